"""Directive configuration loader with Pydantic v2 validation.

Loads and validates a ``permissions.yaml`` file into a typed
:class:`DirectiveConfig`.  Unknown keys are allowed so hosts can keep
their own settings in the same file.

Schema
------
::

    version: "1"
    development: true
    permissions: ["read", "write", "admin.users"]
    requirements:
      edit_button:
        permissions: ["write", "admin."]
        mode: startWith
      delete_button:
        - delete
        - permissions: ["^admin"]
          mode: regex

Example
-------
>>> loader = ConfigLoader()
>>> config = loader.load(Path("permissions.yaml"))
>>> context = config.build_context()
"""
from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

from permission_directive.directive.context import PermissionContext
from permission_directive.diagnostics import DiagnosticSink

logger = logging.getLogger(__name__)


class DirectiveConfig(BaseModel):
    """Top-level directive configuration schema.

    All fields are optional.  ``permissions`` left unset means the context
    starts unconfigured, which the directive treats as "deny everything
    except ``*``".
    """

    model_config = {"extra": "allow"}

    version: str = Field(default="1")
    development: bool = Field(default=False)
    permissions: list[str] | None = Field(default=None)
    requirements: dict[str, object] = Field(default_factory=dict)

    @field_validator("permissions")
    @classmethod
    def validate_permissions(cls, values: list[str] | None) -> list[str] | None:
        if values is None:
            return values
        # Held permissions are a set; keep first-seen order.
        return list(dict.fromkeys(values))

    def build_context(self, sink: DiagnosticSink | None = None) -> PermissionContext:
        """Return a :class:`PermissionContext` seeded from this config."""
        return PermissionContext(
            self.permissions,
            development=self.development,
            sink=sink,
        )


class ConfigLoader:
    """Loads and validates directive YAML configuration.

    Example
    -------
    >>> loader = ConfigLoader()
    >>> config = loader.load_string("development: true\\npermissions: [read]")
    >>> config.permissions
    ['read']
    """

    def load(self, config_path: Path) -> DirectiveConfig:
        """Load and validate a directive YAML file.

        Parameters
        ----------
        config_path:
            Path to the YAML file.

        Returns
        -------
        DirectiveConfig
            Validated configuration object.

        Raises
        ------
        FileNotFoundError:
            When the config file does not exist.
        ValueError:
            When the YAML content fails Pydantic validation.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Directive config not found: {config_path}")

        with config_path.open("r", encoding="utf-8") as fh:
            raw: dict[str, object] = yaml.safe_load(fh) or {}

        config = DirectiveConfig.model_validate(raw)
        logger.info(
            "Loaded directive config from %s (%d requirements, development=%s)",
            config_path,
            len(config.requirements),
            config.development,
        )
        return config

    def load_string(self, yaml_content: str) -> DirectiveConfig:
        """Load and validate a YAML string directly.

        Parameters
        ----------
        yaml_content:
            Raw YAML text.
        """
        raw: dict[str, object] = yaml.safe_load(yaml_content) or {}
        return DirectiveConfig.model_validate(raw)

    def defaults(self) -> DirectiveConfig:
        """Return a default configuration with all defaults applied."""
        return DirectiveConfig()
