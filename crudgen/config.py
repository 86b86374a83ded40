"""crudgen configuration.

Explicit, typed configuration for a generation pass.  Every destination path
and the root PHP namespace live on one Pydantic v2 model that is built once by
the CLI (from defaults, a JSON file or environment variables) and passed into
the generator; nothing reads ambient global state.

All ``*_path`` settings are relative to ``base_path`` (the Laravel project
root) unless given as absolute paths.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError


CONFIG_FILENAME = "crudgen.json"


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or validated."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")


# Environment variable -> field name
_ENV_FIELDS: dict[str, str] = {
    "CRUDGEN_BASE_PATH": "base_path",
    "CRUDGEN_NAMESPACE": "namespace",
    "CRUDGEN_MODELS_PATH": "models_path",
    "CRUDGEN_REPOSITORIES_PATH": "repositories_path",
    "CRUDGEN_INTERFACES_PATH": "interfaces_path",
    "CRUDGEN_SERVICES_PATH": "services_path",
    "CRUDGEN_CONTROLLERS_PATH": "controllers_path",
    "CRUDGEN_API_CONTROLLERS_PATH": "api_controllers_path",
    "CRUDGEN_REQUESTS_PATH": "requests_path",
    "CRUDGEN_MIGRATIONS_PATH": "migrations_path",
    "CRUDGEN_VIEWS_PATH": "views_path",
    "CRUDGEN_WEB_ROUTES_PATH": "web_routes_path",
    "CRUDGEN_API_ROUTES_PATH": "api_routes_path",
    "CRUDGEN_STUBS_PATH": "stubs_path",
}


class GeneratorConfig(BaseModel):
    """Destination layout and namespace for generated Laravel code."""

    base_path: Path = Field(default=Path("."), description="Laravel project root")
    namespace: str = Field(default="App", min_length=1, description="Root PHP namespace")

    models_path: Path = Field(default=Path("app/Models"))
    repositories_path: Path = Field(default=Path("app/Repositories"))
    interfaces_path: Path = Field(default=Path("app/Repositories/Contracts"))
    services_path: Path = Field(default=Path("app/Services"))
    controllers_path: Path = Field(default=Path("app/Http/Controllers"))
    api_controllers_path: Path = Field(default=Path("app/Http/Controllers/API"))
    requests_path: Path = Field(default=Path("app/Http/Requests"))
    migrations_path: Path = Field(default=Path("database/migrations"))
    views_path: Path = Field(default=Path("resources/views"))
    web_routes_path: Path = Field(default=Path("routes/web.php"))
    api_routes_path: Path = Field(default=Path("routes/api.php"))

    # Project-local stub overrides (see ``publish-stubs``).
    stubs_path: Path = Field(default=Path("stubs/crud-generator"))

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    def resolve(self, relative: Path) -> Path:
        """Anchor *relative* at ``base_path`` unless it is already absolute."""
        if relative.is_absolute():
            return relative
        return self.base_path / relative

    @property
    def stubs_dir(self) -> Path:
        return self.resolve(self.stubs_path)

    @property
    def layouts_dir(self) -> Path:
        return self.resolve(self.views_path) / "layouts"

    @property
    def config_file(self) -> Path:
        """Default location of the persisted configuration."""
        return self.base_path / CONFIG_FILENAME

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration (minus ``base_path``) to a JSON file.

        Args:
            path: Destination file. Defaults to ``<base_path>/crudgen.json``.

        Returns:
            The path where the file was written.
        """
        target = path or self.config_file
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(
            self.model_dump_json(indent=2, exclude={"base_path"}) + "\n",
            encoding="utf-8",
        )
        return target

    @classmethod
    def load(cls, path: Path, **overrides: Any) -> "GeneratorConfig":
        """Load a configuration file written by :meth:`save`.

        Keyword *overrides* take precedence over values in the file.

        Raises:
            ConfigError: If the file is missing, not JSON, or fails validation.
        """
        path = Path(path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            raise ConfigError(path, "file not found") from None
        except json.JSONDecodeError as exc:
            raise ConfigError(path, f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc
        if not isinstance(raw, dict):
            raise ConfigError(path, "expected a JSON object")
        try:
            return cls.model_validate({**raw, **overrides})
        except ValidationError as exc:
            raise ConfigError(path, str(exc)) from exc

    @classmethod
    def from_env(cls, **overrides: Any) -> "GeneratorConfig":
        """Build a config from ``CRUDGEN_*`` environment variables.

        Recognised variables (all optional): CRUDGEN_BASE_PATH,
        CRUDGEN_NAMESPACE and one ``CRUDGEN_<FIELD>`` per path setting,
        e.g. CRUDGEN_MODELS_PATH or CRUDGEN_API_ROUTES_PATH.
        """
        values: dict[str, Any] = {}
        for env_name, field_name in _ENV_FIELDS.items():
            if os.environ.get(env_name):
                values[field_name] = os.environ[env_name]
        values.update(overrides)
        return cls(**values)

    @classmethod
    def discover(
        cls, base_path: Path | None = None, config_path: Path | None = None
    ) -> "GeneratorConfig":
        """Resolve the active configuration for a project.

        Precedence: an explicit *config_path*, then ``<base_path>/crudgen.json``
        if present, then environment variables and defaults.  The project root
        is *base_path* when given, otherwise CRUDGEN_BASE_PATH, otherwise the
        current directory; it always wins over a value found in a config file.
        """
        if base_path is None:
            base_path = Path(os.environ.get("CRUDGEN_BASE_PATH") or ".")
        if config_path is not None:
            return cls.load(config_path, base_path=base_path)
        default_file = Path(base_path) / CONFIG_FILENAME
        if default_file.is_file():
            return cls.load(default_file, base_path=base_path)
        return cls.from_env(base_path=base_path)
