"""Configuration management using Pydantic settings with optional file persistence."""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import Field, SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# --- Paths ---

APP_NAME = "docbot"


def get_config_dir() -> Path:
    """Get the configuration directory (e.g. ~/.config/docbot)."""
    if os.name == "nt":
        base = Path(os.environ.get("APPDATA", Path.home() / ".config")).expanduser()
    else:
        base = Path("~/.config").expanduser()
    return base / APP_NAME


def get_config_file() -> Path:
    """Path of the JSON config file. Overridable with DOCBOT_CONFIG_FILE."""
    override = os.environ.get("DOCBOT_CONFIG_FILE")
    if override:
        return Path(override).expanduser()
    return get_config_dir() / "config.json"


def load_config_file(path: Path | None = None) -> dict[str, Any]:
    """Load settings from the JSON config file if it exists."""
    config_file = path or get_config_file()
    if not config_file.exists():
        return {}

    try:
        text = config_file.read_text(encoding="utf-8")
        if not text.strip():
            return {}
        data = json.loads(text)
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config_file(config_data: dict[str, Any], path: Path | None = None) -> Path:
    """Save settings to the JSON config file."""
    config_file = path or get_config_file()
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(json.dumps(config_data, indent=2), encoding="utf-8")
    return config_file


class TargetSettings(BaseSettings):
    """The application being documented."""

    model_config = SettingsConfigDict(env_prefix="DOCBOT_TARGET_")

    base_url: str = Field(default="http://localhost:3000", description="Base URL of the application under documentation")
    email: Optional[str] = Field(default=None, description="Login email of the documentation user")
    password: Optional[SecretStr] = Field(default=None, description="Login password of the documentation user")
    docs_secret: Optional[SecretStr] = Field(default=None, description="Shared secret for the dev-docs seed endpoints")

    def get_password(self) -> Optional[str]:
        return self.password.get_secret_value() if self.password else None

    def get_docs_secret(self) -> Optional[str]:
        return self.docs_secret.get_secret_value() if self.docs_secret else None


class OutputSettings(BaseSettings):
    """Where run artifacts and session state are written."""

    model_config = SettingsConfigDict(env_prefix="DOCBOT_OUTPUT_")

    dir: str = Field(default="output", description="Root directory for generated guides and failure artifacts")
    state_dir: str = Field(default="storage-state", description="Directory holding the saved browser session")

    @property
    def root(self) -> Path:
        return Path(self.dir).expanduser()

    @property
    def auth_file(self) -> Path:
        return Path(self.state_dir).expanduser() / "auth.json"

    @property
    def guides_work_dir(self) -> Path:
        return self.root / "guides"

    @property
    def failures_dir(self) -> Path:
        return self.root / "failures"


class BrowserSettings(BaseSettings):
    """Browser configuration."""

    model_config = SettingsConfigDict(env_prefix="DOCBOT_BROWSER_")

    headless: bool = Field(default=True)
    viewport_width: int = Field(default=1280)
    viewport_height: int = Field(default=720)
    action_timeout_ms: int = Field(default=10_000, description="Timeout for clicks, fills and visibility checks")
    navigation_timeout_ms: int = Field(default=30_000, description="Timeout for page navigations and URL waits")


class ViewerSettings(BaseSettings):
    """Guide viewer HTTP server configuration."""

    model_config = SettingsConfigDict(env_prefix="DOCBOT_VIEWER_")

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8484)
    guides_dir: Optional[str] = Field(default=None, description="Directory of published guides (default: <output>/published)")
    search_limit: int = Field(default=3, description="Maximum number of results returned by /api/search")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="DOCBOT_LOG_")

    level: str = Field(default="INFO")
    json_output: bool = Field(default=False, description="Emit JSON lines instead of console-formatted logs")


class AppSettings(BaseSettings):
    """Root application settings.

    Priority: Environment Variables > Config File > Defaults
    """

    model_config = SettingsConfigDict(env_prefix="DOCBOT_", extra="ignore")

    target: TargetSettings = Field(default_factory=TargetSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    viewer: ViewerSettings = Field(default_factory=ViewerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    def save(self, path: Path | None = None) -> Path:
        """Save current configuration to file (excluding secrets)."""
        data = self.model_dump(mode="json", exclude_none=True)
        for secret in ("password", "docs_secret"):
            data.get("target", {}).pop(secret, None)
        return save_config_file(data, path)

    def get_guides_dir(self) -> Path:
        """Directory of published guides served by the viewer."""
        if self.viewer.guides_dir:
            return Path(self.viewer.guides_dir).expanduser()
        return self.output.root / "published"

    def has_auth_state(self) -> bool:
        return self.output.auth_file.exists()

    def validate_auth_config(self) -> None:
        """Ensure login credentials are configured.

        Raises:
            ConfigurationError: listing every missing environment variable.
        """
        missing = []
        if not self.target.email:
            missing.append("DOCBOT_TARGET_EMAIL")
        if not self.target.get_password():
            missing.append("DOCBOT_TARGET_PASSWORD")
        if missing:
            raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}")


def load_settings(config_file: Path | None = None) -> AppSettings:
    """Load settings with file config as base, env vars overlay.

    Unknown keys in the file are ignored with a warning. Values that fail
    validation raise ConfigurationError.
    """
    file_data = load_config_file(config_file)
    sections: dict[str, BaseSettings] = {}
    for name, field in AppSettings.model_fields.items():
        section_cls = field.annotation
        from_file = file_data.get(name)
        from_file = from_file if isinstance(from_file, dict) else {}
        unknown = sorted(set(from_file) - set(section_cls.model_fields))
        if unknown:
            logger.warning(f"Ignoring unknown config keys in [{name}]: {', '.join(unknown)}")
        try:
            from_env = section_cls()
            # Init kwargs beat env in pydantic-settings, so re-apply env-set fields on top of the file values
            env_values = {key: getattr(from_env, key) for key in from_env.model_fields_set}
            known = {key: value for key, value in from_file.items() if key in section_cls.model_fields}
            sections[name] = section_cls(**{**known, **env_values})
        except ValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first["loc"])
            raise ConfigurationError(f"Invalid {name} settings: {location}: {first['msg']}") from e
    return AppSettings(**sections)
