"""Typed runtime settings with dotenv support and startup validation."""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class PlatformSettings(BaseSettings):
    """Platform connection and runtime settings.

    Environment variable names map directly to field names in uppercase.
    Example: `cf_api_url` reads from `CF_API_URL`.

    Attributes:
        cf_home: Optional CF CLI home directory (`CF_HOME`); config lives at `<home>/.cf/config.json`.
        cf_api_url: Control-plane API URL; falls back to CF CLI `Target`.
        cf_access_token: OAuth access token; falls back to CF CLI `AccessToken`.
        cf_space_guid: Space scope for application listing; falls back to CF CLI targeted space.
        cf_request_timeout_seconds: Per-request HTTP timeout.
        cf_skip_ssl_validation: Disable TLS certificate verification.
        poll_interval_seconds: Delay between build/application state probes.
        log_level: Diagnostic log level for stderr logging.
        log_json: Emit diagnostic logs as JSON lines.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    cf_home: str | None = Field(default=None)
    cf_api_url: str | None = Field(default=None)
    cf_access_token: str | None = Field(default=None)
    cf_space_guid: str | None = Field(default=None)
    cf_request_timeout_seconds: float = Field(default=30.0, gt=0)
    cf_skip_ssl_validation: bool = Field(default=False)
    poll_interval_seconds: float = Field(default=1.0, gt=0)
    log_level: str = Field(default="WARNING")
    log_json: bool = Field(default=False)

    @field_validator("cf_home", "cf_api_url", "cf_access_token", "cf_space_guid")
    @classmethod
    def _validate_optional_string(cls, value: str | None) -> str | None:
        if value is None:
            return None
        stripped_value = value.strip()
        return stripped_value or None

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_value = value.strip().upper()
        if normalized_value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError("log_level must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return normalized_value


@dataclass(frozen=True)
class PlatformTarget:
    """Resolved platform connection target.

    Attributes:
        api_url: Control-plane API URL.
        access_token: OAuth access token.
        space_guid: Optional space scope.
        verify_ssl: Whether TLS certificates are verified.
    """

    api_url: str
    access_token: str
    space_guid: str | None
    verify_ssl: bool


def config_load_settings() -> PlatformSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        PlatformSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when settings are invalid.
    """

    try:
        return PlatformSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error


def config_cli_config_path(settings: PlatformSettings) -> Path:
    """Return CF CLI config file path for the configured home directory.

    Args:
        settings: Validated runtime settings.

    Returns:
        Path: Location of `config.json`.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    home_directory = Path(settings.cf_home).expanduser() if settings.cf_home else Path.home()
    return home_directory / ".cf" / "config.json"


def config_resolve_platform_target(settings: PlatformSettings) -> PlatformTarget:
    """Resolve connection target from settings, falling back to the CF CLI login state.

    Explicit settings win over values in the CF CLI config file. The file is
    read only when at least one of API URL, token or space is missing.

    Args:
        settings: Validated runtime settings.

    Returns:
        PlatformTarget: Fully resolved connection target.

    Raises:
        SettingsLoadError: Raised when API URL or access token cannot be resolved
            or the CF CLI config file is unreadable.
    """

    api_url = settings.cf_api_url
    access_token = settings.cf_access_token
    space_guid = settings.cf_space_guid
    skip_ssl_validation = settings.cf_skip_ssl_validation

    if api_url is None or access_token is None or space_guid is None:
        cli_config = _config_read_cli_config(config_cli_config_path(settings))
        api_url = api_url or _config_optional_text(cli_config.get("Target"))
        access_token = access_token or _config_optional_text(cli_config.get("AccessToken"))
        space_fields = cli_config.get("SpaceFields")
        if space_guid is None and isinstance(space_fields, dict):
            space_guid = _config_optional_text(space_fields.get("GUID"))
        if settings.cf_api_url is None:
            skip_ssl_validation = skip_ssl_validation or bool(cli_config.get("SSLDisabled", False))

    if api_url is None:
        raise SettingsLoadError("Platform API URL is not configured. Set CF_API_URL or run `cf login`.")
    if access_token is None:
        raise SettingsLoadError("Platform access token is not configured. Set CF_ACCESS_TOKEN or run `cf login`.")

    return PlatformTarget(
        api_url=api_url,
        access_token=access_token,
        space_guid=space_guid,
        verify_ssl=not skip_ssl_validation,
    )


def _config_read_cli_config(config_path: Path) -> dict[str, object]:
    """Read CF CLI config JSON, returning an empty mapping when the file is absent."""

    if not config_path.is_file():
        return {}
    try:
        payload = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as error:
        raise SettingsLoadError(f"CF CLI config could not be read: {config_path}") from error
    if not isinstance(payload, dict):
        raise SettingsLoadError(f"CF CLI config has unexpected format: {config_path}")
    return payload


def _config_optional_text(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    return value.strip() or None
