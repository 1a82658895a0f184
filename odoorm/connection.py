"""Process-wide connection state shared by all models."""

import logging
from typing import Any, Protocol

from pydantic import ValidationError as PydanticValidationError

from .client import OdooClient
from .config import Settings, get_settings
from .exceptions import ConfigurationError

_settings: Settings | None = None
_client: "Dispatcher | None" = None
_owns_client = False


class Dispatcher(Protocol):
    """Anything that can call a method of a remote model."""

    def execute(self, model: str, method: str, params: dict[str, Any]) -> Any: ...


def configure(
    settings: Settings | None = None,
    *,
    client: Dispatcher | None = None,
    **overrides: Any,
) -> Settings:
    """Configure the connection used by every model.

    Args:
        settings: Settings to use (environment defaults if not specified).
        client: Dispatcher to use instead of building an OdooClient.
        **overrides: Individual settings (url, api_key, timeout, ...).

    Returns:
        The settings now in effect.

    Raises:
        ConfigurationError: An override is unknown or has an invalid value.
            The previous configuration stays in effect.

    Example:
        >>> odoorm.configure(url="https://erp.example.com", api_key="...")
    """
    global _settings, _client, _owns_client

    base = settings or get_settings()
    if overrides:
        base = _apply_overrides(base, overrides)

    _close_owned_client()
    _settings = base
    _client = client
    _owns_client = False

    logging.getLogger("odoorm").setLevel(base.log_level)
    return base


def _apply_overrides(base: Settings, overrides: dict[str, Any]) -> Settings:
    unknown = sorted(set(overrides) - Settings.field_names())
    if unknown:
        raise ConfigurationError(f"Unknown settings: {', '.join(unknown)}")

    aliases = {f.alias: name for name, f in Settings.model_fields.items() if f.alias}
    values = base.model_dump()
    values.update({aliases.get(key, key): value for key, value in overrides.items()})
    try:
        return Settings.model_validate(values)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}", original_error=e) from e


def current_settings() -> Settings:
    """Return the configured settings, or the environment defaults."""
    return _settings or get_settings()


def get_client() -> Dispatcher:
    """Return the shared dispatcher, building an OdooClient on first use.

    Raises:
        ConfigurationError: No client was given and the URL or API key is missing.
    """
    global _client, _owns_client

    if _client is None:
        settings = current_settings()
        settings.validate_connection()
        _client = OdooClient(
            settings.url,
            api_key=settings.api_key,
            timeout=settings.timeout,
            open_timeout=settings.open_timeout,
        )
        _owns_client = True
    return _client


def reset() -> None:
    """Forget configured settings and client, closing a client built here."""
    global _settings, _client, _owns_client

    _close_owned_client()
    _settings = None
    _client = None
    _owns_client = False
    get_settings.cache_clear()


def _close_owned_client() -> None:
    if _owns_client and isinstance(_client, OdooClient):
        _client.close()
