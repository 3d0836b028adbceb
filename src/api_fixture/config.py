"""
Session configuration for the step library.

Settings are layered, later sources overriding earlier ones:

1. built-in defaults
2. a YAML config file (``config.yaml`` or the path in ``API_FIXTURE_CONFIG``)
3. environment variables (a ``.env`` file is loaded into the environment first)
4. runner user data, e.g. ``behave -D lifecycle=dev``

Settings are resolved once before any scenario runs and are read-only after.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from api_fixture.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.yaml"
CONFIG_FILE_VARIABLE = "API_FIXTURE_CONFIG"
ENV_PREFIX = "API_FIXTURE_"

LOCAL_LIFECYCLE = "local"
PROD_LIFECYCLE = "prod"

# Config file keys -> Settings field names
_FILE_KEYS = {
    "lifecycle": "lifecycle",
    "appDomain": "app_domain",
    "app_domain": "app_domain",
    "debug": "debug",
    "port": "port",
    "timeout": "timeout",
    "tokenField": "token_field",
    "token_field": "token_field",
    "replacements": "replacements",
}

_ENV_VARIABLES = {
    f"{ENV_PREFIX}LIFECYCLE": "lifecycle",
    f"{ENV_PREFIX}APP_DOMAIN": "app_domain",
    f"{ENV_PREFIX}DEBUG": "debug",
    f"{ENV_PREFIX}PORT": "port",
    f"{ENV_PREFIX}TIMEOUT": "timeout",
    f"{ENV_PREFIX}TOKEN_FIELD": "token_field",
}

# User data names -> Settings field names
_USERDATA_KEYS = {
    "lifecycle": "lifecycle",
    "app_domain": "app_domain",
    "appDomain": "app_domain",
    "debug": "debug",
    "port": "port",
    "timeout": "timeout",
    "token_field": "token_field",
}


@dataclass(frozen=True)
class Settings:
    """
    Read-only configuration shared by every scenario in a session.

    :param lifecycle: Deployment to target: ``local``, ``prod`` or any other
        environment name served from ``{lifecycle}.{app_domain}``.
    :param app_domain: Domain the API is served from outside of ``local``.
    :param debug: Enable debug logging.
    :param port: Port of the API when running ``local``.
    :param timeout: Per-request timeout in seconds; ``None`` waits indefinitely.
    :param token_field: Response field holding a bearer token.
    :param replacements: Static values available as ``${name}`` placeholders.
    """

    lifecycle: str = LOCAL_LIFECYCLE
    app_domain: str = ""
    debug: bool = False
    port: int = 8080
    timeout: float | None = None
    token_field: str = "token"
    replacements: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.lifecycle:
            raise ConfigurationError("lifecycle must not be empty")
        if self.lifecycle != LOCAL_LIFECYCLE and not self.app_domain:
            raise ConfigurationError(
                f"appDomain is required for lifecycle '{self.lifecycle}'"
            )
        if not 0 < self.port < 65536:
            raise ConfigurationError(f"port {self.port} is out of range")
        if not isinstance(self.replacements, Mapping):
            raise ConfigurationError("replacements must be a mapping")


def load_settings(
    userdata: Mapping[str, str] | None = None,
    *,
    config_path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
    dotenv_path: str | Path = ".env",
) -> Settings:
    """
    Resolve settings from every configuration source.

    :param userdata: Runner-provided overrides (highest precedence).
    :param config_path: YAML config file; defaults to ``API_FIXTURE_CONFIG`` or
        ``config.yaml`` in the working directory.
    :param environ: Environment to read; defaults to :data:`os.environ` after
        loading ``dotenv_path`` into it.
    :param dotenv_path: ``.env`` file to load when ``environ`` is not given.
    :returns: The resolved settings.
    :raises ConfigurationError: If a value is invalid.
    """
    if environ is None:
        load_dotenv(dotenv_path)
        environ = os.environ

    values: dict[str, Any] = {}

    if config_path is None:
        config_path = environ.get(CONFIG_FILE_VARIABLE, DEFAULT_CONFIG_FILE)
    values.update(_read_config_file(Path(config_path)))

    for variable, field_name in _ENV_VARIABLES.items():
        if variable in environ:
            values[field_name] = environ[variable]

    if userdata is not None:
        for name, field_name in _USERDATA_KEYS.items():
            if name in userdata:
                values[field_name] = userdata[name]

    return Settings(
        lifecycle=str(values.get("lifecycle", LOCAL_LIFECYCLE)),
        app_domain=str(values.get("app_domain", "")),
        debug=_to_bool(values.get("debug", False)),
        port=_to_int(values.get("port", 8080), "port"),
        timeout=_to_timeout(values.get("timeout")),
        token_field=str(values.get("token_field", "token")),
        replacements=values.get("replacements") or {},
    )


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        with path.open(encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except FileNotFoundError:
        logger.warning("Config file %s not found; using defaults", path)
        return {}
    except yaml.YAMLError as err:
        raise ConfigurationError(f"config file {path} is not valid YAML: {err}") from err

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ConfigurationError(f"config file {path} must contain a mapping")

    return {
        _FILE_KEYS[key]: value for key, value in document.items() if key in _FILE_KEYS
    }


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def _to_int(value: Any, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as err:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from err


def _to_timeout(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as err:
        raise ConfigurationError(f"timeout must be a number, got {value!r}") from err
