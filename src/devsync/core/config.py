"""Configuration loader for devsync."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from devsync.sync.errors import AuthConfigError

log = logging.getLogger(__name__)

KEYRING_SERVICE = "devsync"
KEYRING_USERNAME = "devto_api_key"

DEFAULTS: dict = {
    "api": {
        "base_url": "https://dev.to/api",
        "key_env": "DEVTO_API_KEY",
        "timeout": 30.0,
    },
    "pull": {
        "output_dir": "articles",
        "per_page": 100,
        "fail_fast": True,
    },
    "push": {
        # Courtesy pause between successful posts (dev.to rate limits writes)
        "delay_seconds": 5.0,
        "fail_fast": True,
    },
}


def config_path() -> Path:
    """Return the config file location: DEVSYNC_CONFIG > ./devsync.yaml."""
    env_path = os.environ.get("DEVSYNC_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return Path.cwd() / "devsync.yaml"


def load_config(path: Path | None = None) -> dict:
    """Load devsync.yaml and merge with defaults.

    Args:
        path: Explicit path to the YAML file. If None, uses config_path().

    Returns:
        Merged configuration dict.
    """
    if path is None:
        path = config_path()

    user_config: dict = {}
    if path.exists():
        try:
            raw = path.read_text(encoding="utf-8")
            user_config = yaml.safe_load(raw) or {}
        except (OSError, yaml.YAMLError):
            log.warning("Failed to read config at %s, using defaults", path, exc_info=True)
        if not isinstance(user_config, dict):
            log.warning("Config at %s is not a mapping, using defaults", path)
            user_config = {}

    return _deep_merge(DEFAULTS, user_config)


def resolve_api_key(config: dict) -> str:
    """Return the dev.to API key: environment variable > system keyring.

    Raises:
        AuthConfigError: No key found in either place.
    """
    env_name = config.get("api", {}).get("key_env") or DEFAULTS["api"]["key_env"]
    key = os.environ.get(env_name)
    if key:
        return key

    key = _get_keyring_key()
    if key:
        log.debug("Using API key from system keyring")
        return key

    raise AuthConfigError(
        f"{env_name} is not set.\n"
        "Create a key at https://dev.to/settings/extensions and export it,\n"
        "or store it: python -c "
        f"\"import keyring; keyring.set_password('{KEYRING_SERVICE}', "
        f"'{KEYRING_USERNAME}', 'YOUR_KEY')\""
    )


def _get_keyring_key() -> str | None:
    """Retrieve the API key from the system keyring, if one is configured."""
    try:
        import keyring
        from keyring.errors import KeyringError

        return keyring.get_password(KEYRING_SERVICE, KEYRING_USERNAME)
    except ImportError:
        return None
    except KeyringError:
        log.debug("Keyring lookup failed", exc_info=True)
        return None


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base, returning a new dict."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result
