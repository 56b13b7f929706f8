import os

# Mapping of configuration keys to their corresponding environment variables
_API_ENV_VARS = {
    "url": "VENDOR_API_URL",
    "timeout": "VENDOR_API_TIMEOUT",
}

_API_DEFAULTS = {
    "url": "http://localhost:3000",
    "timeout": "10",
}

_TRUTHY = {"1", "true", "yes", "on"}


def load_api_config() -> dict:
    """Return vendor backend configuration from the environment.

    Missing or blank variables fall back to local development defaults. An
    unparsable timeout falls back to the default as well.
    """
    config = {
        key: (os.getenv(env) or "").strip() or _API_DEFAULTS[key]
        for key, env in _API_ENV_VARS.items()
    }
    config["url"] = config["url"].rstrip("/")
    try:
        config["timeout"] = float(config["timeout"])
    except ValueError:
        config["timeout"] = float(_API_DEFAULTS["timeout"])
    return config


def env_flag(name: str, default: bool = False) -> bool:
    """Return ``True`` when ``name`` is set to a truthy value."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def env_list(name: str, default: str = "") -> list[str]:
    """Return a comma-separated environment variable as a list."""
    raw = os.getenv(name, default)
    return [part.strip() for part in raw.split(",") if part.strip()]
