import os
import threading
from typing import Any, Dict, Optional

from dotenv import load_dotenv

# Lazy imports - only load the YAML parser when a config file is actually used
_yaml = None
_dotenv_loaded = False

_config_cache: Optional[Dict[str, Any]] = None
lock = threading.Lock()

# Optional YAML config file, named by this environment variable
CONFIG_PATH_ENV = "YTDLP_PROMPT_CONFIG"

# ------------
# Built-in defaults, no config file required
# ------------
DEFAULTS = {
    "tools.ytdlp": "yt-dlp",
    "tools.mkvpropedit": "mkvpropedit",
    "tools.atomicparsley": ["atomicparsley", "AtomicParsley"],
    "debug.log_level": "WARNING",
}

# ------------
# Environment variable mapping
# ------------
ENV_MAPPINGS = {
    "tools.ytdlp": "YTDLP_PROMPT_YTDLP",
    "tools.mkvpropedit": "YTDLP_PROMPT_MKVPROPEDIT",
    "tools.atomicparsley": "YTDLP_PROMPT_ATOMICPARSLEY",
    "debug.log_level": "YTDLP_PROMPT_LOG_LEVEL",
}

# Keys whose environment value is a comma separated list
_LIST_KEYS = {"tools.atomicparsley"}


def _get_yaml():
    """Lazy load YAML module only when needed"""
    global _yaml
    if _yaml is None:
        from ruamel.yaml import YAML

        _yaml = YAML(typ="safe")
    return _yaml


def _ensure_dotenv():
    """Load .env from the working directory once per process"""
    global _dotenv_loaded
    if not _dotenv_loaded:
        load_dotenv()
        _dotenv_loaded = True


def _invalidate_cache():
    """Invalidate the config cache (tests call this after changing the environment)"""
    global _config_cache, _dotenv_loaded
    with lock:
        _config_cache = None
        _dotenv_loaded = False


def _read_config_file(path: str) -> Dict[str, Any]:
    from ruamel.yaml.error import YAMLError

    try:
        with open(path, "r", encoding="utf-8") as file:
            data = _get_yaml().load(file)
    except FileNotFoundError:
        return {}
    except (OSError, YAMLError) as e:
        print(f"Warning: could not read config file {path}: {e}")
        return {}

    if data is None:
        return {}
    if not isinstance(data, dict):
        print(f"Warning: config file {path} must contain a mapping, ignoring it")
        return {}
    return data


def _get_cached_config() -> Dict[str, Any]:
    global _config_cache
    with lock:
        if _config_cache is None:
            path = os.getenv(CONFIG_PATH_ENV)
            _config_cache = _read_config_file(path) if path else {}
        return _config_cache


def _from_env(key: str) -> Optional[Any]:
    env_name = ENV_MAPPINGS.get(key)
    if not env_name:
        return None
    env_value = os.getenv(env_name, "").strip()
    if not env_value:
        return None
    if key in _LIST_KEYS:
        return [part.strip() for part in env_value.split(",") if part.strip()]
    return env_value


# -----------------------
# load config
# -----------------------


def load_key(key: str, default: Any = None) -> Any:
    """
    Resolve a dotted configuration key

    Lookup order: environment variable, config file, ``default`` argument,
    built-in default.

    Raises:
        KeyError: If the key is unknown and no default is available
    """
    _ensure_dotenv()

    env_value = _from_env(key)
    if env_value is not None:
        return env_value

    value: Any = _get_cached_config()
    for part in key.split("."):
        if isinstance(value, dict) and part in value:
            value = value[part]
        else:
            value = None
            break

    if value is not None and value != "":
        return value
    if default is not None:
        return default
    if key in DEFAULTS:
        return DEFAULTS[key]
    raise KeyError(f"Configuration key not found: {key}")


def load_all_config() -> Dict[str, Any]:
    """Effective configuration as a flat dict of the known keys"""
    return {key: load_key(key) for key in DEFAULTS}
