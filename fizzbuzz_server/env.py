from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

from django.core.exceptions import ImproperlyConfigured
from dotenv import load_dotenv

_ENV_LOADED: bool = False


def load_env(path: Optional[Union[str, Path]] = None) -> None:
    """
    Load a .env file into os.environ once. Variables already present in the
    environment win over the file. Safe to call several times.
    """
    global _ENV_LOADED
    if _ENV_LOADED:
        return
    if path is not None:
        load_dotenv(dotenv_path=path)
    else:
        load_dotenv()
    _ENV_LOADED = True


def env_str(key: str, default: str = "") -> str:
    """String from the environment, surrounding quotes removed."""
    val = os.environ.get(key, default)
    if isinstance(val, str) and len(val) >= 2:
        if (val.startswith("'") and val.endswith("'")) or (val.startswith('"') and val.endswith('"')):
            return val[1:-1]
    return val


def env_bool(key: str, default: bool = False) -> bool:
    val = env_str(key, "")
    if not val:
        return default
    return val.strip().lower() in ("1", "true", "yes", "on")


def env_int(key: str, default: int) -> int:
    val = env_str(key, "")
    if not val:
        return default
    try:
        return int(val)
    except ValueError:
        raise ImproperlyConfigured(f"{key} must be an integer (received:{val})")


def require_env(key: str) -> str:
    """Mandatory variable; a missing one stops the process at startup."""
    if key not in os.environ:
        raise ImproperlyConfigured(f"failed to retrieve {key} from environment")
    return env_str(key)
