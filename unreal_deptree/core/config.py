import os
import json
import logging
from typing import Optional

logger = logging.getLogger("unreal-deptree")

# Set to True (or UE_DEPTREE_DEBUG=1) to log every traversal step
DEBUG = os.environ.get("UE_DEPTREE_DEBUG", "").lower() in ("1", "true", "yes")

_CORE_DIR = os.path.dirname(__file__)
_TOOL_DIR = os.path.dirname(_CORE_DIR)
CONFIG_FILE = os.environ.get("UE_DEPTREE_CONFIG") or os.path.join(
    _TOOL_DIR, "config.json"
)

# Default bound for `tree --max-depth`
DEFAULT_MAX_DEPTH = 64
DEFAULT_PARSER_TIMEOUT = 60


def load_config(config_file: str = None) -> dict:
    """Load config.json, or return an empty config if missing or unreadable."""
    config_file = config_file or CONFIG_FILE
    if not os.path.exists(config_file):
        return {}

    try:
        with open(config_file, "r") as f:
            config = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.debug("Failed to load config %s: %s", config_file, e)
        return {}

    return config if isinstance(config, dict) else {}


def save_config(config: dict, config_file: str = None):
    config_file = config_file or CONFIG_FILE
    with open(config_file, "w") as f:
        json.dump(config, f, indent=2)


def set_defaults(
    engine_dir: Optional[str] = None,
    max_depth: Optional[int] = None,
    config_file: str = None,
) -> dict:
    """Persist default engine directory and/or max depth. Returns the new config."""
    config = load_config(config_file)

    if engine_dir is not None:
        if engine_dir:
            config["engine_dir"] = os.path.abspath(os.path.expanduser(engine_dir))
        else:
            config.pop("engine_dir", None)

    if max_depth is not None:
        if max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {max_depth}")
        config["max_depth"] = max_depth

    save_config(config, config_file)
    return config


def get_engine_dir(engine_dir: Optional[str] = None, config_file: str = None) -> str:
    """Resolve the engine directory.

    Cascade: explicit argument > UE_ENGINE_DIR > config.json > "" (not set).
    """
    if engine_dir:
        return engine_dir

    env_dir = os.environ.get("UE_ENGINE_DIR", "")
    if env_dir:
        return env_dir

    return load_config(config_file).get("engine_dir", "") or ""


def get_max_depth(max_depth: Optional[int] = None, config_file: str = None) -> int:
    """Resolve the traversal depth bound.

    Cascade: explicit argument > UE_DEPTREE_MAX_DEPTH > config.json > 64.
    """
    if max_depth is not None:
        return max_depth

    raw = os.environ.get("UE_DEPTREE_MAX_DEPTH")
    if raw:
        try:
            return max(0, int(raw))
        except ValueError:
            logger.warning("Ignoring invalid UE_DEPTREE_MAX_DEPTH=%r", raw)

    saved = load_config(config_file).get("max_depth")
    if isinstance(saved, int) and saved >= 0:
        return saved

    return DEFAULT_MAX_DEPTH


def get_parser_timeout() -> int:
    """Resolve the AssetParser subprocess timeout from env with a safe fallback."""
    raw = os.environ.get("UE_DEPTREE_PARSER_TIMEOUT", str(DEFAULT_PARSER_TIMEOUT))
    try:
        return max(1, int(raw))
    except (TypeError, ValueError):
        return DEFAULT_PARSER_TIMEOUT
