from .config import (
    DEBUG,
    CONFIG_FILE,
    DEFAULT_MAX_DEPTH,
    load_config,
    save_config,
    set_defaults,
    get_engine_dir,
    get_max_depth,
    get_parser_timeout,
)

__all__ = [
    "DEBUG",
    "CONFIG_FILE",
    "DEFAULT_MAX_DEPTH",
    "load_config",
    "save_config",
    "set_defaults",
    "get_engine_dir",
    "get_max_depth",
    "get_parser_timeout",
]
