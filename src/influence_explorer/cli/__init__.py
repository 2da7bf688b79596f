from .config import (
    add_config_arg,
    build_config,
    load_yaml_config,
    parse_param_pairs,
    resolve_path,
)
from .logging import (
    DEFAULT_LOGGING,
    add_logging_args,
    setup_logging_from_config,
)

__all__ = [
    "DEFAULT_LOGGING",
    "add_config_arg",
    "add_logging_args",
    "build_config",
    "load_yaml_config",
    "parse_param_pairs",
    "resolve_path",
    "setup_logging_from_config",
]
