from .logging import setup_logging
from .config import load_config, save_config, config_from_dict, merge_overrides
from .seed import set_seed

__all__ = [
    "setup_logging",
    "load_config",
    "save_config",
    "config_from_dict",
    "merge_overrides",
    "set_seed"
]
