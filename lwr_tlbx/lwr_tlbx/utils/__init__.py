from .paths import get_cache_dir, get_output_dir
from .plotting_config import DEFAULT_PLOT_CFG, PlottingConfig


__all__ = [
    "DEFAULT_PLOT_CFG",
    "PlottingConfig",
    "get_cache_dir",
    "get_output_dir",
]
