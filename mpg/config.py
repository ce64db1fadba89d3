"""Engine configuration management."""

import os
from functools import lru_cache
from pathlib import Path

from .schemas import EngineConfig
from .utils import load_json_safe

CONFIG_ENV_VAR = 'MPG_ENGINE_CONFIG'


def get_config_path() -> Path:
    """Config file location: $MPG_ENGINE_CONFIG, else data/engine_config.json."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return Path(__file__).parent.parent / 'data' / 'engine_config.json'


@lru_cache(maxsize=1)
def get_config() -> EngineConfig:
    """
    Load engine configuration.

    Configuration is cached after first load. A missing or invalid file
    falls back to the built-in defaults, so the engine always has a
    usable configuration.

    Returns:
        EngineConfig object with validated settings

    Example:
        from mpg.config import get_config
        config = get_config()
        print(f"Rotaldo rating: {config.rotaldo_rating}")
    """
    return load_json_safe(get_config_path(), default=EngineConfig(), schema=EngineConfig)


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file or MPG_ENGINE_CONFIG changes during
    runtime and you need to reload it.
    """
    get_config.cache_clear()
