from __future__ import annotations
import logging

from .base import BaseConfig, BASE_DIR

logger = logging.getLogger(__name__)

# .env.local wins over .env when both exist
_local_env = BASE_DIR / ".env.local"
_default_env = BASE_DIR / ".env"
_env_file = str(_local_env if _local_env.exists() else _default_env)


class Settings(BaseConfig):
    model_config = BaseConfig.model_config.copy()
    model_config.update(env_file=_env_file)


settings = Settings()

logger.debug(
    "Loaded config | palette=%d previews=%dx%d/%dx%d concurrent=%s",
    settings.PALETTE_COLOR_COUNT,
    settings.PREVIEW_SIZE, settings.PREVIEW_SIZE,
    settings.PREVIEW_ENHANCED_SIZE, settings.PREVIEW_ENHANCED_SIZE,
    settings.CONCURRENT,
)
