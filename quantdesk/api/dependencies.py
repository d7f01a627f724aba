from functools import lru_cache

from quantdesk.services.settings import EngineSettings, load_settings


@lru_cache
def get_settings() -> EngineSettings:
    return load_settings()
