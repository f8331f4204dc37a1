import os
from functools import lru_cache

from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, ConfigDict


_ENV_PATH = os.path.join(os.path.dirname(__file__), "..", ".env")
load_dotenv(dotenv_path=_ENV_PATH, override=False)


def _get_env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _get_float(name: str, default: float) -> float:
    v = os.getenv(name)
    if v is None or not v.strip():
        return default
    try:
        return float(v)
    except ValueError:
        logger.warning("{}={!r} is not a number; using {}", name, v, default)
        return default


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-3.5-turbo"
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_TIMEOUT_S: float = 30.0
    LOG_LEVEL: str = "INFO"

    @property
    def oracle_configured(self) -> bool:
        return bool(self.OPENAI_API_KEY.strip())


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings(
        OPENAI_API_KEY=_get_env("OPENAI_API_KEY", ""),
        OPENAI_MODEL=_get_env("OPENAI_MODEL", "gpt-3.5-turbo"),
        OPENAI_BASE_URL=_get_env("OPENAI_BASE_URL", "https://api.openai.com/v1"),
        OPENAI_TIMEOUT_S=_get_float("OPENAI_TIMEOUT_S", 30.0),
        LOG_LEVEL=_get_env("LOG_LEVEL", "INFO"),
    )


settings = get_settings()
