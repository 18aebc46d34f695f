from __future__ import annotations

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Used when a request does not carry its own rtp, like the ?rtp= query default.
    default_rtp: int = 97
    history_page_size: int = 50
    history_max_limit: int = 1_000
    history_max_depth: int = 10_000
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="PROVABLY_FAIR_")


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
