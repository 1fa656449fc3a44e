from __future__ import annotations

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore")

    log_level: str = Field(default="WARNING", validation_alias="NUTRICALC_LOG_LEVEL")
    # any tabulate tablefmt name
    table_format: str = Field(default="github", validation_alias="NUTRICALC_TABLE_FORMAT")


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
