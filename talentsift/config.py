from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "TalentSift"
    log_level: str = "INFO"

    # Replacement keyword/gazetteer file; None uses the packaged core/data/lexicon.json
    lexicon_path: Optional[str] = None

    max_upload_size_mb: int = 5
    max_batch_size: int = 200

    model_config = SettingsConfigDict(
        env_prefix="TALENTSIFT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
