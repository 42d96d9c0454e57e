from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    bucket_width_minutes: int = 5
    active_threshold: int = 20  # steps per bucket; product decision, 8-30 seen in practice
    freshness_window_seconds: int = 900
    work_start_hour: int = 9
    work_end_hour: int = 17  # exclusive
    minute_active_threshold: int = 1
    timezone: str = "UTC"  # local zone for day boundaries and work hours
    garmin_tokens_dir: str = "~/.laststand/garmin_tokens"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
