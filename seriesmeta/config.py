from typing import ClassVar
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path


class Settings(BaseSettings):
    app_name: ClassVar[str] = "seriesmeta"
    version: ClassVar[str] = "0.1.0"

    database_url: str = "sqlite:///./storage/database/seriesmeta.db"

    # --- SQLITE TUNING ---
    # WAL lets readers keep going while a metadata write transaction is open
    sqlite_wal: bool = True

    # --- LOGGING ---
    log_dir: Path = Path("storage/logs")
    log_level: str = "INFO"
    log_file: str = "seriesmeta.log"
    log_max_bytes: int = 10 * 1024 * 1024  # 10MB
    log_backup_count: int = 10

    model_config = SettingsConfigDict(env_file=".env",
                                      extra="ignore",
                                      env_ignore_empty=True,
                                      case_sensitive=False,
                                      env_nested_delimiter=None
                                      )

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


settings = Settings()
