from pydantic import field_validator
from pydantic_settings import BaseSettings


# Grid sizes offered to the user; resizing to anything else is rejected.
GRID_SIZE_OPTIONS: tuple[int, ...] = (8, 16, 32, 64)

# Undo depth, in committed document snapshots.
MAX_HISTORY = 20


class Settings(BaseSettings):
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    DEFAULT_GRID_SIZE: int = 16

    EXPORT_SCALE: int = 20
    EXPORT_BACKGROUND: str = "#ffffff"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @field_validator("DEFAULT_GRID_SIZE")
    @classmethod
    def _check_grid_size(cls, value: int) -> int:
        if value not in GRID_SIZE_OPTIONS:
            raise ValueError(
                f"DEFAULT_GRID_SIZE must be one of {GRID_SIZE_OPTIONS}, got {value}"
            )
        return value


settings = Settings()
