from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 8000

    storage_root: str = "storage"  # pieces live in <storage_root>/.pieces
    cache_size: int = 64  # number of pieces, not bytes

    require_auth: bool = False
    api_key: str = "dummy-local-key"

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"
