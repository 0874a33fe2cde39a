from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_dir: str = "/data"
    store_backend: Literal["sqlite", "supabase"] = "sqlite"
    supabase_url: str = ""
    supabase_service_key: str = ""
    store_timeout: float = 10.0
    log_level: str = "INFO"

    model_config = {"env_prefix": "PARCELS_"}


settings = Settings()
