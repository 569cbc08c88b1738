# evaltrack/core/config.py
from typing import List, Union
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import json


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === MongoDB ===
    mongo_url: str = "mongodb://localhost:27017"
    db_name: str = "evaltrack"
    # Atlas exige TLS; en local normalmente no
    mongo_tls: bool = False
    mongo_timeout_ms: int = 20000

    # === CORS ===
    # Acepta JSON (["http://a","https://b"]) o lista separada por comas ("http://a,https://b")
    cors_origins: Union[str, List[str]] = ""

    # === Archivos ===
    upload_dir: str = "uploads"
    max_upload_mb: int = 50
    allowed_upload_extensions: Union[str, List[str]] = ["jpeg", "jpg", "png", "gif", "pdf"]

    # === Números de referencia ===
    reference_series: str = "requestCounter"
    reference_width: int = 4

    # Zona horaria para formattedTimestamp
    display_timezone: str = "Asia/Manila"

    # === Rate limit (SlowAPI) ===
    rate_limit_enabled: bool = True
    create_rate_limit: str = "60/minute"
    upload_rate_limit: str = "30/minute"

    log_level: str = "INFO"

    @field_validator("cors_origins", "allowed_upload_extensions", mode="before")
    @classmethod
    def _parse_list(cls, v):
        if v is None:
            return []
        if isinstance(v, list):
            return v
        if isinstance(v, str):
            s = v.strip()
            if not s:
                return []
            if s.startswith("["):
                try:
                    data = json.loads(s)
                    if isinstance(data, list):
                        return [str(x).strip() for x in data if str(x).strip()]
                except ValueError:
                    # si parece JSON pero está mal formado, caemos al split por comas
                    pass
            return [item.strip() for item in s.split(",") if item.strip()]
        return [str(v).strip()] if str(v).strip() else []

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


# Instancia global usada por main.py, servicios y rutas
settings = Settings()
