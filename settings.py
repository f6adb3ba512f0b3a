import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 30001
    api_base: str = "https://api.bilibili.com"
    request_timeout: float = 10.0
    max_retries: int = 2
    log_level: str = "INFO"

    @classmethod
    def from_env(cls):
        """Build settings from the environment, reading .env if present."""
        load_dotenv()
        return cls(
            host=os.getenv("HOST", cls.host),
            port=int(os.getenv("PORT", cls.port)),
            api_base=os.getenv("BILIBILI_API_BASE", cls.api_base).rstrip("/"),
            request_timeout=float(os.getenv("REQUEST_TIMEOUT", cls.request_timeout)),
            max_retries=int(os.getenv("MAX_RETRIES", cls.max_retries)),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
        )
