import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Force-load .env (Windows-safe, reload-safe)
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"

MIN_SECRET_LENGTH = 32


def _require(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"{name} is not set. Check your .env file.")
    return value


def _truthy(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    razorpay_key_id: str
    razorpay_key_secret: str
    jwt_secret: str
    counter_backend: str = "sql"  # 'sql' | 'file'
    database_url: Optional[str] = None
    database_ssl: bool = False
    db_pool_size: int = 5
    db_max_overflow: int = 5
    db_pool_timeout: int = 30
    counter_file: str = "./data.json"
    order_amount: int = 100  # paise
    order_currency: str = "INR"
    gateway_timeout: float = 10.0
    storage_timeout: float = 5.0
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    port: int = 4000
    log_level: str = "INFO"

    def __post_init__(self):
        if self.counter_backend not in ("sql", "file"):
            raise RuntimeError(
                f"COUNTER_BACKEND must be 'sql' or 'file', "
                f"got {self.counter_backend!r}"
            )
        if self.counter_backend == "sql" and not self.database_url:
            raise RuntimeError("DATABASE_URL is not set. Check your .env file.")
        if not self.jwt_secret:
            raise RuntimeError("JWT_SECRET is not set. Check your .env file.")
        if len(self.jwt_secret) < MIN_SECRET_LENGTH:
            logger.warning(
                "JWT_SECRET is shorter than %d characters", MIN_SECRET_LENGTH
            )

    @classmethod
    def from_env(cls, env_path: Path = ENV_PATH) -> "Settings":
        load_dotenv(dotenv_path=env_path)

        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            razorpay_key_id=_require("RAZORPAY_KEY_ID"),
            razorpay_key_secret=_require("RAZORPAY_KEY_SECRET"),
            jwt_secret=_require("JWT_SECRET"),
            counter_backend=os.getenv("COUNTER_BACKEND", "sql").lower(),
            database_url=os.getenv("DATABASE_URL"),
            database_ssl=_truthy(os.getenv("DATABASE_SSL")),
            db_pool_size=int(os.getenv("DB_POOL_SIZE", "5")),
            db_max_overflow=int(os.getenv("DB_MAX_OVERFLOW", "5")),
            db_pool_timeout=int(os.getenv("DB_POOL_TIMEOUT", "30")),
            counter_file=os.getenv("COUNTER_FILE", "./data.json"),
            order_amount=int(os.getenv("ORDER_AMOUNT", "100")),
            order_currency=os.getenv("ORDER_CURRENCY", "INR"),
            gateway_timeout=float(os.getenv("GATEWAY_TIMEOUT", "10")),
            storage_timeout=float(os.getenv("STORAGE_TIMEOUT", "5")),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            port=int(os.getenv("PORT", "4000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
