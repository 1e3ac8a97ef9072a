import os
from dataclasses import dataclass, field
from typing import List, Optional

DB_HOST = os.getenv("DB_HOST")
DB_USER = os.getenv("DB_USER", "root")
DB_PASSWORD = os.getenv("DB_PASSWORD", "")
DB_NAME = os.getenv("DB_NAME", "rental")
DB_PORT = int(os.getenv("DB_PORT", "3306"))
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))
DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "10"))


def build_database_url() -> str:
    if not DB_HOST:
        return "sqlite:///./rental.db"
    return f"mysql+pymysql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"


DATABASE_URL = os.getenv("DATABASE_URL") or build_database_url()

PORT = int(os.getenv("PORT", "5001"))
BACKEND_URL = os.getenv("BACKEND_URL", f"http://localhost:{PORT}")
IMAGES_DIR = os.getenv("IMAGES_DIR", "images")
PUBLIC_DIR = os.getenv("PUBLIC_DIR", "public")

RENTAL_TOTAL_MODE = os.getenv("RENTAL_TOTAL_MODE", "lenient")
DRIVER_FEE_PER_DAY = float(os.getenv("DRIVER_FEE_PER_DAY", "0"))
ADMIN_TOKEN = os.getenv("ADMIN_TOKEN")

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_FILE = os.getenv("LOG_FILE", "logs/api.log")


@dataclass
class Settings:
    database_url: str = DATABASE_URL
    pool_size: int = DB_POOL_SIZE
    max_overflow: int = DB_MAX_OVERFLOW
    backend_url: str = BACKEND_URL
    images_dir: str = IMAGES_DIR
    public_dir: str = PUBLIC_DIR
    rental_total_mode: str = RENTAL_TOTAL_MODE
    driver_fee_per_day: float = DRIVER_FEE_PER_DAY
    admin_token: Optional[str] = ADMIN_TOKEN
    cors_origins: List[str] = field(default_factory=lambda: list(CORS_ORIGINS))

    @property
    def strict_totals(self) -> bool:
        return self.rental_total_mode.lower() == "strict"
