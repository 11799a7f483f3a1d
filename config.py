"""
Configuration for the herb trace ledger, read from environment variables.
"""
import os


def _bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class Config:
    ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

    # ---------- DB ----------
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./herbtrace.db")

    # ---------- HTTP ----------
    BASE_URL = os.getenv("BASE_URL", "http://localhost:8000")
    ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

    # ---------- Logging ----------
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_JSON = _bool("LOG_JSON", "true" if ENVIRONMENT == "production" else "false")

    # ---------- Verification ----------
    VERIFICATION_DELAY_SECONDS = float(os.getenv("VERIFICATION_DELAY_SECONDS", "2.0"))
    VERIFICATION_TIMEOUT_SECONDS = float(os.getenv("VERIFICATION_TIMEOUT_SECONDS", "10.0"))

    # ---------- Store ----------
    BATCH_ID_MAX_ATTEMPTS = int(os.getenv("BATCH_ID_MAX_ATTEMPTS", "3"))
    DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
    MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", "100"))

    @classmethod
    def validate(cls):
        if cls.VERIFICATION_TIMEOUT_SECONDS <= 0:
            raise ValueError("VERIFICATION_TIMEOUT_SECONDS must be positive")
        if cls.BATCH_ID_MAX_ATTEMPTS < 1:
            raise ValueError("BATCH_ID_MAX_ATTEMPTS must be at least 1")
        if not 1 <= cls.DEFAULT_PAGE_SIZE <= cls.MAX_PAGE_SIZE:
            raise ValueError("DEFAULT_PAGE_SIZE must be between 1 and MAX_PAGE_SIZE")


config = Config()
