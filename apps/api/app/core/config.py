import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

try:
    from dotenv import load_dotenv

    # Always load .env from apps/api/.env (stable, regardless of CWD)
    BASE_DIR = Path(__file__).resolve().parents[2]  # apps/api
    dotenv_path = BASE_DIR / ".env"
    load_dotenv(dotenv_path=dotenv_path, override=False)
except ImportError:
    # dotenv is optional; if not installed, env vars still work
    pass


@dataclass(frozen=True)
class Settings:
    # In-memory by default: nothing survives a restart
    database_url: str = os.getenv("DATABASE_URL", "sqlite+pysqlite:///:memory:")
    env: str = os.getenv("ENV", "local")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Generation layer
    openai_api_key: str | None = os.getenv("OPENAI_API_KEY")
    openai_model: str = os.getenv("OPENAI_MODEL", "gpt-4o")
    openai_timeout_sec: float = float(os.getenv("OPENAI_TIMEOUT_SEC", "120"))
    openai_max_retries: int = int(os.getenv("OPENAI_MAX_RETRIES", "0"))
    generation_max_workers: int = int(os.getenv("GENERATION_MAX_WORKERS", "7"))

    # Upload staging
    upload_dir: str = os.getenv("UPLOAD_DIR", tempfile.gettempdir())
    upload_max_bytes: int = int(os.getenv("UPLOAD_MAX_BYTES", str(5 * 1024 * 1024)))


settings = Settings()
