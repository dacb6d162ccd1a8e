import os
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_DB_PATH = "data/stock.db"
DEFAULT_LOG_LEVEL = "INFO"


def load_env() -> None:
    """Load .env from the working directory if present.
    Values already in the environment win.
    """
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path, override=False)


def db_path() -> Path:
    return Path(os.getenv("STOCKMATCH_DB") or DEFAULT_DB_PATH)


def default_company() -> str | None:
    return os.getenv("STOCKMATCH_COMPANY") or None


def log_level() -> str:
    return (os.getenv("STOCKMATCH_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
