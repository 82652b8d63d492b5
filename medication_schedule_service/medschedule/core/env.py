import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

SERVICE_DIR = Path(__file__).resolve().parents[2]
DEFAULT_ENV_FILE = SERVICE_DIR / "config.env"

def env_file() -> Path:
    """MEDSCHEDULE_ENV_FILE points at another file; otherwise config.env beside the package."""
    override = os.getenv("MEDSCHEDULE_ENV_FILE")
    return Path(override) if override else DEFAULT_ENV_FILE

def load_env(path: Optional[Path] = None) -> bool:
    # variables already set in the process environment win over the file
    return load_dotenv(dotenv_path=path or env_file(), override=False)
