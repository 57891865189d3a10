"""Runtime settings from environment variables (optionally a .env file)."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_FILE = "addressbook.dat"


@dataclass(frozen=True)
class Settings:
    data_file: Path
    phone_region: str | None = None
    log_level: str = "INFO"


def load_settings(env_file: Path | None = None) -> Settings:
    """Build Settings from ADDRESSBOOK_* variables.

    When env_file is given (or a .env exists in the working directory) it is
    loaded first; variables already set in the environment win.
    """
    for path in (env_file, Path.cwd() / ".env"):
        if path is not None and path.exists():
            load_dotenv(path)
            break
    data_file = os.environ.get("ADDRESSBOOK_FILE", "").strip() or DEFAULT_FILE
    region = os.environ.get("ADDRESSBOOK_PHONE_REGION", "").strip().upper() or None
    level = os.environ.get("ADDRESSBOOK_LOG_LEVEL", "").strip().upper() or "INFO"
    return Settings(data_file=Path(data_file), phone_region=region, log_level=level)
