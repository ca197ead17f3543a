import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Where the CLI looks for stored field settings
SETTINGS_PATH: Path = Path(
    os.environ.get("SMARTTRIM_SETTINGS_PATH", "config/smarttrim.json")
)

LOG_LEVEL: str = os.environ.get("SMARTTRIM_LOG_LEVEL", "INFO").upper()
