"""Environment-driven settings (data directory, logging)."""

import os
from pathlib import Path
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parents[1]
load_dotenv(BASE_DIR / ".env")

# Directory holding the persisted JSON blobs for FileBlobStorage
DATA_DIR = Path(os.getenv("HOUSING_DATA_DIR", BASE_DIR / "storage"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Empty means console only
LOG_FILE = os.getenv("LOG_FILE", "")
