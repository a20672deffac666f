# cli/core/config.py
from pathlib import Path
import os

# Backend URL
BASE_URL = os.environ.get("PRAKRITIPATH_URL", "http://localhost:3000")

# Request timeout in seconds
TIMEOUT = 10

# Local folder for the CLI session
APP_DIR = Path.home() / ".prakritipath"

# Session file (token, role and id of the logged in account)
SESSION_FILE = APP_DIR / "session.json"

# Make sure the folder exists
APP_DIR.mkdir(parents=True, exist_ok=True)
