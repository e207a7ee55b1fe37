from __future__ import annotations

import os

from dotenv import load_dotenv
load_dotenv()

# Values from the environment (or a .env file next to the working directory)
SQL_ECHO = os.getenv("CLINIC_SQL_ECHO", "0").lower() in ("1", "true", "t", "yes", "y")
LOG_LEVEL = os.getenv("CLINIC_LOG_LEVEL", "WARNING").upper()
SEED_DEMO = os.getenv("CLINIC_SEED_DEMO", "1").lower() in ("1", "true", "t", "yes", "y")
