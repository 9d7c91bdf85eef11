import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Override with e.g. "sqlite:////var/lib/grader/grader.db"
DATABASE_URL = os.getenv("GRADER_DATABASE_URL", f"sqlite:///{BASE_DIR}/grader.db")

# Late policy defaults (used until a snapshot is saved)
DEFAULT_START_TIME = "19:50"  # end of grace period
DEFAULT_CUTOFF_TIME = "22:30"  # maximum penalty from here on
DEFAULT_MAX_PERCENT = 40.0

# Upload limits
MAX_UPLOAD_BYTES = 5 * 1024 * 1024  # 5MB
ALLOWED_UPLOAD_SUFFIX = ".csv"

# Required CSV columns, matched case-insensitively
NAME_COLUMN = "nome"
SCORE_COLUMN = "nota"
TIMESTAMP_COLUMN = "datahora"
REQUIRED_COLUMNS = (NAME_COLUMN, SCORE_COLUMN, TIMESTAMP_COLUMN)
