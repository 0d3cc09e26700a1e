import os

SQLITE_URL = "sqlite:///./hockey_predictor.db"
POSTGRES_URL = os.environ.get("DATABASE_URL")

DATABASE_URL = POSTGRES_URL if POSTGRES_URL else SQLITE_URL

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_JSON = os.environ.get("LOG_JSON", "false").lower() in ("true", "1", "yes")

# Daily reports land in <REPORT_FOLDER>/<MM-dd-yyyy>.txt
REPORT_FOLDER = os.environ.get("REPORT_FOLDER", "GamePredictions")
REPORT_DATE_FORMAT = "%m-%d-%Y"

PREDICTION_WORKERS = int(os.environ.get("PREDICTION_WORKERS", "4"))

# Optional JSON file with ModelConfig overrides
MODEL_CONFIG_PATH = os.environ.get("MODEL_CONFIG_PATH")

SPORTRADAR_API_KEY = os.environ.get("SPORTRADAR_API_KEY", "")
SPORTRADAR_BASE_URL = os.environ.get(
    "SPORTRADAR_BASE_URL", "https://api.sportradar.com/nhl/trial/v7/en"
)
SPORTRADAR_MAX_RATE_LIMIT_RETRIES = 3
SPORTRADAR_RATE_LIMIT_WAIT_SECONDS = float(
    os.environ.get("SPORTRADAR_RATE_LIMIT_WAIT_SECONDS", "60")
)

TOO_CLOSE_TO_CALL = "Too close to call"
