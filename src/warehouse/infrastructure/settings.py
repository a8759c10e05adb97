import os
from pathlib import Path

from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parents[3]

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")

# --- Storage ---
WAREHOUSE_TABLE_NAME = os.getenv("WAREHOUSE_TABLE_NAME", "warehouse")
EVENT_STORE_TABLE_NAME = os.getenv("EVENT_STORE_TABLE_NAME", "warehouse-event-store")
AWS_REGION = os.getenv("AWS_REGION", "us-east-1")
# Point at DynamoDB Local or similar; unset means the real service.
DYNAMODB_ENDPOINT_URL = os.getenv("DYNAMODB_ENDPOINT_URL") or None

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_JSON = os.getenv("LOG_JSON", "false").lower() in ("1", "true", "yes")
