import os
from pathlib import Path
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")

# --- Path Configuration ---
INPUT_DIR = BASE_DIR / os.getenv("INPUT_DIR", "input")
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", "output")

# --- Filename Configuration ---
# Reports are expected as <PREFIX><YYYY-MM-DD>.<ext>, e.g. FBA_inventory_2024-06-30.json
FBA_FILENAME_PREFIX = os.getenv("FBA_FILENAME_PREFIX", "FBA_inventory_")
AWD_FILENAME_PREFIX = os.getenv("AWD_FILENAME_PREFIX", "AWD_inventory_")
THREEPL_FILENAME_PREFIX = os.getenv("THREEPL_FILENAME_PREFIX", "3PL_inventory_")
HOME_FILENAME_PREFIX = os.getenv("HOME_FILENAME_PREFIX", "HOME_inventory_")
VELOCITY_FILENAME_PREFIX = os.getenv("VELOCITY_FILENAME_PREFIX", "velocity_")
COMBINED_FILENAME_BASE = os.getenv("COMBINED_FILENAME", "inventory_snapshot")

# --- Outputs ---
SAVE_JSON_OUTPUT = os.getenv("SAVE_JSON_OUTPUT", "false").strip().lower() in (
    "1",
    "true",
    "yes",
)

# --- Webhook ---
WEBHOOK_URL = os.getenv("WEBHOOK_URL")
WEBHOOK_TIMEOUT = int(os.getenv("WEBHOOK_TIMEOUT", "15"))

# --- Shared Business Logic ---
# Trailing marketplace marker on channel-specific SKU variants (e.g. "ABC123SHOP").
SKU_CHANNEL_SUFFIX = os.getenv("SKU_CHANNEL_SUFFIX", "SHOP")

# Define the explicit order for channels in the status summary.
CHANNEL_ORDER = [
    "FBA",
    "AWD",
    "3PL",
    "HOME",
]

# Days-of-supply thresholds for stock health.
CRITICAL_DAYS = int(os.getenv("CRITICAL_DAYS", "14"))
LOW_DAYS = int(os.getenv("LOW_DAYS", "30"))
OVERSTOCK_DAYS = int(os.getenv("OVERSTOCK_DAYS", "90"))
