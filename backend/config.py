import os

from dotenv import load_dotenv

load_dotenv()

# HTTP
CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get(
        "CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
    ).split(",")
    if origin.strip()
]

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# Clock
TIMEZONE = os.environ.get("TIMEZONE", "America/Bogota")

# Fixed-term renewal limits (Colombian labor law defaults)
JURISDICTION = os.environ.get("JURISDICTION", "CO")
CEILING_YEARS = float(os.environ.get("CEILING_YEARS", "4"))
APPROACHING_YEARS = float(os.environ.get("APPROACHING_YEARS", "3.5"))
MINIMUM_DURATION_PERIOD = int(os.environ.get("MINIMUM_DURATION_PERIOD", "5"))
MINIMUM_DURATION_DAYS = int(os.environ.get("MINIMUM_DURATION_DAYS", "365"))

# Expiration notifications
EXPIRATION_SCAN_LIMIT = int(os.environ.get("EXPIRATION_SCAN_LIMIT", "10"))
MISSING_COMPANY_LABEL = "Sin empresa"
