import os
from dotenv import load_dotenv

load_dotenv()

AVIATION_WEATHER_BASE = os.getenv("AVIATION_WEATHER_BASE", "https://aviationweather.gov/api/data")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

# Comma separated lists
ALLOWED_ORIGINS = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "http://localhost:5173").split(",") if o.strip()]
ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "*").split(",") if h.strip()]
