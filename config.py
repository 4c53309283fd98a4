# config.py
import os

from dotenv import load_dotenv

load_dotenv()


def _origins(raw):
    return [o.strip().rstrip("/") for o in raw.split(",") if o.strip()]


# --- Storage ---
DATABASE_PATH = os.getenv("DATABASE_PATH", "terrain_invest.db")

# --- Upstream APIs (public, no key) ---
OPENTOPODATA_URL = os.getenv("OPENTOPODATA_URL", "https://api.opentopodata.org/v1/srtm90m")
OVERPASS_URL = os.getenv("OVERPASS_URL", "https://overpass-api.de/api/interpreter")
OPEN_METEO_URL = os.getenv("OPEN_METEO_URL", "https://api.open-meteo.com/v1/forecast")

HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "25"))
LANDUSE_RADIUS_M = int(os.getenv("LANDUSE_RADIUS_M", "1000"))

# --- Web ---
ALLOWED_ORIGINS = _origins(os.getenv(
    "ALLOWED_ORIGINS",
    "http://localhost:3000,http://127.0.0.1:3000"
))
PORT = int(os.getenv("PORT", "5000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Rainfall risk page ---
DEFAULT_REQUESTED_BY = os.getenv("DEFAULT_REQUESTED_BY", "farmer-123")
PREDICTION_MODEL_ID = "open-meteo"

# Predefined regions offered by the rainfall risk page.
REGIONS = [
    {"id": "punjab", "name": "Punjab Plains", "lat": 30.9010, "lon": 75.8573},
    {"id": "vidarbha", "name": "Vidarbha", "lat": 21.1458, "lon": 79.0882},
    {"id": "krishna-delta", "name": "Krishna Delta", "lat": 16.5062, "lon": 80.6480},
    {"id": "kuttanad", "name": "Kuttanad", "lat": 9.4981, "lon": 76.3388},
    {"id": "marathwada", "name": "Marathwada", "lat": 19.8762, "lon": 75.3433},
]
