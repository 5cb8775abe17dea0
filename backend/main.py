import logging
import config

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

logger.info("🔧 Environment Check:")
logger.info(f"   ENVIRONMENT: {config.ENVIRONMENT}")
logger.info(f"   AVIATION_WEATHER_BASE: {config.AVIATION_WEATHER_BASE}")

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from models.metar import DecodedReport
from models.request import MetarRequest, DecodeRequest
from services.decoder import decode
from services.weather import fetch_metar

SERVICE_NAME = "METAR Reader"
VERSION = "1.0.0"

app = FastAPI(
    title=SERVICE_NAME,
    description="Fetches aviation weather reports (METAR) and decodes them into plain English",
    version=VERSION,
    docs_url="/docs" if config.ENVIRONMENT != "production" else None,
    redoc_url="/redoc" if config.ENVIRONMENT != "production" else None
)

# Security middleware
app.add_middleware(TrustedHostMiddleware, allowed_hosts=config.ALLOWED_HOSTS)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "HEAD", "OPTIONS"],
    allow_headers=["*"],
)

@app.get("/")
@app.head("/")
def health():
    """Health check endpoint"""
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "version": VERSION,
    }

@app.get("/metar/{airport_code}", response_model=DecodedReport)
def get_metar(airport_code: str):
    """Fetch the latest METAR for an airport and decode it.

    Problems (bad code, no report, weather service down) come back in
    ``error_message`` with ``is_valid`` false rather than as HTTP errors.
    """
    logger.info(f"🛫 METAR request for {airport_code}")
    report = fetch_metar(airport_code)
    if not report.is_valid:
        logger.info(f"⚠️ {airport_code}: {report.error_message}")
    return report

@app.post("/metar", response_model=DecodedReport)
def post_metar(req: MetarRequest):
    return get_metar(req.airport_code)

@app.post("/decode", response_model=DecodedReport)
def decode_metar(req: DecodeRequest):
    """Decode METAR text supplied by the caller, no network access."""
    return decode(req.raw_metar)
