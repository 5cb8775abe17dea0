import logging
import requests
from typing import Optional
from config import AVIATION_WEATHER_BASE, REQUEST_TIMEOUT
from models.metar import DecodedReport
from services.decoder import decode

logger = logging.getLogger(__name__)

def normalize_airport_code(airport_code: Optional[str]) -> str:
    return (airport_code or "").strip().upper()

def validate_airport_code(airport_code: Optional[str]) -> Optional[str]:
    """Return an error message for an unusable airport code, None if it looks fine."""
    code = normalize_airport_code(airport_code)
    if not code:
        return "Please enter an airport code"
    # ICAO codes are 4 characters, FAA identifiers such as LAX are 3
    if len(code) < 3 or len(code) > 4:
        return "Airport code should be 3-4 characters (e.g., KJFK, LAX)"
    return None

def fetch_raw_metar(airport_code: str) -> str:
    url = f"{AVIATION_WEATHER_BASE}/metar"
    logger.info(f"🌐 Fetching METAR: {url}?ids={airport_code}")
    r = requests.get(url, params={"ids": airport_code}, timeout=REQUEST_TIMEOUT)

    logger.info(f"📊 METAR Response Status: {r.status_code}")
    r.raise_for_status()
    return r.text

def fetch_metar(airport_code: Optional[str]) -> DecodedReport:
    error = validate_airport_code(airport_code)
    code = normalize_airport_code(airport_code)
    if error:
        logger.warning(f"⚠️ Rejected airport code '{code}': {error}")
        return DecodedReport(airport_code=code, error_message=error)

    try:
        raw_metar = fetch_raw_metar(code)

        if not raw_metar or not raw_metar.strip():
            logger.warning(f"📭 No METAR found for {code}")
            return DecodedReport(
                airport_code=code,
                error_message=f"No METAR data found for airport code '{code}'. Please verify the code is correct."
            )

        logger.info(f"📄 Received METAR: {raw_metar.strip()}")
        return decode(raw_metar)
    except requests.exceptions.RequestException:
        logger.exception(f"❌ Error fetching METAR for {code}")
        return DecodedReport(
            airport_code=code,
            error_message="Unable to connect to the weather service. Please try again later."
        )
    except Exception:
        logger.exception(f"💥 Unexpected error fetching METAR for {code}")
        return DecodedReport(
            airport_code=code,
            error_message="An unexpected error occurred. Please try again."
        )
