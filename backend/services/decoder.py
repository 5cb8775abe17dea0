"""Decode raw METAR text into a DecodedReport.

The report is read left to right. Each field group is tried once, in the
order METARs are written, against the token at the cursor; a group that does
not match is left unset and the cursor stays put. There is no backtracking
and nothing but empty input is treated as an error: whatever cannot be
recognized is skipped.
"""
import calendar
import logging
import re
from datetime import datetime, timedelta, timezone
from models.metar import CloudLayer, DecodedReport
from services.codes import WEATHER_CODES, INTENSITY, VICINITY, VICINITY_PREFIX
from services.summary import summarize
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No METAR data received"
REPORT_TYPES = ("METAR", "SPECI")

TIME_RE = re.compile(r"^\d{6}Z$")
WIND_RE = re.compile(r"^(VRB|\d{3})(\d{2,3})(G(\d{2,3}))?KT$")
VIS_MILES_RE = re.compile(r"^(\d+)SM$")
VIS_WHOLE_RE = re.compile(r"^\d+$")
VIS_FRACTION_RE = re.compile(r"^\d/\d+SM$")
WEATHER_RE = re.compile(r"^([+-]|VC)?([A-Z]{2,})$")
# Prefix match only, trailing cloud types such as CB or TCU are allowed
CLOUD_RE = re.compile(r"^(SKC|CLR|NCD|NSC|FEW|SCT|BKN|OVC|VV)(\d{3})?")
TEMP_RE = re.compile(r"^(M)?(\d{2})/(M)?(\d{2})$")
ALTIMETER_RE = re.compile(r"^A(\d{4})$")

def _previous_month(year: int, month: int) -> Tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1

def parse_observation_time(token: str, now: datetime) -> Optional[datetime]:
    """Turn a DDHHMMZ group into a UTC datetime.

    The group carries no month or year, so the current ones are assumed. A
    result more than a day in the future belongs to the previous month (day
    clamped to that month's length). Returns None for impossible digits.
    """
    day, hour, minute = int(token[0:2]), int(token[2:4]), int(token[4:6])
    if not 1 <= day <= 31 or hour > 23 or minute > 59:
        logger.debug(f"Ignoring impossible observation time {token}")
        return None

    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    if day <= calendar.monthrange(now.year, now.month)[1]:
        observed = datetime(now.year, now.month, day, hour, minute, tzinfo=timezone.utc)
        if observed <= now + timedelta(days=1):
            return observed

    year, month = _previous_month(now.year, now.month)
    day = min(day, calendar.monthrange(year, month)[1])
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)

def _split_groups(code: str) -> List[str]:
    return [code[i:i + 2] for i in range(0, len(code), 2)]

def is_weather_code(token: str) -> bool:
    """True when every two-letter group of the token is a known weather code."""
    code = token.lstrip("+-")
    if code.startswith(VICINITY):
        code = code[len(VICINITY):]

    if not code or len(code) % 2:
        return False
    return all(group in WEATHER_CODES for group in _split_groups(code))

def decode_weather(token: str) -> str:
    """Decode a present-weather group such as "-RA", "+TSRA" or "VCSH"."""
    prefix = ""
    remaining = token

    if remaining[:1] in INTENSITY:
        prefix += INTENSITY[remaining[0]]
        remaining = remaining[1:]

    if remaining.startswith(VICINITY):
        prefix += VICINITY_PREFIX
        remaining = remaining[len(VICINITY):]

    phrases = [WEATHER_CODES[group] for group in _split_groups(remaining) if group in WEATHER_CODES]
    return (prefix + " ".join(phrases)).strip()

def _parse_wind(tokens: List[str], pos: int):
    direction = speed = gust = None
    if pos < len(tokens):
        match = WIND_RE.match(tokens[pos])
        if match:
            direction = match.group(1)
            speed = int(match.group(2))
            if match.group(4):
                gust = int(match.group(4))
            pos += 1
    return direction, speed, gust, pos

def _parse_visibility(tokens: List[str], pos: int) -> Tuple[Optional[str], int]:
    if pos >= len(tokens):
        return None, pos

    token = tokens[pos]
    match = VIS_MILES_RE.match(token)
    if match:
        return f"{match.group(1)} statute miles", pos + 1

    if token == "CAVOK":
        return "Greater than 10 km (CAVOK)", pos + 1

    # Whole number and fraction split over two tokens, e.g. "1 1/2SM"
    if pos + 1 < len(tokens) and VIS_WHOLE_RE.match(token) and VIS_FRACTION_RE.match(tokens[pos + 1]):
        fraction = tokens[pos + 1].replace("SM", "")
        return f"{token} {fraction} statute miles", pos + 2

    if VIS_FRACTION_RE.match(token):
        return f"{token.replace('SM', '')} statute miles", pos + 1

    return None, pos

def _parse_weather(tokens: List[str], pos: int) -> Tuple[List[str], int]:
    phenomena = []
    while pos < len(tokens):
        token = tokens[pos]
        if not (WEATHER_RE.match(token) and is_weather_code(token)):
            break
        phenomena.append(decode_weather(token))
        pos += 1
    return phenomena, pos

def _parse_clouds(tokens: List[str], pos: int) -> Tuple[List[CloudLayer], int]:
    layers = []
    while pos < len(tokens):
        match = CLOUD_RE.match(tokens[pos])
        if not match:
            break
        altitude = int(match.group(2)) * 100 if match.group(2) else 0
        layers.append(CloudLayer(coverage=match.group(1), altitude_feet=altitude))
        pos += 1
    return layers, pos

def _parse_temperature(tokens: List[str], pos: int):
    if pos < len(tokens):
        match = TEMP_RE.match(tokens[pos])
        if match:
            temperature = int(match.group(2))
            if match.group(1) == "M":
                temperature = -temperature
            dew_point = int(match.group(4))
            if match.group(3) == "M":
                dew_point = -dew_point
            return temperature, dew_point, pos + 1
    return None, None, pos

def _parse_altimeter(tokens: List[str], pos: int) -> Tuple[Optional[float], int]:
    if pos < len(tokens):
        match = ALTIMETER_RE.match(tokens[pos])
        if match:
            return int(match.group(1)) / 100.0, pos + 1
    return None, pos

def decode(raw_metar: Optional[str], now: Optional[datetime] = None) -> DecodedReport:
    if raw_metar is None or not raw_metar.strip():
        return DecodedReport(error_message=NO_DATA_MESSAGE)

    raw_metar = raw_metar.strip()
    tokens = raw_metar.split()
    pos = 0

    if tokens[pos] in REPORT_TYPES:
        pos += 1

    airport_code = ""
    if pos < len(tokens):
        airport_code = tokens[pos]
        pos += 1

    observation_time = None
    if pos < len(tokens) and TIME_RE.match(tokens[pos]):
        observation_time = parse_observation_time(tokens[pos], now or datetime.now(timezone.utc))
        pos += 1

    wind_direction, wind_speed, gust_speed, pos = _parse_wind(tokens, pos)
    visibility, pos = _parse_visibility(tokens, pos)
    weather_phenomena, pos = _parse_weather(tokens, pos)
    cloud_layers, pos = _parse_clouds(tokens, pos)
    temperature, dew_point, pos = _parse_temperature(tokens, pos)
    altimeter, pos = _parse_altimeter(tokens, pos)

    if pos < len(tokens):
        logger.debug(f"Ignoring {len(tokens) - pos} trailing token(s) in {airport_code} report: {' '.join(tokens[pos:])}")

    return DecodedReport(
        raw_metar=raw_metar,
        airport_code=airport_code,
        observation_time=observation_time,
        wind_direction=wind_direction,
        wind_speed_knots=wind_speed,
        gust_speed_knots=gust_speed,
        visibility=visibility,
        weather_phenomena=weather_phenomena,
        cloud_layers=cloud_layers,
        temperature_celsius=temperature,
        dew_point_celsius=dew_point,
        altimeter_in_hg=altimeter,
        human_readable_summary=summarize(
            cloud_layers, weather_phenomena, temperature,
            wind_speed, wind_direction, gust_speed,
            visibility, altimeter
        )
    )
