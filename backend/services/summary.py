from models.metar import CloudLayer
from services.codes import CLOUD_COVERAGE
from typing import List, Optional

KNOTS_TO_MPH = 1.15078

def celsius_to_fahrenheit(celsius: int) -> int:
    return round(celsius * 9 / 5 + 32)

def knots_to_mph(knots: int) -> int:
    return round(knots * KNOTS_TO_MPH)

def cardinal_direction(degrees: int) -> str:
    """Map a wind heading to one of the eight compass points."""
    degrees = degrees % 360

    if degrees >= 337.5 or degrees < 22.5:
        return "north"
    if degrees < 67.5:
        return "northeast"
    if degrees < 112.5:
        return "east"
    if degrees < 157.5:
        return "southeast"
    if degrees < 202.5:
        return "south"
    if degrees < 247.5:
        return "southwest"
    if degrees < 292.5:
        return "west"
    return "northwest"

def _describe_sky(cloud_layers: List[CloudLayer]) -> str:
    if not cloud_layers:
        return "Clear skies"

    # Only the lowest reported layer is narrated
    primary = cloud_layers[0]
    description = CLOUD_COVERAGE.get(primary.coverage, primary.coverage)
    if primary.altitude_feet > 0:
        return f"{description} at {primary.altitude_feet:,} feet"
    return description

def _describe_wind(
    wind_speed_knots: int,
    wind_direction: Optional[str],
    gust_speed_knots: Optional[int]
) -> str:
    if wind_speed_knots == 0:
        return "Calm winds"

    wind_mph = knots_to_mph(wind_speed_knots)
    if wind_direction == "VRB":
        return f"Variable winds at {wind_mph} mph"

    try:
        degrees = int(wind_direction)
    except (TypeError, ValueError):
        return ""

    wind_desc = f"Wind from the {cardinal_direction(degrees)} at {wind_mph} mph"
    if gust_speed_knots is not None:
        wind_desc += f", gusting to {knots_to_mph(gust_speed_knots)} mph"
    return wind_desc

def summarize(
    cloud_layers: List[CloudLayer],
    weather_phenomena: List[str],
    temperature_celsius: Optional[int],
    wind_speed_knots: Optional[int],
    wind_direction: Optional[str],
    gust_speed_knots: Optional[int],
    visibility: Optional[str],
    altimeter_in_hg: Optional[float]
) -> str:
    """Render decoded METAR fields as a short plain-English report.

    Fragments come out in a fixed order (sky, weather, temperature, wind,
    visibility, altimeter), are joined with ". " and end with a period.
    Temperatures are shown in both Fahrenheit and Celsius, wind speeds in mph.
    """
    parts = [_describe_sky(cloud_layers)]

    if weather_phenomena:
        weather = ", ".join(weather_phenomena).lower()
        if weather:
            parts.append(weather)

    if temperature_celsius is not None:
        fahrenheit = celsius_to_fahrenheit(temperature_celsius)
        parts.append(f"Temperature {fahrenheit}°F ({temperature_celsius}°C)")

    if wind_speed_knots is not None:
        wind_desc = _describe_wind(wind_speed_knots, wind_direction, gust_speed_knots)
        if wind_desc:
            parts.append(wind_desc)

    if visibility:
        parts.append(f"Visibility {visibility}")

    if altimeter_in_hg is not None:
        parts.append(f"Altimeter {altimeter_in_hg:.2f}\" Hg")

    return ". ".join(parts) + "."
