from types import MappingProxyType

# Two-letter present-weather groups. Descriptors, precipitation, obscuration
# and other phenomena share one table so a token like "TSRA" or "BLSN" is
# decoded group by group.
WEATHER_CODES = MappingProxyType({
    # Vicinity
    "VC": "In the vicinity:",

    # Descriptor
    "MI": "shallow",
    "PR": "partial",
    "BC": "patches of",
    "DR": "low drifting",
    "BL": "blowing",
    "SH": "showers of",
    "TS": "thunderstorm with",
    "FZ": "freezing",

    # Precipitation
    "DZ": "drizzle",
    "RA": "rain",
    "SN": "snow",
    "SG": "snow grains",
    "IC": "ice crystals",
    "PL": "ice pellets",
    "GR": "hail",
    "GS": "small hail",
    "UP": "unknown precipitation",

    # Obscuration
    "BR": "mist",
    "FG": "fog",
    "FU": "smoke",
    "VA": "volcanic ash",
    "DU": "dust",
    "SA": "sand",
    "HZ": "haze",
    "PY": "spray",

    # Other
    "PO": "dust/sand whirls",
    "SQ": "squalls",
    "FC": "funnel cloud/tornado",
    "SS": "sandstorm",
    "DS": "duststorm",
})

INTENSITY = MappingProxyType({
    "-": "Light ",
    "+": "Heavy ",
})

VICINITY = "VC"
VICINITY_PREFIX = "In vicinity: "

CLOUD_COVERAGE = MappingProxyType({
    "SKC": "Clear skies",
    "CLR": "Clear skies",
    "NCD": "No clouds detected",
    "NSC": "No significant clouds",
    "FEW": "Few clouds",
    "SCT": "Scattered clouds",
    "BKN": "Broken clouds",
    "OVC": "Overcast",
    "VV": "Vertical visibility",
})
