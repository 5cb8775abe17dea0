from datetime import datetime
from pydantic import BaseModel, ConfigDict, computed_field
from typing import List, Optional

class CloudLayer(BaseModel):
    model_config = ConfigDict(frozen=True)

    coverage: str  # SKC, CLR, NCD, NSC, FEW, SCT, BKN, OVC or VV
    altitude_feet: int = 0  # 0 when the report gave no height group

class DecodedReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    raw_metar: str = ""
    airport_code: str = ""
    observation_time: Optional[datetime] = None
    wind_direction: Optional[str] = None  # "VRB" or three digits, e.g. "090"
    wind_speed_knots: Optional[int] = None
    gust_speed_knots: Optional[int] = None
    visibility: Optional[str] = None
    weather_phenomena: List[str] = []
    cloud_layers: List[CloudLayer] = []
    temperature_celsius: Optional[int] = None
    dew_point_celsius: Optional[int] = None
    altimeter_in_hg: Optional[float] = None
    human_readable_summary: str = ""
    error_message: Optional[str] = None

    @computed_field
    @property
    def is_valid(self) -> bool:
        return not self.error_message
