from pydantic import BaseModel
from typing import Optional

class MetarRequest(BaseModel):
    airport_code: str  # e.g. "KJFK" or "LAX"

class DecodeRequest(BaseModel):
    raw_metar: Optional[str] = None  # e.g. "KJFK 041856Z 31015KT 10SM CLR 20/10 A3042"
