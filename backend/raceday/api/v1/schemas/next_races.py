from typing import Optional

from pydantic import BaseModel, Field


class NextRaceOut(BaseModel):
    code: str = Field(..., description="Series code, e.g. N1")
    series_name: str
    series_logo: str

    race_name: str
    venue: str
    start: str = Field(..., description="ISO datetime in the requested zone")

    tv: list[str]
    radio: list[str]
    satellite: list[str]

    outlet_logos: dict[str, str] = Field(default_factory=dict, description="Logo URL per known outlet code")


class NextRacesOut(BaseModel):
    tz: Optional[str] = None
    races: list[NextRaceOut]
