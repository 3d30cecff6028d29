# models/incidents.py
from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

IncidentType = Literal["accident", "police", "construction", "congestion",
                       "weather", "vip", "pothole", "closure"]
Severity = Literal["low", "medium", "high"]
ReportStatus = Literal["Active", "Resolved", "Fake Report"]


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python; both accepted on input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Coordinate(CamelModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class IncidentReport(CamelModel):
    id: str
    type: IncidentType
    severity: Severity = "medium"
    location: Coordinate
    reported_at: datetime
    status: ReportStatus = "Active"
    is_active: bool = True
    expires_at: Optional[datetime] = None
    description: Optional[str] = None
    address: Optional[str] = None        # free-text address shown in the UI

    def is_current(self, now: Optional[datetime] = None) -> bool:
        if self.status != "Active" or not self.is_active:
            return False
        if self.expires_at is None:
            return True
        now = now or datetime.now(timezone.utc)
        exp = self.expires_at
        if exp.tzinfo is None:
            exp = exp.replace(tzinfo=timezone.utc)
        return exp > now
