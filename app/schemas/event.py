from datetime import datetime
from typing import Optional

from pydantic import model_validator

from app.schemas.base import CamelModel
from app.schemas.job import StartupSummary


class EventIn(CamelModel):
    title: str
    description: Optional[str] = None
    location: str
    date: datetime
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    event_image_path: Optional[str] = None

    @model_validator(mode="after")
    def check_times(self):
        if self.start_time and self.end_time and self.end_time < self.start_time:
            raise ValueError("End time must be after start time")
        return self


class EventResponse(EventIn):
    id: str
    startup_id: str
    created_at: datetime
    updated_at: datetime


class EventRegistrationResponse(CamelModel):
    id: str
    event_id: str
    registrant_id: str
    created_at: datetime
    updated_at: datetime


class EventIdRequest(CamelModel):
    event_id: Optional[str] = None


class RegistrantSummary(CamelModel):
    name: str
    email: str
    profile_picture: Optional[str] = None


class EventRegistrationDetail(CamelModel):
    id: str
    event_id: str
    registrant_id: str
    created_at: datetime
    user: RegistrantSummary


class MyRegistration(CamelModel):
    """A registration made by the caller, with event and host summaries."""

    id: str
    event_id: str
    created_at: datetime
    event: Optional[EventResponse] = None
    startup: Optional[StartupSummary] = None


class RegisteredEvent(EventResponse):
    startup: Optional[StartupSummary] = None
