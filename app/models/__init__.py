from app.models.user import User, USER_TYPES
from app.models.profile import IndividualProfile, StartupProfile
from app.models.job import Job, JobApplication, APPLICATION_STATUSES
from app.models.event import Event, EventRegistration

__all__ = [
    "User",
    "USER_TYPES",
    "IndividualProfile",
    "StartupProfile",
    "Job",
    "JobApplication",
    "APPLICATION_STATUSES",
    "Event",
    "EventRegistration",
]
