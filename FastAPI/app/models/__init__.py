from app.models.user import User
from app.models.job_offer import JobOffer
from app.models.job_request import JobRequest
from app.models.job_application import JobApplication
from app.models.notification import Notification

__all__ = [
    "User",
    "JobOffer",
    "JobRequest",
    "JobApplication",
    "Notification",
]
