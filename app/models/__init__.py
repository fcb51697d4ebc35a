from app.models.complaint import Complaint, ComplaintPriority, ComplaintSource, ComplaintStatus, ComplaintType
from app.models.location_qr import LocationQR
from app.models.user import User, UserRole

__all__ = [
    "Complaint",
    "ComplaintPriority",
    "ComplaintSource",
    "ComplaintStatus",
    "ComplaintType",
    "LocationQR",
    "User",
    "UserRole",
]
