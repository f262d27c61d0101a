"""
Closed status and category enumerations.

Single source of truth for every enumerated column. The database columns,
the request schemas and the aggregators all use these types, so an unknown
value is rejected where records enter or leave the system.
"""
import enum
from typing import List, Set


class ApplicationStatus(str, enum.Enum):
    APPLIED = "Applied"
    OA = "OA"
    INTERVIEW = "Interview"
    OFFER = "Offer"
    REJECTED = "Rejected"
    GHOSTED = "Ghosted"
    WITHDRAWN = "Withdrawn"


class ApplicationSource(str, enum.Enum):
    LINKEDIN = "LinkedIn"
    NAUKRI = "Naukri"
    INDEED = "Indeed"
    WELLFOUND = "WellFound"
    INSTAHYRE = "Instahyre"
    COMPANY_PORTAL = "Company-Portal"
    REFERRAL = "Referral"
    OTHER = "Other"


class CompanyTier(str, enum.Enum):
    FAANG = "FAANG"
    UNICORN = "Unicorn"
    MID_SIZE = "Mid-Size"
    STARTUP = "Startup"


class Priority(str, enum.Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class ReferralStatus(str, enum.Enum):
    PENDING = "Pending"
    AGREED = "Agreed"
    REFERRED = "Referred"
    DECLINED = "Declined"


class InterviewStatus(str, enum.Enum):
    SCHEDULED = "Scheduled"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    RESCHEDULED = "Rescheduled"


class ActivityType(str, enum.Enum):
    APPLICATION = "application"
    REFERRAL = "referral"
    RESUME = "resume"
    INTERVIEW = "interview"


class ActivityAction(str, enum.Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    STATUS_CHANGED = "status_changed"


# Statuses that do not count as a response from the company
NON_RESPONSE_STATUSES: Set[ApplicationStatus] = {
    ApplicationStatus.APPLIED,
    ApplicationStatus.GHOSTED,
    ApplicationStatus.WITHDRAWN,
}

# Statuses that close an application
INACTIVE_STATUSES: Set[ApplicationStatus] = {
    ApplicationStatus.REJECTED,
    ApplicationStatus.GHOSTED,
    ApplicationStatus.WITHDRAWN,
}

# Funnel stages, each one including every later stage
FUNNEL_STAGES: List[ApplicationStatus] = [
    ApplicationStatus.APPLIED,
    ApplicationStatus.OA,
    ApplicationStatus.INTERVIEW,
    ApplicationStatus.OFFER,
]

UNKNOWN_TIER = "Unknown"
TIER_ORDER: List[str] = [tier.value for tier in CompanyTier] + [UNKNOWN_TIER]


def coerce_status(value, enum_cls):
    """Return ``value`` as a member of ``enum_cls``, or None if it is not one."""
    if value is None:
        return None
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return None


def is_response(status) -> bool:
    """True when the company answered (anything but Applied, Ghosted, Withdrawn)."""
    status = coerce_status(status, ApplicationStatus)
    return status is not None and status not in NON_RESPONSE_STATUSES


def enum_values(enum_cls) -> List[str]:
    """Stored values for a SQLAlchemy ``Enum`` column (values, not member names)."""
    return [member.value for member in enum_cls]
