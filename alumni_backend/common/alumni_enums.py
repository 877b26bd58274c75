from enum import Enum


class MentorshipStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


ACTIVE_MENTORSHIP_STATUSES = (MentorshipStatus.PENDING, MentorshipStatus.ACCEPTED)


class PreferredMode(str, Enum):
    ONLINE = "online"
    IN_PERSON = "in-person"
    BOTH = "both"


class EventType(str, Enum):
    REUNION = "reunion"
    WEBINAR = "webinar"
    WORKSHOP = "workshop"
    NETWORKING = "networking"
    MEETUP = "meetup"


class EventMode(str, Enum):
    ONLINE = "online"
    OFFLINE = "offline"
    HYBRID = "hybrid"


class TargetAudience(str, Enum):
    ALL = "all"
    ALUMNI = "alumni"
    STUDENTS = "students"
    SPECIFIC_BATCH = "specific-batch"
    SPECIFIC_DEPARTMENT = "specific-department"


class EventStatus(str, Enum):
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class AttendeeStatus(str, Enum):
    GOING = "going"
    MAYBE = "maybe"
    NOT_GOING = "not-going"


class JobType(str, Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    INTERNSHIP = "internship"
    REMOTE = "remote"
    CONTRACT = "contract"


class JobStatus(str, Enum):
    ACTIVE = "active"
    CLOSED = "closed"
    PENDING = "pending"
    REJECTED = "rejected"


class ApplicationStatus(str, Enum):
    APPLIED = "applied"
    SHORTLISTED = "shortlisted"
    REJECTED = "rejected"
    HIRED = "hired"
