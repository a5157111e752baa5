from enum import Enum


class PersonRole(str, Enum):
    """Domain roles an ambiguous identifier can be resolved against."""

    STUDENT = "student"
    REVIEWER = "reviewer"


class AccountRole(str, Enum):
    ADMIN = "ADMIN"
    REVIEWER = "REVIEWER"
    STUDENT = "STUDENT"


class AccountStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
