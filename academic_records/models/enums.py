import enum


class RoleId(enum.IntEnum):
    ADMIN = 1
    TEACHER = 2
    STUDENT = 3


class UserStatus(str, enum.Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"
    INACTIVE = "inactive"


class EnrollmentStatus(str, enum.Enum):
    ENROLLED = "enrolled"
    WITHDRAWN = "withdrawn"
