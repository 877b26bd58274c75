from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    ALUMNI = "alumni"
    STUDENT = "student"
