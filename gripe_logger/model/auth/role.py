from enum import Enum


class Role(str, Enum):
    STUDENT = "student"
    ADMIN = "admin"
