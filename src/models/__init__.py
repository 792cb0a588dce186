from src.models.base import BaseModel
from .university import University
from .user import User, UserRole
from .club import Club, ClubMember

__all__ = [
    "BaseModel",
    "University",
    "User",
    "UserRole",
    "Club",
    "ClubMember",
]
