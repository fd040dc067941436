"""User database models."""

from crtlo.db.users.model import User
from crtlo.db.users.repository import UserRepository

__all__ = ["User", "UserRepository"]
