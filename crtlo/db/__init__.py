"""Database layer for PostgreSQL operations."""

from crtlo.db.ai_analyses.model import AIAnalysis
from crtlo.db.config import DatabaseSettings, get_db_settings
from crtlo.db.database import Base, get_db
from crtlo.db.documents.model import Document
from crtlo.db.properties.model import Property
from crtlo.db.rtlo_questions.model import RTLOQuestion
from crtlo.db.sessions.model import SessionRecord
from crtlo.db.users import User, UserRepository

__all__ = [
    "AIAnalysis",
    "Base",
    "get_db",
    "DatabaseSettings",
    "get_db_settings",
    "Document",
    "Property",
    "RTLOQuestion",
    "SessionRecord",
    "User",
    "UserRepository",
]
