import re
from enum import Enum


class ChittyEntity(str, Enum):
    """Entity tags allowed in the second segment of a ChittyID."""

    PERSON = "PEO"
    PLACE = "PLACE"
    PROPERTY = "PROP"
    EVENT = "EVNT"
    AUTHORITY = "AUTH"
    INFO = "INFO"
    FACT = "FACT"
    CONTEXT = "CONTEXT"
    ACTOR = "ACTOR"
    DOCUMENT = "DOC"
    SERVICE = "SERVICE"


# CHITTY-{ENTITY}-{SEQUENCE}-{CHECKSUM}
CHITTYID_PATTERN = re.compile(
    r"^CHITTY-(" + "|".join(entity.value for entity in ChittyEntity) + r")"
    r"-[A-Z0-9]{8}-[A-Z0-9]{4}$"
)


class SameSite(str, Enum):
    """SameSite cookie settings."""

    LAX = "lax"
    STRICT = "strict"
    NONE = "none"


class TimeInSeconds(int):
    """Time constants in seconds."""

    ONE_HOUR = 3600
    ONE_WEEK = 604800


OIDC_SCOPES = ("openid", "email", "profile", "offline_access")
LOGIN_PROMPT = "login consent"
DISCOVERY_PATH = "/.well-known/openid-configuration"
