"""ChittyGateway constants and enums."""

from enum import Enum

DEFAULT_MODEL = "@cf/meta/llama-3.1-70b-instruct"
DEFAULT_GATEWAY_BASE_URL = "https://gateway.ai.cloudflare.com/v1"
DEFAULT_GATEWAY_NAME = "chittygateway"

FALLBACK_ANSWER = (
    "Unable to provide specific guidance. Please consult the full Chicago "
    "RTLO text or legal counsel."
)
FALLBACK_DOCUMENT = "Unable to generate document."

MIN_COMPLIANCE_SCORE = 0
MAX_COMPLIANCE_SCORE = 100


class ChatRole(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class Confidence(str, Enum):
    """Confidence the model reports in an answer; also used for issue severity."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class AnalysisType(str, Enum):
    LEASE_REVIEW = "lease-review"


class DocumentType(str, Enum):
    """Document types the generator prompt describes."""

    SECURITY_DEPOSIT_NOTICE = "security-deposit-notice"
    ACCESS_NOTICE = "access-notice"
    LEASE_ADDENDUM = "lease-addendum"
    HABITABILITY_NOTICE = "habitability-notice"
