from fastapi import APIRouter

from crtlo.legal_aid.data import LEGAL_AID_RESOURCES
from crtlo.legal_aid.schemas import LegalAidResource

router = APIRouter(prefix="/legal-aid", tags=["Legal Aid"])


@router.get("", response_model=list[LegalAidResource], response_model_exclude_none=True)
async def list_legal_aid_resources() -> list[LegalAidResource]:
    """Cook County legal aid organisations for landlord-tenant matters."""
    return list(LEGAL_AID_RESOURCES)
