from pydantic import BaseModel, Field


class LegalAidResource(BaseModel):
    """A Cook County legal aid organisation."""

    id: str
    name: str
    description: str
    phone: str | None = None
    website: str | None = None
    services: list[str] = Field(default_factory=list)
    eligibility: str
