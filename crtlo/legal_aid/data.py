"""Static directory of Cook County housing legal aid organisations."""

from crtlo.legal_aid.schemas import LegalAidResource

LEGAL_AID_RESOURCES: tuple[LegalAidResource, ...] = (
    LegalAidResource(
        id="erp",
        name="Early Resolution Program (ERP)",
        description=(
            "Free mediation and legal aid for unrepresented tenants and "
            "landlords in eviction court."
        ),
        phone="855-956-5763",
        website="https://cookcountylegalaid.org",
        services=["eviction_assistance", "mediation", "rental_assistance"],
        eligibility="All Cook County residents",
    ),
    LegalAidResource(
        id="cvls",
        name="Chicago Volunteer Legal Services",
        description=(
            "Comprehensive legal assistance for low-income Chicago residents "
            "facing housing issues."
        ),
        website="https://cvls.org",
        services=["housing_law", "eviction_defense", "landlord_tenant"],
        eligibility="Low-income residents",
    ),
    LegalAidResource(
        id="legal-aid-chicago",
        name="Legal Aid Chicago",
        description=(
            "Free civil legal services for residents facing eviction, "
            "foreclosure, and housing discrimination."
        ),
        services=["eviction_defense", "foreclosure_prevention", "discrimination"],
        eligibility="Income-qualified residents",
    ),
    LegalAidResource(
        id="lcbh",
        name="Lawyers' Committee for Better Housing",
        description=(
            "Legal representation and advocacy for tenants facing "
            "habitability issues and evictions."
        ),
        services=["habitability", "eviction_defense", "housing_advocacy"],
        eligibility="Tenants with housing issues",
    ),
    LegalAidResource(
        id="cdel",
        name="Center for Disability & Elder Law",
        description=(
            "Specialized legal services for seniors and individuals with "
            "disabilities in housing matters."
        ),
        services=["disability_rights", "elder_law", "housing"],
        eligibility="Seniors and disabled individuals",
    ),
    LegalAidResource(
        id="carpls",
        name="CARPLS Legal Aid",
        description=(
            "Free legal assistance for housing, family, immigration, and "
            "consumer law issues."
        ),
        services=["housing", "family_law", "immigration", "consumer_protection"],
        eligibility="Income-qualified residents",
    ),
)
