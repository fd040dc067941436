"""ChittyID format validation."""

from crtlo.auth.constants import CHITTYID_PATTERN


def validate_chittyid_format(chitty_id: str | None) -> bool:
    """
    Check that a string looks like `CHITTY-{ENTITY}-{8 alnum}-{4 alnum}`.

    Only the format is checked; the checksum segment is not verified
    against any registry.
    """
    if not chitty_id:
        return False
    return CHITTYID_PATTERN.fullmatch(chitty_id) is not None
