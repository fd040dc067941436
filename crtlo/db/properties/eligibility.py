"""RTLO coverage rule for residential properties."""

# Owner-occupied buildings up to this many units are exempt (MCC 5-12-020).
EXEMPT_MAX_UNITS = 6


def is_rtlo_covered(units: int | None, is_owner_occupied: bool | None) -> bool:
    """
    Decide whether the Chicago RTLO applies to a property.

    Args:
        units: Number of dwelling units; missing counts as a single unit
        is_owner_occupied: Whether the owner lives in the building

    Returns:
        bool: False for owner-occupied buildings of six units or fewer, True otherwise
    """
    if is_owner_occupied and (units or 1) <= EXEMPT_MAX_UNITS:
        return False
    return True
