"""Field extraction from spatial database query results."""
from typing import Iterable, Optional, Tuple

from tzlookup.core.models import ZoneFields

TIMEZONE_ID_PREFIX_FIELD = "TimezoneIdPrefix"
TIMEZONE_ID_FIELD = "TimezoneId"
COUNTRY_NAME_FIELD = "CountryName"
COUNTRY_ALPHA2_FIELD = "CountryAlpha2"

FieldPair = Tuple[Optional[str], Optional[str]]


def extract_fields(pairs: Iterable[FieldPair]) -> Optional[ZoneFields]:
    """
    Extract timezone and country fields from a query result's field list.
    
    The timezone is the prefix and id fields concatenated, e.g.
    ``"Europe/"`` + ``"Berlin"``. Without both of them the whole result is
    discarded, country fields included.
    
    Args:
        pairs: (name, value) pairs as returned by a spatial database query
        
    Returns:
        ZoneFields, or None if the timezone fields are incomplete
    """
    prefix = None
    zone_id = None
    country_name = None
    country_alpha2 = None
    
    for name, value in pairs:
        if name is None or value is None:
            continue
        if name == COUNTRY_ALPHA2_FIELD:
            country_alpha2 = value
        elif name == COUNTRY_NAME_FIELD:
            country_name = value
        elif name == TIMEZONE_ID_PREFIX_FIELD:
            prefix = value
        elif name == TIMEZONE_ID_FIELD:
            zone_id = value
    
    if prefix is None or zone_id is None:
        return None
    
    return ZoneFields(
        timezone=prefix + zone_id,
        country_name=country_name,
        country_alpha2=country_alpha2,
    )


def extract_timezone(pairs: Iterable[FieldPair]) -> Optional[str]:
    """Extract only the timezone identifier from a field list."""
    prefix = None
    zone_id = None
    
    for name, value in pairs:
        if name is None or value is None:
            continue
        if name == TIMEZONE_ID_PREFIX_FIELD:
            prefix = value
        elif name == TIMEZONE_ID_FIELD:
            zone_id = value
    
    if prefix is None or zone_id is None:
        return None
    return prefix + zone_id
