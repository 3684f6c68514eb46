"""
Query parameter parsing helpers.
"""
from rest_framework.exceptions import ValidationError


def parse_optional_id(value, name):
    """
    Parse an optional integer id from a query/body value.
    Returns None for missing/blank values and for the literal "all".
    Raises ValidationError (400) when the value is not an integer.
    """
    if value is None:
        return None
    s = str(value).strip()
    if not s or s.lower() == 'all':
        return None
    try:
        return int(s)
    except (TypeError, ValueError):
        raise ValidationError({'detail': f'{name} must be an integer'})
