# Overview: Lookups over the permission catalogue.

from .definitions import PERMISSION_DEFINITIONS


_BY_CODE = {code: (code, name, description, category) for code, name, description, category in PERMISSION_DEFINITIONS}


def get_all_permission_codes():
    return list(_BY_CODE)


def get_permission_definition(code):
    """Catalogue entry for a code as a dict, or None for an unknown code."""
    if code not in _BY_CODE:
        return None
    return dict(zip(("code", "name", "description", "category"), _BY_CODE[code]))


def validate_permission_code(code):
    return code in _BY_CODE
