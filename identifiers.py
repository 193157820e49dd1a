import re

from exceptions import InvalidIdentifierError

MIN_INSTALLATION_ID_LENGTH = 45

_SEPARATORS = re.compile(r"[-\s]")


def normalize_installation_id(installation_id: str) -> str:
    """
    Strip hyphens and whitespace from an installation id and validate it.

    The result contains only digits and is at least 45 characters long.
    Normalizing an already normalized id returns it unchanged.
    """
    clean_iid = _SEPARATORS.sub("", installation_id)

    if len(clean_iid) < MIN_INSTALLATION_ID_LENGTH:
        raise InvalidIdentifierError(
            f"Invalid Installation ID format - got {len(clean_iid)} digits, "
            f"need at least {MIN_INSTALLATION_ID_LENGTH}"
        )
    if not clean_iid.isdigit() or not clean_iid.isascii():
        raise InvalidIdentifierError(
            "Invalid Installation ID format - only digits, hyphens and spaces are allowed"
        )

    return clean_iid
