import logging
from types import MappingProxyType

logger = logging.getLogger(__name__)

DEFAULT_PRODUCT_VERSION = "windows11"

_WINDOWS_PID = "55041-00206-271-298329-03-1033-9600.0000-0452015"

# Product version -> extended product id sent as <PID>
PRODUCT_DESCRIPTORS = MappingProxyType({
    "windows7": _WINDOWS_PID,
    "windows8": _WINDOWS_PID,
    "windows10": _WINDOWS_PID,
    "windows11": _WINDOWS_PID,
    "office2010": "14391-00206-234-298765-03-1033-9600.0000-0452015",
    "office2013": "15063-00206-234-298765-03-1033-9600.0000-0452015",
    "office2016": "16341-00206-234-298765-03-1033-9600.0000-0452015",
    "office2019": "16341-00206-234-298765-03-1033-9600.0000-0452015",
    "office2021": "16341-00206-234-298765-03-1033-9600.0000-0452015",
    "office2024": "16341-00206-234-298765-03-1033-9600.0000-0452015",
})


def resolve_product_descriptor(product_version: str) -> str:
    """
    Get the extended product id for a product version.

    Unknown versions fall back to the Windows 11 descriptor so the
    activation service still gets a best-effort request.
    """
    descriptor = PRODUCT_DESCRIPTORS.get(product_version)
    if descriptor is None:
        logger.warning(
            "Unknown product version %r, using %s descriptor",
            product_version, DEFAULT_PRODUCT_VERSION,
        )
        return PRODUCT_DESCRIPTORS[DEFAULT_PRODUCT_VERSION]
    return descriptor
