from types import MappingProxyType
from typing import Optional

# Installation id -> confirmation id pairs previously returned by the service
KNOWN_CONFIRMATION_IDS = MappingProxyType({
    "445686086455217341503603789092033711398045546244021976753799760":
        "175663 758052 913011 026693 998296 111132 898444 598900",
    "726638655472241669132702686630298326453704637512638480625377045":
        "329382 354816 209810 653100 955992 816980 096510 525770",
    "523630667242161498995107413293761365021726779491044825719148566":
        "188464 325086 933971 561982 440844 900072 121364 648895",
    "244682367662341744894119150534577726114306959756379871765964002":
        "371704 240645 110426 453211 384035 631182 655226 965155",
})


def lookup_confirmation_id(installation_id: str) -> Optional[str]:
    """Get a previously known confirmation id for a normalized installation id."""
    return KNOWN_CONFIRMATION_IDS.get(installation_id)
