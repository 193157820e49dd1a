"""
Batch activation response parsing.

The SOAP reply wraps an entity-escaped <ResponseXml> document. Fields
are read in a fixed order: an <ErrorCode> always wins over a <CID>,
and a <CID> wins over a remaining-activations count.
"""
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional
from xml.sax.saxutils import unescape

from exceptions import MalformedResponseError, RemoteRejectedError

CONFIRMATION_ID_DIGITS = 48
CONFIRMATION_ID_GROUP = 6

ERROR_MESSAGES = MappingProxyType({
    "0x7F": "The Multiple Activation Key has exceeded its limit",
    "0x67": "The product key has been blocked",
    "0x68": "Invalid product key",
    "0x86": "Invalid key type",
    "0x8F": "Invalid Installation ID format or unsupported product",
    "0x90": "Please check the Installation ID and try again",
})

# &quot; and &#39; on top of the &amp; &lt; &gt; that unescape handles
_EXTRA_ENTITIES = {"&quot;": '"', "&#39;": "'", "&apos;": "'"}

_RESPONSE_XML = re.compile(r"<ResponseXml[^>]*>(.*?)</ResponseXml>", re.S)
_ERROR_CODE = re.compile(r"<ErrorCode>(.*?)</ErrorCode>", re.S)
_CID = re.compile(r"<CID>(.*?)</CID>", re.S)
_RESPONSE_TYPE = re.compile(r"<ResponseType>(.*?)</ResponseType>", re.S)
_ACTIVATION_REMAINING = re.compile(r"<ActivationRemaining>(.*?)</ActivationRemaining>", re.S)
_WHITESPACE = re.compile(r"\s")

ACTIVATION_REMAINING_RESPONSE_TYPE = "2"


@dataclass(frozen=True)
class RemoteOutcome:
    confirmation_id: Optional[str] = None
    error_code: Optional[str] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.confirmation_id is not None


def extract_response_xml(soap_response: str) -> str:
    """Pull the inner response document out of the SOAP envelope and unescape it."""
    match = _RESPONSE_XML.search(soap_response)
    if not match:
        raise MalformedResponseError("Activation service returned unexpected response format")
    return unescape(match.group(1), _EXTRA_ENTITIES)


def error_message_for(error_code: str) -> str:
    code = error_code.strip()
    message = ERROR_MESSAGES.get(code)
    if message is None and code[:2].lower() == "0x":
        message = ERROR_MESSAGES.get("0x" + code[2:].upper())
    return message or f"Activation service error ({code})"


def format_confirmation_id(cid: str) -> str:
    """
    Group a 48 digit confirmation id into 8 blocks of 6 digits.

    Anything that is not exactly 48 digits once whitespace is removed is
    returned unchanged.
    """
    clean_cid = _WHITESPACE.sub("", cid)
    if len(clean_cid) != CONFIRMATION_ID_DIGITS or not (clean_cid.isdigit() and clean_cid.isascii()):
        return cid
    return " ".join(
        clean_cid[i:i + CONFIRMATION_ID_GROUP]
        for i in range(0, CONFIRMATION_ID_DIGITS, CONFIRMATION_ID_GROUP)
    )


def read_remote_outcome(response_xml: str) -> RemoteOutcome:
    error_code_match = _ERROR_CODE.search(response_xml)
    if error_code_match:
        error_code = error_code_match.group(1).strip()
        return RemoteOutcome(error_code=error_code, message=error_message_for(error_code))

    cid_match = _CID.search(response_xml)
    if cid_match:
        return RemoteOutcome(confirmation_id=format_confirmation_id(cid_match.group(1)))

    response_type_match = _RESPONSE_TYPE.search(response_xml)
    if response_type_match and response_type_match.group(1).strip() == ACTIVATION_REMAINING_RESPONSE_TYPE:
        remaining_match = _ACTIVATION_REMAINING.search(response_xml)
        if remaining_match:
            return RemoteOutcome(message=f"Activation remaining: {remaining_match.group(1).strip()}")

    raise MalformedResponseError()


def parse_activation_response(soap_response: str) -> str:
    """
    Parse a BatchActivate SOAP reply into a confirmation id.

    Raises:
        MalformedResponseError: the reply matched none of the known shapes
        RemoteRejectedError: the service returned an error code or only
            a remaining-activations count
    """
    outcome = read_remote_outcome(extract_response_xml(soap_response))
    if not outcome.ok:
        raise RemoteRejectedError(outcome.message, remote_code=outcome.error_code)
    return outcome.confirmation_id
