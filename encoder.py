"""
Batch activation request encoding.

The activation service verifies an HMAC-SHA256 digest computed over the
UTF-16LE bytes of the request document, so the document text, its
encoding and the MAC key must all match byte for byte.
"""
import base64
import hashlib
import hmac
from dataclasses import dataclass
from xml.sax.saxutils import escape

# 32 published key bytes, zero padded to the 64-byte HMAC block size
MAC_KEY = bytes([
    254, 49, 152, 117, 251, 72, 132, 134,
    156, 243, 241, 206, 153, 168, 144, 100,
    171, 87, 31, 202, 71, 4, 80, 88,
    48, 36, 226, 20, 98, 135, 121, 160,
]) + bytes(32)

BATCH_ACTIVATION_REQUEST_NS = "http://www.microsoft.com/DRM/SL/BatchActivationRequest/1.0"
BATCH_ACTIVATION_SERVICE_NS = "http://www.microsoft.com/BatchActivationService"
REQUEST_VERSION = "2.0"
REQUEST_TYPE = "1"

_REQUEST_TEMPLATE = """<?xml version="1.0" encoding="utf-16"?>
<ActivationRequest xmlns="{namespace}">
  <VersionNumber>{version}</VersionNumber>
  <RequestType>{request_type}</RequestType>
  <Requests>
    <Request>
      <PID>{pid}</PID>
      <IID>{iid}</IID>
    </Request>
  </Requests>
</ActivationRequest>"""

_SOAP_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<soap:Envelope xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/"
               xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"
               xmlns:xsd="http://www.w3.org/2001/XMLSchema">
  <soap:Body>
    <BatchActivate xmlns="{namespace}">
      <request>
        <Digest>{digest}</Digest>
        <RequestXml>{payload}</RequestXml>
      </request>
    </BatchActivate>
  </soap:Body>
</soap:Envelope>"""


@dataclass(frozen=True)
class ActivationEnvelope:
    installation_id: str
    product_descriptor: str
    digest: str
    payload: str

    def to_soap(self) -> str:
        """Render the SOAP document posted to the activation service."""
        return _SOAP_TEMPLATE.format(
            namespace=BATCH_ACTIVATION_SERVICE_NS,
            digest=self.digest,
            payload=self.payload,
        )


def build_activation_request(installation_id: str, product_descriptor: str) -> str:
    return _REQUEST_TEMPLATE.format(
        namespace=BATCH_ACTIVATION_REQUEST_NS,
        version=REQUEST_VERSION,
        request_type=REQUEST_TYPE,
        pid=escape(product_descriptor),
        iid=escape(installation_id),
    )


def sign_request(request_bytes: bytes) -> str:
    digest = hmac.new(MAC_KEY, request_bytes, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def encode_envelope(installation_id: str, product_descriptor: str) -> ActivationEnvelope:
    """
    Build the signed envelope for one installation id.

    Args:
        installation_id: Normalized installation id (digits only)
        product_descriptor: Extended product id from the catalog

    Returns:
        Envelope carrying the base64 digest and base64 request payload
    """
    request_bytes = build_activation_request(
        installation_id, product_descriptor
    ).encode("utf-16-le")

    return ActivationEnvelope(
        installation_id=installation_id,
        product_descriptor=product_descriptor,
        digest=sign_request(request_bytes),
        payload=base64.b64encode(request_bytes).decode("ascii"),
    )
