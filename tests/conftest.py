"""
Pytest configuration and shared fixtures.
"""

import httpx
import pytest

from activation_client import ActivationClient
from database import SessionLocal
from storage import ActivationRequestStore
from transport import ActivationTransport

KNOWN_IID = "445686086455217341503603789092033711398045546244021976753799760"
KNOWN_CID = "175663 758052 913011 026693 998296 111132 898444 598900"
UNKNOWN_IID = "1" * 63


def soap_response(inner_xml: str) -> str:
    """Wrap an (unescaped) response document the way the service does."""
    escaped = (
        inner_xml.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        '<soap:Envelope xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/">'
        "<soap:Body><BatchActivateResponse xmlns=\"http://www.microsoft.com/BatchActivationService\">"
        "<BatchActivateResult>"
        f"<ResponseXml>{escaped}</ResponseXml>"
        "</BatchActivateResult></BatchActivateResponse></soap:Body></soap:Envelope>"
    )


def cid_response(cid: str) -> str:
    return soap_response(
        '<?xml version="1.0" encoding="utf-16"?>'
        '<ActivationResponse xmlns="http://www.microsoft.com/DRM/SL/BatchActivationResponse/1.0">'
        "<VersionNumber>2.0</VersionNumber><ResponseType>1</ResponseType>"
        f"<Responses><Response><PID>x</PID><CID>{cid}</CID></Response></Responses>"
        "</ActivationResponse>"
    )


def error_response(code: str) -> str:
    return soap_response(
        "<ActivationResponse><Responses><Response>"
        f"<ErrorInfo><ErrorCode>{code}</ErrorCode></ErrorInfo>"
        "</Response></Responses></ActivationResponse>"
    )


class RecordingHandler:
    """httpx.MockTransport handler returning a canned reply and recording requests."""

    def __init__(self, body: str = "", status_code: int = 200, exc: Exception = None):
        self.body = body
        self.status_code = status_code
        self.exc = exc
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        return httpx.Response(self.status_code, text=self.body)


@pytest.fixture
def make_transport():
    """Build an ActivationTransport backed by a mock handler."""

    def _make(handler: RecordingHandler) -> ActivationTransport:
        return ActivationTransport(
            url="https://activation.test/BatchActivation.asmx",
            timeout=5,
            verify_tls=True,
            http_transport=httpx.MockTransport(handler),
        )

    return _make


@pytest.fixture
def make_client(make_transport):
    """Build an ActivationClient backed by a mock handler."""

    def _make(handler: RecordingHandler, fallback_enabled: bool = True) -> ActivationClient:
        return ActivationClient(
            transport=make_transport(handler),
            fallback_enabled=fallback_enabled,
        )

    return _make


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db_session):
    return ActivationRequestStore(db_session)
