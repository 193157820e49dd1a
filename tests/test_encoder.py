"""
Unit tests for the batch activation request encoder.
"""
import base64

import pytest

from encoder import (
    MAC_KEY,
    ActivationEnvelope,
    build_activation_request,
    encode_envelope,
    sign_request,
)

from conftest import KNOWN_IID

WINDOWS_PID = "55041-00206-271-298329-03-1033-9600.0000-0452015"

# HMAC-SHA256 under MAC_KEY, computed independently with openssl
KNOWN_IID_DIGEST = "JOyk0fcBFt5+8ECKPPzecfX9w/ivY5zClXo59T3kYg8="
ABC_DIGEST = "xdcLX0BB6TFhREYgbQ1XVqYXtMV9nZK9qjMZrqBYEGQ="


class TestActivationRequest:
    def test_document_embeds_request_fields(self):
        document = build_activation_request(KNOWN_IID, WINDOWS_PID)

        assert document.startswith('<?xml version="1.0" encoding="utf-16"?>')
        assert 'xmlns="http://www.microsoft.com/DRM/SL/BatchActivationRequest/1.0"' in document
        assert "<VersionNumber>2.0</VersionNumber>" in document
        assert "<RequestType>1</RequestType>" in document
        assert f"<PID>{WINDOWS_PID}</PID>" in document
        assert f"<IID>{KNOWN_IID}</IID>" in document

    def test_mac_key_is_zero_padded_to_64_bytes(self):
        assert len(MAC_KEY) == 64
        assert MAC_KEY[:2] == bytes([254, 49])
        assert MAC_KEY[32:] == bytes(32)


class TestSigning:
    def test_sign_request_matches_known_vector(self):
        assert sign_request(b"abc") == ABC_DIGEST

    def test_envelope_digest_matches_known_vector(self):
        envelope = encode_envelope(KNOWN_IID, WINDOWS_PID)
        assert envelope.digest == KNOWN_IID_DIGEST

    def test_payload_is_utf16le_document(self):
        envelope = encode_envelope(KNOWN_IID, WINDOWS_PID)
        raw = base64.b64decode(envelope.payload)

        assert raw == build_activation_request(KNOWN_IID, WINDOWS_PID).encode("utf-16-le")
        # Low byte first, no byte order mark
        assert raw[:4] == b"<\x00?\x00"
        assert len(raw) == 2 * len(build_activation_request(KNOWN_IID, WINDOWS_PID))

    def test_encoding_is_deterministic(self):
        assert encode_envelope(KNOWN_IID, WINDOWS_PID) == encode_envelope(KNOWN_IID, WINDOWS_PID)

    @pytest.mark.parametrize("iid, pid", [
        (KNOWN_IID[:-1] + "1", WINDOWS_PID),
        (KNOWN_IID, "16341-00206-234-298765-03-1033-9600.0000-0452015"),
    ])
    def test_digest_changes_with_document(self, iid, pid):
        baseline = encode_envelope(KNOWN_IID, WINDOWS_PID)
        changed = encode_envelope(iid, pid)

        assert changed.payload != baseline.payload
        assert changed.digest != baseline.digest


class TestEnvelope:
    def test_soap_document_carries_digest_and_payload(self):
        envelope = encode_envelope(KNOWN_IID, WINDOWS_PID)
        soap = envelope.to_soap()

        assert '<BatchActivate xmlns="http://www.microsoft.com/BatchActivationService">' in soap
        assert f"<Digest>{envelope.digest}</Digest>" in soap
        assert f"<RequestXml>{envelope.payload}</RequestXml>" in soap

    def test_envelope_is_immutable(self):
        envelope = encode_envelope(KNOWN_IID, WINDOWS_PID)
        with pytest.raises(AttributeError):
            envelope.digest = "tampered"
        assert isinstance(envelope, ActivationEnvelope)
