import logging
import time
from typing import Optional, Dict, Any

from catalog import resolve_product_descriptor
from config import settings
from encoder import encode_envelope
from exceptions import ActivationError, MalformedResponseError, RemoteRejectedError, TransportError
from fallback import lookup_confirmation_id
from identifiers import normalize_installation_id
from response_parser import parse_activation_response
from transport import ActivationTransport

logger = logging.getLogger(__name__)


def format_processing_time(started_at: float) -> str:
    return f"{time.perf_counter() - started_at:.3f}s"


class ActivationClient:
    def __init__(
        self,
        transport: Optional[ActivationTransport] = None,
        fallback_enabled: Optional[bool] = None,
    ):
        self.transport = transport or ActivationTransport()
        self.fallback_enabled = settings.FALLBACK_ENABLED if fallback_enabled is None else fallback_enabled

    async def generate_confirmation_id(self, installation_id: str, product_version: str) -> str:
        """
        Get a confirmation id from the activation service.

        Invalid installation ids are rejected before any network call.
        When the remote call fails, the fallback table is consulted with
        the normalized id; on a miss the original error is raised.
        """
        clean_iid = normalize_installation_id(installation_id)
        product_descriptor = resolve_product_descriptor(product_version)

        logger.info("Calling activation service for %s...", product_version)

        try:
            envelope = encode_envelope(clean_iid, product_descriptor)
            response_text = await self.transport.send(envelope)
            cid = parse_activation_response(response_text)
        except (TransportError, MalformedResponseError, RemoteRejectedError) as e:
            logger.warning("Activation service call failed: %s", e.message)

            cached_cid = lookup_confirmation_id(clean_iid) if self.fallback_enabled else None
            if cached_cid is None:
                raise

            logger.info("Using fallback known mapping")
            return cached_cid

        logger.info("Successfully received confirmation id from activation service")
        return cid

    async def generate(self, installation_id: str, product_version: str) -> Dict[str, Any]:
        """
        Run one activation and report it as a caller-facing outcome.

        Returns {"success", "confirmationId", "processingTime"} or
        {"success", "error", "processingTime"}.
        """
        started_at = time.perf_counter()
        try:
            cid = await self.generate_confirmation_id(installation_id, product_version)
        except ActivationError as e:
            return {
                "success": False,
                "error": e.message,
                "processingTime": format_processing_time(started_at),
            }

        return {
            "success": True,
            "confirmationId": cid,
            "processingTime": format_processing_time(started_at),
        }
