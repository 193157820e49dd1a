import logging
import ssl
from typing import Optional, Union

import httpx

from config import settings
from encoder import ActivationEnvelope
from exceptions import TransportError

logger = logging.getLogger(__name__)


class ActivationTransport:
    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        verify_tls: Optional[bool] = None,
        ca_bundle: Optional[str] = None,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url or settings.ACTIVATION_API_URL
        self.timeout = timeout if timeout is not None else settings.ACTIVATION_API_TIMEOUT
        self.verify_tls = settings.ACTIVATION_VERIFY_TLS if verify_tls is None else verify_tls
        self.ca_bundle = ca_bundle if ca_bundle is not None else settings.ACTIVATION_CA_BUNDLE
        self.http_transport = http_transport

        if not self.verify_tls:
            logger.warning(
                "TLS certificate validation is DISABLED for %s; "
                "set ACTIVATION_VERIFY_TLS=true outside development",
                self.url,
            )

    def _verify(self) -> Union[bool, ssl.SSLContext]:
        if not self.verify_tls:
            return False
        if self.ca_bundle:
            # Pins the chain the remote certificate must come from
            return ssl.create_default_context(cafile=self.ca_bundle)
        return True

    def _headers(self) -> dict:
        return {
            "Content-Type": "text/xml; charset=UTF-8",
            "SOAPAction": settings.ACTIVATION_SOAP_ACTION,
            "User-Agent": settings.ACTIVATION_USER_AGENT,
        }

    async def send(self, envelope: ActivationEnvelope) -> str:
        """
        Post an envelope to the activation service.

        Returns the raw response body on any 2xx status. Timeouts,
        connection failures, error statuses and an unusable CA bundle
        raise TransportError.
        """
        try:
            verify = self._verify()
            async with httpx.AsyncClient(
                timeout=self.timeout,
                verify=verify,
                transport=self.http_transport,
            ) as client:
                response = await client.post(
                    self.url,
                    content=envelope.to_soap().encode("utf-8"),
                    headers=self._headers(),
                )
                response.raise_for_status()

                logger.info("Activation service response received (%s)", response.status_code)
                return response.text

        except httpx.TimeoutException as e:
            raise TransportError(
                f"Activation service timed out after {self.timeout}s"
            ) from e
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"Activation service returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP error during activation: {str(e)}") from e
        except OSError as e:
            # Missing or unreadable CA bundle; ssl.SSLError is an OSError
            raise TransportError(f"TLS setup failed for activation service: {str(e)}") from e
