"""Prober service - performs a single bounded HTTP reachability check."""
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import httpx

from ..models import Status

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0


@dataclass
class ProbeOutcome:
    """Classified result of one probe."""
    status: Status
    detail: Optional[str] = None
    status_code: Optional[int] = None
    response_time_ms: Optional[int] = None


def classify_status_code(status_code: int) -> ProbeOutcome:
    """Classify an HTTP response code.

    < 400 is OK, 4xx is OK with a note (the endpoint is answering),
    5xx is DOWN.
    """
    if status_code >= 500:
        return ProbeOutcome(
            status=Status.DOWN,
            detail=f"server error {status_code}",
            status_code=status_code,
        )
    if status_code >= 400:
        return ProbeOutcome(
            status=Status.OK,
            detail=f"client error {status_code}",
            status_code=status_code,
        )
    return ProbeOutcome(status=Status.OK, status_code=status_code)


def describe_error(error: Exception) -> str:
    """Human-readable message for a transport failure."""
    message = str(error).strip()
    return message or type(error).__name__


class ProberService:
    """Service for probing endpoints.

    One GET per call, no retries. The retry cadence is the sweep interval.
    The timeout bounds the whole request, redirects and body included.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        # Overridable for tests (httpx.MockTransport)
        self.transport = transport

    async def check(self, endpoint: str, timeout: Optional[float] = None) -> ProbeOutcome:
        """Probe an endpoint and classify the result. Never raises."""
        timeout = self.timeout if timeout is None else timeout

        try:
            start = datetime.now()

            async with httpx.AsyncClient(
                timeout=timeout,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                response = await asyncio.wait_for(client.get(endpoint), timeout)

            response_time = int((datetime.now() - start).total_seconds() * 1000)

            outcome = classify_status_code(response.status_code)
            outcome.response_time_ms = response_time
            return outcome

        except (httpx.TimeoutException, asyncio.TimeoutError):
            return ProbeOutcome(status=Status.DOWN, detail="timed out")
        except Exception as e:
            # Any other transport-level failure
            logger.debug(f"Probe of {endpoint} failed: {type(e).__name__}: {e}")
            return ProbeOutcome(status=Status.DOWN, detail=describe_error(e))
