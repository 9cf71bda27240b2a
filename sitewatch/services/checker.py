"""Checker service - performs the HTTP availability probe."""
import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


@dataclass
class CheckOutcome:
    """Result of a single availability check."""
    success: bool
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    status_code: Optional[int] = None
    response_time_ms: Optional[int] = None
    details: Optional[str] = None  # Failure reason


class CheckerService:
    """Service for probing a URL over HTTP."""

    def __init__(self, verify: bool = True, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.verify = verify
        self.transport = transport

    async def check(self, url: str, timeout: float) -> CheckOutcome:
        """Perform one GET request against url, following redirects.

        Success means a 2xx response after redirects. Timeouts, connection
        and DNS errors, and non-2xx statuses are all reported as a failed
        outcome; no transport error reaches the caller. The timeout bounds
        the whole request, not only each connect/read phase.
        """
        start = datetime.now(timezone.utc)

        try:
            status_code = await asyncio.wait_for(self._fetch_status(url, timeout), timeout=timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException):
            return self._failure(start, f"Request timeout after {timeout:g}s")
        except httpx.ConnectError as e:
            return self._failure(start, f"Connection error: {e}")
        except httpx.TooManyRedirects:
            return self._failure(start, "Too many redirects")
        except httpx.HTTPError as e:
            return self._failure(start, f"{type(e).__name__}: {e}")
        except Exception as e:
            logger.debug(f"Unexpected probe error for {url}: {type(e).__name__}: {e}")
            return self._failure(start, f"{type(e).__name__}: {e}")

        response_time = self._elapsed_ms(start)

        if not (200 <= status_code < 300):
            return CheckOutcome(
                success=False,
                checked_at=start,
                status_code=status_code,
                response_time_ms=response_time,
                details=f"HTTP {status_code}",
            )

        return CheckOutcome(
            success=True,
            checked_at=start,
            status_code=status_code,
            response_time_ms=response_time,
        )

    async def _fetch_status(self, url: str, timeout: float) -> int:
        """Issue the request and return the final status code without reading the body."""
        async with httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            verify=self.verify,
            transport=self.transport,
        ) as client:
            async with client.stream("GET", url) as response:
                return response.status_code

    def _failure(self, start: datetime, details: str) -> CheckOutcome:
        return CheckOutcome(
            success=False,
            checked_at=start,
            response_time_ms=self._elapsed_ms(start),
            details=details,
        )

    @staticmethod
    def _elapsed_ms(start: datetime) -> int:
        return int((datetime.now(timezone.utc) - start).total_seconds() * 1000)


# Global instance
checker_service = CheckerService()
