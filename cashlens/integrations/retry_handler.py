"""
Retry Handler
Handles retries with exponential backoff and Retry-After header support.
"""

import asyncio
import logging
from typing import Any, Callable, Optional

import httpx

from cashlens.config import RetryConfig

logger = logging.getLogger(__name__)


class RetryHandler:
    """
    Handles retries for provider API calls with exponential backoff.

    Supports:
    - Exponential backoff: 1s, 2s, 4s, 8s, 16s (max)
    - Retry-After header from 429 responses
    - Maximum retry attempts

    Retrying belongs to the fetch clients. Metrics building never retries.
    """

    def __init__(
        self,
        max_retries: int = 3,
        backoff_base: float = 1.0,
        max_backoff: float = 16.0,
    ):
        self.max_retries = max_retries
        self.backoff_base = backoff_base
        self.max_backoff = max_backoff

    @classmethod
    def from_config(cls, config: RetryConfig) -> "RetryHandler":
        return cls(
            max_retries=config.max_retries,
            backoff_base=config.backoff_base,
            max_backoff=config.max_backoff,
        )

    async def execute_with_retry(
        self,
        func: Callable,
        *args,
        **kwargs
    ) -> Any:
        """
        Execute an async function with retry logic.

        Handles:
        - 429 (Too Many Requests) with Retry-After header
        - 5xx responses and transport errors with exponential backoff
        - Everything else fails immediately

        Raises:
            httpx.HTTPStatusError / httpx.TransportError: If not retryable
                or all retries exhausted
        """
        for attempt in range(self.max_retries + 1):
            try:
                return await func(*args, **kwargs)

            except httpx.HTTPStatusError as e:
                status = e.response.status_code

                if status == 429 and attempt < self.max_retries:
                    retry_after = self._extract_retry_after(e.response)
                    wait_seconds = min(
                        retry_after if retry_after is not None else self._backoff(attempt),
                        self.max_backoff,
                    )
                    logger.info(
                        "Rate limited (429). Retrying after %.1f seconds (attempt %d/%d)...",
                        wait_seconds,
                        attempt + 1,
                        self.max_retries + 1
                    )
                    await asyncio.sleep(wait_seconds)
                    continue

                if 500 <= status < 600 and attempt < self.max_retries:
                    wait_seconds = self._backoff(attempt)
                    logger.warning(
                        "Server error (status: %s). Retrying after %.1f seconds (attempt %d/%d)...",
                        status,
                        wait_seconds,
                        attempt + 1,
                        self.max_retries + 1
                    )
                    await asyncio.sleep(wait_seconds)
                    continue

                logger.error(
                    "API error (status: %s) - %s. Not retrying.",
                    status,
                    str(e)[:100]
                )
                raise

            except httpx.TransportError as e:
                if attempt < self.max_retries:
                    wait_seconds = self._backoff(attempt)
                    logger.warning(
                        "Transport error (%s). Retrying after %.1f seconds (attempt %d/%d)...",
                        type(e).__name__,
                        wait_seconds,
                        attempt + 1,
                        self.max_retries + 1
                    )
                    await asyncio.sleep(wait_seconds)
                    continue

                logger.error("All retry attempts exhausted for transport error: %s", e)
                raise

    def _backoff(self, attempt: int) -> float:
        return min(self.backoff_base * (2 ** attempt), self.max_backoff)

    @staticmethod
    def _extract_retry_after(response: httpx.Response) -> Optional[float]:
        """Extract Retry-After seconds from a response, if present."""
        retry_after = response.headers.get("Retry-After")
        if not retry_after:
            return None
        try:
            return float(retry_after)
        except (ValueError, TypeError):
            return None
