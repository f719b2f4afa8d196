"""
Load-generation harness.

Spawns a fixed number of virtual clients, each running its own request loop
against one URL until a shared deadline passes. Every request is recorded as
a `RequestOutcome`; failures are recorded and the loop moves on, a deadline
reached mid-request ends the loop without recording anything.

Usage:
    config = LoadTestConfig(url="http://localhost:8000/", clients=50, duration_seconds=10)
    report = asyncio.run(LoadHarness(config).run())
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import List, Optional

import httpx

from people_cache.config import Settings, get_settings
from people_cache.domain.models import RequestOutcome
from people_cache.load.report import LoadTestReport
from people_cache.utils.logging import get_logger
from people_cache.utils.profiler import profile_block

log = get_logger(__name__)


@dataclass
class LoadTestConfig:
    """All tunables for a single load-test run."""

    url: str
    clients: int = 500
    duration_seconds: float = 60.0
    request_timeout_seconds: float = 30.0
    verify_tls: bool = True

    def __post_init__(self) -> None:
        if self.clients <= 0:
            raise ValueError(f"clients must be positive, got {self.clients}")
        if self.duration_seconds <= 0:
            raise ValueError(f"duration_seconds must be positive, got {self.duration_seconds}")
        if self.request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be positive")

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        url: Optional[str] = None,
        clients: Optional[int] = None,
        duration_seconds: Optional[float] = None,
    ) -> "LoadTestConfig":
        """Build a config from settings, letting explicit arguments win."""
        settings = settings or get_settings()
        return cls(
            url=url if url is not None else settings.load_target_url,
            clients=clients if clients is not None else settings.load_clients,
            duration_seconds=(
                duration_seconds
                if duration_seconds is not None
                else settings.load_duration_seconds
            ),
            request_timeout_seconds=settings.load_request_timeout_seconds,
            verify_tls=settings.load_verify_tls,
        )


class LoadHarness:
    """
    Drive `config.clients` concurrent request loops for `config.duration_seconds`.

    Parameters
    ----------
    config : LoadTestConfig
        Run parameters.
    transport : httpx.AsyncBaseTransport | None
        Optional transport shared by every client; tests pass an
        `httpx.MockTransport`.
    """

    def __init__(
        self, config: LoadTestConfig, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> None:
        self.config = config
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.config.request_timeout_seconds,
            verify=self.config.verify_tls,
            transport=self._transport,
        )

    async def run(self) -> LoadTestReport:
        """
        Run every client loop until the deadline and return the collected outcomes.

        Returns only after all client loops have exited.
        """
        loop = asyncio.get_running_loop()
        outcomes: List[RequestOutcome] = []
        log.info(
            f"Starting load test with {self.config.clients} clients "
            f"for {self.config.duration_seconds:g} seconds...",
            extra={"url": self.config.url, "clients": self.config.clients},
        )

        with profile_block("load-test") as stats:
            deadline = loop.time() + self.config.duration_seconds
            await asyncio.gather(
                *(
                    self._run_client(client_id, deadline, outcomes)
                    for client_id in range(self.config.clients)
                )
            )

        report = LoadTestReport(
            url=self.config.url,
            clients=self.config.clients,
            duration_seconds=self.config.duration_seconds,
            elapsed_seconds=stats.duration_seconds,
            outcomes=outcomes,
            profile=stats,
        )
        log.info(
            "Load test completed.",
            extra={"total": report.total, "succeeded": report.succeeded, "failed": report.failed},
        )
        return report

    async def _run_client(
        self, client_id: int, deadline: float, outcomes: List[RequestOutcome]
    ) -> None:
        loop = asyncio.get_running_loop()
        sequence = 0
        async with self._client() as client:
            while loop.time() < deadline:
                started = time.perf_counter()
                status_code: Optional[int] = None
                error: Optional[str] = None
                bounded = asyncio.timeout_at(deadline)
                try:
                    async with bounded:
                        response = await client.get(self.config.url)
                except TimeoutError as exc:
                    if bounded.expired():
                        # Test duration ended
                        break
                    error = f"{type(exc).__name__}: {exc}"
                except httpx.HTTPError as exc:
                    error = f"{type(exc).__name__}: {exc}"
                except Exception as exc:  # noqa: BLE001 - recorded so the client keeps looping
                    error = f"{type(exc).__name__}: {exc}"
                else:
                    status_code = response.status_code
                    if not response.is_success:
                        error = f"HTTP {response.status_code} {response.reason_phrase}".rstrip()

                latency_ms = (time.perf_counter() - started) * 1000.0
                sequence += 1
                outcome = RequestOutcome(
                    client_id=client_id,
                    sequence=sequence,
                    latency_ms=latency_ms,
                    success=error is None,
                    status_code=status_code,
                    error=error,
                )
                outcomes.append(outcome)
                if outcome.success:
                    log.info(
                        f"[Client {client_id}] Request #{sequence} succeeded in {latency_ms:.0f} ms"
                    )
                else:
                    log.warning(f"[Client {client_id}] Request #{sequence} failed: {error}")


__all__ = ["LoadHarness", "LoadTestConfig"]
