"""Concurrent GET load generator.

Fires N GET requests at once against each target, counts 200 responses and
reports wall-clock time per target. Used for manual throughput comparison
between server instances, e.g.:

  user-registry-stress --requests 1000 --target standard=http://localhost:8080/user/1
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Optional, Sequence

import httpx

from user_registry.logging_config import configure_logging

logger = logging.getLogger("user_registry.loadgen")

DEFAULT_REQUESTS = 1000
DEFAULT_TARGETS: tuple[tuple[str, str], ...] = (
    ("Standard Server", "http://localhost:8080"),
    ("Secondary Server", "http://localhost:8081"),
)


@dataclass
class StressResult:
    name: str
    url: str
    requests: int
    successes: int = 0
    elapsed_seconds: float = 0.0
    # Distinct bodies of successful responses; one entry means every read agreed.
    bodies: set[bytes] = field(default_factory=set)

    def summary(self) -> str:
        return f"{self.name}: {self.successes}/{self.requests} successful responses in {self.elapsed_seconds:.3f}s"


async def stress_test(
    name: str,
    url: str,
    requests: int,
    *,
    timeout_seconds: float = 30.0,
    client: httpx.AsyncClient | None = None,
) -> StressResult:
    """Issue ``requests`` concurrent GETs to ``url``.

    Transport errors and non-200 statuses count as failures; they never abort the run.
    Pass ``client`` to reuse a pool or inject a transport (tests).
    """
    result = StressResult(name=name, url=url, requests=requests)

    async def _one(c: httpx.AsyncClient) -> None:
        try:
            r = await c.get(url)
        except httpx.HTTPError as e:
            logger.debug("Request failed: %s: %s", type(e).__name__, e)
            return
        if r.status_code == 200:
            result.successes += 1
            result.bodies.add(r.content)

    start = time.perf_counter()
    if client is None:
        limits = httpx.Limits(max_connections=requests, max_keepalive_connections=requests)
        async with httpx.AsyncClient(timeout=timeout_seconds, limits=limits) as c:
            await asyncio.gather(*(_one(c) for _ in range(requests)))
    else:
        await asyncio.gather(*(_one(client) for _ in range(requests)))
    result.elapsed_seconds = time.perf_counter() - start

    return result


async def run_targets(
    targets: Sequence[tuple[str, str]], requests: int, *, timeout_seconds: float = 30.0
) -> list[StressResult]:
    results: list[StressResult] = []
    # One target at a time so the numbers are comparable.
    for name, url in targets:
        res = await stress_test(name, url, requests, timeout_seconds=timeout_seconds)
        print(res.summary())
        results.append(res)
    return results


def _parse_target(raw: str) -> tuple[str, str]:
    name, sep, url = raw.partition("=")
    if not sep or not name.strip() or not url.strip():
        raise argparse.ArgumentTypeError("target must look like NAME=URL")
    return name.strip(), url.strip()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="user-registry-stress", description="Concurrent GET load generator")
    p.add_argument("--requests", "-n", type=int, default=DEFAULT_REQUESTS, help="requests per target")
    p.add_argument(
        "--target",
        "-t",
        action="append",
        type=_parse_target,
        dest="targets",
        metavar="NAME=URL",
        help="target to hit; repeatable (default: localhost:8080 and localhost:8081)",
    )
    p.add_argument("--timeout", type=float, default=30.0, help="per-request timeout in seconds")
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)
    if args.requests < 1:
        print("--requests must be at least 1")
        return 2

    targets = args.targets or list(DEFAULT_TARGETS)
    print("Starting stress tests with", args.requests, "requests each...")
    results = asyncio.run(run_targets(targets, args.requests, timeout_seconds=args.timeout))
    return 0 if all(r.successes == r.requests for r in results) else 1


if __name__ == "__main__":
    raise SystemExit(main())
