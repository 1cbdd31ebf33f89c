"""Concurrent probing of candidate endpoints with first-reachable promotion.

Round state machine: idle -> testing (all candidates) -> settled.

``run_all`` replaces the candidate list with every row in ``testing`` before
its first await, probes all candidates concurrently, and only touches shared
state again once every probe has settled. The first reachable candidate in
declaration order (not the fastest) is written to the EndpointStore. When
nothing is reachable the store is left as it was.

Every round gets an increasing id. A round that is superseded (a newer
``run_all`` or ``reset``) before it settles returns its report flagged
``stale`` and does not apply or promote anything.
A round that is cancelled, or whose probe raises, puts its rows back to
``pending`` and leaves the controller idle before the error propagates.

Probe failures are terminal for the round; nothing is retried automatically.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from rentlink.models.candidate import Candidate, ProbeState, RoundReport

if TYPE_CHECKING:
    from rentlink.probe.health import HealthProbe
    from rentlink.store.endpoint_store import EndpointStore

logger = logging.getLogger(__name__)


def select_first_reachable(candidates: Iterable[Candidate]) -> Candidate | None:
    """Return the first successful candidate in list order, or None."""
    for candidate in candidates:
        if candidate.state == ProbeState.SUCCESS:
            return candidate
    return None


class DiagnosticsController:
    """Own the candidate set of the current diagnostics round.

    Args:
        probe: HealthProbe (or any object with the same ``probe`` coroutine).
        store: Store that receives the promoted endpoint.
        timeout_ms: Default per-probe timeout.
    """

    def __init__(
        self,
        probe: HealthProbe,
        store: EndpointStore,
        timeout_ms: int = 5000,
    ) -> None:
        self._probe = probe
        self._store = store
        self._timeout_ms = timeout_ms
        self._round_id = 0
        self._running_round: int | None = None
        self._candidates: list[Candidate] = []

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def round_id(self) -> int:
        return self._round_id

    @property
    def is_running(self) -> bool:
        return self._running_round is not None

    @property
    def candidates(self) -> list[Candidate]:
        """Snapshot of the current candidate rows."""
        return [dataclasses.replace(c) for c in self._candidates]

    def initialize(self, urls: Iterable[str]) -> list[Candidate]:
        """Show ``urls`` as pending rows without probing them."""
        self._round_id += 1
        self._running_round = None
        self._candidates = [
            Candidate(url=url, state=ProbeState.PENDING, round_id=self._round_id) for url in urls
        ]
        return self.candidates

    def reset(self) -> None:
        """Discard the candidate set; results still in flight will be ignored."""
        self._round_id += 1
        self._running_round = None
        self._candidates = []

    def get_state(self) -> dict:
        return {
            "round_id": self._round_id,
            "running": self.is_running,
            "candidates": [c.to_dict() for c in self._candidates],
        }

    # ------------------------------------------------------------------
    # Rounds
    # ------------------------------------------------------------------

    async def run_all(
        self, urls: Iterable[str], timeout_ms: int | None = None
    ) -> RoundReport:
        """Probe every candidate concurrently and promote the first reachable one."""
        urls = list(urls)
        timeout = timeout_ms or self._timeout_ms

        self._round_id += 1
        round_id = self._round_id
        self._running_round = round_id
        self._candidates = [
            Candidate(url=url, state=ProbeState.TESTING, round_id=round_id) for url in urls
        ]
        logger.info(
            "Diagnostics round started",
            extra={"round_id": round_id, "candidate_count": len(urls), "event": "round_start"},
        )

        try:
            results = await asyncio.gather(*(self._probe.probe(url, timeout) for url in urls))
        except BaseException:
            if round_id == self._round_id:
                self._candidates = [
                    Candidate(url=url, state=ProbeState.PENDING, round_id=round_id) for url in urls
                ]
            logger.warning(
                "Diagnostics round aborted",
                extra={"round_id": round_id, "event": "round_aborted"},
            )
            raise
        finally:
            if self._running_round == round_id:
                self._running_round = None

        settled = [
            Candidate.from_probe(url, result, round_id) for url, result in zip(urls, results)
        ]

        if round_id != self._round_id:
            logger.info(
                "Discarding results of superseded diagnostics round",
                extra={"round_id": round_id, "event": "round_stale"},
            )
            return RoundReport(round_id=round_id, candidates=settled, stale=True)

        self._candidates = settled

        winner = select_first_reachable(settled)
        promoted = None
        if winner is not None:
            promoted = self._store.set(winner.url)
            logger.info(
                "Diagnostics round promoted endpoint",
                extra={
                    "round_id": round_id,
                    "endpoint": promoted,
                    "latency_ms": round(winner.latency_ms or 0.0, 1),
                    "event": "round_promoted",
                },
            )
        else:
            logger.warning(
                "Diagnostics round found no reachable endpoint",
                extra={"round_id": round_id, "candidate_count": len(urls), "event": "round_all_failed"},
            )

        return RoundReport(round_id=round_id, candidates=self.candidates, promoted=promoted)

    async def run_one(self, url: str, timeout_ms: int | None = None) -> Candidate:
        """Re-test a single row. Never promotes."""
        timeout = timeout_ms or self._timeout_ms
        round_id = self._round_id
        previous = {row.url: row for row in self._candidates}
        self._update_rows(url, lambda row: dataclasses.replace(row, state=ProbeState.TESTING))

        try:
            result = await self._probe.probe(url, timeout)
        except BaseException:
            if round_id == self._round_id and url in previous:
                self._update_rows(url, lambda _row: dataclasses.replace(previous[url]))
            raise
        candidate = Candidate.from_probe(url, result, round_id)

        if round_id == self._round_id:
            self._update_rows(url, lambda _row: dataclasses.replace(candidate))
        else:
            logger.debug(
                "Discarding single-candidate result from superseded round",
                extra={"round_id": round_id, "endpoint": url},
            )
        return candidate

    def _update_rows(self, url: str, update) -> None:  # noqa: ANN001
        self._candidates = [update(row) if row.url == url else row for row in self._candidates]
