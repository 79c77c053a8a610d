"""Ranking engine: applies a pattern to a candidate set and orders the results."""

import threading
import time
from concurrent.futures import Future, ProcessPoolExecutor
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple, Union

import structlog

from .exceptions import LengthExceeded, ScanCancelled
from .matcher import get_matcher
from .pattern import Pattern, PatternComposer
from .scoring import DEFAULT_CONFIG, ScoringConfig

logger = structlog.get_logger(__name__)

DEFAULT_CHUNK_SIZE = 2048
DEFAULT_PARALLEL_THRESHOLD = 10000


class RankedMatch(NamedTuple):
    """One surviving candidate: original position, score and matched positions."""

    index: int
    score: int
    indices: Tuple[int, ...]


ChunkResult = Tuple[List[RankedMatch], List[Tuple[int, str]]]


def _score_chunk(
    config: ScoringConfig,
    pattern: Pattern,
    candidates: Sequence[str],
    offset: int,
) -> ChunkResult:
    """
    Score a contiguous slice of candidates.

    Runs in the calling thread or in a pool worker; either way the matcher
    and its scratch arena belong to the current thread only.

    Returns:
        Tuple of (matches, skipped) where skipped lists (index, reason)
    """
    composer = PatternComposer(get_matcher(config))
    matches: List[RankedMatch] = []
    skipped: List[Tuple[int, str]] = []

    for position, candidate in enumerate(candidates, start=offset):
        try:
            result = composer.evaluate(pattern, candidate)
        except (LengthExceeded, TypeError, UnicodeError) as exc:
            skipped.append((position, str(exc)))
            continue
        if result is not None:
            matches.append(RankedMatch(position, result.score, result.indices))

    return matches, skipped


def sort_matches(matches: List[RankedMatch], candidates: Sequence[str]) -> List[RankedMatch]:
    """Order by score, then shorter haystack, earlier first match, input order."""
    return sorted(
        matches,
        key=lambda m: (
            -m.score,
            len(candidates[m.index]),
            m.indices[0] if m.indices else 0,
            m.index,
        ),
    )


class Ranker:
    """Scores candidate sets against queries with a deterministic total order."""

    def __init__(
        self,
        config: Optional[ScoringConfig] = None,
        parallel_workers: int = 1,
        parallel_threshold: int = DEFAULT_PARALLEL_THRESHOLD,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        """
        Initialize the ranker.

        Args:
            config: Default scoring configuration
            parallel_workers: Worker processes for large candidate sets (1 = serial)
            parallel_threshold: Minimum candidate count before workers are used
            chunk_size: Candidates scored between cancellation checks
        """
        self.config = config or DEFAULT_CONFIG
        self.parallel_workers = max(1, parallel_workers)
        self.parallel_threshold = parallel_threshold
        self.chunk_size = max(1, chunk_size)
        self._executor: Optional[ProcessPoolExecutor] = None
        self._lock = threading.Lock()

        # Performance tracking
        self._stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, Any]:
        return {
            "total_scans": 0,
            "candidates_scored": 0,
            "matched": 0,
            "skipped": 0,
            "cancelled_scans": 0,
            "parallel_scans": 0,
            "total_execution_time": 0.0,
        }

    def match_candidates(
        self,
        candidates: Sequence[str],
        query: Union[str, Pattern],
        config: Optional[ScoringConfig] = None,
        limit: Optional[int] = None,
        cancel: Optional[threading.Event] = None,
    ) -> List[RankedMatch]:
        """
        Rank ``candidates`` against ``query``.

        Args:
            candidates: Haystacks, in caller order
            query: Raw query text or an already parsed Pattern
            config: Per-call override of the ranker's configuration
            limit: Keep only the best ``limit`` results
            cancel: Abandons the scan when set; nothing is returned

        Returns:
            Ranked matches, best first

        Raises:
            QuerySyntaxError: If the query cannot be parsed
            LengthExceeded: If a query atom exceeds the needle limit
            ScanCancelled: If ``cancel`` was set before the scan finished
        """
        start_time = time.time()
        config = config or self.config
        pattern = query if isinstance(query, Pattern) else Pattern.parse(query, config)

        if pattern.is_empty:
            ranked = [RankedMatch(i, 0, ()) for i in range(len(candidates))]
            skipped: List[Tuple[int, str]] = []
        else:
            if self._use_parallel(len(candidates)):
                matches, skipped = self._scan_parallel(config, pattern, candidates, cancel)
            else:
                matches, skipped = self._scan_serial(config, pattern, candidates, cancel)
            ranked = sort_matches(matches, candidates)

        for index, reason in skipped:
            logger.warning("Skipped candidate", index=index, reason=reason)

        total_matched = len(ranked)
        if limit is not None:
            ranked = ranked[:limit]

        execution_time = (time.time() - start_time) * 1000
        with self._lock:
            self._stats["total_scans"] += 1
            self._stats["candidates_scored"] += len(candidates)
            self._stats["matched"] += total_matched
            self._stats["skipped"] += len(skipped)
            self._stats["total_execution_time"] += execution_time

        return ranked

    def _use_parallel(self, count: int) -> bool:
        return self.parallel_workers > 1 and count >= self.parallel_threshold

    def _chunks(self, count: int) -> List[Tuple[int, int]]:
        return [
            (start, min(start + self.chunk_size, count))
            for start in range(0, count, self.chunk_size)
        ]

    def _abandon(self) -> None:
        with self._lock:
            self._stats["cancelled_scans"] += 1
        logger.info("Scan cancelled")
        raise ScanCancelled("scan abandoned before completion")

    def _scan_serial(
        self,
        config: ScoringConfig,
        pattern: Pattern,
        candidates: Sequence[str],
        cancel: Optional[threading.Event],
    ) -> ChunkResult:
        matches: List[RankedMatch] = []
        skipped: List[Tuple[int, str]] = []
        for start, stop in self._chunks(len(candidates)):
            if cancel is not None and cancel.is_set():
                self._abandon()
            chunk_matches, chunk_skipped = _score_chunk(
                config, pattern, candidates[start:stop], start
            )
            matches.extend(chunk_matches)
            skipped.extend(chunk_skipped)
        return matches, skipped

    def _scan_parallel(
        self,
        config: ScoringConfig,
        pattern: Pattern,
        candidates: Sequence[str],
        cancel: Optional[threading.Event],
    ) -> ChunkResult:
        executor = self._get_executor()
        chunks = self._chunks(len(candidates))
        logger.debug(
            "Dispatching parallel scan",
            candidates=len(candidates),
            chunks=len(chunks),
            workers=self.parallel_workers,
        )
        futures: List[Future] = [
            executor.submit(_score_chunk, config, pattern, list(candidates[start:stop]), start)
            for start, stop in chunks
        ]

        matches: List[RankedMatch] = []
        skipped: List[Tuple[int, str]] = []
        for future in futures:
            if cancel is not None and cancel.is_set():
                for pending in futures:
                    pending.cancel()
                self._abandon()
            chunk_matches, chunk_skipped = future.result()
            matches.extend(chunk_matches)
            skipped.extend(chunk_skipped)

        with self._lock:
            self._stats["parallel_scans"] += 1
        return matches, skipped

    def _get_executor(self) -> ProcessPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = ProcessPoolExecutor(max_workers=self.parallel_workers)
            return self._executor

    def close(self) -> None:
        """Shut down the worker pool, if one was started."""
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(cancel_futures=True)

    def __enter__(self) -> "Ranker":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def get_stats(self) -> Dict[str, Any]:
        """Get engine statistics."""
        with self._lock:
            stats = self._stats.copy()

        # Calculate averages
        if stats["total_scans"] > 0:
            stats["average_execution_time_ms"] = (
                stats["total_execution_time"] / stats["total_scans"]
            )
            stats["match_rate"] = (
                stats["matched"] / stats["candidates_scored"]
                if stats["candidates_scored"]
                else 0.0
            )
        else:
            stats["average_execution_time_ms"] = 0.0
            stats["match_rate"] = 0.0

        return stats

    def reset_stats(self) -> None:
        """Reset statistics."""
        with self._lock:
            self._stats = self._empty_stats()


def match_candidates(
    candidates: Sequence[str],
    pattern: Union[str, Pattern],
    config: Optional[ScoringConfig] = None,
) -> List[RankedMatch]:
    """Rank ``candidates`` against ``pattern`` with a one-off serial ranker."""
    return Ranker(config).match_candidates(candidates, pattern)
