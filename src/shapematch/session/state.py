"""
Query state for one interactive session.

The session owns the current query vector, reacts to input by scheduling a
throttled recompute, and publishes each RankedResult to its subscribers.
Subscribers receive whole snapshots; they never see partial updates.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Optional, Sequence

from ..core.config import Settings
from ..core.errors import InvalidQueryError
from ..core.models import RankedResult
from ..core.types import (
    DEFAULT_MIN_COMMON_DIMS,
    DEFAULT_THROTTLE_MS,
    DEFAULT_TOP_N,
    QUERY_MIDPOINT,
    FeatureVector,
)
from ..dataset.dataset import Dataset
from ..features.normalize import clamp_unit, fill_missing
from ..ranking.engine import rank_top_n
from .scheduler import CallLater, UpdateScheduler

logger = logging.getLogger(__name__)

Subscriber = Callable[[RankedResult], Any]


class QuerySession:
    """
    Holds the query vector and drives throttled re-ranking.

    Single logical thread of control: the input path is the only writer of
    the query, and the scheduled recompute is its only reader.
    """

    def __init__(
        self,
        dataset: Dataset,
        top_n: int = DEFAULT_TOP_N,
        min_common_dims: int = DEFAULT_MIN_COMMON_DIMS,
        throttle_ms: int = DEFAULT_THROTTLE_MS,
        call_later: Optional[CallLater] = None,
    ):
        """
        Initialize the session with a midpoint query.

        Args:
            dataset: Loaded dataset (read-only)
            top_n: Number of candidates published per recompute
            min_common_dims: Minimum shared axes for a score
            throttle_ms: Throttle interval in milliseconds
            call_later: Timer factory for the scheduler (see UpdateScheduler)
        """
        if top_n < 0:
            raise ValueError(f"top_n must be >= 0, got {top_n}")

        self.dataset = dataset
        self.top_n = top_n
        self.min_common_dims = min_common_dims
        self._query: list[float] = [QUERY_MIDPOINT] * dataset.dimensions
        self._subscribers: list[Subscriber] = []
        self._latest: Optional[RankedResult] = None
        self._generation = 0
        self.scheduler = UpdateScheduler(
            self.recompute,
            delay_seconds=throttle_ms / 1000.0,
            call_later=call_later,
        )

    @classmethod
    def from_settings(
        cls,
        dataset: Dataset,
        settings: Settings,
        call_later: Optional[CallLater] = None,
    ) -> QuerySession:
        return cls(
            dataset,
            top_n=settings.top_n,
            min_common_dims=settings.min_common_dims,
            throttle_ms=settings.throttle_ms,
            call_later=call_later,
        )

    # =========================================================================
    # Read side
    # =========================================================================

    @property
    def query(self) -> FeatureVector:
        """Snapshot of the current query vector."""
        return tuple(self._query)

    @property
    def latest_result(self) -> Optional[RankedResult]:
        return self._latest

    @property
    def has_data(self) -> bool:
        return not self.dataset.is_empty

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback fired with every published RankedResult.

        Returns:
            A function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # =========================================================================
    # Input side
    # =========================================================================

    def on_input(self) -> bool:
        """Signal one input event; coalesced by the scheduler."""
        return self.scheduler.request()

    def set_query(self, values: Sequence[Any]) -> None:
        """Replace the whole query vector and schedule a recompute."""
        if len(values) != self.dataset.dimensions:
            raise InvalidQueryError(
                f"Query must have {self.dataset.dimensions} values, got {len(values)}"
            )
        self._query = [_query_value(v, axis) for axis, v in enumerate(values)]
        self.on_input()

    def set_axis(self, index: int, value: Any) -> None:
        """Move one axis (a slider) and schedule a recompute."""
        if not 0 <= index < self.dataset.dimensions:
            raise InvalidQueryError(
                f"Axis index {index} out of range 0..{self.dataset.dimensions - 1}"
            )
        self._query[index] = _query_value(value, index)
        self.on_input()

    def reset_query(self) -> None:
        """Set every axis to the midpoint and schedule a recompute."""
        self._query = [QUERY_MIDPOINT] * self.dataset.dimensions
        self.on_input()

    def adopt_shape_of(self, record_id: str) -> None:
        """
        Copy a record's shape into the query and schedule a recompute.

        Missing slots become 0.0, since the query is always fully specified.

        Raises:
            RecordNotFoundError: If the id is not in the dataset
        """
        record = self.dataset.require(record_id)
        self._query = list(fill_missing(record.vector, 0.0))
        logger.debug("Query adopted shape of record %s", record_id)
        self.on_input()

    def flush(self) -> bool:
        """Run a pending recompute now."""
        return self.scheduler.flush()

    # =========================================================================
    # Recompute
    # =========================================================================

    def recompute(self) -> RankedResult:
        """Rank the dataset against the current query and publish the result."""
        result = rank_top_n(
            self.query,
            self.dataset,
            self.top_n,
            min_common_dims=self.min_common_dims,
        )
        self._generation += 1
        result = result.with_generation(self._generation)
        self._latest = result
        self._publish(result)
        return result

    def _publish(self, result: RankedResult) -> None:
        for callback in list(self._subscribers):
            try:
                callback(result)
            except Exception:
                logger.exception("Result subscriber %r failed", callback)


def _query_value(value: Any, axis: int) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidQueryError(f"Axis {axis}: query values must be numbers, got {value!r}")
    number = float(value)
    if not math.isfinite(number):
        raise InvalidQueryError(f"Axis {axis}: query values must be finite, got {value!r}")
    return clamp_unit(number)
