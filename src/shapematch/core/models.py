"""
Value objects shared by the ranking pipeline.

Records and results are immutable: a dataset is built once, and every
recompute produces a fresh RankedResult that replaces the previous one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterator

from .types import FeatureVector


@dataclass(frozen=True)
class Record:
    """A shaped entity: stable id, display name and one feature vector."""

    record_id: str
    name: str
    vector: FeatureVector
    attributes: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def observed(self) -> int:
        """Number of non-missing slots."""
        return sum(1 for v in self.vector if v is not None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "record_id": self.record_id,
            "name": self.name,
            "vector": list(self.vector),
            "attributes": dict(self.attributes),
        }


@dataclass(frozen=True)
class ScoredCandidate:
    """A record paired with its similarity to the query for one ranking pass."""

    record: Record
    score: float
    rank: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "rank": self.rank,
            "score": self.score,
            "record": self.record.to_dict(),
        }


@dataclass(frozen=True)
class RankedResult:
    """Top-N candidates of one ranking pass, ordered by descending score."""

    query: FeatureVector
    candidates: tuple[ScoredCandidate, ...]
    limit: int
    considered: int = 0
    excluded_by_peak: int = 0
    incomparable: int = 0
    generation: int = 0
    computed_at: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))

    @property
    def qualified(self) -> int:
        """Candidates that survived the peak filter and had a defined score."""
        return self.considered - self.excluded_by_peak - self.incomparable

    @property
    def records(self) -> list[Record]:
        return [c.record for c in self.candidates]

    def __len__(self) -> int:
        return len(self.candidates)

    def __iter__(self) -> Iterator[ScoredCandidate]:
        return iter(self.candidates)

    def with_generation(self, generation: int) -> RankedResult:
        """Copy of this result stamped with a publish generation."""
        return RankedResult(
            query=self.query,
            candidates=self.candidates,
            limit=self.limit,
            considered=self.considered,
            excluded_by_peak=self.excluded_by_peak,
            incomparable=self.incomparable,
            generation=generation,
            computed_at=self.computed_at,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": list(self.query),
            "limit": self.limit,
            "generation": self.generation,
            "computed_at": self.computed_at.isoformat(),
            "stats": {
                "considered": self.considered,
                "excluded_by_peak": self.excluded_by_peak,
                "incomparable": self.incomparable,
                "qualified": self.qualified,
            },
            "candidates": [c.to_dict() for c in self.candidates],
        }
