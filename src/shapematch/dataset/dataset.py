"""
Immutable, ordered collection of records built once from raw rows.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence

from ..core.errors import RecordNotFoundError
from ..core.models import Record
from ..features.normalize import normalize
from ..similarity.calculator import peak_axis

logger = logging.getLogger(__name__)


class Dataset:
    """
    Ordered, read-only sequence of Records.

    Every record vector has exactly len(feature_keys) slots. The dataset is
    shared by all ranking passes without locking because nothing mutates it
    after construction.
    """

    def __init__(
        self,
        records: Iterable[Record],
        feature_keys: Sequence[str],
        skipped: int = 0,
    ):
        self._feature_keys = tuple(feature_keys)
        self._records = tuple(records)
        self._skipped = skipped
        self._by_id: dict[str, Record] = {}

        dimensions = len(self._feature_keys)
        for record in self._records:
            if len(record.vector) != dimensions:
                raise ValueError(
                    f"Record {record.record_id!r} has {len(record.vector)} slots, "
                    f"expected {dimensions}"
                )
            if record.record_id in self._by_id:
                logger.warning("Duplicate record id %r; lookups use the first", record.record_id)
                continue
            self._by_id[record.record_id] = record

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[Mapping[str, Any]],
        feature_keys: Sequence[str],
        id_column: str = "id",
        name_column: str = "name",
    ) -> Dataset:
        """
        Build a dataset from parsed rows.

        Args:
            rows: Parsed rows {column_name: cell}, in source order
            feature_keys: Ordered feature columns
            id_column: Column holding the stable record id
            name_column: Column holding the display name

        Returns:
            Dataset; rows with no observed feature at all are skipped
        """
        feature_set = set(feature_keys)
        records: list[Record] = []
        skipped = 0

        for row_number, row in enumerate(rows, start=1):
            vector = normalize(row, feature_keys)

            if all(v is None for v in vector):
                logger.warning("Skipping row %d: no usable feature values", row_number)
                skipped += 1
                continue

            record_id = _clean_text(row.get(id_column)) or str(row_number)
            name = _clean_text(row.get(name_column)) or record_id
            attributes = {
                k: v
                for k, v in row.items()
                if k not in feature_set and k not in (id_column, name_column) and k is not None
            }

            records.append(
                Record(record_id=record_id, name=name, vector=vector, attributes=attributes)
            )

        dataset = cls(records, feature_keys, skipped=skipped)

        if dataset.is_empty:
            logger.warning("Dataset has no usable records (skipped %d rows)", skipped)

        return dataset

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def feature_keys(self) -> tuple[str, ...]:
        return self._feature_keys

    @property
    def dimensions(self) -> int:
        return len(self._feature_keys)

    @property
    def records(self) -> tuple[Record, ...]:
        return self._records

    @property
    def skipped(self) -> int:
        """Rows dropped at build time because no feature was observed."""
        return self._skipped

    @property
    def is_empty(self) -> bool:
        return not self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._by_id

    def get(self, record_id: str) -> Optional[Record]:
        return self._by_id.get(record_id)

    def require(self, record_id: str) -> Record:
        """Look up a record, raising RecordNotFoundError if absent."""
        record = self._by_id.get(record_id)
        if record is None:
            raise RecordNotFoundError(record_id)
        return record

    def summary(self) -> dict[str, Any]:
        """Per-axis coverage and peak-axis distribution."""
        observed = {key: 0 for key in self._feature_keys}
        peaks: dict[str, int] = {key: 0 for key in self._feature_keys}
        peaks["none"] = 0

        for record in self._records:
            for key, value in zip(self._feature_keys, record.vector):
                if value is not None:
                    observed[key] += 1
            peak = peak_axis(record.vector)
            peaks["none" if peak is None else self._feature_keys[peak]] += 1

        return {
            "records": len(self._records),
            "skipped": self._skipped,
            "dimensions": self.dimensions,
            "feature_keys": list(self._feature_keys),
            "observed": observed,
            "peaks": peaks,
        }


def _clean_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()
