"""
CSV loader for shaped-entity datasets.

CSV Format (header row required):
    id,name,axis1,axis2,axis3,axis4,axis5,axis6
    A01,Ridge,0.12,0.85,#N/A,0.40,,0.33
    A02,Basin,0.90,0.10,0.05,0.00,0.00,0.20

Feature cells that are blank, spreadsheet error tokens, or not numbers
become missing slots. Other columns are kept as record attributes.
"""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Iterable, Sequence

from ..core.errors import DatasetLoadError
from ..core.types import DEFAULT_FEATURE_KEYS
from .dataset import Dataset

logger = logging.getLogger(__name__)


def load_dataset(
    file_path: str | Path,
    feature_keys: Sequence[str] = DEFAULT_FEATURE_KEYS,
    id_column: str = "id",
    name_column: str = "name",
    encoding: str = "utf-8-sig",
) -> Dataset:
    """
    Load a dataset from a CSV file.

    Args:
        file_path: Path to CSV file
        feature_keys: Ordered feature columns
        id_column: Column holding the stable record id
        name_column: Column holding the display name
        encoding: File encoding (the default tolerates a UTF-8 BOM)

    Returns:
        Dataset built from every row

    Raises:
        FileNotFoundError: If the file does not exist
        DatasetLoadError: If the file cannot be read or decoded
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"CSV file not found: {file_path}")

    try:
        with open(file_path, newline="", encoding=encoding) as f:
            dataset = _read_csv(f, feature_keys, id_column, name_column, source=file_path.name)
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise DatasetLoadError(str(file_path), str(e)) from e

    return dataset


def parse_csv_text(
    text: str,
    feature_keys: Sequence[str] = DEFAULT_FEATURE_KEYS,
    id_column: str = "id",
    name_column: str = "name",
) -> Dataset:
    """Build a dataset from in-memory CSV text."""
    try:
        return _read_csv(
            io.StringIO(text), feature_keys, id_column, name_column, source="<text>"
        )
    except csv.Error as e:
        raise DatasetLoadError("<text>", str(e)) from e


def _read_csv(
    stream: Iterable[str],
    feature_keys: Sequence[str],
    id_column: str,
    name_column: str,
    source: str,
) -> Dataset:
    reader = csv.DictReader(stream)

    header = reader.fieldnames
    if not header:
        logger.warning("No header row in %s; dataset is empty", source)
        return Dataset([], feature_keys)

    absent = [key for key in feature_keys if key not in header]
    if absent:
        logger.warning(
            "Feature columns missing from %s header: %s (treated as missing values)",
            source,
            ", ".join(absent),
        )

    dataset = Dataset.from_rows(reader, feature_keys, id_column=id_column, name_column=name_column)

    logger.info(
        "Loaded %d records from %s (skipped: %d, dimensions: %d)",
        len(dataset),
        source,
        dataset.skipped,
        dataset.dimensions,
    )

    return dataset
