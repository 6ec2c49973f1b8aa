"""
Dataset construction and CSV ingestion.
"""

from .dataset import Dataset
from .loader import load_dataset, parse_csv_text

__all__ = ["Dataset", "load_dataset", "parse_csv_text"]
