"""
Similarity calculation module.

Missing-value-aware cosine similarity on feature vectors, the peak-axis
pre-filter, and match explanations.
"""

from .calculator import common_dims, cosine_similarity, peak_axis, peaks_conflict
from .traits import key_differences, shared_traits, similarity_label

__all__ = [
    "common_dims",
    "cosine_similarity",
    "peak_axis",
    "peaks_conflict",
    "key_differences",
    "shared_traits",
    "similarity_label",
]
