"""
Tests for the top-N ranking engine.
"""

import pytest

from shapematch.dataset.dataset import Dataset
from shapematch.ranking.engine import rank_top_n

QUERY = (1.0, 0.0, 0.0, 0.0, 0.0, 0.0)


class TestRankTopN:
    """Peak filter + similarity + stable sort + truncation."""

    def test_reference_scenario(self, abc_dataset):
        result = rank_top_n(QUERY, abc_dataset, 2)

        assert [r.record_id for r in result.records] == ["A", "B"]
        assert result.candidates[0].score == pytest.approx(1.0)
        assert result.candidates[1].score == pytest.approx(0.994, abs=1e-3)
        assert result.excluded_by_peak == 1

    def test_ranks_are_one_based(self, abc_dataset):
        result = rank_top_n(QUERY, abc_dataset, 5)
        assert [c.rank for c in result.candidates] == [1, 2]

    def test_peak_filter_beats_raw_similarity(self, feature_keys, record_factory):
        dataset = Dataset(
            [
                record_factory("spiked_1", [0.9, 1.0, 0.85, 0, 0, 0]),
                record_factory("spiked_0", [1.0, 0.1, 0.05, 0, 0, 0]),
            ],
            feature_keys,
        )
        result = rank_top_n(QUERY, dataset, 10)

        assert [r.record_id for r in result.records] == ["spiked_0"]
        assert result.excluded_by_peak == 1

    def test_undefined_peak_is_not_a_peak_exclusion(self, feature_keys, record_factory):
        dataset = Dataset([record_factory("empty", [None] * 6)], feature_keys)
        result = rank_top_n(QUERY, dataset, 3)

        assert len(result) == 0
        assert result.excluded_by_peak == 0
        assert result.incomparable == 1

    def test_midpoint_query_peaks_on_first_axis(self, feature_keys, record_factory):
        dataset = Dataset(
            [
                record_factory("tied", [1.0, 1.0, None, None, None, None]),
                record_factory("axis2", [0.1, 0.9, 0.2, 0.2, 0.2, 0.2]),
            ],
            feature_keys,
        )
        result = rank_top_n((0.5,) * 6, dataset, 3)
        assert [r.record_id for r in result.records] == ["tied"]

    def test_never_more_than_n(self, abc_dataset):
        assert len(rank_top_n(QUERY, abc_dataset, 1)) == 1
        assert len(rank_top_n(QUERY, abc_dataset, 0)) == 0

    def test_returns_all_qualifying_when_fewer_than_n(self, abc_dataset):
        result = rank_top_n(QUERY, abc_dataset, 100)
        assert len(result) == result.qualified == 2

    def test_scores_descending(self, feature_keys, record_factory):
        dataset = Dataset(
            [
                record_factory("r1", [0.6, 0.5, 0.1, 0.0, 0.0, 0.0]),
                record_factory("r2", [1.0, 0.0, 0.0, 0.0, 0.0, 0.0]),
                record_factory("r3", [0.9, 0.3, 0.3, 0.3, 0.0, 0.0]),
            ],
            feature_keys,
        )
        result = rank_top_n(QUERY, dataset, 3)
        scores = [c.score for c in result.candidates]

        assert scores == sorted(scores, reverse=True)
        assert result.records[0].record_id == "r2"

    def test_ties_keep_dataset_order(self, feature_keys, record_factory):
        dataset = Dataset(
            [
                record_factory("first", [0.5, 0.25, 0, 0, 0, 0]),
                record_factory("second", [0.25, 0.125, 0, 0, 0, 0]),
                record_factory("third", [1.0, 0.5, 0, 0, 0, 0]),
            ],
            feature_keys,
        )
        result = rank_top_n((1.0, 0.5, 0, 0, 0, 0), dataset, 3)

        scores = {c.score for c in result.candidates}
        assert len(scores) == 1

        assert [r.record_id for r in result.records] == ["first", "second", "third"]

    def test_incomparable_candidates_are_skipped(self, feature_keys, record_factory):
        dataset = Dataset(
            [
                record_factory("sparse", [0.9, None, None, None, None, None]),
                record_factory("dense", [0.9, 0.1, 0.1, 0.0, 0.0, 0.0]),
            ],
            feature_keys,
        )
        result = rank_top_n(QUERY, dataset, 5)

        assert [r.record_id for r in result.records] == ["dense"]
        assert result.incomparable == 1

    def test_partial_record_still_ranks(self, feature_keys, record_factory):
        dataset = Dataset(
            [record_factory("partial", [0.9, None, 0.1, None, 0.0, None])],
            feature_keys,
        )
        result = rank_top_n(QUERY, dataset, 5)
        assert result.records[0].record_id == "partial"

    def test_deterministic_and_non_mutating(self, abc_dataset):
        query = list(QUERY)
        before = abc_dataset.records

        first = rank_top_n(query, abc_dataset, 3)
        second = rank_top_n(query, abc_dataset, 3)

        assert first.candidates == second.candidates
        assert query == list(QUERY)
        assert abc_dataset.records == before

    def test_empty_dataset_yields_empty_result(self, feature_keys):
        result = rank_top_n(QUERY, Dataset([], feature_keys), 5)
        assert len(result) == 0
        assert result.considered == 0

    def test_negative_n_rejected(self, abc_dataset):
        with pytest.raises(ValueError):
            rank_top_n(QUERY, abc_dataset, -1)

    def test_to_dict_shape(self, abc_dataset):
        data = rank_top_n(QUERY, abc_dataset, 2).to_dict()
        assert data["stats"] == {
            "considered": 3,
            "excluded_by_peak": 1,
            "incomparable": 0,
            "qualified": 2,
        }
        assert data["candidates"][0]["record"]["record_id"] == "A"
