"""
Tests for the interactive query session.
"""

import pytest

from shapematch.core.config import Settings
from shapematch.core.errors import InvalidQueryError, RecordNotFoundError
from shapematch.dataset.dataset import Dataset
from shapematch.dataset.loader import parse_csv_text
from shapematch.session.state import QuerySession


@pytest.fixture
def session(abc_dataset, fake_timer):
    return QuerySession(abc_dataset, top_n=2, throttle_ms=120, call_later=fake_timer.call_later)


@pytest.fixture
def published(session):
    results = []
    session.subscribe(results.append)
    return results


class TestQueryState:
    def test_default_query_is_midpoint(self, session):
        assert session.query == (0.5,) * 6

    def test_set_query_replaces_vector(self, session):
        session.set_query([1, 0, 0, 0, 0, 0])
        assert session.query == (1.0, 0.0, 0.0, 0.0, 0.0, 0.0)

    def test_set_query_clamps(self, session):
        session.set_query([1.5, -0.2, 0, 0, 0, 0])
        assert session.query[:2] == (1.0, 0.0)

    def test_set_query_rejects_wrong_length(self, session):
        with pytest.raises(InvalidQueryError):
            session.set_query([0.1, 0.2])

    def test_set_query_rejects_missing_values(self, session):
        with pytest.raises(InvalidQueryError):
            session.set_query([0.1, None, 0.1, 0.1, 0.1, 0.1])

    def test_set_axis(self, session):
        session.set_axis(3, 0.9)
        assert session.query[3] == 0.9

    def test_set_axis_out_of_range(self, session):
        with pytest.raises(InvalidQueryError):
            session.set_axis(6, 0.5)

    def test_reset_query(self, session):
        session.set_query([1, 0, 0, 0, 0, 0])
        session.reset_query()
        assert session.query == (0.5,) * 6

    def test_adopt_shape_fills_missing_with_zero(self, feature_keys, record_factory, fake_timer):
        dataset = Dataset([record_factory("P", [0.3, None, 0.9, None, 0.1, 0.2])], feature_keys)
        session = QuerySession(dataset, call_later=fake_timer.call_later)

        session.adopt_shape_of("P")

        assert session.query == (0.3, 0.0, 0.9, 0.0, 0.1, 0.2)
        assert session.scheduler.pending

    def test_adopt_unknown_record(self, session):
        with pytest.raises(RecordNotFoundError):
            session.adopt_shape_of("nope")

    def test_query_snapshot_is_immutable(self, session):
        snapshot = session.query
        session.set_axis(0, 0.1)
        assert snapshot[0] == 0.5


class TestThrottledRecompute:
    def test_rapid_inputs_trigger_one_recompute_with_last_value(
        self, session, published, fake_timer
    ):
        for i in range(1, 11):
            session.set_axis(0, i / 10)

        assert published == []
        fake_timer.advance(0.12)

        assert len(published) == 1
        assert published[0].query[0] == 1.0

    def test_mutations_schedule_recompute(self, session, fake_timer):
        session.reset_query()
        assert session.scheduler.pending
        assert fake_timer.pending == 1

    def test_reference_scenario_through_session(self, session, published):
        session.set_query([1, 0, 0, 0, 0, 0])
        session.flush()

        assert [r.record_id for r in published[-1].records] == ["A", "B"]

    def test_each_recompute_replaces_result(self, session, published, fake_timer):
        session.set_query([1, 0, 0, 0, 0, 0])
        fake_timer.advance(0.12)
        first = session.latest_result

        session.set_query([0, 1, 0, 0, 0, 0])
        fake_timer.advance(0.12)
        second = session.latest_result

        assert first is not second
        assert second.generation == first.generation + 1
        assert [r.record_id for r in first.records] == ["A", "B"]
        assert [r.record_id for r in second.records] == ["C"]

    def test_recompute_bypasses_throttle(self, session, published):
        result = session.recompute()
        assert published == [result]
        assert session.latest_result is result

    def test_on_input_coalesces(self, session):
        assert session.on_input() is True
        assert session.on_input() is False


class TestSubscribers:
    def test_unsubscribe(self, session):
        received = []
        unsubscribe = session.subscribe(received.append)
        unsubscribe()
        session.recompute()
        assert received == []

    def test_failing_subscriber_does_not_block_others(self, session):
        received = []

        def broken(result):
            raise RuntimeError("render failed")

        session.subscribe(broken)
        session.subscribe(received.append)
        session.recompute()

        assert len(received) == 1


class TestNoData:
    def test_empty_dataset_publishes_empty_result(self, feature_keys, fake_timer):
        session = QuerySession(Dataset([], feature_keys), call_later=fake_timer.call_later)

        assert not session.has_data
        result = session.recompute()
        assert len(result) == 0

    def test_malformed_cell_record_still_ranks(self, fake_timer):
        dataset = parse_csv_text(
            "id,name,axis1,axis2,axis3,axis4,axis5,axis6\n"
            "X,Partial,0.9,#N/A,0.1,0.05,#VALUE!,0\n"
        )
        session = QuerySession(dataset, call_later=fake_timer.call_later)
        session.set_query([1, 0, 0, 0, 0, 0])
        session.flush()

        assert dataset.get("X").vector[1] is None
        assert session.latest_result.records[0].record_id == "X"


class TestFromSettings:
    def test_uses_configured_parameters(self, abc_dataset, fake_timer):
        settings = Settings(top_n=1, min_common_dims=3, throttle_ms=50)
        session = QuerySession.from_settings(abc_dataset, settings, call_later=fake_timer.call_later)

        assert session.top_n == 1
        assert session.min_common_dims == 3
        assert session.scheduler.delay_seconds == pytest.approx(0.05)
