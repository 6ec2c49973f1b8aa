"""
Tests for the shapematch command-line interface.
"""

import json

import pytest
from click.testing import CliRunner

from shapematch.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


class TestRankCommand:
    def test_rank_with_query(self, runner, sample_csv_path):
        result = runner.invoke(cli, ["rank", str(sample_csv_path), "--query", "1,0,0,0,0,0"])

        assert result.exit_code == 0
        lines = result.output.splitlines()
        ranked = [line for line in lines if line.strip()[:2] in ("1.", "2.")]
        assert "Basin" in ranked[0]
        assert "Mesa" in ranked[1]
        assert "excluded by peak 2" in result.output

    def test_rank_like_record(self, runner, sample_csv_path):
        result = runner.invoke(cli, ["rank", str(sample_csv_path), "--like", "R1", "--json"])

        assert result.exit_code == 0
        payload = json.loads(result.output)
        ids = [c["record"]["record_id"] for c in payload["candidates"]]
        assert ids == ["R1", "R3"]
        assert payload["candidates"][0]["similarity_label"] == "Nearly Identical"

    def test_rank_json_top_n(self, runner, sample_csv_path):
        result = runner.invoke(
            cli, ["rank", str(sample_csv_path), "--query", "1,0,0,0,0,0", "--top-n", "1", "--json"]
        )

        payload = json.loads(result.output)
        assert payload["limit"] == 1
        assert len(payload["candidates"]) == 1
        assert payload["stats"]["qualified"] == 2

    def test_requires_exactly_one_query_source(self, runner, sample_csv_path):
        result = runner.invoke(cli, ["rank", str(sample_csv_path)])
        assert result.exit_code == 1
        assert "exactly one" in result.output

    def test_wrong_query_length(self, runner, sample_csv_path):
        result = runner.invoke(cli, ["rank", str(sample_csv_path), "--query", "1,0"])
        assert result.exit_code == 1
        assert "ERROR" in result.output

    def test_non_numeric_query(self, runner, sample_csv_path):
        result = runner.invoke(cli, ["rank", str(sample_csv_path), "--query", "1,x,0,0,0,0"])
        assert result.exit_code == 1

    def test_unknown_like_record(self, runner, sample_csv_path):
        result = runner.invoke(cli, ["rank", str(sample_csv_path), "--like", "nope"])
        assert result.exit_code == 1
        assert "nope" in result.output

    def test_missing_dataset(self, runner, tmp_path):
        result = runner.invoke(
            cli, ["rank", str(tmp_path / "absent.csv"), "--query", "1,0,0,0,0,0"]
        )
        assert result.exit_code == 1


class TestInspectCommand:
    def test_inspect_text(self, runner, sample_csv_path):
        result = runner.invoke(cli, ["inspect", str(sample_csv_path)])

        assert result.exit_code == 0
        assert "Records: 4" in result.output
        assert "Skipped rows: 1" in result.output

    def test_inspect_json(self, runner, sample_csv_path):
        result = runner.invoke(cli, ["inspect", str(sample_csv_path), "--json"])

        summary = json.loads(result.output)
        assert summary["dimensions"] == 6
        assert summary["feature_keys"][0] == "axis1"

    def test_custom_feature_keys(self, runner, tmp_path):
        path = tmp_path / "boxes.csv"
        path.write_text("id,name,h,w\nb1,Tall,0.9,0.1\nb2,Wide,0.1,0.9\n", encoding="utf-8")

        result = runner.invoke(cli, ["inspect", str(path), "--feature-keys", "h,w", "--json"])

        summary = json.loads(result.output)
        assert summary["records"] == 2
        assert summary["peaks"] == {"h": 1, "w": 1, "none": 0}
