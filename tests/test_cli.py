"""Tests for the mobility-advisor command line interface."""

import json
from unittest.mock import patch

import yaml
from click.testing import CliRunner

from content_catalog.exceptions import SnapshotLoadError
from content_catalog.loader import load_snapshot, save_snapshot
from content_catalog.mock_data import mock_snapshot
from mobility_advisor.cli import main as advisor_cli
from mobility_advisor.config import get_config


class TestHelp:
    def test_group_help(self):
        runner = CliRunner()
        result = runner.invoke(advisor_cli, ["--help"])
        assert result.exit_code == 0
        for command in ("rank", "governance", "validate", "inspect", "init-config"):
            assert command in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(advisor_cli, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output


class TestRankCommand:
    def test_json_output(self):
        runner = CliRunner()
        result = runner.invoke(advisor_cli, [
            "rank", "-r", "reason-1",
            "-t", "woon-werkverkeer", "-t", "zakelijk verkeer",
            "-p", "locatie", "--json-output",
        ])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [item["solution"]["id"] for item in data["ordered"]] == [
            "solution-2", "solution-4", "solution-3", "solution-1",
        ]
        assert data["used_fallback"] is False

    def test_formatted_output(self):
        runner = CliRunner()
        result = runner.invoke(advisor_cli, ["rank", "-r", "reason-2", "--verbose"])

        assert result.exit_code == 0
        assert "Solution Ranking" in result.output
        assert "Collectief OV-abonnement" in result.output
        assert "Duurzaamheidsdoelen" in result.output

    def test_fallback_notice(self):
        runner = CliRunner()
        result = runner.invoke(advisor_cli, ["rank", "-r", "reason-5"])
        assert result.exit_code == 0
        assert "showing all solutions" in result.output

    def test_selection_file_with_override(self, tmp_path):
        selection = tmp_path / "selection.yaml"
        selection.write_text(yaml.safe_dump({
            "selected_reasons": ["reason-5"],
            "business_park_info": {"traffic_types": ["bezoekers verkeer"]},
        }))

        runner = CliRunner()
        result = runner.invoke(advisor_cli, ["rank", "-x", str(selection), "-r", "reason-1", "-j"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["active_reason_ids"] == ["reason-1"]
        assert data["ordered"][0]["solution"]["id"] == "solution-3"

    def test_out_file(self, tmp_path):
        out = tmp_path / "ranking.json"
        runner = CliRunner()
        result = runner.invoke(advisor_cli, ["rank", "-r", "reason-1", "-o", str(out)])

        assert result.exit_code == 0
        assert len(json.loads(out.read_text(encoding="utf-8"))["ordered"]) == 4

    @patch("mobility_advisor.engine.ContentRepository.from_source")
    def test_load_failure_exits_with_error(self, mock_from_source):
        mock_from_source.side_effect = SnapshotLoadError("Snapshot file not found: x.json")
        runner = CliRunner()
        result = runner.invoke(advisor_cli, ["rank", "-s", "x.json"])
        assert result.exit_code == 1
        assert "Error" in result.output


class TestGovernanceCommand:
    def test_json_output(self):
        runner = CliRunner()
        result = runner.invoke(advisor_cli, [
            "governance", "-V", "solution-4=variation-1", "-c", "governance-2", "-j",
        ])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [m["id"] for m in data["recommended"]] == ["governance-2", "governance-3"]
        assert [m["id"] for m in data["unsuitable"]] == ["governance-1"]
        assert data["current_model_is_recommended"] is True

    def test_formatted_output(self):
        runner = CliRunner()
        result = runner.invoke(advisor_cli, [
            "governance", "-V", "solution-4=variation-2", "-c", "governance-1",
        ])

        assert result.exit_code == 0
        assert "Current governance model" in result.output
        assert "Aanbevolen, mits" in result.output
        assert "variation-2" in result.output

    def test_legacy_solution(self):
        runner = CliRunner()
        result = runner.invoke(advisor_cli, ["governance", "--solution", "solution-4", "-j"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [m["id"] for m in data["recommended"]] == ["governance-2", "governance-3"]
        assert data["conditional"] == []

    def test_unknown_solution(self):
        runner = CliRunner()
        result = runner.invoke(advisor_cli, ["governance", "--solution", "missing"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_malformed_variant_option(self):
        runner = CliRunner()
        result = runner.invoke(advisor_cli, ["governance", "-V", "variation-1"])
        assert result.exit_code == 1
        assert "solution_id=variation_id" in result.output


class TestValidateCommand:
    def test_valid_snapshot(self, tmp_path):
        path = tmp_path / "snapshot.json"
        save_snapshot(mock_snapshot(), path)

        runner = CliRunner()
        result = runner.invoke(advisor_cli, ["validate", "-s", str(path)])

        assert result.exit_code == 0
        assert "Snapshot valid" in result.output

    def test_invalid_snapshot(self, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps({"version": "1.0.0"}))

        runner = CliRunner()
        result = runner.invoke(advisor_cli, ["validate", "-s", str(path)])

        assert result.exit_code == 1
        assert "Snapshot invalid" in result.output


class TestInspectCommand:
    def test_overview(self):
        runner = CliRunner()
        result = runner.invoke(advisor_cli, ["inspect"])
        assert result.exit_code == 0
        assert "Reasons: 5" in result.output

    def test_solution_detail(self):
        runner = CliRunner()
        result = runner.invoke(advisor_cli, ["inspect", "--id", "solution-4"])
        assert result.exit_code == 0
        assert "Pendeldienst" in result.output
        assert "variation-1" in result.output


class TestFileCommands:
    def test_init_config(self, tmp_path):
        path = tmp_path / "advisor-config.yaml"
        runner = CliRunner()
        result = runner.invoke(advisor_cli, ["init-config", str(path)])

        assert result.exit_code == 0
        assert yaml.safe_load(path.read_text(encoding="utf-8"))["scoring"]["traffic_full_match_bonus"] == 1000

    def test_export_mock(self, tmp_path):
        path = tmp_path / "mock.json"
        runner = CliRunner()
        result = runner.invoke(advisor_cli, ["export-mock", str(path)])

        assert result.exit_code == 0
        assert len(load_snapshot(path).implementation_variations) == 3

    def test_config_option(self, tmp_path):
        config_path = tmp_path / "advisor-config.yaml"
        config_path.write_text(yaml.safe_dump({"scoring": {"unknown_category_label": "Unknown"}}))

        runner = CliRunner()
        result = runner.invoke(advisor_cli, ["--config", str(config_path), "inspect"])

        assert result.exit_code == 0
        assert get_config().scoring.unknown_category_label == "Unknown"
