"""CLI tests for supernal-config."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from supernal_config import __version__
from supernal_config.cli import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def project_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, write_config, write_pattern, user_patterns) -> Path:
    """A project with `.supernal/project.yaml` and one user-defined phase."""
    write_pattern(user_patterns, "phases", "review", "description: Strict review\nphase_settings:\n  review:\n    min_reviewers: 2\n")
    write_config(
        """\
        defaults:
          - agile
          - _self_
        workflow:
          wip_limit: 5
        """
    )
    project = tmp_path / "project"
    monkeypatch.chdir(project)
    return project


def _search_args(paths) -> list[str]:
    args: list[str] = []
    for p in paths:
        args += ["--search-path", str(p)]
    return args


class TestShow:
    def test_show_default_config(self, runner: CliRunner, project_dir: Path) -> None:
        result = runner.invoke(cli, ["show"])
        assert result.exit_code == 0, result.output
        config = yaml.safe_load(result.output)
        assert config["workflow"]["wip_limit"] == 5
        assert config["phase_settings"]["review"]["min_reviewers"] == 2
        assert "implementation" in config["phase_settings"]

    def test_show_section_json(self, runner: CliRunner, project_dir: Path) -> None:
        result = runner.invoke(cli, ["show", "--format", "json", "--section", "workflow.phases[0]"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == "planning"

    def test_show_missing_section_exits_1(self, runner: CliRunner, project_dir: Path) -> None:
        result = runner.invoke(cli, ["show", "--section", "nope"])
        assert result.exit_code == 1
        assert "Section not found: nope" in result.output

    def test_show_output_file(self, runner: CliRunner, project_dir: Path) -> None:
        result = runner.invoke(cli, ["show", "--output", "resolved.yaml"])
        assert result.exit_code == 0, result.output
        assert "Config written to resolved.yaml" in result.output
        assert yaml.safe_load((project_dir / "resolved.yaml").read_text())["workflow"]["name"] == "agile"

    def test_show_explicit_config_and_search_path(
        self, runner: CliRunner, project_like_patterns, write_config
    ) -> None:
        path = write_config("defaults: [test-workflow]\n", name="other.yaml")
        result = runner.invoke(cli, [*_search_args(project_like_patterns), "show", "--config", str(path)])
        assert result.exit_code == 0, result.output
        assert yaml.safe_load(result.output)["tags"] == ["shipped"]


class TestErrors:
    def test_missing_config_file(self, runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(cli, ["show"])
        assert result.exit_code == 1
        assert "Config file not found" in result.output

    def test_syntax_error_shows_context(self, runner: CliRunner, project_dir: Path) -> None:
        (project_dir / ".supernal" / "project.yaml").write_text("a: 1\nb: c: d\n", encoding="utf-8")
        result = runner.invoke(cli, ["show"])
        assert result.exit_code == 1
        assert "YAML syntax error in" in result.output
        assert ">    2 | b: c: d" in result.output

    def test_unknown_pattern_json_payload(self, runner: CliRunner, project_dir: Path) -> None:
        (project_dir / ".supernal" / "project.yaml").write_text("defaults: [agil]\n", encoding="utf-8")
        result = runner.invoke(cli, ["show", "--format", "json"])
        assert result.exit_code == 1
        payload = json.loads(result.output)
        assert payload["type"] == "CONFIG_PATTERN_NOT_FOUND"
        assert payload["details"]["suggestion"] == "agile"


class TestTrace:
    def test_trace_text(self, runner: CliRunner, project_dir: Path) -> None:
        result = runner.invoke(cli, ["trace", "workflow.wip_limit"])
        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines[0] == "workflow.wip_limit = 5"
        assert lines[1] == "    workflows/agile: 3"
        assert lines[2].startswith("  > ") and lines[2].endswith(": 5")

    def test_trace_json(self, runner: CliRunner, project_dir: Path) -> None:
        result = runner.invoke(cli, ["trace", "phase_settings.review.min_reviewers", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["final_value"] == 2
        assert [e["source"] for e in data["chain"]] == ["phases/review"]


class TestPatterns:
    def test_patterns_sections(self, runner: CliRunner, project_dir: Path) -> None:
        result = runner.invoke(cli, ["patterns"])
        assert result.exit_code == 0, result.output
        user, shipped = result.output.split("Shipped:")
        assert "phases/review" in user and "Strict review" in user
        assert "workflows/agile" in shipped
        assert "workflows/minimal" in shipped

    def test_patterns_type_and_usage_json(self, runner: CliRunner, project_dir: Path) -> None:
        result = runner.invoke(cli, ["patterns", "--type", "workflows", "--usage", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["user_defined"] == []
        agile = next(p for p in data["shipped"] if p["name"] == "agile")
        assert "- agile" in agile["usage_example"]

    def test_structured_usage_example(
        self, runner: CliRunner, project_dir: Path, user_patterns: Path, write_pattern
    ) -> None:
        write_pattern(user_patterns, "documents", "adr", "usageExample:\n  defaults:\n    - document: adr\n")
        result = runner.invoke(cli, ["patterns", "--type", "documents", "--usage"])
        assert result.exit_code == 0, result.output
        assert "      - document: adr" in result.output

    def test_empty_user_section(self, runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(cli, ["patterns", "--type", "documents"])
        assert result.exit_code == 0, result.output
        assert result.output.startswith("User-defined:\n  (none)\nShipped:\n")


class TestInspect:
    def test_inspect_raw(self, runner: CliRunner, project_dir: Path) -> None:
        result = runner.invoke(cli, ["inspect", "workflows/minimal"])
        assert result.exit_code == 0, result.output
        assert yaml.safe_load(result.output)["workflow"]["name"] == "minimal"

    def test_inspect_resolved(self, runner: CliRunner, project_dir: Path) -> None:
        result = runner.invoke(cli, ["inspect", "agile", "--resolve", "--format", "json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["phase_settings"]["review"]["min_reviewers"] == 2
        assert data["workflow"]["wip_limit"] == 3

    def test_inspect_unknown(self, runner: CliRunner, project_dir: Path) -> None:
        result = runner.invoke(cli, ["inspect", "nonexistent-xyz"])
        assert result.exit_code == 1
        assert 'Pattern "nonexistent-xyz" not found' in result.output


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output
