"""CLI contract tests for repoenforcer check and config commands."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from typer.testing import CliRunner

from repoenforcer import __version__
from repoenforcer.cli import EXIT_USAGE, EXIT_VIOLATION, cli

if TYPE_CHECKING:
    from pathlib import Path

CHAIN_YAML = """
models:
  - groupId: org.example
    artifactId: app
    version: "1.0"
    repositories:
      - id: central2
  - groupId: org.example
    artifactId: parent
    version: "1"
    pluginRepositories:
      - id: snap-plugins
        releases: {enabled: false}
""".lstrip()


def _chain(tmp_path: Path) -> Path:
    path = tmp_path / "chain.yaml"
    path.write_text(CHAIN_YAML, encoding="utf-8")
    return path


def test_check_fails_on_banned_repositories(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["check", "--chain", str(_chain(tmp_path)), "--project-root", str(tmp_path)])

    assert result.exit_code == EXIT_VIOLATION
    assert "Some poms have repositories defined:" in result.output
    assert "org.example:app version:1.0 has repositories [central2]" in result.output
    assert "has plugin repositories [snap-plugins]" in result.output


def test_check_passes_with_cli_allowlist_and_snapshot_tolerance(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli,
        [
            "check",
            "--chain",
            str(_chain(tmp_path)),
            "--project-root",
            str(tmp_path),
            "--allow-repo",
            "central2",
            "--allow-snapshot-plugins",
        ],
    )

    assert result.exit_code == 0
    assert "No banned repositories found" in result.output


def test_check_reads_project_config(tmp_path: Path) -> None:
    config_path = tmp_path / ".repoenforcer" / "rule.yaml"
    config_path.parent.mkdir()
    config_path.write_text(
        "requireNoRepositories:\n  banRepositories: false\n  banPluginRepositories: false\n",
        encoding="utf-8",
    )
    runner = CliRunner()

    result = runner.invoke(cli, ["check", "--chain", str(_chain(tmp_path)), "--project-root", str(tmp_path)])

    assert result.exit_code == 0


def test_cli_flags_extend_config(tmp_path: Path) -> None:
    config_path = tmp_path / "rule.yaml"
    config_path.write_text("allowedRepositories: [central2]\n", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["check", "--chain", str(_chain(tmp_path)), "--config", str(config_path), "--allow-plugin-repo", "other"],
    )

    assert result.exit_code == EXIT_VIOLATION
    assert "[snap-plugins]" in result.output
    assert "central2" not in result.output


def test_cli_flags_override_config_both_ways(tmp_path: Path) -> None:
    config_path = tmp_path / "rule.yaml"
    config_path.write_text(
        "banRepositories: false\nallowSnapshotPluginRepositories: true\n",
        encoding="utf-8",
    )
    runner = CliRunner()
    base = ["check", "--chain", str(_chain(tmp_path)), "--config", str(config_path)]

    from_config = runner.invoke(cli, base)
    snapshots_off = runner.invoke(cli, [*base, "--no-allow-snapshot-plugins"])
    ban_on = runner.invoke(cli, [*base, "--ban-repositories"])

    assert from_config.exit_code == 0
    assert snapshots_off.exit_code == EXIT_VIOLATION
    assert "has plugin repositories [snap-plugins]" in snapshots_off.output
    assert "[central2]" not in snapshots_off.output
    assert ban_on.exit_code == EXIT_VIOLATION
    assert "has repositories [central2]" in ban_on.output
    assert "snap-plugins" not in ban_on.output


def test_check_json_report(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli,
        [
            "check",
            "--chain",
            str(_chain(tmp_path)),
            "--project-root",
            str(tmp_path),
            "--no-ban-plugin-repositories",
            "--message",
            "Use the mirror.",
            "--json",
        ],
    )

    assert result.exit_code == EXIT_VIOLATION
    payload = json.loads(result.stdout)
    assert payload["status"] == "failed"
    assert payload["message"] == "Use the mirror."
    assert payload["violations"] == [
        {
            "artifact_id": "app",
            "banned_ids": ["central2"],
            "category": "repositories",
            "group_id": "org.example",
            "version": "1.0",
        }
    ]


def test_check_json_report_when_passing(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli,
        [
            "check",
            "--chain",
            str(_chain(tmp_path)),
            "--project-root",
            str(tmp_path),
            "--no-ban-repositories",
            "--no-ban-plugin-repositories",
            "--json",
        ],
    )

    assert result.exit_code == 0
    assert json.loads(result.stdout)["status"] == "passed"


def test_check_missing_chain_is_usage_error(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["check", "--chain", str(tmp_path / "absent.yaml"), "--project-root", str(tmp_path)])

    assert result.exit_code == EXIT_USAGE


def test_check_invalid_config_is_usage_error(tmp_path: Path) -> None:
    config_path = tmp_path / "rule.yaml"
    config_path.write_text("banRepos: true\n", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(cli, ["check", "--chain", str(_chain(tmp_path)), "--config", str(config_path)])

    assert result.exit_code == EXIT_USAGE


def test_check_non_utf8_chain_is_usage_error(tmp_path: Path) -> None:
    chain_path = tmp_path / "chain.yaml"
    chain_path.write_bytes(b"models:\n  - groupId: g\n    artifactId: \xff\xfe\n    version: '1'\n")
    runner = CliRunner()

    result = runner.invoke(cli, ["check", "--chain", str(chain_path), "--project-root", str(tmp_path)])

    assert result.exit_code == EXIT_USAGE


def test_check_non_utf8_config_is_usage_error(tmp_path: Path) -> None:
    config_path = tmp_path / "rule.yaml"
    config_path.write_bytes(b"message: \xff\n")
    runner = CliRunner()

    result = runner.invoke(cli, ["check", "--chain", str(_chain(tmp_path)), "--config", str(config_path)])

    assert result.exit_code == EXIT_USAGE


def test_config_init_and_show(tmp_path: Path) -> None:
    runner = CliRunner()

    init = runner.invoke(cli, ["config", "init", "--project-root", str(tmp_path)])
    again = runner.invoke(cli, ["config", "init", "--project-root", str(tmp_path)])
    show = runner.invoke(cli, ["config", "show", "--project-root", str(tmp_path)])

    assert init.exit_code == 0
    assert (tmp_path / ".repoenforcer" / "rule.yaml").exists()
    assert again.exit_code == EXIT_USAGE
    assert show.exit_code == 0
    assert json.loads(show.stdout)["banRepositories"] is True


def test_version() -> None:
    result = CliRunner().invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output
