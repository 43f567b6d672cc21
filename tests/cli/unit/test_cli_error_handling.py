"""CLI error-handling tests."""

from __future__ import annotations

from pathlib import Path

from lesson_reconciler.cli import main


def test_missing_required_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["reconcile", "--output-dir", "/tmp/out"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Missing option" in captured.err
    assert "--config" in captured.err
    assert "Traceback" not in captured.err


def test_unknown_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["reconcile", "--bogus"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "No such option: --bogus" in captured.err
    assert "Traceback" not in captured.err


def test_invalid_log_level_is_rejected(capsys) -> None:
    exit_code = main(["--log-level", "LOUD", "reconcile", "--config", "config.yaml"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "--log-level" in captured.err


def test_run_failures_are_reported_without_traceback(tmp_path: Path, capsys) -> None:
    exit_code = main(["reconcile", "--config", str(tmp_path / "absent.yaml")])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Configuration file not found" in captured.err
    assert "Traceback" not in captured.err


def test_existing_config_is_not_overwritten(tmp_path: Path, capsys) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("tenant_id: keep\n", encoding="utf-8")

    exit_code = main(["generate-config", "--output", str(config_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "already exists" in captured.err
    assert config_path.read_text(encoding="utf-8") == "tenant_id: keep\n"
