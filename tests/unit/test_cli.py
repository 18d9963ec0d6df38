from __future__ import annotations

from pathlib import Path

import pytest

from hashcash.cli import EXIT_LEDGER, EXIT_OK, EXIT_REJECTED, EXIT_USAGE, build_parser, main
from hashcash.core.difficulty import score


def _write_config(tmp_path: Path, *, bits: int = 8) -> Path:
    cfg = tmp_path / "config" / "default.yaml"
    cfg.parent.mkdir(parents=True, exist_ok=True)
    cfg.write_text(
        "\n".join(
            [
                "stamp:",
                f"  bits: {bits}",
                "ledger:",
                "  backend: sqlite",
                f"  path: {tmp_path / 'data' / 'spent.db'}",
                "logging:",
                "  level: WARNING",
                "",
            ]
        )
    )
    return cfg


def _mint(capsys: pytest.CaptureFixture[str], *argv: str) -> str:
    assert main([*argv]) == EXIT_OK
    return capsys.readouterr().out.strip()


def test_cli_help_includes_subcommands(capsys: pytest.CaptureFixture[str]) -> None:
    rc = main([])
    assert rc == EXIT_USAGE
    out = capsys.readouterr().out
    for cmd in ("mint", "verify", "score", "purge", "api"):
        assert cmd in out


def test_cli_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    rc = main(["--version"])
    assert rc == EXIT_OK
    assert capsys.readouterr().out.strip().startswith("hashcash v")


def test_cli_unknown_command_errors() -> None:
    parser = build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["nope"])


def test_mint_prints_a_stamp(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)
    _write_config(tmp_path)
    token = _mint(capsys, "mint", "someone@gmail.com")
    assert token.startswith("1:8:")
    assert score(token) >= 8


def test_mint_bits_override_and_budget(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)
    _write_config(tmp_path)
    token = _mint(capsys, "mint", "someone@gmail.com", "--bits", "4")
    assert token.startswith("1:4:")

    rc = main(["mint", "someone@gmail.com", "--bits", "160", "--max-attempts", "3"])
    assert rc == EXIT_REJECTED
    assert "3 attempts" in capsys.readouterr().err


def test_mint_rejects_resource_with_delimiter(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)
    _write_config(tmp_path)
    assert main(["mint", "mailto:someone"]) == EXIT_USAGE


def test_verify_accepts_once_then_reports_spent(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)
    _write_config(tmp_path)
    token = _mint(capsys, "mint", "someone@gmail.com")

    assert main(["verify", token, "--resource", "someone@gmail.com"]) == EXIT_OK
    assert capsys.readouterr().out.strip() == "accepted"

    assert main(["verify", token]) == EXIT_REJECTED
    assert capsys.readouterr().out.strip() == "rejected: spent"


def test_verify_reports_each_rejection_code(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)
    _write_config(tmp_path)

    assert main(["verify", "blah"]) == EXIT_REJECTED
    assert capsys.readouterr().out.strip() == "rejected: invalid_header"

    token = _mint(capsys, "mint", "someone@gmail.com")
    assert main(["verify", token, "--resource", "other@gmail.com"]) == EXIT_REJECTED
    assert capsys.readouterr().out.strip() == "rejected: resource"


def test_explicit_config_path(tmp_path: Path, capsys) -> None:
    cfg = _write_config(tmp_path, bits=3)
    token = _mint(capsys, "--config", str(cfg), "mint", "someone@gmail.com")
    assert token.startswith("1:3:")


def test_missing_config_path_is_usage_error(tmp_path: Path, capsys) -> None:
    assert main(["--config", str(tmp_path / "nope.yaml"), "score", "x"]) == EXIT_USAGE


def test_score_prints_bits_and_fingerprint(capsys) -> None:
    assert main(["score", "abc"]) == EXIT_OK
    assert capsys.readouterr().out.strip() == "0 a9993e364706816aba3e25717850c26c9cd0d89d"


def test_purge_reports_count(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)
    _write_config(tmp_path)
    assert main(["purge"]) == EXIT_OK
    assert capsys.readouterr().out.strip() == "purged 0"


def test_ledger_failure_exit_code(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    from hashcash.core import verifier
    from hashcash.core.exceptions import LedgerError

    monkeypatch.chdir(tmp_path)
    _write_config(tmp_path)
    token = _mint(capsys, "mint", "someone@gmail.com")

    def boom(self, text: str) -> bool:
        raise LedgerError("ledger write failed")

    monkeypatch.setattr(verifier.Verifier, "verify", boom)
    assert main(["verify", token]) == EXIT_LEDGER
