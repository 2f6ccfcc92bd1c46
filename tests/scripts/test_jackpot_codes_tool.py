from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from jackpot.economy.tiers import Tier
from jackpot.store.memory_store import MemoryStore
from scripts import jackpot_codes_tool

NOW_UTC = datetime(2026, 2, 17, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def tool_store(monkeypatch) -> MemoryStore:
    store = MemoryStore()
    monkeypatch.setattr(jackpot_codes_tool, "get_store", lambda: store)
    monkeypatch.setattr(
        jackpot_codes_tool,
        "get_settings",
        lambda: SimpleNamespace(log_level="WARNING", database_url="postgresql+asyncpg://db/jackpot"),
    )
    return store


def test_dry_run_prints_generated_codes_without_storing(tool_store, capsys) -> None:
    exit_code = jackpot_codes_tool.main(
        ["--tier", "mini", "--count", "3", "--prefix", "promo", "--dry-run"]
    )

    assert exit_code == 0
    printed = capsys.readouterr().out.split()
    assert len(printed) == 3
    assert all(code.startswith("PROMO-") for code in printed)


def test_import_file_adds_codes_and_reports_conflicts(tool_store, tmp_path, capsys) -> None:
    path = tmp_path / "codes.txt"
    path.write_text("mega-1\nmega-2\n", encoding="utf-8")
    asyncio.run(tool_store.insert_code(tier=Tier.MINI, code="MEGA-2", now_utc=NOW_UTC))

    exit_code = jackpot_codes_tool.main(["--tier", "mega", "--import-file", str(path)])

    assert exit_code == 1
    out = capsys.readouterr().out
    assert "mega-1\tOK" in out
    assert "mega-2\tALREADY_EXISTS" in out


def test_duplicate_batch_is_rejected(tool_store, tmp_path) -> None:
    path = tmp_path / "codes.txt"
    path.write_text("dup\nDUP\n", encoding="utf-8")

    with pytest.raises(ValueError, match="duplicate codes in batch"):
        jackpot_codes_tool.main(["--tier", "minor", "--import-file", str(path)])


def test_import_requires_database_url(monkeypatch, capsys) -> None:
    monkeypatch.setattr(
        jackpot_codes_tool,
        "get_settings",
        lambda: SimpleNamespace(log_level="WARNING", database_url=None),
    )

    assert jackpot_codes_tool.main(["--tier", "grand", "--count", "2"]) == 2
    assert "DATABASE_URL is required" in capsys.readouterr().err
