"""Tests for the command-line entry point."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

import main

CATALOG = {
    "Pikachu": {"dex_number": "25"},
    "Eevee": {"dex_number": "133"},
    "Miraidon": {"dex_number": "1008", "restricted": True},
}


@pytest.fixture()
def files(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> dict[str, Path]:
    for key in ("POKE_USAGE_CONFIG", "POKE_USAGE_CATALOG", "OBS_HTTP_URL", "POKE_USAGE_EFFECT", "POKE_USAGE_LIMIT"):
        monkeypatch.delenv(key, raising=False)
    roster = tmp_path / "roster.json"
    roster.write_text(
        json.dumps([{"mon1": "Pikachu", "mon2": "Miraidon"}, {"mon1": "Pikachu"}, {"mon1": "Eevee"}]),
        encoding="utf-8",
    )
    catalog = tmp_path / "catalog.json"
    catalog.write_text(json.dumps(CATALOG), encoding="utf-8")
    return {"roster": roster, "catalog": catalog}


def test_json_output(files, capsys: pytest.CaptureFixture[str]) -> None:
    code = main.main([str(files["roster"]), "--catalog", str(files["catalog"]), "--json"])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["unique_mons"] == 2
    assert [stat["dex_number"] for stat in payload["usage_stats"]] == ["25", "133"]


def test_restricted_table_output(files, capsys: pytest.CaptureFixture[str]) -> None:
    main.main([str(files["roster"]), "--catalog", str(files["catalog"]), "--restricted"])

    out = capsys.readouterr().out
    assert out.startswith("Restricted usage: 1 species across 3 teams")
    assert "Miraidon (#1008)" in out


def test_url_output_respects_limit(files, capsys: pytest.CaptureFixture[str]) -> None:
    main.main(
        [
            str(files["roster"]),
            "--catalog",
            str(files["catalog"]),
            "--url",
            "--limit",
            "1",
            "--effect",
            "glow",
            "--frame-url",
            "http://x/frame",
        ]
    )

    assert capsys.readouterr().out.strip() == "http://x/frame?25=66.67&effect=glow"


def test_publish_without_obs_prints_each_view(files, capsys: pytest.CaptureFixture[str]) -> None:
    main.main([str(files["roster"]), "--catalog", str(files["catalog"]), "--publish", "--json"])

    published = json.loads(capsys.readouterr().out)
    assert list(published) == ["non_restricted", "restricted"]


def test_missing_catalog_exits(files) -> None:
    with pytest.raises(SystemExit):
        main.main([str(files["roster"])])


def test_showdown_text_roster(tmp_path: Path, files, capsys: pytest.CaptureFixture[str]) -> None:
    paste = tmp_path / "teams.txt"
    paste.write_text("=== Team A ===\n\nPikachu @ Light Ball\n- Thunderbolt\n\n=== Team B ===\n\nEevee\n- Tackle\n")

    main.main([str(paste), "--catalog", str(files["catalog"]), "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert payload["total_teams"] == 2
    assert {stat["mon"] for stat in payload["usage_stats"]} == {"Pikachu", "Eevee"}


def test_unreadable_catalog_exits_cleanly(files, tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main.main([str(files["roster"]), "--catalog", str(tmp_path)])

    assert "Could not read catalog" in str(excinfo.value)


def test_non_utf8_catalog_exits_cleanly(files, tmp_path: Path) -> None:
    catalog = tmp_path / "latin1.json"
    catalog.write_bytes(b'{"Pok\xe9mon": {"dex_number": 1}}')

    with pytest.raises(SystemExit) as excinfo:
        main.main([str(files["roster"]), "--catalog", str(catalog)])

    assert "Invalid catalog" in str(excinfo.value)
