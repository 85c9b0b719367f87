"""Tests for the ``docpages`` command line commands."""

from __future__ import annotations

from pathlib import Path

import msgspec.json
import pytest

from docpages import cli
from docpages.config import load_site_config


def test_generate_prints_written_paths(
    site_config_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.generate(config=site_config_path)
    out = capsys.readouterr().out
    lines = out.splitlines()
    assert len([line for line in lines if line.startswith("wrote ")]) == 13
    assert any(line.endswith("sitemap.xml") for line in lines)


def test_generate_missing_config_exits(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.generate(config=tmp_path / "missing.yaml")
    assert excinfo.value.code == 1
    assert "not found" in capsys.readouterr().err


def test_generate_invalid_config_exits(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "docpages.yaml"
    path.write_text("site:\n  html_path: data\n", encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        cli.generate(config=path)
    assert excinfo.value.code == 1
    assert "available_versions" in capsys.readouterr().err


def test_remove_deletes_generated_html(
    site_config_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.generate(config=site_config_path)
    capsys.readouterr()
    cli.remove(config=site_config_path)
    out = capsys.readouterr().out
    assert len(out.splitlines()) == 12
    html_root = load_site_config(site_config_path).html_root
    assert not list(html_root.rglob("*.html"))


def test_search_prints_payload(site_config_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cli.generate(config=site_config_path)
    capsys.readouterr()
    cli.search("concatenate", config=site_config_path, locale="tr")
    payload = msgspec.json.decode(capsys.readouterr().out.strip())
    results = payload["data"]["results"]
    assert [result["file"] for result in results] == ["/ui/getting-started.html"]
    assert results[0]["baseUrl"] == "https://tr.example.com/docs"


def test_page_writes_output(site_config_path: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cli.generate(config=site_config_path)
    capsys.readouterr()
    output = tmp_path / "out" / "resources.html"
    cli.page(
        cli.RouteKind.DIRECTORY,
        directory="ui",
        name="resources.html",
        output=output,
        config=site_config_path,
    )
    assert output.exists()
    assert 'id="markdown-content"' in output.read_text(encoding="utf-8")
    assert capsys.readouterr().out.startswith("wrote ")


def test_page_unknown_locale_exits(site_config_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.page(cli.RouteKind.PAGE, locale="de", name="index.html", config=site_config_path)
    assert excinfo.value.code == 1
