"""Tests for the canvas-export CLI."""

from __future__ import annotations

from typer.testing import CliRunner

from cli.main import app

runner = CliRunner()

_URL = "https://handbook.example.com/lectures/git/"
_CSS_URL = "https://handbook.example.com/style.css"
_PAGE_HTML = (
    "<html><head><style>h1 { color: navy }</style>"
    f'<link rel="stylesheet" href="{_CSS_URL}"></head>'
    "<body><main><h1>Git</h1></main></body></html>"
)


def test_export_writes_file(fake_browser, tmp_path) -> None:
    fake_browser["site"].update({_URL: (200, _PAGE_HTML), _CSS_URL: (200, "main { padding: 1em }")})
    out = tmp_path / "output-main.html"

    result = runner.invoke(app, ["export", "--url", _URL, "--output", str(out)])

    assert result.exit_code == 0
    assert "1 fetched, 0 failed" in result.stdout
    assert f"Main content with inline styles saved to {out}" in result.stdout
    assert "<main" in out.read_text(encoding="utf-8")


def test_export_lists_failed_stylesheets(fake_browser, tmp_path) -> None:
    fake_browser["site"].update({_URL: (200, _PAGE_HTML), _CSS_URL: (404, "")})

    result = runner.invoke(app, ["export", "--url", _URL, "-o", str(tmp_path / "o.html")])

    assert result.exit_code == 0
    assert "0 fetched, 1 failed" in result.stdout
    assert result.stdout.count(_CSS_URL) == 1
    assert f"Failed stylesheet {_CSS_URL}: HTTP 404" in result.stdout


def test_export_uses_configured_defaults(fake_browser, tmp_path, monkeypatch) -> None:
    fake_browser["site"].update({_URL: (200, _PAGE_HTML), _CSS_URL: (200, "")})
    monkeypatch.setattr("canvas_export.config.settings.target_url", _URL)
    monkeypatch.setattr("canvas_export.config.settings.output_path", tmp_path / "d.html")

    result = runner.invoke(app, ["export"])

    assert result.exit_code == 0
    assert (tmp_path / "d.html").exists()


def test_export_navigation_failure_exits_nonzero(fake_browser, tmp_path) -> None:
    out = tmp_path / "output-main.html"

    result = runner.invoke(app, ["export", "--url", "https://nope.invalid/", "-o", str(out)])

    assert result.exit_code == 1
    assert "❌ Error: Failed to load https://nope.invalid/" in result.stdout
    assert not out.exists()


def test_styles_lists_bundle(fake_browser) -> None:
    fake_browser["site"][_URL] = (200, _PAGE_HTML)

    result = runner.invoke(app, ["styles", "--url", _URL])

    assert result.exit_code == 0
    assert "Inline <style> blocks: 1" in result.stdout
    assert f"  - {_CSS_URL}" in result.stdout


def test_styles_failure_exits_nonzero(fake_browser) -> None:
    result = runner.invoke(app, ["styles", "--url", "https://nope.invalid/"])
    assert result.exit_code == 1
