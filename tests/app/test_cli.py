from __future__ import annotations

from pathlib import Path

import orjson
import pytest
from typer.testing import CliRunner

from app.cli import app
from tests.helpers.diagram_fixtures import bordered, fixture_path, load_document_fixture

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)


def test_convert_file_to_stdout() -> None:
    result = runner.invoke(app, ["convert", str(fixture_path("box.md"))])

    assert result.exit_code == 0, result.output
    assert result.stdout.startswith("A single box with an arrow along its top edge.\n\n<center>")
    assert '<div class="imagecaption">Figure 1: A box</div>' in result.stdout
    assert "<svg" in result.stdout
    assert "*******" not in result.stdout


def test_convert_file_to_output(tmp_path: Path) -> None:
    output = tmp_path / "box.html"

    result = runner.invoke(app, ["convert", str(fixture_path("box.md")), "-o", str(output)])

    assert result.exit_code == 0, result.output
    assert output.read_text(encoding="utf-8").count("<svg") == 1


def test_convert_directory(tmp_path: Path) -> None:
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "one.md").write_text(bordered("-->"), encoding="utf-8")
    (docs / "two.txt").write_text(load_document_fixture("flowchart.txt"), encoding="utf-8")

    result = runner.invoke(app, ["convert", str(docs)])

    assert result.exit_code == 0, result.output
    assert (docs / "converted" / "one.html").read_text(encoding="utf-8").startswith("<svg")
    assert "<svg" in (docs / "converted" / "two.html").read_text(encoding="utf-8")


def test_convert_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["convert", str(tmp_path / "absent.md")])

    assert result.exit_code == 1
    assert "File not found" in result.output


def test_render_bare_interior(tmp_path: Path) -> None:
    source = tmp_path / "arrow.txt"
    source.write_text("o--->\n", encoding="utf-8")

    result = runner.invoke(app, ["render", str(source), "--align", "center"])

    assert result.exit_code == 0, result.output
    svg = (tmp_path / "arrow.svg").read_text(encoding="utf-8")
    assert svg.startswith('<svg class="diagram"')
    assert 'style="margin:0 auto 0 auto;"' in svg
    assert "<style>" in svg


def test_render_rejects_unknown_alignment(tmp_path: Path) -> None:
    source = tmp_path / "arrow.txt"
    source.write_text("--->\n", encoding="utf-8")

    result = runner.invoke(app, ["render", str(source), "--align", "left"])

    assert result.exit_code == 1
    assert not (tmp_path / "arrow.svg").exists()


def test_inspect_json() -> None:
    result = runner.invoke(app, ["inspect", str(fixture_path("box.md")), "--json"])

    assert result.exit_code == 0, result.output
    report = orjson.loads(result.stdout)
    assert report["width"] == 5
    assert report["height"] == 3
    assert report["alignment_hint"] == "center"
    assert len(report["paths"]) == 4
    assert [d["kind"] for d in report["decorations"]] == [">"]
    assert report["labels"] == []


def test_inspect_writes_report(tmp_path: Path) -> None:
    output = tmp_path / "report.json"

    result = runner.invoke(
        app, ["inspect", str(fixture_path("flowchart.txt")), "--output", str(output)]
    )

    assert result.exit_code == 0, result.output
    report = orjson.loads(output.read_bytes())
    assert report["width"] == 31
    assert "".join(label["text"] for label in report["labels"]).startswith("start")


def test_inspect_without_diagram(tmp_path: Path) -> None:
    source = tmp_path / "plain.md"
    source.write_text("Nothing here.\n", encoding="utf-8")

    result = runner.invoke(app, ["inspect", str(source)])

    assert result.exit_code == 1


def test_validate_counts_diagrams() -> None:
    result = runner.invoke(app, ["validate", str(fixture_path("floats.md"))])

    assert result.exit_code == 0, result.output
    assert "2 diagrams converted" in result.output


def test_validate_fails_on_unterminated_border(tmp_path: Path) -> None:
    source = tmp_path / "broken.md"
    source.write_text("Intro\n*****\n*-->*", encoding="utf-8")

    result = runner.invoke(app, ["validate", str(source)])

    assert result.exit_code == 1
    assert "unterminated_border" in result.output


def test_config_option_changes_marker(tmp_path: Path) -> None:
    config = tmp_path / "hash.yaml"
    config.write_text("diagrams:\n  marker: '#'\n", encoding="utf-8")
    source = tmp_path / "hash.md"
    source.write_text(bordered("-->", marker="#"), encoding="utf-8")

    result = runner.invoke(app, ["convert", str(source), "--config", str(config)])

    assert result.exit_code == 0, result.output
    assert result.stdout.startswith("<svg")


def test_invalid_config_exits(tmp_path: Path) -> None:
    config = tmp_path / "bad.yaml"
    config.write_text("diagrams:\n  marker: '##'\n", encoding="utf-8")
    source = tmp_path / "doc.md"
    source.write_text("text\n", encoding="utf-8")

    result = runner.invoke(app, ["convert", str(source), "--config", str(config)])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
