from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, cast

import orjson
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from adapters.filesystem.document_repository import FileSystemDocumentRepository
from app.config import AppSettings, load_settings
from app.diagram_wiring import build_renderer, build_replacer
from domain.models import (
    ALIGNMENT_HINTS,
    DIAGNOSTIC_UNTERMINATED_BORDER,
    AlignmentHint,
    Diagnostic,
    DiagramReport,
)
from domain.services.extract_diagram import extract_diagram
from domain.services.parse_diagram import parse_diagram

app = typer.Typer(no_args_is_help=True)
console = Console()


def _settings(config: Optional[Path], verbose: bool) -> AppSettings:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    try:
        return load_settings(config)
    except (FileNotFoundError, ValidationError) as exc:
        console.print(f"[red]Invalid configuration:[/] {exc}")
        raise typer.Exit(code=1) from exc


def _require_file(path: Path) -> None:
    if not path.exists():
        console.print(f"[red]File not found:[/] {path}")
        raise typer.Exit(code=1)


def _print_diagnostics(diagnostics: list[Diagnostic]) -> None:
    for diagnostic in diagnostics:
        console.print(
            f"[yellow]{diagnostic.kind}[/] line {diagnostic.line}, column {diagnostic.column}"
            + (f": {diagnostic.detail}" if diagnostic.detail else "")
        )


ConfigOption = typer.Option(None, "--config", help="YAML settings file.")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Log diagram processing.")


@app.command("convert")
def convert(
    input_path: Path = typer.Argument(..., help="Document, or directory of documents, to convert."),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output file, or directory when converting a directory."
    ),
    config: Optional[Path] = ConfigOption,
    verbose: bool = VerboseOption,
) -> None:
    settings = _settings(config, verbose)
    _require_file(input_path)
    repo = FileSystemDocumentRepository()
    replacer = build_replacer(settings)

    if input_path.is_dir():
        pairs = repo.load_all_with_paths(input_path)
        if not pairs:
            console.print(f"[yellow]No documents found in {input_path}[/]")
            raise typer.Exit(code=0)
        output_dir = output or input_path / "converted"
        for path, text in pairs:
            result = replacer.replace(text)
            target_path = output_dir / f"{path.stem}.html"
            repo.save(result.text, target_path)
            console.print(f"[green]Wrote[/] {target_path} ({result.diagram_count} diagrams)")
        return

    result = replacer.replace(repo.load(input_path))
    if output is None:
        typer.echo(result.text, nl=False)
        return
    repo.save(result.text, output)
    console.print(f"[green]Wrote[/] {output} ({result.diagram_count} diagrams)")


@app.command("render")
def render(
    input_path: Path = typer.Argument(..., help="Bare diagram interior, without its border."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="SVG file to write."),
    align: str = typer.Option("", "--align", help="center, floatleft or floatright."),
    config: Optional[Path] = ConfigOption,
    verbose: bool = VerboseOption,
) -> None:
    settings = _settings(config, verbose)
    _require_file(input_path)
    if align not in ALIGNMENT_HINTS:
        console.print(f"[red]Unknown alignment:[/] {align}")
        raise typer.Exit(code=1)
    repo = FileSystemDocumentRepository()
    parsed = parse_diagram(
        repo.load(input_path), allow_isolated_points=settings.diagrams.allow_isolated_points
    )
    svg = build_renderer(settings, standalone=True).render(parsed, cast(AlignmentHint, align))
    target_path = output or input_path.with_suffix(".svg")
    repo.save(svg + "\n", target_path)
    console.print(f"[green]Wrote[/] {target_path}")


@app.command("inspect")
def inspect_diagram(
    input_path: Path = typer.Argument(..., help="Document containing a bordered diagram."),
    as_json: bool = typer.Option(False, "--json", help="Print the parsed diagram as JSON."),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the parsed diagram as JSON to this file."
    ),
    config: Optional[Path] = ConfigOption,
    verbose: bool = VerboseOption,
) -> None:
    settings = _settings(config, verbose)
    _require_file(input_path)
    repo = FileSystemDocumentRepository()
    text = repo.load(input_path)
    extraction = extract_diagram(
        text,
        marker=settings.diagrams.marker,
        resume_after_unterminated=settings.diagrams.resume_after_unterminated,
    )
    if not extraction.found:
        console.print(f"[yellow]No diagram found in {input_path}[/]")
        _print_diagnostics(list(extraction.diagnostics))
        raise typer.Exit(code=1)

    parsed = parse_diagram(
        extraction.diagram, allow_isolated_points=settings.diagrams.allow_isolated_points
    )
    report = DiagramReport.from_parsed(parsed, extraction.alignment_hint)
    if output is not None:
        repo.save_json(report.model_dump(), output)
        console.print(f"[green]Wrote[/] {output}")
        return
    if as_json:
        typer.echo(orjson.dumps(report.model_dump(), option=orjson.OPT_INDENT_2).decode("utf-8"))
        return

    console.print(
        f"[bold]{report.width}x{report.height}[/] cells, alignment "
        f"[cyan]{report.alignment_hint}[/]"
    )
    paths = Table("start", "end", "controls", title="Paths")
    for path in report.paths:
        paths.add_row(
            f"{path.start.x:g},{path.start.y:g}",
            f"{path.end.x:g},{path.end.y:g}",
            " ".join(f"{c.x:g},{c.y:g}" for c in path.controls),
        )
    console.print(paths)
    decorations = Table("kind", "position", "angle", title="Decorations")
    for decoration in report.decorations:
        decorations.add_row(
            decoration.kind,
            f"{decoration.position.x:g},{decoration.position.y:g}",
            f"{decoration.angle:g}",
        )
    console.print(decorations)
    if report.labels:
        console.print("Labels: " + " ".join(label.text for label in report.labels))
    _print_diagnostics(list(extraction.diagnostics) + parsed.diagnostics)


@app.command("validate")
def validate(
    input_path: Path = typer.Argument(..., help="Document to check for diagrams."),
    config: Optional[Path] = ConfigOption,
    verbose: bool = VerboseOption,
) -> None:
    settings = _settings(config, verbose)
    _require_file(input_path)
    result = build_replacer(settings).replace(FileSystemDocumentRepository().load(input_path))
    _print_diagnostics(result.diagnostics)
    if any(d.kind == DIAGNOSTIC_UNTERMINATED_BORDER for d in result.diagnostics):
        console.print(f"[red]Unterminated diagram border in:[/] {input_path}")
        raise typer.Exit(code=1)
    console.print(f"[green]{result.diagram_count} diagrams converted:[/] {input_path}")


if __name__ == "__main__":
    app()
