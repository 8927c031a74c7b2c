#!/usr/bin/env python3
"""
Resume Layout CLI

Paginates a resume YAML with the layout engine and writes print-ready HTML.

Commands:
    paginate - Lay out a resume (automatic, or manual with --pages/--pin)
    fit      - Find the text scale that fits the whole resume on one page
    sections - List section identities in default order

Examples:\n

    layout_resume.py paginate resume.yaml                            # Automatic layout

    layout_resume.py paginate resume.yaml --pages 2 --pin skills=1   # Manual layout with a pin

    layout_resume.py paginate resume.yaml --scale 90 -o outs/r.html  # Shrunk text, HTML output

    layout_resume.py fit resume.yaml --preset a4                     # Single-page fit scale
"""

import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from quire.contexts.document import DEFAULT_SECTIONS, InvalidResumeStructureError, load_resume
from quire.contexts.layout import (
    LayoutSession,
    TextMetricsOracle,
    analyze_layout,
    resolve_page_geometry,
    resolve_typography,
)
from quire.contexts.layout.blocks import collect_groups
from quire.contexts.layout.logger import setup_layout_logger
from quire.contexts.rendering import HtmlPageRenderer
from quire.utils import now

load_dotenv()
LOGS_PATH = Path(os.getenv("QUIRE_LOGS_PATH", "outs/logs"))
DEFAULT_PAGE_PRESET = os.getenv("QUIRE_PAGE_PRESET", "letter")


app = typer.Typer(
    help="Paginate resumes into fixed-size pages and export print-ready HTML",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _parse_pins(pins: List[str]) -> List[tuple]:
    parsed = []
    for pin in pins:
        section_id, sep, page = pin.rpartition("=")
        if not sep or not section_id or not page.isdigit():
            raise typer.BadParameter(f"Pin must look like SECTION=PAGE, got '{pin}'")
        parsed.append((section_id, int(page)))
    return parsed


def _build_session(preset: str, typography: str, with_renderer: bool = True) -> LayoutSession:
    try:
        geometry = resolve_page_geometry(preset)
        type_preset = resolve_typography(typography)
    except ValueError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    renderer = HtmlPageRenderer(geometry, type_preset) if with_renderer else None
    return LayoutSession(TextMetricsOracle(geometry, type_preset), renderer=renderer, geometry=geometry)


def _load(yaml_path: Path):
    try:
        return load_resume(yaml_path)
    except (FileNotFoundError, InvalidResumeStructureError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command("paginate")
def paginate_command(
    yaml_path: Annotated[Path, typer.Argument(help="Resume YAML file")],
    pages: Annotated[
        Optional[int],
        typer.Option("--pages", "-n", help="Target page count (switches to manual layout)", min=1, max=3),
    ] = None,
    pins: Annotated[
        Optional[List[str]],
        typer.Option("--pin", help="Pin a section to a page, e.g. --pin education=2 (repeatable)"),
    ] = None,
    scale: Annotated[
        int,
        typer.Option("--scale", "-s", help="Text scale in percent", min=50, max=100),
    ] = 100,
    preset: Annotated[
        str, typer.Option("--preset", "-p", help="Page preset (letter, a4, legal)")
    ] = DEFAULT_PAGE_PRESET,
    typography: Annotated[
        str, typer.Option("--typography", "-t", help="Typography preset (standard, compact)")
    ] = "standard",
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Write rendered HTML here")
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show per-page debug output")
    ] = False,
):
    """
    Lay out a resume and report which page each section landed on.

    Without --pages or --pin the layout is automatic. --pages fixes the page
    count; each --pin then moves one section, keeping the others where they are.

    Examples:\n

        $ layout_resume.py paginate resume.yaml

        $ layout_resume.py paginate resume.yaml --pages 2 --pin projects=2
    """
    log_file = setup_layout_logger(LOGS_PATH / f"layout_{now()}", page_preset=preset, verbose=verbose)

    document = _load(yaml_path)
    session = _build_session(preset, typography, with_renderer=output is not None)
    result = session.load_document(document)

    if scale != result.text_scale_percent:
        result = session.set_text_scale(scale)

    if pages is not None:
        result = session.set_target_page_count(pages)

    try:
        for section_id, page in _parse_pins(pins or []):
            result = session.pin_section(section_id, page)
    except KeyError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"\nLayout: {yaml_path.name}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Mode: {result.mode.value}  Text scale: {result.text_scale_percent}%")
    typer.echo("")

    for page_number, page in enumerate(result.pages, start=1):
        used = sum(result.heights[group.key] for group in page)
        typer.echo(f"  Page {page_number} ({used:.0f}/{result.usable_height:.0f}px)")
        for group in page:
            typer.echo(f"    - {group.key}")

    diagnostics = analyze_layout(result, session.state.pin_map)
    typer.echo("")
    if diagnostics.is_valid:
        typer.secho(f"✓ {result.page_count} page(s)", fg=typer.colors.GREEN, bold=True)
    else:
        typer.secho(f"✗ {len(diagnostics.get_inherited_issues())} layout issue(s)", fg=typer.colors.YELLOW, bold=True)
        for issue in diagnostics.get_inherited_issues():
            typer.echo(f"  - {issue}")

    if output is not None:
        session.renderer.write(result, output, title=f"{document.name} Resume" if document.name else "Resume")
        typer.echo(f"  HTML: {output}")
    typer.echo(f"  Log: {log_file}")
    typer.echo("")

    raise typer.Exit(code=1 if result.overflowed else 0)


@app.command("fit")
def fit_command(
    yaml_path: Annotated[Path, typer.Argument(help="Resume YAML file")],
    preset: Annotated[
        str, typer.Option("--preset", "-p", help="Page preset (letter, a4, legal)")
    ] = DEFAULT_PAGE_PRESET,
    typography: Annotated[
        str, typer.Option("--typography", "-t", help="Typography preset (standard, compact)")
    ] = "standard",
):
    """
    Find the largest text scale that fits the whole resume on one page.

    Examples:\n

        $ layout_resume.py fit resume.yaml
    """
    document = _load(yaml_path)
    session = _build_session(preset, typography, with_renderer=False)
    session.load_document(document)
    scale = session.fit_single_page()

    typer.secho(f"\nSingle-page fit: {yaml_path.name}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"  Scale: {scale:.3f} ({scale * 100:.1f}%)")
    typer.echo("")


@app.command("sections")
def sections_command(
    yaml_path: Annotated[Path, typer.Argument(help="Resume YAML file")],
):
    """
    List the section identities a resume lays out, in default order.

    Identities are what --pin expects.
    """
    document = _load(yaml_path)
    seen = []
    for group in collect_groups(document, DEFAULT_SECTIONS):
        if group.section_id not in seen:
            seen.append(group.section_id)

    labels = {section.id: (section.label, section.kind.value) for section in DEFAULT_SECTIONS}
    typer.echo("")
    for i, section_id in enumerate(seen, 1):
        label, kind = labels.get(section_id.split(":")[0], ("", "header"))
        typer.echo(f"{i:2}. {section_id:30} | {label:20} | {kind}")
    typer.echo("")


if __name__ == "__main__":
    app()
