#!/usr/bin/env python3
"""
Resume Rendering CLI

Renders JSON-Resume files through the theme registry and reports profile completion.

Commands:
    render     - Render a resume to HTML (print-ready) or markdown
    themes     - List available themes
    completion - Show which sections have content and the completion percentage
    validate   - Check field formats (emails, URLs, phone numbers, dates)

Examples:\n

    render_resume.py render resume.json                          # Professional theme, HTML

    render_resume.py render resume.json --theme modern           # Two-column theme

    render_resume.py render resume.json --hide references -f markdown

    render_resume.py completion resume.json
"""

import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from cvgen.contexts.profile import (
    RESUME_SECTIONS,
    SectionId,
    calculate_profile_completion,
    filter_hidden_sections,
    load_resume,
    parse_section_id,
    section_has_content,
    sections_with_content,
    validate_resume,
)
from cvgen.contexts.rendering import (
    ThemeRegistry,
    render_resume_markdown,
    render_to_file,
)
from cvgen.contexts.rendering.engine import get_default_renderer
from cvgen.contexts.rendering.exceptions import TemplateRenderError, ThemeConfigError
from cvgen.contexts.profile.logger import setup_profile_logger
from cvgen.contexts.rendering.logger import setup_rendering_logger
from cvgen.contexts.rendering.themes import DEFAULT_THEME_ID
from cvgen.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("CVGEN_LOGS_PATH", "outs/logs"))
OUTPUT_PATH = Path(os.getenv("CVGEN_OUTPUT_PATH", "outs/rendered"))

OUTPUT_FORMATS = ("html", "markdown")


def display_path(path: Path) -> str:
    """Return path relative to the working directory for cleaner display."""
    try:
        return str(Path(path).resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


def _fail(message: str) -> None:
    typer.secho(f"Error: {message}\n", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


app = typer.Typer(
    help="Render JSON-Resume files with the CV themes and check profile completion",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("render")
def render_command(
    resume_path: Annotated[
        Path,
        typer.Argument(help="Path to a JSON-Resume file"),
    ],
    theme: Annotated[
        str,
        typer.Option("--theme", "-t", help="Theme id (see the themes command)"),
    ] = DEFAULT_THEME_ID,
    hide: Annotated[
        Optional[List[str]],
        typer.Option("--hide", "-H", help="Section to leave out (repeatable)"),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: html or markdown"),
    ] = "html",
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Output file (default: CVGEN_OUTPUT_PATH/<name>_<theme>.<ext>)",
        ),
    ] = None,
):
    """
    Render a resume with a theme.

    HTML output is a standalone document with print CSS; open it in a browser
    and print to PDF.

    Examples:\n

        $ render_resume.py render resume.json --theme academic

        $ render_resume.py render resume.json -H references -H interests

        $ render_resume.py render resume.json -f markdown -o preview.md
    """
    if output_format not in OUTPUT_FORMATS:
        _fail(f"Unknown format '{output_format}'. Choose from: {', '.join(OUTPUT_FORMATS)}")

    setup_rendering_logger(LOGS_PATH / f"render_{now()}", theme)

    try:
        resume = load_resume(resume_path)
        hidden = [parse_section_id(section) for section in hide or []]
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))

    extension = "html" if output_format == "html" else "md"
    if output is None:
        output = OUTPUT_PATH / f"{resume_path.stem}_{theme}.{extension}"

    typer.secho(f"\nRendering: {display_path(resume_path)}", fg=typer.colors.BLUE, bold=True)

    try:
        if output_format == "html":
            document = render_to_file(resume, output, theme, hidden)
            used_theme = document.theme_id
            section_count = len(document.sections)
        else:
            markdown = render_resume_markdown(resume, theme, hidden)
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(markdown, encoding="utf-8")
            used_theme = get_default_renderer().theme_registry.resolve(theme).id
            visible = sections_with_content(filter_hidden_sections(resume, hidden))
            section_count = len([s for s in visible if s is not SectionId.BASICS])
    except (TemplateRenderError, ThemeConfigError) as e:
        _fail(str(e))

    if used_theme != theme:
        typer.secho(f"  Unknown theme '{theme}', used '{used_theme}'", fg=typer.colors.YELLOW)
    typer.secho("✓ Rendered", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Theme: {used_theme}")
    typer.echo(f"  Sections: {section_count}")
    typer.echo(f"  Output: {display_path(output)}\n")


@app.command("themes")
def themes_command():
    """List available themes in display order."""
    try:
        themes = ThemeRegistry().list_themes()
    except ThemeConfigError as e:
        _fail(str(e))

    typer.secho("\nThemes:", fg=typer.colors.BLUE, bold=True)
    for info in themes:
        marker = " (default)" if info.id == DEFAULT_THEME_ID else ""
        typer.echo(f"  {info.id:<14} {info.name}{marker}")
        if info.description:
            typer.echo(f"  {'':<14} {info.description}")
    typer.echo("")


@app.command("completion")
def completion_command(
    resume_path: Annotated[
        Path,
        typer.Argument(help="Path to a JSON-Resume file"),
    ],
):
    """
    Show per-section content status and the completion percentage.

    Examples:\n

        $ render_resume.py completion resume.json
    """
    try:
        resume = load_resume(resume_path)
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))

    typer.secho(f"\nCompletion: {display_path(resume_path)}", fg=typer.colors.BLUE, bold=True)
    for info in RESUME_SECTIONS:
        if section_has_content(resume, info.id):
            typer.secho(f"  ✓ {info.label}", fg=typer.colors.GREEN)
        else:
            typer.echo(f"  · {info.label}")

    completion = calculate_profile_completion(resume)
    typer.secho(f"\n  {completion}% complete\n", bold=True)


@app.command("validate")
def validate_command(
    resume_path: Annotated[
        Path,
        typer.Argument(help="Path to a JSON-Resume file"),
    ],
):
    """
    Check field formats before uploading.

    Exits with code 1 when any check fails.
    """
    setup_profile_logger(LOGS_PATH / f"validate_{now()}", "validate")
    try:
        resume = load_resume(resume_path)
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))

    issues = validate_resume(resume)
    if not issues:
        typer.secho("✓ No validation issues", fg=typer.colors.GREEN, bold=True)
        return

    typer.secho(f"✗ {len(issues)} validation issue(s)", fg=typer.colors.RED, bold=True)
    for issue in issues:
        typer.secho(f"  - {issue.path}: {issue.message}", fg=typer.colors.RED)
    raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
