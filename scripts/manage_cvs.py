#!/usr/bin/env python3
"""
CV Management CLI

Lists, edits, renders and generates tailored CVs through the CV API.

Commands:
    list      - List CVs (paginated)
    show      - Show CV metadata and the AI analysis
    create    - Create a CV from the current profile
    rename    - Rename a CV
    theme     - Change the theme (template id) of a CV
    duplicate - Copy a CV
    delete    - Delete a CV
    render    - Render a CV with its theme to HTML or markdown
    watch     - Auto-save a local JSON-Resume file to a CV while you edit it
    analyze   - Match the profile against a job description
    generate  - Generate a tailored CV from a job description
    credits   - Show remaining AI generation credits

Examples:\n

    manage_cvs.py list

    manage_cvs.py generate job.md --job-title "Backend Engineer" --company Acme

    manage_cvs.py render 3f2a... --output cv.html

    manage_cvs.py watch 3f2a... cv.json
"""

import os
import time
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from cvgen.contexts.persistence import DebouncedSaver, SaveState, create_client
from cvgen.contexts.persistence.api_client import ApiResponse
from cvgen.contexts.persistence.autosave import AUTOSAVE_DELAY
from cvgen.contexts.persistence.logger import setup_persistence_logger
from cvgen.contexts.profile import load_resume, parse_section_id, save_resume
from cvgen.contexts.rendering import render_resume_markdown, render_to_file
from cvgen.contexts.rendering.exceptions import TemplateRenderError, ThemeConfigError
from cvgen.utils.timestamp import format_timestamp, now

load_dotenv()
LOGS_PATH = Path(os.getenv("CVGEN_LOGS_PATH", "outs/logs"))
OUTPUT_PATH = Path(os.getenv("CVGEN_OUTPUT_PATH", "outs/rendered"))

WATCH_INTERVAL = 0.2


def _fail(message: str) -> None:
    typer.secho(f"Error: {message}\n", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _check(response: ApiResponse) -> ApiResponse:
    """Exit with the API error when the response failed."""
    if not response.ok:
        status = f" (HTTP {response.status})" if response.status else ""
        _fail(f"{response.error}{status}")
    return response


def _connect(ctx: typer.Context, command: str):
    options = ctx.obj or {}
    client = create_client(options.get("api_url"), options.get("token"))
    setup_persistence_logger(LOGS_PATH / f"cvs_{now()}", client.api.base_url, command)
    return client


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        _fail(f"File not found: {path}")


def _print_analysis(analysis) -> None:
    typer.echo(f"  Match score: {analysis.match_score}%")
    for label, items in (
        ("Matching skills", analysis.matching_skills),
        ("Missing skills", analysis.missing_skills),
        ("Relevant experience", analysis.relevant_experiences),
        ("Keywords to include", analysis.keywords_to_include),
    ):
        if items:
            typer.echo(f"  {label}: {', '.join(items)}")
    if analysis.suggestions:
        typer.echo("  Suggestions:")
        for suggestion in analysis.suggestions:
            typer.echo(f"    - {suggestion}")


app = typer.Typer(
    help="Manage tailored CVs stored by the CV API",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    api_url: Annotated[
        Optional[str],
        typer.Option("--api-url", help="API base URL (default: CVGEN_API_URL)"),
    ] = None,
    token: Annotated[
        Optional[str],
        typer.Option("--token", help="Bearer token (default: CVGEN_API_TOKEN)"),
    ] = None,
):
    """Show help by default when no command is provided."""
    ctx.obj = {"api_url": api_url, "token": token}
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("list")
def list_command(
    ctx: typer.Context,
    page: Annotated[int, typer.Option("--page", "-p", min=1, help="Page number")] = 1,
    page_size: Annotated[
        int, typer.Option("--page-size", "-n", min=1, max=100, help="CVs per page")
    ] = 10,
):
    """List CVs, newest first."""
    client = _connect(ctx, "list")
    result = _check(client.list_cvs(page, page_size)).data

    typer.secho(
        f"\nCVs (page {result.page}/{max(result.total_pages, 1)}, {result.total} total)",
        fg=typer.colors.BLUE,
        bold=True,
    )
    if not result.cvs:
        typer.echo("  No CVs yet\n")
        return
    for cv in result.cvs:
        score = f"{cv.match_score}%" if cv.match_score is not None else "-"
        job = " @ ".join(part for part in (cv.job_title, cv.company_name) if part)
        typer.echo(f"  {cv.id}  {cv.name:<30} {cv.template_id or '-':<13} {score:>4}  {job}")
    typer.echo("")


@app.command("show")
def show_command(
    ctx: typer.Context,
    cv_id: Annotated[str, typer.Argument(help="CV id")],
):
    """Show CV metadata and the stored AI analysis."""
    client = _connect(ctx, "show")
    cv = _check(client.get_cv(cv_id)).data

    typer.secho(f"\n{cv.name or '(unnamed)'}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"  Id: {cv.id}")
    typer.echo(f"  Theme: {cv.template_id or '-'}")
    if cv.job_title or cv.company_name:
        typer.echo(f"  Job: {' @ '.join(p for p in (cv.job_title, cv.company_name) if p)}")
    if cv.job_url:
        typer.echo(f"  Posting: {cv.job_url}")
    if cv.updated_at:
        typer.echo(f"  Updated: {format_timestamp(cv.updated_at)}")
    if cv.ai_suggestions is not None:
        typer.secho("\nAnalysis", bold=True)
        _print_analysis(cv.ai_suggestions)
    elif cv.match_score is not None:
        typer.echo(f"  Match score: {cv.match_score}%")
    typer.echo("")


@app.command("create")
def create_command(
    ctx: typer.Context,
    name: Annotated[Optional[str], typer.Option("--name", help="CV name")] = None,
    theme: Annotated[Optional[str], typer.Option("--theme", "-t", help="Theme id")] = None,
):
    """Create a CV from the current profile."""
    client = _connect(ctx, "create")
    cv = _check(client.create_cv(name, theme)).data
    typer.secho(f"✓ Created CV {cv.id}", fg=typer.colors.GREEN, bold=True)


@app.command("rename")
def rename_command(
    ctx: typer.Context,
    cv_id: Annotated[str, typer.Argument(help="CV id")],
    name: Annotated[str, typer.Argument(help="New name")],
):
    """Rename a CV."""
    client = _connect(ctx, "rename")
    cv = _check(client.update_cv(cv_id, name=name)).data
    typer.secho(f"✓ Renamed to '{cv.name}'", fg=typer.colors.GREEN, bold=True)


@app.command("theme")
def theme_command(
    ctx: typer.Context,
    cv_id: Annotated[str, typer.Argument(help="CV id")],
    theme: Annotated[str, typer.Argument(help="Theme id (professional, modern, minimal, academic)")],
):
    """Change the theme a CV renders with."""
    client = _connect(ctx, "theme")
    cv = _check(client.update_cv(cv_id, template_id=theme)).data
    typer.secho(f"✓ Theme set to '{cv.template_id}'", fg=typer.colors.GREEN, bold=True)


@app.command("duplicate")
def duplicate_command(
    ctx: typer.Context,
    cv_id: Annotated[str, typer.Argument(help="CV id")],
):
    """Copy a CV."""
    client = _connect(ctx, "duplicate")
    cv = _check(client.duplicate_cv(cv_id)).data
    typer.secho(f"✓ Created copy {cv.id} ('{cv.name}')", fg=typer.colors.GREEN, bold=True)


@app.command("delete")
def delete_command(
    ctx: typer.Context,
    cv_id: Annotated[str, typer.Argument(help="CV id")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip the confirmation prompt")] = False,
):
    """Delete a CV."""
    if not yes:
        typer.confirm(f"Delete CV {cv_id}?", abort=True)
    client = _connect(ctx, "delete")
    _check(client.delete_cv(cv_id))
    typer.secho("✓ CV deleted", fg=typer.colors.GREEN, bold=True)


@app.command("render")
def render_command(
    ctx: typer.Context,
    cv_id: Annotated[str, typer.Argument(help="CV id")],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output file (default: CVGEN_OUTPUT_PATH/<cv id>.<ext>)"),
    ] = None,
    markdown: Annotated[
        bool, typer.Option("--markdown", "-m", help="Render markdown instead of HTML")
    ] = False,
    hide: Annotated[
        Optional[List[str]],
        typer.Option("--hide", "-H", help="Section to leave out (repeatable)"),
    ] = None,
):
    """
    Render a CV with its stored theme.

    Examples:\n

        $ manage_cvs.py render 3f2a... -H references
    """
    try:
        hidden = [parse_section_id(section) for section in hide or []]
    except ValueError as e:
        _fail(str(e))

    client = _connect(ctx, "render")
    cv = _check(client.get_cv(cv_id)).data
    if output is None:
        output = OUTPUT_PATH / f"{cv.id}.{'md' if markdown else 'html'}"

    try:
        if markdown:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(render_resume_markdown(cv.cv_data, cv.template_id, hidden), encoding="utf-8")
        else:
            render_to_file(cv.cv_data, output, cv.template_id, hidden)
    except (TemplateRenderError, ThemeConfigError) as e:
        _fail(str(e))

    typer.secho("✓ Rendered", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Output: {output}\n")


@app.command("watch")
def watch_command(
    ctx: typer.Context,
    cv_id: Annotated[str, typer.Argument(help="CV id")],
    resume_path: Annotated[Path, typer.Argument(help="Local JSON-Resume file to watch")],
    delay: Annotated[
        float, typer.Option("--delay", help="Seconds of quiet before saving")
    ] = AUTOSAVE_DELAY,
):
    """
    Save a local JSON-Resume file to a CV whenever it changes.

    Saves are debounced: a burst of edits produces one request. The file is
    first seeded from the CV if it does not exist. Stop with Ctrl+C; pending
    edits are flushed before exiting.
    """
    client = _connect(ctx, "watch")
    if not resume_path.exists():
        cv = _check(client.get_cv(cv_id)).data
        save_resume(cv.cv_data, resume_path)

    saver = DebouncedSaver(lambda payload: client.update_cv(cv_id, **payload), delay=delay)
    last_mtime = resume_path.stat().st_mtime
    last_state = saver.state

    typer.secho(f"\nWatching {resume_path} -> CV {cv_id} (Ctrl+C to stop)", fg=typer.colors.BLUE)
    try:
        while True:
            mtime = resume_path.stat().st_mtime
            if mtime != last_mtime:
                last_mtime = mtime
                try:
                    saver.edit({"cv_data": load_resume(resume_path)})
                except ValueError as e:
                    typer.secho(f"  Skipping invalid file: {e}", fg=typer.colors.YELLOW)
            saver.poll()

            if saver.state is not last_state:
                last_state = saver.state
                if last_state is SaveState.SAVED:
                    typer.secho("  ✓ Saved", fg=typer.colors.GREEN)
                elif last_state is SaveState.ERROR:
                    typer.secho(f"  ✗ Save failed: {saver.last_error}", fg=typer.colors.RED)
            time.sleep(WATCH_INTERVAL)
    except KeyboardInterrupt:
        if saver.flush():
            status = "saved" if saver.state is SaveState.SAVED else f"failed: {saver.last_error}"
            typer.echo(f"\n  Flushed pending edits ({status})")
        if saver.pending:
            typer.secho(
                f"  ✗ Unsaved fields: {', '.join(saver.pending)} (still in {resume_path})",
                fg=typer.colors.RED,
            )
    typer.echo("")


@app.command("analyze")
def analyze_command(
    ctx: typer.Context,
    job_path: Annotated[Path, typer.Argument(help="Text or markdown file with the job description")],
):
    """Match the profile against a job description (does not use credits)."""
    job_description = _read_text(job_path)
    client = _connect(ctx, "analyze")
    analysis = _check(client.analyze_job(job_description)).data
    typer.secho("\nAnalysis", fg=typer.colors.BLUE, bold=True)
    _print_analysis(analysis)
    typer.echo("")


@app.command("generate")
def generate_command(
    ctx: typer.Context,
    job_path: Annotated[Path, typer.Argument(help="Text or markdown file with the job description")],
    name: Annotated[Optional[str], typer.Option("--name", help="CV name")] = None,
    job_title: Annotated[Optional[str], typer.Option("--job-title", help="Job title")] = None,
    company: Annotated[Optional[str], typer.Option("--company", help="Company name")] = None,
    job_url: Annotated[Optional[str], typer.Option("--job-url", help="Job posting URL")] = None,
):
    """
    Generate a CV tailored to a job description (uses one credit).

    Examples:\n

        $ manage_cvs.py generate job.md --job-title "Data Engineer" --company Initech
    """
    job_description = _read_text(job_path)
    client = _connect(ctx, "generate")
    result = _check(client.generate_cv(job_description, name, job_title, company, job_url)).data

    typer.secho(f"✓ Generated CV {result.cv.id} ('{result.cv.name}')", fg=typer.colors.GREEN, bold=True)
    if result.analysis is not None:
        _print_analysis(result.analysis)
    typer.echo(f"  Credits remaining: {result.credits_remaining}\n")


@app.command("credits")
def credits_command(ctx: typer.Context):
    """Show remaining AI generation credits."""
    client = _connect(ctx, "credits")
    credits = _check(client.get_credits()).data
    typer.secho("\nCredits", fg=typer.colors.BLUE, bold=True)
    typer.echo(
        f"  Free: {credits.free_generations_remaining} of {credits.free_generations_limit} remaining"
    )
    typer.echo(f"  Paid: {credits.paid_credits}")
    typer.echo(f"  Total remaining: {credits.remaining}")
    typer.echo(f"  Generated so far: {credits.total_generations}\n")


if __name__ == "__main__":
    app()
