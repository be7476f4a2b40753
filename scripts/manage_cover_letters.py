#!/usr/bin/env python3
"""
Cover Letter Management CLI

Commands:
    list     - List cover letters
    show     - Print a cover letter
    create   - Store a cover letter written locally
    update   - Replace the content of a cover letter
    delete   - Delete a cover letter
    generate - Generate a cover letter for a job (uses one credit)

Examples:\n

    manage_cover_letters.py list

    manage_cover_letters.py generate --job-title "Backend Engineer" --company Acme --cv-id 3f2a...

    manage_cover_letters.py show 9c1d... > letter.md
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from cvgen.contexts.persistence import create_client
from cvgen.contexts.persistence.api_client import ApiResponse
from cvgen.contexts.persistence.logger import setup_persistence_logger
from cvgen.utils.timestamp import format_timestamp, now

load_dotenv()
LOGS_PATH = Path(os.getenv("CVGEN_LOGS_PATH", "outs/logs"))


def _fail(message: str) -> None:
    typer.secho(f"Error: {message}\n", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _check(response: ApiResponse) -> ApiResponse:
    """Exit with the API error when the response failed."""
    if not response.ok:
        status = f" (HTTP {response.status})" if response.status else ""
        _fail(f"{response.error}{status}")
    return response


def _connect(ctx: typer.Context, command: str, log: bool = True):
    options = ctx.obj or {}
    client = create_client(options.get("api_url"), options.get("token"))
    if log:
        setup_persistence_logger(LOGS_PATH / f"cover_letters_{now()}", client.api.base_url, command)
    return client


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        _fail(f"File not found: {path}")


app = typer.Typer(
    help="Manage cover letters stored by the CV API",
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
def list_command(ctx: typer.Context):
    """List cover letters."""
    client = _connect(ctx, "list")
    letters = _check(client.list_cover_letters()).data

    typer.secho(f"\nCover letters ({len(letters)})", fg=typer.colors.BLUE, bold=True)
    for letter in letters:
        job = " @ ".join(part for part in (letter.job_title, letter.company_name) if part) or "-"
        created = format_timestamp(letter.created_at, relative=True) if letter.created_at else ""
        typer.echo(f"  {letter.id}  {job:<45} {created}")
    typer.echo("")


@app.command("show")
def show_command(
    ctx: typer.Context,
    cover_letter_id: Annotated[str, typer.Argument(help="Cover letter id")],
):
    """Print a cover letter's content to stdout."""
    client = _connect(ctx, "show", log=False)
    letter = _check(client.get_cover_letter(cover_letter_id)).data
    typer.echo(letter.content)


@app.command("create")
def create_command(
    ctx: typer.Context,
    content_path: Annotated[Path, typer.Argument(help="File with the letter text")],
    cv_id: Annotated[Optional[str], typer.Option("--cv-id", help="CV the letter belongs to")] = None,
    job_title: Annotated[Optional[str], typer.Option("--job-title", help="Job title")] = None,
    company: Annotated[Optional[str], typer.Option("--company", help="Company name")] = None,
):
    """Store a cover letter written locally."""
    content = _read_text(content_path)
    client = _connect(ctx, "create")
    letter = _check(client.create_cover_letter(content, cv_id, job_title, company)).data
    typer.secho(f"✓ Created cover letter {letter.id}", fg=typer.colors.GREEN, bold=True)


@app.command("update")
def update_command(
    ctx: typer.Context,
    cover_letter_id: Annotated[str, typer.Argument(help="Cover letter id")],
    content_path: Annotated[Path, typer.Argument(help="File with the new letter text")],
):
    """Replace the content of a cover letter."""
    content = _read_text(content_path)
    client = _connect(ctx, "update")
    _check(client.update_cover_letter(cover_letter_id, content))
    typer.secho("✓ Cover letter updated", fg=typer.colors.GREEN, bold=True)


@app.command("delete")
def delete_command(
    ctx: typer.Context,
    cover_letter_id: Annotated[str, typer.Argument(help="Cover letter id")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip the confirmation prompt")] = False,
):
    """Delete a cover letter."""
    if not yes:
        typer.confirm(f"Delete cover letter {cover_letter_id}?", abort=True)
    client = _connect(ctx, "delete")
    _check(client.delete_cover_letter(cover_letter_id))
    typer.secho("✓ Cover letter deleted", fg=typer.colors.GREEN, bold=True)


@app.command("generate")
def generate_command(
    ctx: typer.Context,
    job_title: Annotated[str, typer.Option("--job-title", help="Job title")],
    company: Annotated[str, typer.Option("--company", help="Company name")],
    cv_id: Annotated[
        Optional[str], typer.Option("--cv-id", help="CV to base the letter on (default: profile)")
    ] = None,
    job_path: Annotated[
        Optional[Path], typer.Option("--job", help="File with the job description")
    ] = None,
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Also write the letter to this file")
    ] = None,
):
    """
    Generate a cover letter for a job (uses one credit).

    Examples:\n

        $ manage_cover_letters.py generate --job-title "SRE" --company Globex --job job.md
    """
    job_description = _read_text(job_path) if job_path else None
    client = _connect(ctx, "generate")
    result = _check(client.generate_cover_letter(job_title, company, cv_id, job_description)).data

    typer.secho(f"✓ Generated cover letter {result.cover_letter.id}", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Credits remaining: {result.credits_remaining}")
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(result.cover_letter.content, encoding="utf-8")
        typer.echo(f"  Written to: {output}")
    typer.echo("")


if __name__ == "__main__":
    app()
