#!/usr/bin/env python3
"""
Profile Management CLI

Synchronizes the master profile between local JSON-Resume files and the CV API.

Commands:
    pull   - Download the profile to a JSON-Resume file
    push   - Upload a JSON-Resume file as the profile (validated first)
    patch  - Replace a single profile section from a JSON file
    export - Print the profile as JSON-Resume to stdout
    status - Show remote profile completion per section
    delete - Delete the remote profile

Examples:\n

    manage_profile.py pull profile.json

    manage_profile.py push profile.json

    manage_profile.py patch skills skills.json

    manage_profile.py --api-url https://cv.example.com status
"""

import json
import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from cvgen.contexts.persistence import create_client
from cvgen.contexts.persistence.api_client import ApiResponse
from cvgen.contexts.persistence.logger import setup_persistence_logger
from cvgen.contexts.profile import (
    RESUME_SECTIONS,
    calculate_profile_completion,
    export_resume_json,
    load_resume,
    parse_section_id,
    save_resume,
    section_has_content,
    validate_resume,
)
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
        setup_persistence_logger(LOGS_PATH / f"profile_{now()}", client.api.base_url, command)
    return client


app = typer.Typer(
    help="Pull, push and patch the master profile stored by the CV API",
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


@app.command("pull")
def pull_command(
    ctx: typer.Context,
    output: Annotated[
        Path,
        typer.Argument(help="File to write the JSON-Resume profile to"),
    ] = Path("profile.json"),
):
    """
    Download the profile to a local JSON-Resume file.

    Examples:\n

        $ manage_profile.py pull                    # Writes profile.json

        $ manage_profile.py pull data/master.json
    """
    client = _connect(ctx, "pull")
    profile = _check(client.get_profile()).data

    if not profile.has_profile:
        typer.secho("No profile stored yet; writing an empty resume", fg=typer.colors.YELLOW)

    save_resume(profile.resume, output)
    typer.secho("✓ Profile downloaded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Completion: {calculate_profile_completion(profile.resume)}%")
    if profile.updated_at:
        typer.echo(f"  Last updated: {format_timestamp(profile.updated_at)}")
    typer.echo(f"  File: {output}\n")


@app.command("push")
def push_command(
    ctx: typer.Context,
    resume_path: Annotated[
        Path,
        typer.Argument(help="JSON-Resume file to upload"),
    ],
    force: Annotated[
        bool,
        typer.Option("--force", help="Upload even if field validation fails"),
    ] = False,
):
    """
    Replace the remote profile with a local JSON-Resume file.

    Field formats are checked first; the server rejects the same problems.
    """
    client = _connect(ctx, "push")
    try:
        resume = load_resume(resume_path)
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))

    issues = validate_resume(resume)
    if issues and not force:
        typer.secho(f"✗ {len(issues)} validation issue(s)", fg=typer.colors.RED, bold=True)
        for issue in issues:
            typer.secho(f"  - {issue.path}: {issue.message}", fg=typer.colors.RED)
        _fail("Fix the issues above or pass --force")

    profile = _check(client.update_profile(resume)).data
    typer.secho("✓ Profile uploaded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Completion: {calculate_profile_completion(profile.resume)}%\n")


@app.command("patch")
def patch_command(
    ctx: typer.Context,
    section: Annotated[
        str,
        typer.Argument(help="Section id (e.g. work, skills, basics)"),
    ],
    data_path: Annotated[
        Path,
        typer.Argument(help="JSON file holding the section value (object or list)"),
    ],
):
    """
    Replace one profile section.

    Examples:\n

        $ manage_profile.py patch skills skills.json

        $ manage_profile.py patch basics basics.json
    """
    try:
        section_id = parse_section_id(section)
        data = json.loads(data_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        _fail(f"File not found: {data_path}")
    except ValueError as e:
        _fail(str(e))

    client = _connect(ctx, f"patch {section_id.value}")
    profile = _check(client.update_profile_section(section_id, data)).data
    typer.secho(f"✓ Updated section '{section_id.value}'", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Completion: {calculate_profile_completion(profile.resume)}%\n")


@app.command("export")
def export_command(ctx: typer.Context):
    """Print the profile as JSON-Resume to stdout (pipe-friendly, no logging)."""
    client = _connect(ctx, "export", log=False)
    profile = _check(client.get_profile()).data
    typer.echo(export_resume_json(profile.resume))


@app.command("status")
def status_command(ctx: typer.Context):
    """Show which profile sections have content on the server."""
    client = _connect(ctx, "status")
    profile = _check(client.get_profile()).data

    typer.secho("\nProfile status", fg=typer.colors.BLUE, bold=True)
    if not profile.has_profile:
        typer.echo("  No profile stored yet\n")
        return

    for info in RESUME_SECTIONS:
        if section_has_content(profile.resume, info.id):
            typer.secho(f"  ✓ {info.label}", fg=typer.colors.GREEN)
        else:
            typer.echo(f"  · {info.label}")
    typer.secho(f"\n  {calculate_profile_completion(profile.resume)}% complete", bold=True)
    if profile.updated_at:
        typer.echo(f"  Updated {format_timestamp(profile.updated_at, relative=True)}")
    typer.echo("")


@app.command("delete")
def delete_command(
    ctx: typer.Context,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip the confirmation prompt"),
    ] = False,
):
    """Delete the remote profile."""
    if not yes:
        typer.confirm("Delete the stored profile?", abort=True)
    client = _connect(ctx, "delete")
    _check(client.delete_profile())
    typer.secho("✓ Profile deleted", fg=typer.colors.GREEN, bold=True)


if __name__ == "__main__":
    app()
