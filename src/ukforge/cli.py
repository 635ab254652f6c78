"""
ukforge.cli - Command Line Interface
====================================

This module provides the command-line interface for ukforge using Typer.

Architecture
------------
    app (main entry point)
    └── create (alias: init) - Create a new library

Every field of the parameter record can be given as a flag. Fields left out
are prompted for interactively, with sensible defaults, unless --no-prompt
is passed; in that case the required fields (name, version, author name and
email) must be supplied and everything else falls back to its default.

Usage Examples
--------------
Interactive mode:
    $ ukforge create sample

Non-interactive mode:
    $ ukforge create sample --no-prompt --version 1.0.0 \\
        --author-name "A. Dev" --author-email a@dev.io --git-init

See Also
--------
- generator.py: Library tree generation
- models.py: Parameter record and defaults
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import questionary
import typer
from rich import print as rprint
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ukforge import __version__
from ukforge.errors import UkforgeError
from ukforge.generator import generate_library
from ukforge.models import (
    DEFAULT_INITIAL_BRANCH,
    DEFAULT_VERSION,
    LibraryConfig,
    LibraryConfigBuilder,
    default_author_email,
    default_author_name,
    default_lib_kname,
    default_lib_name,
    missing_required_fields,
)


# =============================================================================
# CLI Application Setup
# =============================================================================

app = typer.Typer(
    name="ukforge",
    help="Bootstrap a new Unikraft library from templates.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=True,
)

# Console for rich output
console = Console()


# =============================================================================
# Version Callback
# =============================================================================

def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(Panel(
            f"[bold green]ukforge[/] version [cyan]{__version__}[/]\n\n"
            f"[dim]Unikraft library bootstrapper[/]",
            border_style="green",
        ))
        raise typer.Exit()


# =============================================================================
# Interactive Prompts
# =============================================================================

def prompt_text(message: str, default: str = "") -> str:
    """
    Ask for a line of text.

    Raises
    ------
    typer.Abort
        If the user cancels the prompt.
    """
    result = questionary.text(message, default=default).ask()

    if result is None:
        raise typer.Abort()

    return result.strip()


def prompt_confirm(message: str, default: bool = False) -> bool:
    """Ask a yes/no question. Cancelling aborts."""
    result = questionary.confirm(message, default=default).ask()

    if result is None:
        raise typer.Abort()

    return result


# =============================================================================
# Main Application Callback
# =============================================================================

@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    [bold]ukforge[/] - Unikraft library bootstrapper.

    [bold]Quick Start:[/]

        ukforge create sample
    """


# =============================================================================
# Create Command
# =============================================================================

@app.command()
def create(
    name: Annotated[
        str | None,
        typer.Argument(help="Project name (directory to create)"),
    ] = None,
    library_name: Annotated[
        str | None,
        typer.Option("--library-name", help="Library name (default: lib-<name>)"),
    ] = None,
    library_kname: Annotated[
        str | None,
        typer.Option("--library-kname", help="Library key-name (default: LIB<NAME>)"),
    ] = None,
    lib_version: Annotated[
        str | None,
        typer.Option("--version", "-v", help="Library version"),
    ] = None,
    description: Annotated[
        str,
        typer.Option("--description", help="Short library description"),
    ] = "",
    author_name: Annotated[
        str | None,
        typer.Option("--author-name", help="Author name"),
    ] = None,
    author_email: Annotated[
        str | None,
        typer.Option("--author-email", help="Author email"),
    ] = None,
    initial_branch: Annotated[
        str | None,
        typer.Option("--initial-branch", help="Initial git branch name"),
    ] = None,
    copyright_holder: Annotated[
        str | None,
        typer.Option("--copyright-holder", help="Copyright holder (default: author)"),
    ] = None,
    origin: Annotated[
        str | None,
        typer.Option("--origin", help="Source code origin URL"),
    ] = None,
    no_provide_main: Annotated[
        bool,
        typer.Option("--no-provide-main", help="Do not provide a main.c stub"),
    ] = False,
    no_docs: Annotated[
        bool,
        typer.Option("--no-docs", help="Do not provide a documentation index"),
    ] = False,
    patch_dir: Annotated[
        bool,
        typer.Option("--patch-dir", help="Create a patches/ directory"),
    ] = False,
    git_init: Annotated[
        bool,
        typer.Option("--git-init", help="Initialize a git repository"),
    ] = False,
    project_path: Annotated[
        Path | None,
        typer.Option("--project-path", help="Where to create the library (default: cwd)"),
    ] = None,
    no_prompt: Annotated[
        bool,
        typer.Option("--no-prompt", "-y", help="Never prompt; fail on missing fields"),
    ] = False,
) -> None:
    """
    Create a new library from templates.

    [bold]Examples:[/]

        # Interactive mode
        ukforge create sample

        # Fully specified, with git
        ukforge create sample --no-prompt -v 1.0.0 \\
            --author-name "A. Dev" --author-email a@dev.io --git-init
    """
    if not no_prompt:
        if not git_init:
            git_init = prompt_confirm("Initialise the library with git?")
        if not name:
            name = prompt_text("Project name:")
        if project_path is None:
            project_path = Path(prompt_text("Work directory:", default=str(Path.cwd())))
        if not library_name:
            library_name = prompt_text("Library name:", default=default_lib_name(name))
        if not library_kname:
            library_kname = prompt_text("Library kname:", default=default_lib_kname(name))
        if not lib_version:
            lib_version = prompt_text("Version:", default=DEFAULT_VERSION)
        if not author_name:
            author_name = prompt_text("Author name:", default=default_author_name())
        if not author_email:
            author_email = prompt_text("Author email:", default=default_author_email())
        if git_init and not initial_branch:
            initial_branch = prompt_text("Initial branch:", default=DEFAULT_INITIAL_BRANCH)
        if git_init and origin is None:
            origin = prompt_text("Origin url (make sure the repository is new or empty):")
        if not copyright_holder:
            copyright_holder = prompt_text("Copyright holder:", default=author_name)

    errors = missing_required_fields(
        project_name=name,
        version=lib_version,
        author_name=author_name,
        author_email=author_email,
    )
    if errors or name is None:
        for error in errors:
            rprint(f"[red]Error:[/] {error}")
        raise typer.Exit(1)

    config = (
        LibraryConfigBuilder()
        .with_git_init(git_init)
        .with_project_name(name)
        .with_lib_name(library_name or default_lib_name(name))
        .with_lib_kname(library_kname or default_lib_kname(name))
        .with_version(lib_version)
        .with_description(description)
        .with_author_name(author_name)
        .with_author_email(author_email)
        .with_initial_branch(initial_branch or DEFAULT_INITIAL_BRANCH)
        .with_copyright_holder(copyright_holder or author_name)
        .with_provide_main(not no_provide_main)
        .with_docs(not no_docs)
        .with_patch_dir(patch_dir)
        .with_origin_url(origin or "")
        .build()
    )

    if not no_prompt:
        show_summary(config)

    try:
        generate_library(config, project_path or Path.cwd(), verbose=True)
    except (UkforgeError, OSError) as e:
        rprint(f"[red]Error:[/] {e}")
        raise typer.Exit(1)


app.command("init", hidden=True)(create)


def show_summary(config: LibraryConfig) -> None:
    """Print the resolved configuration as a table."""
    console.print()
    table = Table(title="Library Configuration", show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Project", config.project_name)
    table.add_row("Library", config.lib_name)
    table.add_row("Kname", f"{config.lib_kname} / {config.lib_kname_upper}")
    table.add_row("Version", config.version)
    table.add_row("Author", f"{config.author_name} <{config.author_email}>")
    table.add_row("Copyright", config.copyright_holder)
    table.add_row("Git", config.initial_branch if config.git_init else "no")

    console.print(table)
    console.print()


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    app()
