"""
ukforge.generator - Library Tree Generation
===========================================

This module writes a new library to disk and, when asked, hands the
result to the repository bootstrapper.

Architecture
------------
The generator follows a fixed pipeline:

    1. Parse every template the configuration needs
    2. Create <workdir>/<project_name>/
    3. Write the six mandatory files, in order:
       CODING_STYLE.md, Config.uk, CONTRIBUTING.md, COPYING.md,
       README.md, Makefile.uk
    4. Write main.c                  (provide_main)
    5. Write docs/index.md           (with_docs)
    6. Create patches/               (with_patch_dir)
    7. Bootstrap a git repository    (git_init)

The pipeline is:
- **Fail fast**: the first error stops generation and propagates unchanged
- **Not transactional**: files and directories written before a failure
  are left on disk; callers needing atomicity must clean up themselves
- **Exclusive**: step 2 refuses to reuse an existing directory, so two
  runs against the same destination can never merge

Because all templates are parsed in step 1, a template syntax error is
reported before anything touches the filesystem.

Usage Example
-------------
>>> from ukforge.generator import generate_library
>>> from ukforge.models import LibraryConfigBuilder
>>>
>>> config = (
...     LibraryConfigBuilder()
...     .with_project_name("sample")
...     .with_lib_kname("LIBSAMPLE")
...     .build()
... )
>>> result = generate_library(config, "/tmp")
>>> result.project_path
PosixPath('/tmp/sample')
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel

from ukforge.errors import DirectoryExistsError
from ukforge.repository import RepositoryBootstrapper, RepoState
from ukforge.templating import (
    DOCS_OUTPUT,
    DOCS_TEMPLATE,
    MAIN_OUTPUT,
    MAIN_TEMPLATE,
    MANDATORY_TEMPLATES,
    TemplateSet,
)


if TYPE_CHECKING:
    import jinja2

    from ukforge.models import LibraryConfig


# =============================================================================
# Module-Level Configuration
# =============================================================================

# Console for rich output
console = Console()

PATCH_DIR_NAME = "patches"


# =============================================================================
# Result Data Classes
# =============================================================================

@dataclass
class GenerationResult:
    """
    Outcome of a successful library generation.

    Only produced on success; any failure propagates as an exception
    instead.

    Attributes
    ----------
    project_path : Path
        Absolute path to the created library directory.

    files_created : list[Path]
        Files written, in write order.

    directories_created : list[Path]
        Directories created, starting with the library directory.

    repo_state : RepoState | None
        Final repository state, or None if git_init was off.

    default_branch : str | None
        The branch git created on init and that was replaced.
    """

    project_path: Path
    files_created: list[Path] = field(default_factory=list)
    directories_created: list[Path] = field(default_factory=list)
    repo_state: RepoState | None = None
    default_branch: str | None = None


# =============================================================================
# Template Selection
# =============================================================================

def selected_templates(config: LibraryConfig) -> list[tuple[str, str]]:
    """
    List the (template name, output path) pairs to write, in write order.

    Examples
    --------
    >>> [out for _, out in selected_templates(config)][-1]
    'main.c'
    """
    selected = list(MANDATORY_TEMPLATES.items())
    if config.provide_main:
        selected.append((MAIN_TEMPLATE, MAIN_OUTPUT))
    if config.with_docs:
        selected.append((DOCS_TEMPLATE, DOCS_OUTPUT))
    return selected


def parse_templates(
    templates: TemplateSet,
    config: LibraryConfig,
) -> list[tuple[jinja2.Template, str]]:
    """
    Compile every template needed for ``config``.

    Raises
    ------
    TemplateSyntaxError
        On the first malformed template.
    """
    return [(templates.parse(name), output) for name, output in selected_templates(config)]


# =============================================================================
# Filesystem Operations
# =============================================================================

def create_library_dir(workdir: Path, project_name: str) -> Path:
    """
    Create ``workdir / project_name`` with default permissions.

    The parent must already exist and the target must not.

    Raises
    ------
    DirectoryExistsError
        If anything named ``project_name`` already exists in ``workdir``.
    OSError
        For any other failure (missing parent, permission denied).
    """
    library_dir = workdir / project_name
    try:
        library_dir.mkdir()
    except FileExistsError as e:
        raise DirectoryExistsError(
            f"Directory '{library_dir}' already exists. "
            "Use a different name or remove the existing entry."
        ) from e
    return library_dir


def write_rendered(
    templates: TemplateSet,
    template: jinja2.Template,
    config: LibraryConfig,
    path: Path,
) -> Path:
    """
    Create ``path`` and render ``template`` into it.

    The file is created before rendering, so a render failure leaves an
    empty file behind.
    """
    with path.open("w", encoding="utf-8") as f:
        f.write(templates.render(template, config))
    return path


def create_patch_dir(library_dir: Path) -> Path:
    """
    Create the empty ``patches/`` directory.

    Uses the same default mode as the library directory so patches can
    be written into it.
    """
    patch_dir = library_dir / PATCH_DIR_NAME
    patch_dir.mkdir()
    return patch_dir


# =============================================================================
# Main Generation Function
# =============================================================================

def generate_library(
    config: LibraryConfig,
    workdir: Path | str,
    *,
    verbose: bool = False,
    templates: TemplateSet | None = None,
) -> GenerationResult:
    """
    Generate a library from ``config`` under ``workdir``.

    Parameters
    ----------
    config : LibraryConfig
        Fully populated parameter record.

    workdir : Path | str
        Existing directory in which ``config.project_name`` is created.

    verbose : bool, default=False
        If True, report progress to the console.

    templates : TemplateSet | None
        Template set to use. Defaults to the packaged templates.

    Returns
    -------
    GenerationResult
        What was created, and the repository state if git_init was set.

    Raises
    ------
    TemplateSyntaxError
        A template failed to parse. Nothing has been written.
    DirectoryExistsError
        The library directory already exists.
    TemplateRenderError
        A template failed to render. Earlier files remain on disk.
    RepositoryError
        A git step failed. The repository is left as the last
        successful step produced it.
    OSError
        Any other filesystem failure.
    """
    templates = templates or TemplateSet()
    workdir = Path(workdir)

    if verbose:
        console.print()
        console.print(
            Panel(
                f"[bold blue]Creating library:[/] [green]{config.lib_name or config.project_name}[/]\n"
                f"[dim]Version: {config.version} | "
                f"Kconfig: {config.lib_kname_upper} | "
                f"Git: {'yes' if config.git_init else 'no'}[/]",
                title="[bold]ukforge[/]",
                border_style="blue",
            )
        )
        console.print()

    # Step 1: Parse templates before touching the filesystem
    parsed = parse_templates(templates, config)

    # Step 2: Create the library directory
    library_dir = create_library_dir(workdir, config.project_name)
    result = GenerationResult(project_path=library_dir.resolve())
    result.directories_created.append(library_dir)

    if verbose:
        console.print("[bold]📁 Writing files...[/]")
        console.print(f"  Created {config.project_name}/")

    # Steps 3-5: Render each template into its file
    for template, output in parsed:
        path = library_dir / output
        if not path.parent.exists():
            path.parent.mkdir()
            result.directories_created.append(path.parent)
        write_rendered(templates, template, config, path)
        result.files_created.append(path)

        if verbose:
            console.print(f"  Created {output}")

    # Step 6: Patch directory
    if config.with_patch_dir:
        patch_dir = create_patch_dir(library_dir)
        result.directories_created.append(patch_dir)

        if verbose:
            console.print(f"  Created {PATCH_DIR_NAME}/")

    # Step 7: Git repository
    if config.git_init:
        if verbose:
            console.print()
            console.print("[bold]🔧 Initializing git repository...[/]")

        bootstrapper = RepositoryBootstrapper(library_dir, config)
        for step in (
            bootstrapper.init,
            bootstrapper.configure,
            bootstrapper.stage,
            bootstrapper.commit,
            bootstrapper.rebranch,
        ):
            state = step()
            if verbose:
                console.print(f"  [green]✓[/] {state.value}")

        result.repo_state = bootstrapper.state
        result.default_branch = bootstrapper.default_branch

        if verbose:
            console.print(
                f"  On branch '{config.initial_branch}' "
                f"(replaced '{bootstrapper.default_branch}')"
            )

    if verbose:
        console.print()
        console.print(
            Panel(
                f"[bold green]✨ Library created successfully![/]\n\n"
                f"[dim]Location:[/] {result.project_path}",
                title="[bold green]Success[/]",
                border_style="green",
            )
        )

    return result
