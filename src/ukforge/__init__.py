"""
ukforge - Unikraft Library Bootstrapper
=======================================

A CLI tool that creates the skeleton of a new Unikraft library from a fixed
set of templates and, optionally, wraps it in a fresh git repository with a
single initial commit on a branch of your choice.

Features
--------
- **Fixed Template Set**: Kconfig, Makefile.uk, README, license, contribution
  and coding style guides, plus an optional main.c and docs index
- **Fail Fast**: Files are written in a fixed order; the first error stops
  generation and is reported as-is
- **Git Bootstrap**: init, identity, stage, commit, and default branch rename

Quick Start
-----------
```bash
# Create a new library interactively
ukforge create sample

# Or without prompts
ukforge create sample --no-prompt --version 1.0.0 \\
    --author-name "A. Dev" --author-email a@dev.io --git-init
```

Example
-------
>>> from ukforge import LibraryConfigBuilder, generate_library
>>> config = LibraryConfigBuilder().with_project_name("sample").build()
>>> generate_library(config, "/tmp")

Architecture
------------
- ``cli``: Typer-based command line interface
- ``models``: Parameter record and its builder
- ``templating``: Packaged Jinja2 template set
- ``generator``: Writes the library tree
- ``repository``: Git repository bootstrapper
- ``errors``: Exception hierarchy
"""

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "0.1.0"
__license__ = "BSD-3-Clause"

# =============================================================================
# Public API Exports
# =============================================================================

from ukforge.errors import UkforgeError
from ukforge.generator import GenerationResult, generate_library
from ukforge.models import LibraryConfig, LibraryConfigBuilder
from ukforge.repository import RepositoryBootstrapper, RepoState


__all__ = [
    "GenerationResult",
    "LibraryConfig",
    "LibraryConfigBuilder",
    "RepoState",
    "RepositoryBootstrapper",
    "UkforgeError",
    "__version__",
    "generate_library",
]
