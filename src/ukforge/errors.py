"""
ukforge.errors - Exception Hierarchy
====================================

Every error raised by ukforge derives from :class:`UkforgeError`, so callers
(the CLI in particular) can catch the whole family in one place.

Hierarchy
---------
    UkforgeError
    ├── TemplateError
    │   ├── TemplateSyntaxError
    │   │   └── TemplateNotFoundError
    │   └── TemplateRenderError
    ├── DirectoryExistsError (also a FileExistsError)
    └── RepositoryError
        ├── RepoInitError
        ├── RepoConfigError
        ├── RepoStageError
        ├── RepoCommitError
        ├── RepoBranchError
        └── RepoStateError

Wrapped errors always keep the original exception as ``__cause__``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from ukforge.repository import RepoState


class UkforgeError(Exception):
    """Base class for all ukforge errors."""


# =============================================================================
# Template Errors
# =============================================================================

class TemplateError(UkforgeError):
    """
    Base class for template subsystem failures.

    Attributes
    ----------
    template_name : str
        Name of the template that failed (e.g. ``"README.md.j2"``).
    """

    def __init__(self, message: str, template_name: str) -> None:
        super().__init__(message)
        self.template_name = template_name


class TemplateSyntaxError(TemplateError):
    """A packaged template could not be parsed."""


class TemplateNotFoundError(TemplateSyntaxError):
    """The requested template name is not part of the template set."""


class TemplateRenderError(TemplateError):
    """A template referenced a value that is not in the render context."""


# =============================================================================
# Filesystem Errors
# =============================================================================

class DirectoryExistsError(UkforgeError, FileExistsError):
    """
    The library directory already exists.

    Subclasses ``FileExistsError`` so that code written against the plain
    OS error keeps working.
    """


# =============================================================================
# Repository Errors
# =============================================================================

class RepositoryError(UkforgeError):
    """
    Base class for repository bootstrap failures.

    Attributes
    ----------
    state : RepoState
        The last state the bootstrapper reached successfully.

    command : list[str] | None
        The git command that failed, if the failure came from git.

    stderr : str
        Captured stderr of the failing command (empty if not applicable).
    """

    def __init__(
        self,
        message: str,
        state: RepoState,
        command: list[str] | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.state = state
        self.command = command
        self.stderr = stderr


class RepoInitError(RepositoryError):
    """``git init`` failed or the directory is already a repository."""


class RepoConfigError(RepositoryError):
    """Setting the repository-local identity failed."""


class RepoStageError(RepositoryError):
    """Staging the working tree failed."""


class RepoCommitError(RepositoryError):
    """Creating the initial commit failed."""


class RepoBranchError(RepositoryError):
    """Creating, checking out or deleting a branch failed."""


class RepoStateError(RepositoryError):
    """A bootstrap step was invoked out of order."""
