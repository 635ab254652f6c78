"""
ukforge.models - Library Parameter Record
=========================================

This module defines the parameter record consumed by every template and by
the repository bootstrapper, plus the fluent builder used to assemble it.

Architecture Notes
------------------
    LibraryConfig (frozen pydantic model)
    ├── identity: project_name, lib_name, lib_kname, lib_kname_upper,
    │             version, description, copyright_holder,
    │             author_name, author_email
    ├── flags:    provide_main, with_docs, with_patch_dir, git_init
    ├── git:      initial_branch, origin_url
    └── lists:    kconfig_dependencies, source_files

    LibraryConfigBuilder
    └── with_*() mutators, applied in call order, then build()

The record is frozen: once ``build()`` returns, nothing can change it, so no
template ever observes a half-populated record.

Usage Example
-------------
>>> from ukforge.models import LibraryConfigBuilder
>>> config = (
...     LibraryConfigBuilder()
...     .with_project_name("sample")
...     .with_lib_kname("LibSample")
...     .with_version("1.0.0")
...     .build()
... )
>>> config.lib_kname, config.lib_kname_upper
('libsample', 'LIBSAMPLE')
"""

from __future__ import annotations

import os
import subprocess
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


DEFAULT_INITIAL_BRANCH = "staging"
DEFAULT_VERSION = "1.0.0"


# =============================================================================
# Parameter Record
# =============================================================================

class LibraryConfig(BaseModel):
    """
    Complete set of parameters for generating a library.

    No required-field validation happens here; every field has an empty
    default so the record can always be constructed. Checking that the
    caller supplied a project name, version and author is the job of the
    calling layer (see :func:`missing_required_fields`).

    Attributes
    ----------
    project_name : str
        Name of the directory created under the work directory.

    lib_name : str
        Human-facing library name (e.g. ``lib-sample``).

    lib_kname : str
        Lower-case key-name, used for Makefile symbols.

    lib_kname_upper : str
        Upper-case key-name, used for Kconfig symbols. Always derived from
        the same input as ``lib_kname``.

    provide_main : bool
        Write a ``main.c`` stub.

    with_docs : bool
        Write ``docs/index.md``.

    with_patch_dir : bool
        Create an empty ``patches/`` directory.

    git_init : bool
        Initialize a git repository around the generated tree.

    initial_branch : str
        Branch that replaces git's default branch after the first commit.

    origin_url : str
        Upstream URL. Recorded in the README, never pushed to.
    """

    model_config = ConfigDict(frozen=True)

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------
    project_name: str = Field(default="", description="Project directory name")
    lib_name: str = Field(default="", description="Library name")
    lib_kname: str = Field(default="", description="Lower-case library key-name")
    lib_kname_upper: str = Field(default="", description="Upper-case library key-name")
    version: str = Field(default="", description="Library version")
    description: str = Field(default="", description="Short description")
    copyright_holder: str = Field(default="", description="Copyright holder")
    author_name: str = Field(default="", description="Author name")
    author_email: str = Field(default="", description="Author email")

    # -------------------------------------------------------------------------
    # Behavior Flags
    # -------------------------------------------------------------------------
    provide_main: bool = Field(default=True, description="Provide a main.c stub")
    with_docs: bool = Field(default=False, description="Include documentation index")
    with_patch_dir: bool = Field(default=False, description="Create a patches/ directory")
    git_init: bool = Field(default=False, description="Initialize a git repository")

    # -------------------------------------------------------------------------
    # Version Control
    # -------------------------------------------------------------------------
    initial_branch: str = Field(
        default=DEFAULT_INITIAL_BRANCH,
        description="Branch name to use instead of git's default",
    )
    origin_url: str = Field(default="", description="Upstream origin URL")

    # -------------------------------------------------------------------------
    # Reserved Lists
    # -------------------------------------------------------------------------
    kconfig_dependencies: tuple[str, ...] = Field(
        default=(),
        description="Kconfig symbols the library selects",
    )
    source_files: tuple[str, ...] = Field(
        default=(),
        description="Additional C sources compiled into the library",
    )

    @model_validator(mode="before")
    @classmethod
    def derive_kname_forms(cls, data: Any) -> Any:
        """
        Derive both key-name forms from a single ``lib_kname`` input.

        Any ``lib_kname_upper`` passed alongside is ignored, so the two
        forms cannot diverge.
        """
        if isinstance(data, dict):
            data = dict(data)
            kname = data.get("lib_kname", "")
            data["lib_kname"] = kname.lower()
            data["lib_kname_upper"] = kname.upper()
        return data

    @property
    def lib_kname_c(self) -> str:
        """Key-name usable as a C identifier fragment (hyphens to underscores)."""
        return self.lib_kname.replace("-", "_")


# =============================================================================
# Builder
# =============================================================================

class LibraryConfigBuilder:
    """
    Fluent builder for :class:`LibraryConfig`.

    Each ``with_*`` method sets exactly one logical field and returns the
    builder. Later calls for the same field overwrite earlier ones. The
    record itself is only constructed in :meth:`build`.

    Examples
    --------
    >>> builder = LibraryConfigBuilder().with_version("0.1").with_version("0.2")
    >>> builder.build().version
    '0.2'
    """

    def __init__(self) -> None:
        self._fields: dict[str, Any] = {}

    def _set(self, **values: Any) -> LibraryConfigBuilder:
        self._fields.update(values)
        return self

    def with_project_name(self, project_name: str) -> LibraryConfigBuilder:
        return self._set(project_name=project_name)

    def with_lib_name(self, lib_name: str) -> LibraryConfigBuilder:
        return self._set(lib_name=lib_name)

    def with_lib_kname(self, lib_kname: str) -> LibraryConfigBuilder:
        # Both case forms are derived by LibraryConfig from this one value.
        return self._set(lib_kname=lib_kname)

    def with_version(self, version: str) -> LibraryConfigBuilder:
        return self._set(version=version)

    def with_description(self, description: str) -> LibraryConfigBuilder:
        return self._set(description=description)

    def with_author_name(self, author_name: str) -> LibraryConfigBuilder:
        return self._set(author_name=author_name)

    def with_author_email(self, author_email: str) -> LibraryConfigBuilder:
        return self._set(author_email=author_email)

    def with_copyright_holder(self, copyright_holder: str) -> LibraryConfigBuilder:
        return self._set(copyright_holder=copyright_holder)

    def with_provide_main(self, provide_main: bool) -> LibraryConfigBuilder:
        return self._set(provide_main=provide_main)

    def with_docs(self, with_docs: bool) -> LibraryConfigBuilder:
        return self._set(with_docs=with_docs)

    def with_patch_dir(self, with_patch_dir: bool) -> LibraryConfigBuilder:
        return self._set(with_patch_dir=with_patch_dir)

    def with_git_init(self, git_init: bool) -> LibraryConfigBuilder:
        return self._set(git_init=git_init)

    def with_initial_branch(self, initial_branch: str) -> LibraryConfigBuilder:
        return self._set(initial_branch=initial_branch)

    def with_origin_url(self, origin_url: str) -> LibraryConfigBuilder:
        return self._set(origin_url=origin_url)

    def with_kconfig_dependencies(self, dependencies: list[str] | tuple[str, ...]) -> LibraryConfigBuilder:
        return self._set(kconfig_dependencies=tuple(dependencies))

    def with_source_files(self, source_files: list[str] | tuple[str, ...]) -> LibraryConfigBuilder:
        return self._set(source_files=tuple(source_files))

    def build(self) -> LibraryConfig:
        """
        Construct the frozen record from every mutator applied so far.

        Returns
        -------
        LibraryConfig
            The fully populated parameter record.
        """
        return LibraryConfig(**self._fields)


# =============================================================================
# Defaults for Unset Fields
# =============================================================================

def default_lib_name(project_name: str) -> str:
    """
    Default library name for a project.

    >>> default_lib_name("sample")
    'lib-sample'
    """
    return f"lib-{project_name}"


def default_lib_kname(project_name: str) -> str:
    """
    Default key-name for a project: ``LIB`` plus the upper-cased name
    without hyphens.

    >>> default_lib_kname("my-sample")
    'LIBMYSAMPLE'
    """
    return "LIB" + project_name.replace("-", "").upper()


def default_author_name() -> str:
    """Author name from the ``USER`` environment variable, or empty."""
    return os.environ.get("USER", "")


def default_author_email() -> str:
    """
    Author email from ``git config --get user.email``.

    Returns an empty string if git is not installed or no email is set.
    """
    try:
        result = subprocess.run(
            ["git", "config", "--get", "user.email"],
            check=False,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        return ""  # Git not installed
    if result.returncode != 0:
        return ""
    return result.stdout.strip()


def missing_required_fields(
    *,
    project_name: str | None,
    version: str | None,
    author_name: str | None,
    author_email: str | None,
) -> list[str]:
    """
    List the required fields that are still empty.

    Returns
    -------
    list[str]
        One message per missing field, in a stable order. Empty when all
        required fields are present.
    """
    required = [
        ("project name", project_name),
        ("version", version),
        ("author name", author_name),
        ("author email", author_email),
    ]
    return [f"{label} cannot be empty" for label, value in required if not value]
