"""
ukforge.repository - Git Repository Bootstrapper
================================================

Turns a freshly generated library directory into a git repository holding a
single commit on a caller-chosen branch.

State Machine
-------------
The bootstrap is a linear, forward-only state machine:

    UNINITIALIZED --init()--> INITIALIZED --configure()--> CONFIGURED
        --stage()--> STAGED --commit()--> COMMITTED --rebranch()--> REBRANCHED

Each transition has its own error type (``RepoInitError``, ``RepoConfigError``,
``RepoStageError``, ``RepoCommitError``, ``RepoBranchError``). On failure the
bootstrapper stays in the last state it reached, and the raised error carries
that state in ``.state``. Nothing is retried or rolled back: a failure during
``rebranch()`` after the new branch was created leaves both branches in place.

Git is driven through the ``git`` command line via ``subprocess``.

Usage Example
-------------
>>> bootstrapper = RepositoryBootstrapper(Path("./sample"), config)
>>> bootstrapper.run()
<RepoState.REBRANCHED: 'rebranched'>
>>> bootstrapper.default_branch
'master'
"""

from __future__ import annotations

import os
import subprocess
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING

from ukforge.errors import (
    RepoBranchError,
    RepoCommitError,
    RepoConfigError,
    RepoInitError,
    RepoStageError,
    RepoStateError,
    RepositoryError,
)
from ukforge.templating import INITIAL_COMMIT_MESSAGE


if TYPE_CHECKING:
    from pathlib import Path

    from ukforge.models import LibraryConfig


class RepoState(str, Enum):
    """
    States of the repository bootstrap, in the order they are reached.
    """

    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    CONFIGURED = "configured"
    STAGED = "staged"
    COMMITTED = "committed"
    REBRANCHED = "rebranched"


class RepositoryBootstrapper:
    """
    Drive a new git repository through init, configure, stage, commit and
    rebranch.

    Parameters
    ----------
    path : Path
        Root of the generated library. Becomes the repository work tree.

    config : LibraryConfig
        Supplies the author identity and the initial branch name.

    Attributes
    ----------
    state : RepoState
        The last state reached successfully.

    default_branch : str | None
        The branch git created on init. Known once ``rebranch()`` has read
        it from HEAD.
    """

    def __init__(self, path: Path, config: LibraryConfig) -> None:
        self.path = path
        self.config = config
        self.state = RepoState.UNINITIALIZED
        self.default_branch: str | None = None

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _require(self, expected: RepoState, step: str) -> None:
        if self.state is not expected:
            raise RepoStateError(
                f"Cannot {step}: repository is {self.state.value}, "
                f"expected {expected.value}",
                self.state,
            )

    def _git(
        self,
        *args: str,
        error: type[RepositoryError],
        step: str,
        env: dict[str, str] | None = None,
    ) -> str:
        """
        Run a git command in the repository and return its stdout.

        Any failure is raised as ``error``, carrying the current state, the
        command and git's stderr.
        """
        command = ["git", *args]
        try:
            result = subprocess.run(
                command,
                cwd=self.path,
                capture_output=True,
                check=True,
                text=True,
                env=env,
            )
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise error(
                f"Failed to {step}: {' '.join(command)} exited with "
                f"status {e.returncode}: {stderr}",
                self.state,
                command=command,
                stderr=stderr,
            ) from e
        except OSError as e:
            raise error(f"Failed to {step}: {e}", self.state, command=command) from e
        return result.stdout.strip()

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def init(self) -> RepoState:
        """UNINITIALIZED -> INITIALIZED: create the repository."""
        self._require(RepoState.UNINITIALIZED, "initialize repository")

        if (self.path / ".git").exists():
            raise RepoInitError(
                f"Failed to initialize repository: {self.path} is already a git repository",
                self.state,
            )

        self._git("init", error=RepoInitError, step="initialize repository")
        self.state = RepoState.INITIALIZED
        return self.state

    def configure(self) -> RepoState:
        """INITIALIZED -> CONFIGURED: set the repository-local identity."""
        self._require(RepoState.INITIALIZED, "configure repository")

        step = "configure repository identity"
        self._git("config", "--local", "user.name", self.config.author_name,
                  error=RepoConfigError, step=step)
        self._git("config", "--local", "user.email", self.config.author_email,
                  error=RepoConfigError, step=step)

        self.state = RepoState.CONFIGURED
        return self.state

    def stage(self) -> RepoState:
        """CONFIGURED -> STAGED: stage every file in the work tree."""
        self._require(RepoState.CONFIGURED, "stage files")

        self._git("add", "--all", error=RepoStageError, step="stage files")
        self.state = RepoState.STAGED
        return self.state

    def commit(self, when: datetime | None = None) -> RepoState:
        """
        STAGED -> COMMITTED: record the initial commit.

        Empty commits are allowed, so a tree with nothing to track still
        gets a commit.

        Parameters
        ----------
        when : datetime | None
            Author timestamp. Defaults to the current time.
        """
        self._require(RepoState.STAGED, "commit")

        when = when or datetime.now(UTC)
        env = {
            **os.environ,
            "GIT_AUTHOR_NAME": self.config.author_name,
            "GIT_AUTHOR_EMAIL": self.config.author_email,
            "GIT_AUTHOR_DATE": when.isoformat(),
        }
        self._git(
            "commit", "--allow-empty", "--no-gpg-sign", "--no-verify",
            "-m", INITIAL_COMMIT_MESSAGE,
            error=RepoCommitError,
            step="create initial commit",
            env=env,
        )

        self.state = RepoState.COMMITTED
        return self.state

    def rebranch(self) -> RepoState:
        """
        COMMITTED -> REBRANCHED: move the commit to ``initial_branch``.

        Reads the branch git created on init, creates the new branch at the
        same commit, checks it out, then deletes the original branch. When
        the names are equal there is nothing to move.
        """
        self._require(RepoState.COMMITTED, "rename default branch")

        step = "rename default branch"
        self.default_branch = self._git(
            "symbolic-ref", "--short", "HEAD", error=RepoBranchError, step=step,
        )
        target = self.config.initial_branch

        if target != self.default_branch:
            self._git("branch", target, error=RepoBranchError, step=step)
            self._git("checkout", "--quiet", target, error=RepoBranchError, step=step)
            self._git("branch", "-D", self.default_branch, error=RepoBranchError, step=step)

        self.state = RepoState.REBRANCHED
        return self.state

    def run(self) -> RepoState:
        """Execute all five steps in order and return the final state."""
        self.init()
        self.configure()
        self.stage()
        self.commit()
        return self.rebranch()
