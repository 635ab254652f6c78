"""
Tests for ukforge.cli
=====================

This module contains tests for the command-line interface.
Tests use Typer's CliRunner for testing CLI commands.

Test Organization
-----------------
- TestVersionCommand: Tests for --version flag
- TestHelpOutput: Tests for help text
- TestCreateNoPrompt: Tests for the create command with --no-prompt
- TestCreateInteractive: Tests for the prompted flow
"""

import shutil
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from ukforge import __version__
from ukforge.cli import app


requires_git = pytest.mark.skipif(
    shutil.which("git") is None,
    reason="git binary not available",
)

REQUIRED = ["--version", "1.0.0", "--author-name", "A. Dev", "--author-email", "a@dev.io"]


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Create a temporary directory for test output."""
    return tmp_path


def create_args(temp_dir: Path, *extra: str, name: str = "sample") -> list[str]:
    return ["create", name, "--no-prompt", "--project-path", str(temp_dir), *REQUIRED, *extra]


# =============================================================================
# Version Command Tests
# =============================================================================

class TestVersionCommand:
    """Tests for the --version flag."""

    def test_version_flag(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_version_short_flag(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["-V"])

        assert result.exit_code == 0
        assert __version__ in result.stdout


# =============================================================================
# Help Output Tests
# =============================================================================

class TestHelpOutput:
    """Tests for help text."""

    def test_main_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "ukforge" in result.stdout.lower()
        assert "create" in result.stdout

    def test_create_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["create", "--help"])

        assert result.exit_code == 0
        assert "--library-kname" in result.stdout
        assert "--no-prompt" in result.stdout


# =============================================================================
# Non-interactive Create Tests
# =============================================================================

class TestCreateNoPrompt:
    """Tests for `ukforge create --no-prompt`."""

    def test_creates_library(self, runner: CliRunner, temp_dir: Path) -> None:
        result = runner.invoke(app, create_args(temp_dir))

        assert result.exit_code == 0, result.stdout
        library = temp_dir / "sample"
        assert (library / "Config.uk").read_text().startswith("menuconfig LIBSAMPLE")
        assert (library / "main.c").is_file()
        assert (library / "docs" / "index.md").is_file()
        assert not (library / "patches").exists()
        assert not (library / ".git").exists()

    def test_copyright_holder_defaults_to_author(
        self, runner: CliRunner, temp_dir: Path
    ) -> None:
        runner.invoke(app, create_args(temp_dir))

        assert "A. Dev. All rights reserved." in (temp_dir / "sample" / "COPYING.md").read_text()

    def test_explicit_names(self, runner: CliRunner, temp_dir: Path) -> None:
        result = runner.invoke(
            app,
            create_args(temp_dir, "--library-name", "libfoo", "--library-kname", "LibFoo"),
        )

        assert result.exit_code == 0
        makefile = (temp_dir / "sample" / "Makefile.uk").read_text()
        assert "addlib_s,libfoo,$(CONFIG_LIBFOO)" in makefile

    def test_optional_flags(self, runner: CliRunner, temp_dir: Path) -> None:
        result = runner.invoke(
            app,
            create_args(temp_dir, "--no-provide-main", "--no-docs", "--patch-dir"),
        )

        assert result.exit_code == 0
        library = temp_dir / "sample"
        assert not (library / "main.c").exists()
        assert not (library / "docs").exists()
        assert (library / "patches").is_dir()

    def test_missing_required_fields(self, runner: CliRunner, temp_dir: Path) -> None:
        """Every missing field is reported before exiting."""
        result = runner.invoke(
            app, ["create", "sample", "--no-prompt", "--project-path", str(temp_dir)]
        )

        assert result.exit_code == 1
        assert "version cannot be empty" in result.stdout
        assert "author name cannot be empty" in result.stdout
        assert "author email cannot be empty" in result.stdout
        assert not (temp_dir / "sample").exists()

    def test_missing_project_name(self, runner: CliRunner, temp_dir: Path) -> None:
        result = runner.invoke(
            app, ["create", "--no-prompt", "--project-path", str(temp_dir), *REQUIRED]
        )

        assert result.exit_code == 1
        assert "project name cannot be empty" in result.stdout

    def test_existing_directory(self, runner: CliRunner, temp_dir: Path) -> None:
        (temp_dir / "sample").mkdir()
        (temp_dir / "sample" / "keep.txt").write_text("keep")

        result = runner.invoke(app, create_args(temp_dir))

        assert result.exit_code == 1
        assert "Error" in result.stdout
        assert list((temp_dir / "sample").iterdir()) == [temp_dir / "sample" / "keep.txt"]

    def test_init_alias(self, runner: CliRunner, temp_dir: Path) -> None:
        args = create_args(temp_dir)
        args[0] = "init"

        result = runner.invoke(app, args)

        assert result.exit_code == 0
        assert (temp_dir / "sample" / "README.md").is_file()

    @requires_git
    @pytest.mark.integration
    def test_git_init(self, runner: CliRunner, temp_dir: Path) -> None:
        result = runner.invoke(app, create_args(temp_dir, "--git-init"))

        assert result.exit_code == 0, result.stdout
        head = (temp_dir / "sample" / ".git" / "HEAD").read_text()
        assert head.strip() == "ref: refs/heads/staging"

    @requires_git
    @pytest.mark.integration
    def test_git_init_custom_branch(self, runner: CliRunner, temp_dir: Path) -> None:
        result = runner.invoke(
            app, create_args(temp_dir, "--git-init", "--initial-branch", "main")
        )

        assert result.exit_code == 0, result.stdout
        head = (temp_dir / "sample" / ".git" / "HEAD").read_text()
        assert head.strip() == "ref: refs/heads/main"


# =============================================================================
# Interactive Create Tests
# =============================================================================

class TestCreateInteractive:
    """Tests for the prompted flow."""

    def test_prompts_fill_missing_fields(
        self, runner: CliRunner, temp_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Accepting every default produces a library."""
        monkeypatch.setenv("USER", "adev")
        answers = {"Work directory:": str(temp_dir), "Author email:": "a@dev.io"}

        def fake_text(message: str, default: str = "") -> str:
            return answers.get(message, default)

        with (
            patch("ukforge.cli.prompt_text", side_effect=fake_text) as text,
            patch("ukforge.cli.prompt_confirm", return_value=False),
            patch("ukforge.cli.default_author_email", return_value=""),
        ):
            result = runner.invoke(app, ["create", "sample"])

        assert result.exit_code == 0, result.stdout
        asked = [call.args[0] for call in text.call_args_list]
        assert "Initial branch:" not in asked
        assert "Library kname:" in asked
        readme = (temp_dir / "sample" / "README.md").read_text()
        assert "lib-sample" in readme
        assert "adev" in readme
        assert "Library Configuration" in result.stdout

    def test_git_prompts_for_branch_and_origin(
        self, runner: CliRunner, temp_dir: Path
    ) -> None:
        def fake_text(message: str, default: str = "") -> str:
            return default

        with (
            patch("ukforge.cli.prompt_text", side_effect=fake_text) as text,
            patch("ukforge.cli.prompt_confirm", return_value=True),
            patch("ukforge.cli.generate_library") as generate,
        ):
            result = runner.invoke(
                app,
                ["create", "sample", "--project-path", str(temp_dir), *REQUIRED],
            )

        assert result.exit_code == 0, result.stdout
        asked = [call.args[0] for call in text.call_args_list]
        assert "Initial branch:" in asked
        assert any(message.startswith("Origin url") for message in asked)
        config = generate.call_args.args[0]
        assert config.git_init is True
        assert config.initial_branch == "staging"

    def test_supplied_fields_are_not_prompted(
        self, runner: CliRunner, temp_dir: Path
    ) -> None:
        with (
            patch("ukforge.cli.prompt_text", return_value="x") as text,
            patch("ukforge.cli.prompt_confirm", return_value=False),
            patch("ukforge.cli.generate_library"),
        ):
            runner.invoke(
                app,
                [
                    "create", "sample", "--project-path", str(temp_dir),
                    "--library-name", "lib-sample", "--library-kname", "LIBSAMPLE",
                    "--copyright-holder", "Holder", *REQUIRED,
                ],
            )

        text.assert_not_called()

    def test_cancelled_prompt_aborts(self, runner: CliRunner, temp_dir: Path) -> None:
        with patch("ukforge.cli.questionary.confirm") as confirm:
            confirm.return_value.ask.return_value = None
            result = runner.invoke(app, ["create", "sample"])

        assert result.exit_code == 1
        assert not (temp_dir / "sample").exists()
