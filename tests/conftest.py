"""
pytest configuration and shared fixtures for ukforge tests.

Fixtures
--------
workdir : Path
    An empty directory in which libraries are generated.

sample_config : LibraryConfig
    The end-to-end "sample" library with git enabled.

plain_config : LibraryConfig
    The same library with git disabled.
"""

from pathlib import Path

import pytest

from ukforge.models import LibraryConfig, LibraryConfigBuilder


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """
    Create an empty work directory for library generation.

    Returns
    -------
    Path
        Path to the empty directory.
    """
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def sample_builder() -> LibraryConfigBuilder:
    """Builder pre-populated with the sample library."""
    return (
        LibraryConfigBuilder()
        .with_project_name("sample")
        .with_lib_name("lib-sample")
        .with_lib_kname("LIBSAMPLE")
        .with_version("1.0.0")
        .with_description("A sample library")
        .with_author_name("A. Dev")
        .with_author_email("a@dev.io")
        .with_copyright_holder("Sample Holder")
        .with_provide_main(True)
        .with_patch_dir(False)
        .with_git_init(True)
        .with_initial_branch("staging")
    )


@pytest.fixture
def sample_config(sample_builder: LibraryConfigBuilder) -> LibraryConfig:
    """The sample library with git enabled."""
    return sample_builder.build()


@pytest.fixture
def plain_config(sample_builder: LibraryConfigBuilder) -> LibraryConfig:
    """The sample library without git."""
    return sample_builder.with_git_init(False).build()


@pytest.fixture(autouse=True)
def isolated_git_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Keep the user's global git configuration out of the tests.

    Hooks, signing or a configured default branch in ~/.gitconfig would
    otherwise change what the repository tests observe.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(home / ".gitconfig"))
    for var in ("GIT_DIR", "GIT_WORK_TREE", "GIT_INDEX_FILE"):
        monkeypatch.delenv(var, raising=False)


# =============================================================================
# pytest Configuration
# =============================================================================

def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers used in the test suite."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests requiring the git binary"
    )
