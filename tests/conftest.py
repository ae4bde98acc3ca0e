"""Shared test fixtures for the portfolio site."""

import shutil
import sys
from pathlib import Path

import pytest

# Make pelicanconf.py / publishconf.py importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from portfolio.site import SiteDescriptor


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def site() -> SiteDescriptor:
    return SiteDescriptor(
        url='https://example.com',
        name="Morgan's Portfolio",
        description='A description',
    )


@pytest.fixture
def content_dir(tmp_path) -> Path:
    """A copy of the repository's content folder."""
    target = tmp_path / 'content'
    shutil.copytree(PROJECT_ROOT / 'content', target)
    return target


@pytest.fixture
def git_identity(monkeypatch):
    """Commit identity for git commands run by deployments."""
    for role in ('AUTHOR', 'COMMITTER'):
        monkeypatch.setenv(f'GIT_{role}_NAME', 'Portfolio Tests')
        monkeypatch.setenv(f'GIT_{role}_EMAIL', 'tests@example.com')
