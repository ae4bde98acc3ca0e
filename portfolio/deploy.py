"""Deployment targets: push the generated output to a branch of a git remote.

A deployment works in a scratch clone (``.publish/Deploy`` by default) that
is recreated on every run::

    git init
    git remote add origin <remote>
    git fetch origin
    git checkout <branch>        # or: git checkout -b <branch>
    <replace the working tree with the output directory>
    git add --all
    git commit -m "Publish deploy <timestamp>" --allow-empty
    git push origin <branch>

Any failing git command aborts the deployment with a ``DeploymentError``.
"""
from __future__ import annotations

import logging
import re
import shutil
import subprocess
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from portfolio.exceptions import DeploymentError

logger = logging.getLogger(__name__)

DEFAULT_WORK_PATH = Path('.publish') / 'Deploy'
BRANCH_REF_PATTERN = re.compile(r'^refs/(?:heads/|remotes/[^/]+/)(?P<branch>.+)$')


def normalize_branch(branch: str) -> str:
    """``refs/heads/X`` and ``refs/remotes/<remote>/X`` both name branch ``X``."""
    branch = branch.strip()
    match = BRANCH_REF_PATTERN.match(branch)
    if match:
        return match.group('branch')
    return branch


@dataclass(frozen=True)
class DeploymentResult:
    remote: str
    branch: str
    dry_run: bool
    commit_message: Optional[str] = None

    @property
    def message(self) -> str:
        if self.dry_run:
            return f"would deploy to branch {self.branch} of repo {self.remote}"
        return f"deployed to branch {self.branch} of repo {self.remote}"


class GitDeployment:
    """Deploy to ``branch`` of an arbitrary git ``remote`` (URL or path)."""

    def __init__(self, remote: str, branch: str = 'master'):
        if not remote:
            raise ValueError('a deployment needs a remote')
        self.remote = remote
        self.branch = normalize_branch(branch)
        if not self.branch:
            raise ValueError('a deployment needs a branch')

    def __repr__(self):
        return f"{type(self).__name__}(remote={self.remote!r}, branch={self.branch!r})"

    def _git(self, args: List[str], cwd: Path, check: bool = True) -> subprocess.CompletedProcess:
        cmd = ['git', *args]
        logger.debug("Running %s in %s", ' '.join(cmd), cwd)
        try:
            return subprocess.run(cmd, capture_output=True, text=True, check=check, cwd=cwd)
        except FileNotFoundError as err:
            raise DeploymentError('git not found in PATH') from err
        except subprocess.CalledProcessError as err:
            detail = (err.stderr or err.stdout or 'git command failed')[-800:]
            raise DeploymentError(f"`git {' '.join(args)}` failed: {detail.strip()}") from err

    def _prepare(self, work_path: Path) -> None:
        if work_path.exists():
            shutil.rmtree(work_path)
        work_path.mkdir(parents=True)
        self._git(['init'], work_path)
        self._git(['remote', 'add', 'origin', self.remote], work_path)
        self._git(['fetch', 'origin'], work_path)
        if self._git(['checkout', self.branch], work_path, check=False).returncode != 0:
            self._git(['checkout', '-b', self.branch], work_path)

    @staticmethod
    def _replace_tree(output_path: Path, work_path: Path) -> None:
        for child in work_path.iterdir():
            if child.name == '.git':
                continue
            if child.is_dir():
                shutil.rmtree(child)
            else:
                child.unlink()
        shutil.copytree(output_path, work_path, dirs_exist_ok=True)

    def deploy(
        self,
        output_path: Path,
        work_path: Path = DEFAULT_WORK_PATH,
        dry_run: bool = False,
    ) -> DeploymentResult:
        output_path = Path(output_path)
        if not output_path.is_dir():
            raise DeploymentError(f"output directory not found: {output_path}")

        if dry_run:
            result = DeploymentResult(self.remote, self.branch, dry_run=True)
            logger.info("%s", result.message)
            return result

        work_path = Path(work_path).resolve()
        self._prepare(work_path)
        self._replace_tree(output_path, work_path)

        stamp = datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M')
        commit_message = f"Publish deploy {stamp}"
        self._git(['add', '--all'], work_path)
        self._git(['commit', '-m', commit_message, '--allow-empty'], work_path)
        self._git(['push', 'origin', self.branch], work_path)

        result = DeploymentResult(self.remote, self.branch, dry_run=False, commit_message=commit_message)
        logger.info("%s", result.message)
        return result


class GitHubDeployment(GitDeployment):
    """Deploy to ``branch`` of the GitHub repository ``owner/name``."""

    def __init__(self, repository: str, branch: str = 'master', use_ssh: bool = True):
        self.repository = repository.strip().strip('/')
        if self.repository.count('/') != 1:
            raise ValueError(f"expected a repository of the form 'owner/name', got {repository!r}")
        if use_ssh:
            remote = f"git@github.com:{self.repository}.git"
        else:
            remote = f"https://github.com/{self.repository}.git"
        super().__init__(remote, branch)
