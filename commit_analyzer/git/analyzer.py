"""Git Analyzer - Query and drive git for the staged changes."""

import re
import subprocess
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class DiffInfo:
    """Everything parsed from the staged diff, built once per run."""
    modified_files: tuple[str, ...] = ()
    added_files: tuple[str, ...] = ()
    deleted_files: tuple[str, ...] = ()
    added_lines: int = 0
    deleted_lines: int = 0
    diff_content: str = ""

    @property
    def total_files(self) -> int:
        return len(self.modified_files) + len(self.added_files) + len(self.deleted_files)

    @property
    def total_lines(self) -> int:
        return self.added_lines + self.deleted_lines

    @property
    def is_empty(self) -> bool:
        return self.total_files == 0


@dataclass
class GitStatus:
    """Snapshot of the working tree before anything is committed."""
    has_staged_changes: bool
    has_unstaged_changes: bool
    branch: str
    last_commit: str


class VcsQueryError(Exception):
    """Raised when a git command fails."""
    pass


_INSERTIONS_RE = re.compile(r'(\d+) insertions?\(\+\)')
_DELETIONS_RE = re.compile(r'(\d+) deletions?\(-\)')


def parse_stat_summary(stat_output: str) -> tuple[int, int]:
    """Pull (added, deleted) line counts from the last line of ``--stat`` output.

    git drops the noun it has nothing to report for, so each count is
    matched on its own. Missing counts are 0.
    """
    lines = [line for line in stat_output.strip().split('\n') if line.strip()]
    if not lines:
        return 0, 0

    last_line = lines[-1]
    if 'insertion' not in last_line and 'deletion' not in last_line:
        return 0, 0

    added = _INSERTIONS_RE.search(last_line)
    deleted = _DELETIONS_RE.search(last_line)
    return (
        int(added.group(1)) if added else 0,
        int(deleted.group(1)) if deleted else 0,
    )


def parse_name_status(output: str) -> tuple[list[str], list[str]]:
    """Split ``--name-status`` output into (added, deleted) path lists."""
    added, deleted = [], []
    for line in output.strip().split('\n'):
        if line.startswith('A'):
            added.append(line[2:])
        elif line.startswith('D'):
            deleted.append(line[2:])
    return added, deleted


def parse_name_only(output: str) -> list[str]:
    return [line for line in output.strip().split('\n') if line]


class GitAnalyzer:
    """Runs git in one working tree."""

    def __init__(self, cwd: str | Path | None = None):
        self.cwd = str(cwd) if cwd is not None else None
        self._verify_git_available()
        self._verify_in_repo()

    def _run(self, *args: str) -> subprocess.CompletedProcess:
        try:
            return subprocess.run(
                ['git', *args],
                capture_output=True,
                text=True,
                encoding='utf-8',
                errors='replace',
                cwd=self.cwd,
            )
        except FileNotFoundError:
            raise VcsQueryError("Git is not installed or not in PATH")

    def _run_git(self, *args: str) -> str:
        """Run a git command and return stdout."""
        result = self._run(*args)
        if result.returncode != 0:
            stderr = (result.stderr or '').strip()
            raise VcsQueryError(f"Git command failed: git {' '.join(args)}\n{stderr}".rstrip())
        return result.stdout

    def _has_changes(self, *args: str) -> bool:
        """Interpret a ``--quiet`` diff: exit 1 means changes, 0 means none."""
        result = self._run(*args)
        if result.returncode not in (0, 1):
            stderr = (result.stderr or '').strip()
            raise VcsQueryError(f"Git command failed: git {' '.join(args)}\n{stderr}".rstrip())
        return result.returncode == 1

    def _verify_git_available(self) -> None:
        self._run_git('--version')

    def _verify_in_repo(self) -> None:
        try:
            self._run_git('rev-parse', '--git-dir')
        except VcsQueryError:
            raise VcsQueryError("Not inside a git repository")

    def _has_commits(self) -> bool:
        return self._run('rev-parse', '--verify', '--quiet', 'HEAD').returncode == 0

    def get_status(self) -> GitStatus:
        has_commits = self._has_commits()
        return GitStatus(
            has_staged_changes=self._has_changes('diff', '--cached', '--quiet'),
            has_unstaged_changes=self._has_changes('diff', '--quiet'),
            branch=self.current_branch(),
            last_commit=self._run_git('log', '-1', '--pretty=format:%h').strip() if has_commits else '',
        )

    def get_diff_info(self) -> DiffInfo:
        """Parse the staged diff into a DiffInfo."""
        diff_output = self._run_git('diff', '--cached')
        added_lines, deleted_lines = parse_stat_summary(self._run_git('diff', '--cached', '--stat'))
        modified = parse_name_only(self._run_git('diff', '--cached', '--name-only'))
        added, deleted = parse_name_status(self._run_git('diff', '--cached', '--name-status'))

        return DiffInfo(
            modified_files=tuple(modified),
            added_files=tuple(added),
            deleted_files=tuple(deleted),
            added_lines=added_lines,
            deleted_lines=deleted_lines,
            diff_content=diff_output,
        )

    def current_branch(self) -> str:
        if not self._has_commits():
            # rev-parse --abbrev-ref fails on an unborn branch
            return self._run_git('symbolic-ref', '--short', 'HEAD').strip()
        return self._run_git('rev-parse', '--abbrev-ref', 'HEAD').strip()

    def last_commit_hash(self) -> str:
        if not self._has_commits():
            return ''
        return self._run_git('rev-parse', 'HEAD').strip()[:8]

    def repo_root(self) -> Path:
        return Path(self._run_git('rev-parse', '--show-toplevel').strip())

    def stage(self, path: str = '.') -> None:
        self._run_git('add', path)

    def commit(self, message: str, no_verify: bool = False) -> None:
        args = ['commit']
        if no_verify:
            args.append('--no-verify')
        self._run_git(*args, '-m', message)

    def push(self) -> None:
        self._run_git('push')
