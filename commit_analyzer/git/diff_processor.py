"""Diff Processor - Bound and filter the staged diff for the remote model."""

from dataclasses import dataclass, field
from enum import IntEnum
import re

from commit_analyzer.git.analyzer import DiffInfo


class Priority(IntEnum):
    """Order in which files are offered to the remote model."""
    SOURCE = 1
    TEST = 2
    CONFIG = 3
    DOCS = 4
    NOISE = 99


PRIORITY_LABELS = {
    Priority.SOURCE: "Source",
    Priority.TEST: "Tests",
    Priority.CONFIG: "Config",
    Priority.DOCS: "Docs",
}


@dataclass
class ProcessedDiff:
    """Remote-ready view of a DiffInfo."""
    summary: str
    detailed_diff: str
    total_files: int = 0
    included_files: int = 0
    filtered_files: int = 0
    truncated: bool = False
    file_statuses: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class ProcessorConfig:
    max_tokens: int = 3000
    max_lines_per_file: int = 200


class DiffProcessor:
    """Filters lock files and build output, then trims the diff to a token budget."""

    NOISE_PATTERNS: list[str] = [
        r'package-lock\.json$', r'yarn\.lock$', r'pnpm-lock\.yaml$',
        r'poetry\.lock$', r'Cargo\.lock$', r'Gemfile\.lock$', r'composer\.lock$',
        r'\.min\.js$', r'\.min\.css$', r'\.map$', r'\.pyc$', r'__pycache__',
        r'dist/', r'build/', r'\.egg-info/', r'node_modules/', r'\.venv/',
    ]

    TEST_PATTERNS: list[str] = [
        r'test[s]?/', r'spec[s]?/', r'__tests__/',
        r'\.test\.', r'\.spec\.', r'_test\.', r'(^|/)test_',
    ]

    CONFIG_PATTERNS: list[str] = [
        r'\.json$', r'\.ya?ml$', r'\.toml$', r'\.ini$', r'\.env',
        r'\.config\.', r'config/', r'Makefile$', r'Dockerfile$',
    ]

    DOCS_PATTERNS: list[str] = [
        r'\.md$', r'\.rst$', r'\.txt$', r'docs/', r'README', r'CHANGELOG', r'LICENSE',
    ]

    def __init__(self, config: ProcessorConfig | None = None):
        self.config = config or ProcessorConfig()
        self._noise_re = [re.compile(p, re.IGNORECASE) for p in self.NOISE_PATTERNS]
        self._test_re = [re.compile(p, re.IGNORECASE) for p in self.TEST_PATTERNS]
        self._config_re = [re.compile(p, re.IGNORECASE) for p in self.CONFIG_PATTERNS]
        self._docs_re = [re.compile(p, re.IGNORECASE) for p in self.DOCS_PATTERNS]

    def process(self, diff: DiffInfo) -> ProcessedDiff:
        statuses = self._file_statuses(diff)
        classified = [(path, status, self._get_priority(path)) for path, status in statuses]
        kept = [item for item in classified if item[2] != Priority.NOISE]
        noise_count = len(classified) - len(kept)
        kept.sort(key=lambda item: item[2])

        detailed, included, truncated = self._build_detailed_diff(kept, diff.diff_content)
        return ProcessedDiff(
            summary=self._build_summary(kept, noise_count),
            detailed_diff=detailed,
            total_files=len(statuses),
            included_files=included,
            filtered_files=noise_count,
            truncated=truncated,
            file_statuses=[(path, status) for path, status, _ in kept],
        )

    def _file_statuses(self, diff: DiffInfo) -> list[tuple[str, str]]:
        """(path, A/M/D) for every staged path, in name-only order."""
        added = set(diff.added_files)
        deleted = set(diff.deleted_files)
        statuses = []
        seen = set()
        for path in diff.modified_files:
            status = 'A' if path in added else 'D' if path in deleted else 'M'
            statuses.append((path, status))
            seen.add(path)
        for path in (*diff.added_files, *diff.deleted_files):
            if path not in seen:
                statuses.append((path, 'A' if path in added else 'D'))
                seen.add(path)
        return statuses

    def _get_priority(self, path: str) -> Priority:
        if any(p.search(path) for p in self._noise_re):
            return Priority.NOISE
        if any(p.search(path) for p in self._test_re):
            return Priority.TEST
        if any(p.search(path) for p in self._docs_re):
            return Priority.DOCS
        if any(p.search(path) for p in self._config_re):
            return Priority.CONFIG
        return Priority.SOURCE

    def _build_summary(self, files: list[tuple[str, str, Priority]], noise_count: int) -> str:
        lines = ["FILES CHANGED:"]
        current = None
        for path, status, priority in files:
            if priority != current:
                current = priority
                lines.append(f"\n[{PRIORITY_LABELS.get(priority, 'Other')}]")
            lines.append(f"  {status} {path}")

        if noise_count > 0:
            lines.append(f"\n[Filtered: {noise_count} files (lock files, generated code)]")
        return "\n".join(lines)

    def _build_detailed_diff(self, files: list[tuple[str, str, Priority]], full_diff: str) -> tuple[str, int, bool]:
        if not full_diff:
            return "", 0, False

        per_file = split_diff_by_file(full_diff)
        parts = []
        tokens_used = 0
        truncated = False

        for path, _, _ in files:
            if path not in per_file:
                continue
            file_diff = self._truncate_file_diff(per_file[path], path)
            diff_tokens = len(file_diff) // 4
            if tokens_used + diff_tokens > self.config.max_tokens:
                truncated = True
                break
            parts.append(file_diff)
            tokens_used += diff_tokens

        return "\n".join(parts), len(parts), truncated

    def _truncate_file_diff(self, diff: str, path: str) -> str:
        lines = diff.split('\n')
        limit = self.config.max_lines_per_file
        if len(lines) <= limit:
            return diff
        kept = lines[:limit]
        kept.append(f"\n... [{len(lines) - limit} more lines truncated from {path}]")
        return '\n'.join(kept)


_DIFF_HEADER_RE = re.compile(r'^diff --git a/(.+?) b/')


def split_diff_by_file(diff: str) -> dict[str, str]:
    """Map each path to its own section of a multi-file diff."""
    files = {}
    current = None
    current_lines = []

    for line in diff.split('\n'):
        match = _DIFF_HEADER_RE.match(line)
        if match:
            if current:
                files[current] = '\n'.join(current_lines)
            current = match.group(1)
            current_lines = [line]
        elif current:
            current_lines.append(line)

    if current:
        files[current] = '\n'.join(current_lines)
    return files
