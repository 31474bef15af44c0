"""Changelog Repository - Find, create, and append to the project changelog."""

import json
from pathlib import Path

from commit_analyzer import __version__
from commit_analyzer.changelog.document import (
    ChangelogDocument, LATEST_RECORDS_HEADING, LAST_UPDATED_PREFIX,
)
from commit_analyzer.changelog.record import CommitRecord, format_timestamp

CHANGELOG_NAMES = ['CHANGELOG.md', 'Changelog.md', 'changelog.md']
UNKNOWN_PROJECT = "Unknown Project"

CHANGELOG_TEMPLATE = """\
# {project} 变更日志

此文件由 git-commit-analyzer 自动生成，用于记录项目的变更历史。

{latest_heading}

<!-- 这里将自动插入最新的提交记录 -->

---

## 📝 项目信息

- **项目名称**: {project}
- **创建时间**: {created}
- **工具版本**: Git Commit Analyzer v{version}

## 📈 提交统计

<!-- 这里将自动插入提交统计信息 -->

---

{last_updated_prefix}{created}*
"""


class ChangelogIoError(OSError):
    """Raised when the changelog cannot be read or written."""
    pass


class ChangelogRepository:
    """Owns every read and write of the changelog under ``root``."""

    def __init__(self, root: str | Path = '.'):
        self.root = Path(root)

    def locate(self) -> Path | None:
        for name in CHANGELOG_NAMES:
            path = self.root / name
            if path.exists():
                return path
        return None

    def project_name(self) -> str:
        package_json = self.root / 'package.json'
        if package_json.exists():
            try:
                data = json.loads(package_json.read_text(encoding='utf-8'))
                if isinstance(data, dict) and data.get('name'):
                    return str(data['name'])
            except (json.JSONDecodeError, OSError, UnicodeDecodeError):
                pass
        return self.root.resolve().name or UNKNOWN_PROJECT

    def create(self) -> Path:
        path = self.root / CHANGELOG_NAMES[0]
        content = CHANGELOG_TEMPLATE.format(
            project=self.project_name(),
            latest_heading=LATEST_RECORDS_HEADING,
            created=format_timestamp(),
            version=__version__,
            last_updated_prefix=LAST_UPDATED_PREFIX,
        )
        self._write(path, content)
        return path

    def update(self, record: CommitRecord) -> Path:
        """Insert ``record`` after the changelog's anchor and return the file path."""
        path = self.locate() or self.create()

        document = ChangelogDocument.parse(self._read(path))
        document.add_record(record.render_markdown())
        document.touch(format_timestamp())

        self._write(path, document.render())
        return path

    def _read(self, path: Path) -> str:
        # newline="" keeps CRLF files byte-for-byte
        try:
            with open(path, encoding='utf-8', newline='') as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ChangelogIoError(f"Could not read {path}: {e}") from e

    def _write(self, path: Path, content: str) -> None:
        try:
            with open(path, 'w', encoding='utf-8', newline='') as f:
                f.write(content)
        except OSError as e:
            raise ChangelogIoError(f"Could not write {path}: {e}") from e
