"""Commit records and their Markdown rendering."""

from dataclasses import dataclass, field
from datetime import datetime

from commit_analyzer.git.analyzer import DiffInfo
from commit_analyzer.git.classifier import ChangeAnalysis
from commit_analyzer.message.composer import first_line


def format_timestamp(moment: datetime | None = None) -> str:
    """Local time as ``2026/10/19 14:03:07``."""
    moment = moment or datetime.now()
    return f"{moment.year}/{moment.month}/{moment.day} {moment:%H:%M:%S}"


@dataclass(frozen=True)
class ChangeStats:
    added_lines: int
    deleted_lines: int
    modified_files: int
    added_files: int
    deleted_files: int
    complexity: str = ""
    change_pattern: str = ""
    remote_analysis: str | None = None


@dataclass(frozen=True)
class FileChanges:
    modified: tuple[str, ...] = ()
    added: tuple[str, ...] = ()
    deleted: tuple[str, ...] = ()
    file_types: tuple[str, ...] = ()


@dataclass(frozen=True)
class CommitRecord:
    """One changelog entry, rendered once and thrown away."""
    timestamp: str
    branch: str
    commit_hash: str
    message: str
    changes: ChangeStats
    files: FileChanges = field(default_factory=FileChanges)

    @classmethod
    def from_analysis(
        cls,
        message: str,
        diff: DiffInfo,
        analysis: ChangeAnalysis,
        branch: str,
        commit_hash: str,
        remote_analysis: str | None = None,
        timestamp: str | None = None,
    ) -> 'CommitRecord':
        return cls(
            timestamp=timestamp or format_timestamp(),
            branch=branch,
            commit_hash=commit_hash,
            message=message,
            changes=ChangeStats(
                added_lines=diff.added_lines,
                deleted_lines=diff.deleted_lines,
                modified_files=len(diff.modified_files),
                added_files=len(diff.added_files),
                deleted_files=len(diff.deleted_files),
                complexity=analysis.complexity.value,
                change_pattern=analysis.change_pattern,
                remote_analysis=remote_analysis or None,
            ),
            files=FileChanges(
                modified=diff.modified_files,
                added=diff.added_files,
                deleted=diff.deleted_files,
                file_types=analysis.file_types,
            ),
        )

    @property
    def subject(self) -> str:
        return first_line(self.message)

    def render_markdown(self) -> str:
        """Markdown block for this record, ending with a horizontal rule."""
        changes = self.changes
        lines = [
            f"### {self.subject}",
            "",
            "**提交信息：**",
            f"- **时间**: {self.timestamp}",
            f"- **分支**: {self.branch}",
            f"- **提交哈希**: {self.commit_hash or '-'}",
            "",
            "**变更统计：**",
            f"- **新增行数**: {changes.added_lines} 行",
            f"- **删除行数**: {changes.deleted_lines} 行",
            f"- **修改文件**: {changes.modified_files} 个",
            f"- **新增文件**: {changes.added_files} 个",
            f"- **删除文件**: {changes.deleted_files} 个",
            f"- **文件类型**: {', '.join(self.files.file_types)}",
            f"- **复杂度**: {changes.complexity}",
        ]
        if changes.change_pattern:
            lines.append(f"- **变更模式**: {changes.change_pattern}")
        if changes.remote_analysis:
            lines.append(f"- **AI 分析**: {changes.remote_analysis}")

        file_lines = [
            _file_bullet(label, paths)
            for label, paths in (
                ("修改", self.files.modified),
                ("新增", self.files.added),
                ("删除", self.files.deleted),
            )
            if paths
        ]
        if file_lines:
            lines.extend(["", "**文件变更：**", *file_lines])

        lines.extend(["", "---", ""])
        return "\n".join(lines)


def _file_bullet(label: str, paths: tuple[str, ...]) -> str:
    quoted = ", ".join(f"`{path}`" for path in paths)
    return f"- **{label}**: {quoted}"
