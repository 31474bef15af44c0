"""Message Composer - Turn a classified diff into a conventional commit message."""

from dataclasses import dataclass

from commit_analyzer.git.analyzer import DiffInfo
from commit_analyzer.git.classifier import ChangeAnalysis

REMOTE_ANALYSIS_LABEL = "AI 分析:"
STATS_LABEL = "变更统计信息:"

# Substrings in the raw diff that make a plain modification a fix
FIX_MARKERS = ('fix', 'bug', 'error')
BREAKING_MARKERS = ('BREAKING CHANGE', 'breaking change')

DOC_EXTENSIONS = ('md', 'txt')
STYLE_EXTENSIONS = ('css', 'scss')
REFACTOR_MARKER = '重构'


@dataclass
class CommitSuggestion:
    """A composed commit message and the pieces it was built from."""
    type: str
    scope: str | None
    description: str
    breaking: bool
    subject: str
    message: str


class MessageComposer:
    """Builds ``type(scope): description`` plus a statistics block."""

    def compose(
        self,
        diff: DiffInfo,
        analysis: ChangeAnalysis,
        remote_analysis: str | None = None,
    ) -> CommitSuggestion:
        commit_type, base_description = self._select_type(diff, analysis)
        scope = self._select_scope(diff)
        description = base_description + self._describe_counts(diff)
        breaking = any(marker in diff.diff_content for marker in BREAKING_MARKERS)

        subject = commit_type
        if scope:
            subject += f"({scope})"
        subject += f": {description}"
        if breaking:
            subject += "!"

        sections = [subject]
        fragment = first_line(remote_analysis)
        if fragment:
            sections.append(f"{REMOTE_ANALYSIS_LABEL}\n{fragment}")
        sections.append(self._build_stats(diff, analysis))

        return CommitSuggestion(
            type=commit_type,
            scope=scope,
            description=description,
            breaking=breaking,
            subject=subject,
            message="\n\n".join(sections),
        )

    def _select_type(self, diff: DiffInfo, analysis: ChangeAnalysis) -> tuple[str, str]:
        """(type, base description); the first matching rule wins."""
        file_types = analysis.file_types

        if any('test' in path for path in diff.added_files):
            return 'test', '添加测试文件'
        if any(ext in file_types for ext in DOC_EXTENSIONS):
            return 'docs', '更新文档'
        if any(ext in file_types for ext in STYLE_EXTENSIONS):
            return 'style', '调整样式'
        if REFACTOR_MARKER in analysis.change_pattern:
            return 'refactor', '重构代码'
        if diff.deleted_files:
            return 'chore', '删除文件'
        if diff.added_files:
            return 'feat', '新增功能'
        if diff.modified_files:
            if any(marker in diff.diff_content for marker in FIX_MARKERS):
                return 'fix', '修复问题'
            return 'feat', '功能更新'
        return 'chore', ''

    def _select_scope(self, diff: DiffInfo) -> str | None:
        if not diff.modified_files:
            return None
        main_file = diff.modified_files[0]
        if '/' in main_file:
            return main_file.split('/')[0]
        return main_file.split('.')[0]

    def _describe_counts(self, diff: DiffInfo) -> str:
        parts = []
        if diff.added_files:
            parts.append(f": 新增{len(diff.added_files)}个文件")
        if diff.modified_files:
            parts.append(f": 修改{len(diff.modified_files)}个文件")
        if diff.deleted_files:
            parts.append(f": 删除{len(diff.deleted_files)}个文件")
        return "".join(parts)

    def _build_stats(self, diff: DiffInfo, analysis: ChangeAnalysis) -> str:
        lines = [
            STATS_LABEL,
            f"- 新增行数: {diff.added_lines}",
            f"- 删除行数: {diff.deleted_lines}",
            f"- 修改文件数: {len(diff.modified_files)}",
            f"- 新增文件数: {len(diff.added_files)}",
            f"- 删除文件数: {len(diff.deleted_files)}",
            f"- 变更复杂度: {analysis.complexity.value}",
            f"- 涉及文件类型: {', '.join(analysis.file_types)}",
        ]
        return "\n".join(lines)


def first_line(text: str | None) -> str:
    """First non-empty line of ``text``, trimmed."""
    for line in (text or "").strip().split('\n'):
        if line.strip():
            return line.strip()
    return ""

