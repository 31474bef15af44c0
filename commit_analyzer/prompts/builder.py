"""Prompt Builder - Role/content messages for the remote commit-message model."""

from dataclasses import dataclass

from commit_analyzer import COMMIT_TYPES
from commit_analyzer.git.classifier import ChangeAnalysis
from commit_analyzer.git.diff_processor import ProcessedDiff

SYSTEM_PROMPT = """你是一个专业的 git commit message 生成助手，精通 Conventional Commits 规范。
你的任务是根据用户提供的 git diff 信息，分析代码变更内容，准确理解本次提交的目的和影响。
请严格按照以下要求生成 commit message：
1. 只输出 commit message，不要输出多余解释。
2. 内容简洁明了，第一行就是完整的提交标题。
3. type 从 {types} 中选择，必要时可加 scope。
4. subject 需准确描述本次变更的核心内容，避免重复、模糊或无意义的描述。
5. 如有必要，可在 body 补充说明变更动机、影响范围或 breaking change。
6. 不要编造未在 diff 中体现的内容。
7. 保持 message 语法和格式规范。"""


@dataclass
class PromptConfig:
    """User-provided context that shapes the prompt."""
    hint: str | None = None


class PromptBuilder:
    """Builds the message list sent to the remote endpoint."""

    def build(
        self,
        diff: ProcessedDiff,
        analysis: ChangeAnalysis,
        config: PromptConfig | None = None,
    ) -> list[dict[str, str]]:
        config = config or PromptConfig()
        sections = [
            self._build_overview_section(diff, analysis),
            self._build_diff_section(diff),
            self._build_hints_section(config),
            "下面是需要生成 commit message 的变更，请只输出 commit message：",
        ]
        return [
            {"role": "system", "content": self._build_system_prompt()},
            {"role": "user", "content": "\n\n".join(filter(None, sections))},
        ]

    def _build_system_prompt(self) -> str:
        return SYSTEM_PROMPT.format(types="、".join(COMMIT_TYPES))

    def _build_overview_section(self, diff: ProcessedDiff, analysis: ChangeAnalysis) -> str:
        lines = [
            "<overview>",
            f"FILES CHANGED: {diff.total_files}",
            f"COMPLEXITY: {analysis.complexity.value}",
        ]
        if analysis.change_pattern:
            lines.append(f"PATTERN: {analysis.change_pattern}")
        if analysis.file_types:
            lines.append(f"FILE TYPES: {', '.join(analysis.file_types)}")
        lines.append("</overview>")
        return "\n".join(lines)

    def _build_diff_section(self, diff: ProcessedDiff) -> str:
        parts = ["<changes>", diff.summary]
        if diff.detailed_diff:
            parts.extend(["", "DIFF DETAILS:", diff.detailed_diff])
        if diff.truncated:
            parts.append("\n[Note: Diff was truncated due to size. Focus on the file summary above for scope.]")
        parts.append("</changes>")
        return "\n".join(parts)

    def _build_hints_section(self, config: PromptConfig) -> str:
        if not config.hint:
            return ""
        return f"""<context>
The developer provided this context about the changes:
"{config.hint}"
</context>"""
