"""Git Operations Package"""

from commit_analyzer.git.analyzer import (
    GitAnalyzer, VcsQueryError, DiffInfo, GitStatus,
    parse_stat_summary, parse_name_status, parse_name_only,
)
from commit_analyzer.git.classifier import ChangeAnalysis, Complexity, analyze_changes, file_extension
from commit_analyzer.git.diff_processor import DiffProcessor, ProcessedDiff, ProcessorConfig, Priority

__all__ = [
    "GitAnalyzer",
    "VcsQueryError",
    "DiffInfo",
    "GitStatus",
    "parse_stat_summary",
    "parse_name_status",
    "parse_name_only",
    "ChangeAnalysis",
    "Complexity",
    "analyze_changes",
    "file_extension",
    "DiffProcessor",
    "ProcessedDiff",
    "ProcessorConfig",
    "Priority",
]
