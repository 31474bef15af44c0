"""Change Classifier - Size and file-type heuristics for a staged diff."""

from dataclasses import dataclass
from enum import Enum
from posixpath import basename

from commit_analyzer import LARGE_REFACTOR, MEDIUM_CHANGE
from commit_analyzer.git.analyzer import DiffInfo

# (max lines, max files) a change may reach before moving up a tier.
# Comparisons are strict, so hitting a limit exactly stays in the lower tier.
HIGH_THRESHOLDS = (500, 10)
MEDIUM_THRESHOLDS = (100, 5)


class Complexity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class ChangeAnalysis:
    """Classification of a DiffInfo."""
    file_types: tuple[str, ...] = ()
    change_pattern: str = ""
    complexity: Complexity = Complexity.LOW


def file_extension(path: str) -> str | None:
    """Lower-cased text after the last dot of the file name, if any."""
    name = basename(path)
    if '.' not in name:
        return None
    return name.rsplit('.', 1)[1].lower() or None


def analyze_changes(diff: DiffInfo) -> ChangeAnalysis:
    file_types = []
    for path in diff.modified_files:
        ext = file_extension(path)
        if ext and ext not in file_types:
            file_types.append(ext)

    total_lines = diff.total_lines
    file_count = diff.total_files

    if total_lines > HIGH_THRESHOLDS[0] or file_count > HIGH_THRESHOLDS[1]:
        complexity, pattern = Complexity.HIGH, LARGE_REFACTOR
    elif total_lines > MEDIUM_THRESHOLDS[0] or file_count > MEDIUM_THRESHOLDS[1]:
        complexity, pattern = Complexity.MEDIUM, MEDIUM_CHANGE
    else:
        complexity, pattern = Complexity.LOW, ""

    return ChangeAnalysis(
        file_types=tuple(file_types),
        change_pattern=pattern,
        complexity=complexity,
    )
