"""Commit Message Package"""

from commit_analyzer.message.composer import CommitSuggestion, MessageComposer, first_line

__all__ = ["CommitSuggestion", "MessageComposer", "first_line"]
