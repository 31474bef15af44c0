"""Prompt Construction Package"""

from commit_analyzer.prompts.builder import PromptBuilder, PromptConfig, SYSTEM_PROMPT

__all__ = ["PromptBuilder", "PromptConfig", "SYSTEM_PROMPT"]
