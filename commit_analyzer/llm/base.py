"""LLM Base Classes and Shared Code"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class LLMResponse:
    """Structured response from any remote provider."""
    content: str
    model: str = ""
    tokens_used: int = 0


class RemoteServiceError(Exception):
    """Raised when a remote text-generation call fails."""
    pass


class LLMClient(ABC):
    """Abstract base for remote text-generation clients."""

    @abstractmethod
    def generate(self, messages: list[dict[str, str]]) -> LLMResponse:
        """Send role/content messages and return the completion."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass


def split_system(messages: list[dict[str, str]]) -> tuple[str, list[dict[str, str]]]:
    """Separate system messages from the conversation for APIs that take them apart."""
    system = "\n\n".join(m["content"] for m in messages if m.get("role") == "system")
    rest = [m for m in messages if m.get("role") != "system"]
    return system, rest
