"""Remote Text-Generation Clients"""

from commit_analyzer.llm.base import LLMClient, LLMResponse, RemoteServiceError
from commit_analyzer.llm.claude import ClaudeClient
from commit_analyzer.llm.conversation import ConversationClient
from commit_analyzer.llm.ollama import OllamaClient

PROVIDERS = ("auto", "conversation", "ollama", "claude", "none")


def get_client(provider: str = "auto", model: str | None = None,
               endpoint: str | None = None, timeout: int | None = None) -> LLMClient:
    """Build a client for ``provider``; 'auto' picks the first one available."""
    if provider == "conversation":
        return ConversationClient(endpoint=endpoint, model=model, timeout=timeout)
    if provider == "ollama":
        return OllamaClient(model=model, timeout=timeout)
    if provider == "claude":
        return ClaudeClient(model=model, timeout=timeout)
    if provider == "none":
        raise RemoteServiceError("Remote analysis disabled")

    if provider == "auto":
        candidates = [
            lambda: ConversationClient(endpoint=endpoint, model=model, timeout=timeout),
            lambda: OllamaClient(model=model, timeout=timeout),
            lambda: ClaudeClient(model=model, timeout=timeout),
        ]
        for build in candidates:
            try:
                return build()
            except RemoteServiceError:
                continue
        raise RemoteServiceError(
            "No remote provider available. Set GCA_ENDPOINT, run 'ollama serve', "
            "or export ANTHROPIC_API_KEY"
        )

    raise RemoteServiceError(f"Unknown provider: {provider}. Use one of: {', '.join(PROVIDERS)}")


__all__ = [
    "LLMClient",
    "LLMResponse",
    "RemoteServiceError",
    "ClaudeClient",
    "ConversationClient",
    "OllamaClient",
    "get_client",
    "PROVIDERS",
]
