"""Claude (Anthropic) LLM Client"""

import os

from commit_analyzer.llm.base import LLMClient, LLMResponse, RemoteServiceError, split_system


class ClaudeClient(LLMClient):
    """Claude API client. Requires ANTHROPIC_API_KEY env var."""

    DEFAULT_MODEL = "claude-sonnet-4-20250514"
    MAX_TOKENS = 300
    TEMPERATURE = 0.4

    def __init__(self, api_key: str | None = None, model: str | None = None, timeout: int | None = None):
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        self.model = model or self.DEFAULT_MODEL

        if not self.api_key:
            raise RemoteServiceError(
                "No API key found. Set ANTHROPIC_API_KEY environment variable:\n"
                "  export ANTHROPIC_API_KEY='your-key-here'"
            )

        try:
            from anthropic import Anthropic
        except ImportError:
            raise RemoteServiceError("Anthropic SDK not installed. Run:\n  pip install anthropic")
        kwargs = {"api_key": self.api_key}
        if timeout:
            kwargs["timeout"] = float(timeout)
        self._client = Anthropic(**kwargs)

    @property
    def name(self) -> str:
        return f"Claude ({self.model})"

    def generate(self, messages: list[dict[str, str]]) -> LLMResponse:
        from anthropic import APIError, AuthenticationError

        system, conversation = split_system(messages)
        try:
            response = self._client.messages.create(
                model=self.model,
                max_tokens=self.MAX_TOKENS,
                temperature=self.TEMPERATURE,
                system=system,
                messages=conversation,
            )
        except AuthenticationError:
            raise RemoteServiceError("Invalid API key. Check your ANTHROPIC_API_KEY.")
        except APIError as e:
            raise RemoteServiceError(f"Claude API error: {e.message}")

        content = ""
        for block in response.content:
            if block.type == "text":
                content = block.text.strip()
                break

        return LLMResponse(
            content=content,
            model=self.model,
            tokens_used=response.usage.input_tokens + response.usage.output_tokens,
        )
