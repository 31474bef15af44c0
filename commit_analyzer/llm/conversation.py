"""Conversation endpoint client: POST a message list, read back text."""

import json
import os
import socket
import urllib.error
import urllib.request

from commit_analyzer.llm.base import LLMClient, LLMResponse, RemoteServiceError


def extract_text(payload) -> str:
    """Find the completion text in the shapes conversation endpoints return."""
    if payload is None:
        return ""
    if isinstance(payload, str):
        return payload
    if isinstance(payload, list):
        return extract_text(payload[0]) if payload else ""
    if isinstance(payload, dict):
        choices = payload.get("choices")
        if choices:
            first = choices[0]
            if isinstance(first, dict):
                return extract_text(first.get("message") or first.get("text"))
        for key in ("content", "text", "response", "answer", "data", "message", "result"):
            if key in payload:
                text = extract_text(payload[key])
                if text:
                    return text
    return ""


class ConversationClient(LLMClient):
    """Generic chat endpoint. Requires GCA_ENDPOINT (or config endpoint)."""

    DEFAULT_TIMEOUT = 300

    def __init__(self, endpoint: str | None = None, model: str | None = None,
                 token: str | None = None, timeout: int | None = None):
        self.endpoint = endpoint or os.environ.get("GCA_ENDPOINT")
        self.model = model
        self.token = token if token is not None else os.environ.get("GCA_API_TOKEN", "")
        self.timeout = timeout or self.DEFAULT_TIMEOUT

        if not self.endpoint:
            raise RemoteServiceError(
                "No conversation endpoint configured. Set GCA_ENDPOINT or add "
                "\"endpoint\" to .gcarc"
            )

    @property
    def name(self) -> str:
        return f"Conversation ({self.endpoint})"

    def _build_request(self, messages: list[dict[str, str]]) -> urllib.request.Request:
        payload = {"messages": messages}
        if self.model:
            payload["model"] = self.model
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = self.token
        data = json.dumps(payload, ensure_ascii=False).encode('utf-8')
        return urllib.request.Request(self.endpoint, data=data, headers=headers, method="POST")

    def generate(self, messages: list[dict[str, str]]) -> LLMResponse:
        req = self._build_request(messages)
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                raw = response.read().decode('utf-8')
        except urllib.error.HTTPError as e:
            raise RemoteServiceError(f"Conversation endpoint error ({e.code}): {e.reason}")
        except urllib.error.URLError as e:
            if isinstance(e.reason, socket.timeout):
                raise RemoteServiceError(f"Request timed out after {self.timeout}s")
            raise RemoteServiceError(f"Conversation request failed: {e.reason}")
        except (socket.timeout, TimeoutError):
            raise RemoteServiceError(f"Request timed out after {self.timeout}s")
        except OSError as e:
            raise RemoteServiceError(f"Connection to conversation endpoint lost: {e}")
        except UnicodeDecodeError:
            raise RemoteServiceError("Conversation endpoint reply is not valid UTF-8")

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError:
            payload = raw

        content = extract_text(payload).strip()
        if not content:
            raise RemoteServiceError("Empty response from conversation endpoint")
        return LLMResponse(content=content, model=self.model or "")
