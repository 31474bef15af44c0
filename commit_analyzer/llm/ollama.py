"""Ollama LLM Client for Local Models"""

import http.client
import json
import os
import socket
import urllib.error
import urllib.request

from commit_analyzer.llm.base import LLMClient, LLMResponse, RemoteServiceError


class OllamaClient(LLMClient):
    """Ollama client for local models. Requires: ollama serve"""

    DEFAULT_MODEL = "mistral:7b"
    DEFAULT_HOST = "http://localhost:11434"
    DEFAULT_TIMEOUT = 300  # CPU inference can be slow

    def __init__(self, model: str | None = None, host: str | None = None, timeout: int | None = None):
        self.model = model or self.DEFAULT_MODEL
        self.host = host or os.environ.get("OLLAMA_HOST", self.DEFAULT_HOST)
        self.timeout = timeout or self.DEFAULT_TIMEOUT
        self._verify_connection()

    @property
    def name(self) -> str:
        return f"Ollama ({self.model})"

    def _verify_connection(self) -> None:
        try:
            req = urllib.request.Request(f"{self.host}/api/tags")
            with urllib.request.urlopen(req, timeout=5):
                pass
        except (urllib.error.URLError, OSError):
            raise RemoteServiceError("Ollama not running. Start with: ollama serve")

    def _call_api(self, messages: list[dict[str, str]]) -> dict:
        payload = {
            "model": self.model,
            "messages": messages,
            "stream": False,
            "keep_alive": "10m",
            "options": {"temperature": 0.4, "num_predict": 300},
        }
        data = json.dumps(payload).encode('utf-8')
        req = urllib.request.Request(
            f"{self.host}/api/chat", data=data, headers={"Content-Type": "application/json"}
        )
        with urllib.request.urlopen(req, timeout=self.timeout) as response:
            return json.loads(response.read().decode('utf-8'))

    def generate(self, messages: list[dict[str, str]]) -> LLMResponse:
        try:
            result = self._call_api(messages)
        except urllib.error.HTTPError as e:
            if e.code == 404:
                raise RemoteServiceError(f"Model '{self.model}' not found. Run: ollama pull {self.model}")
            raise RemoteServiceError(f"Ollama error ({e.code}): {e.reason}")
        except urllib.error.URLError as e:
            if isinstance(e.reason, socket.timeout):
                raise RemoteServiceError(f"Request timed out after {self.timeout}s. Increase GCA_TIMEOUT")
            raise RemoteServiceError(f"Ollama request failed: {e}")
        except (socket.timeout, TimeoutError):
            raise RemoteServiceError(f"Request timed out after {self.timeout}s. Increase GCA_TIMEOUT")
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise RemoteServiceError("Invalid response from Ollama")
        except http.client.HTTPException as e:
            raise RemoteServiceError(f"Incomplete response from Ollama: {e}")
        except OSError as e:
            raise RemoteServiceError(f"Connection to Ollama lost: {e}")

        if not isinstance(result, dict):
            raise RemoteServiceError("Invalid response from Ollama")
        message = result.get("message")
        content = message.get("content") if isinstance(message, dict) else None
        content = content.strip() if isinstance(content, str) else ""
        return LLMResponse(content=content, model=self.model, tokens_used=result.get("eval_count") or 0)
