"""
Text-completion backend.

The agents only ever need a single request/response call:
``complete(model, temperature, prompt) -> text``. Everything about the
transport lives behind this interface so the router and dispatcher can be
tested without a running model server.

Default backend: Ollama via LangChain (configurable via LLM_BASE_URL).
"""
import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

from langchain_ollama import OllamaLLM

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Raised when the completion backend cannot produce a response.

    Covers network, auth and rate-limit failures alike; callers are expected
    to degrade rather than retry.
    """

    def __init__(self, message: str, model: Optional[str] = None):
        self.model = model
        super().__init__(message)


class CompletionService(ABC):
    """Abstract text-completion interface."""

    @abstractmethod
    async def complete(self, model: str, temperature: float, prompt: str) -> str:
        """
        Return the completion text for a prompt.

        Args:
            model: Model identifier understood by the backend.
            temperature: Sampling temperature in [0, 1].
            prompt: Full prompt text.

        Raises:
            ServiceError: if the backend call fails for any reason.
        """
        raise NotImplementedError


class OllamaCompletionService(CompletionService):
    """
    Ollama-backed completion service.

    One OllamaLLM client is created lazily per (model, temperature) pair and
    reused for the life of the process.
    """

    def __init__(self, base_url: Optional[str] = None, max_tokens: int = 1024):
        self.base_url = base_url
        self.max_tokens = max_tokens
        self._clients: Dict[Tuple[str, float], OllamaLLM] = {}

    def _client(self, model: str, temperature: float) -> OllamaLLM:
        key = (model, temperature)
        client = self._clients.get(key)
        if client is None:
            kwargs = {
                "model": model,
                "temperature": temperature,
                "num_predict": self.max_tokens,
            }
            if self.base_url:
                kwargs["base_url"] = self.base_url
            client = OllamaLLM(**kwargs)
            self._clients[key] = client
            logger.debug(f"Created Ollama client for model={model} temperature={temperature}")
        return client

    async def complete(self, model: str, temperature: float, prompt: str) -> str:
        try:
            llm = self._client(model, temperature)
            # Ollama invoke is sync; run in thread to avoid blocking event loop
            response = await asyncio.to_thread(llm.invoke, prompt)
        except Exception as exc:
            raise ServiceError(f"Completion failed for model {model}: {exc}", model=model) from exc
        return response if isinstance(response, str) else str(response)
