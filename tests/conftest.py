"""
Pytest configuration and shared fixtures for agent server tests.
"""
from typing import AsyncGenerator, List, Optional, Tuple

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from agent_server.agents import build_default_registry
from agent_server.agents.prompts import ROUTER_INSTRUCTIONS
from agent_server.completion import CompletionService, ServiceError
from agent_server.config import Settings
from agent_server.guardrails import Guardrails
from agent_server.memory import SessionStore
from agent_server.pipeline import AgentPipeline


class ScriptedCompletionService(CompletionService):
    """
    Completion service double.

    Prompts built from the router instructions get `route`; every other
    prompt gets `answer`. Either side can be made to fail.
    """

    def __init__(
        self,
        route: str = "general",
        answer: str = "Here is an answer.",
        fail_router: bool = False,
        fail_agent: bool = False,
    ):
        self.route = route
        self.answer = answer
        self.fail_router = fail_router
        self.fail_agent = fail_agent
        self.calls: List[Tuple[str, float, str]] = []

    def router_calls(self) -> List[Tuple[str, float, str]]:
        return [c for c in self.calls if c[2].startswith(ROUTER_INSTRUCTIONS)]

    def agent_calls(self) -> List[Tuple[str, float, str]]:
        return [c for c in self.calls if not c[2].startswith(ROUTER_INSTRUCTIONS)]

    async def complete(self, model: str, temperature: float, prompt: str) -> str:
        self.calls.append((model, temperature, prompt))
        if prompt.startswith(ROUTER_INSTRUCTIONS):
            if self.fail_router:
                raise ServiceError("router backend unavailable", model=model)
            return self.route
        if self.fail_agent:
            raise ServiceError("agent backend unavailable", model=model)
        return self.answer


@pytest.fixture
def test_settings():
    """Settings with distinct per-agent models so calls can be told apart."""
    return Settings(
        router_model="router-model",
        math_model="math-model",
        programming_model="programming-model",
        general_model="general-model",
        log_file=None,
    )


@pytest.fixture
def registry(test_settings):
    return build_default_registry(test_settings)


@pytest.fixture
def guardrails():
    return Guardrails()


@pytest.fixture
def service():
    return ScriptedCompletionService()


@pytest.fixture
def make_pipeline(registry):
    """Factory for pipelines over a scripted service."""

    def _make(service: Optional[ScriptedCompletionService] = None, **kwargs) -> AgentPipeline:
        return AgentPipeline(
            registry=registry,
            service=service or ScriptedCompletionService(),
            **kwargs,
        )

    return _make


@pytest.fixture
def session_store():
    return SessionStore()


@pytest_asyncio.fixture
async def test_app():
    """Provide a test FastAPI app instance."""
    # Import here to avoid circular imports
    from agent_server.main import app
    return app


@pytest_asyncio.fixture
async def test_client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """Provide an async HTTP client for testing FastAPI endpoints."""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test"
    ) as client:
        yield client


@pytest.fixture
def scripted_service():
    """Factory for ScriptedCompletionService instances."""
    return ScriptedCompletionService
