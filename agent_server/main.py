"""
Agent Server - Multi-Agent Assistant
Main FastAPI application for routing messages to specialized agents.
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .agents import AgentRegistry, build_default_registry
from .completion import OllamaCompletionService
from .guardrails import Guardrails
from .memory import ConversationHistory, SessionStore
from .models import (
    AgentInfo,
    AgentListResponse,
    ChatData,
    ChatRequest,
    ChatResponse,
    HealthResponse,
)
from .pipeline import AgentPipeline

# Configure logging
_handlers = [logging.StreamHandler()]
if settings.log_file:
    _handlers.append(logging.FileHandler(settings.log_file))
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=_handlers,
)
logger = logging.getLogger(__name__)

# Global instances
registry: Optional[AgentRegistry] = None
pipeline: Optional[AgentPipeline] = None
session_store: Optional[SessionStore] = None


def create_pipeline(agent_registry: AgentRegistry) -> AgentPipeline:
    """Build the pipeline against the configured completion backend."""
    service = OllamaCompletionService(
        base_url=settings.llm_base_url,
        max_tokens=settings.llm_max_tokens,
    )
    return AgentPipeline(
        registry=agent_registry,
        service=service,
        guardrails=Guardrails(max_input_length=settings.max_input_length),
        truncate_long_input=settings.truncate_long_input,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown."""
    global registry, pipeline, session_store

    logger.info("Starting Agent Server...")

    try:
        registry = build_default_registry(settings)
        pipeline = create_pipeline(registry)
        logger.info(f"Pipeline initialized with {len(registry)} agents")
    except Exception as exc:
        logger.error(f"Failed to initialize pipeline: {exc}", exc_info=True)
        registry = None
        pipeline = None

    session_store = SessionStore()
    cleaned = session_store.cleanup_expired(timeout_minutes=settings.session_timeout_minutes)
    if cleaned > 0:
        logger.info(f"Cleaned up {cleaned} expired sessions on startup")

    yield

    logger.info("Shutting down Agent Server...")


app = FastAPI(
    title="Multi-Agent AI API",
    description="Agentic AI system with Router, Math, Programming, and General agents",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _existing_session(session_id: Optional[str]) -> Optional[str]:
    """Return session_id if it names a live session, else None."""
    if not session_store or not session_id:
        return None
    if not session_store.session_exists(session_id):
        logger.warning(f"Session {session_id} not found, a new one will be created")
        return None
    return session_id


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Multi-Agent AI API",
        "documentation": "/docs",
        "endpoints": {
            "chat": "POST /api/chat",
            "agents": "GET /api/agents",
            "health": "GET /api/health",
            "sessions": "GET /api/sessions",
        },
    }


@app.post("/api/chat", response_model=ChatResponse)
async def chat(request: ChatRequest):
    """
    Process a message through the multi-agent pipeline.

    - Validates and sanitizes input (blocked input returns 400).
    - Routes to the math, programming or general agent.
    - Records the exchange in the caller's session history.
    """
    if not pipeline:
        raise HTTPException(status_code=503, detail="Pipeline not available")

    if session_store:
        session_store.cleanup_expired(timeout_minutes=settings.session_timeout_minutes)

    # Blocked requests must not open a session; new sessions adopt the
    # history of their first completed exchange.
    session_id = _existing_session(request.session_id)
    if session_id:
        history = session_store.get_history(session_id)
    else:
        history = ConversationHistory() if session_store else None

    result = await pipeline.process(request.message, history=history)
    if result.blocked:
        raise HTTPException(status_code=400, detail=f"Input blocked: {result.validation.reason}")

    if session_id:
        session_store.touch(session_id)
    elif session_store:
        session_id = session_store.create_session(history=history)
        logger.info(f"Created new session: {session_id}")

    return ChatResponse(
        success=True,
        data=ChatData(
            input=result.input,
            agent=result.agent_label,
            route_label=result.route_label,
            response=result.response,
            tool=result.tool_name,
            session_id=session_id,
            timestamp=result.timestamp,
        ),
    )


@app.get("/api/agents", response_model=AgentListResponse)
async def list_agents():
    """List available agents and the tools each may use."""
    if not registry:
        raise HTTPException(status_code=503, detail="Agent registry not available")

    return AgentListResponse(
        data=[
            AgentInfo(name=agent.name, description=agent.description, tools=agent.tool_names())
            for agent in registry.values()
        ]
    )


@app.get("/api/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        success=True,
        message="Multi-Agent AI API is running" if pipeline else "Multi-Agent AI API is degraded",
        timestamp=datetime.now(timezone.utc),
        agents_loaded=len(registry) if registry else 0,
    )


# Session Management Endpoints

@app.get("/api/sessions")
async def list_sessions():
    """List sessions ordered by last activity (most recent first)."""
    if not session_store:
        raise HTTPException(status_code=503, detail="Session store not available")

    sessions = session_store.list_sessions()
    return {
        "count": len(sessions),
        "sessions": [s.to_dict() for s in sessions],
    }


@app.post("/api/sessions")
async def create_session():
    """Explicitly create a new conversation session."""
    if not session_store:
        raise HTTPException(status_code=503, detail="Session store not available")

    return {"session_id": session_store.create_session()}


@app.get("/api/sessions/{session_id}")
async def get_session(session_id: str):
    """Get a session's full conversation history."""
    if not session_store:
        raise HTTPException(status_code=503, detail="Session store not available")

    try:
        history = session_store.get_history(session_id)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")

    return {
        "session_id": session_id,
        "count": len(history),
        "entries": [entry.to_dict() for entry in history.entries()],
    }


@app.delete("/api/sessions/{session_id}")
async def delete_session(session_id: str):
    """Delete a conversation session and its history."""
    if not session_store:
        raise HTTPException(status_code=503, detail="Session store not available")

    if not session_store.delete_session(session_id):
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")

    return {"status": "success", "message": f"Session {session_id} deleted"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "agent_server.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )
