"""
Request/response models for the HTTP API.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """User message to process."""
    message: str = Field(..., description="User message to process", examples=["What is 25 * 17?"])
    session_id: Optional[str] = None


class ChatData(BaseModel):
    """Result of processing one message."""
    input: str
    agent: str
    route_label: str
    response: str
    tool: Optional[str] = None
    session_id: Optional[str] = None
    timestamp: datetime


class ChatResponse(BaseModel):
    success: bool
    data: Optional[ChatData] = None
    error: Optional[str] = None


class AgentInfo(BaseModel):
    """Public description of an agent."""
    name: str
    description: str
    tools: List[str]


class AgentListResponse(BaseModel):
    success: bool = True
    data: List[AgentInfo]


class HealthResponse(BaseModel):
    success: bool
    message: str
    timestamp: datetime
    agents_loaded: int = 0
