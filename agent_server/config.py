"""
Configuration management for the agent server.
Supports environment variables and a .env file.
"""
import os
from typing import List, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = True
    cors_origins: List[str] = ["*"]

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    # Completion backend (Ollama)
    llm_base_url: Optional[str] = os.getenv("LLM_BASE_URL", None)
    llm_max_tokens: int = int(os.getenv("LLM_MAX_TOKENS", 1024))

    # Per-agent models
    router_model: str = os.getenv("ROUTER_MODEL", "qwen2.5:3b")
    math_model: str = os.getenv("MATH_MODEL", "qwen2.5:3b")
    programming_model: str = os.getenv("PROGRAMMING_MODEL", "qwen2.5:3b")
    general_model: str = os.getenv("GENERAL_MODEL", "qwen2.5:3b")

    # Guardrails
    max_input_length: int = int(os.getenv("MAX_INPUT_LENGTH", 1000))
    truncate_long_input: bool = os.getenv("TRUNCATE_LONG_INPUT", "false").lower() in ("true", "1", "yes")

    # Sessions (in-memory, process lifetime)
    session_timeout_minutes: int = int(os.getenv("SESSION_TIMEOUT_MINUTES", 30))

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
