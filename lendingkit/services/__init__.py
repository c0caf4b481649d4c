"""Service modules"""
from .agent import build_agent
from .chat import run_chat_mode
from .session import SessionContext, build_session

__all__ = ["SessionContext", "build_agent", "build_session", "run_chat_mode"]
