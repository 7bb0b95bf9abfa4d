"""Data models for Athena Study Assistant."""
from .session import ConversationTurn, Role, StudySession, Preferences
from .api import (
    StudyQueryRequest, StudyQueryResponse,
    MathSolveRequest, MathSolveResponse,
    CodeAnalyzeRequest, CodeAnalyzeResponse,
    StudyProgressRequest, StudyProgressResponse,
    ResearchSearchResponse, ErrorResponse,
)

__all__ = [
    "ConversationTurn",
    "Role",
    "StudySession",
    "Preferences",
    "StudyQueryRequest",
    "StudyQueryResponse",
    "MathSolveRequest",
    "MathSolveResponse",
    "CodeAnalyzeRequest",
    "CodeAnalyzeResponse",
    "StudyProgressRequest",
    "StudyProgressResponse",
    "ResearchSearchResponse",
    "ErrorResponse",
]
