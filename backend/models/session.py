"""Study session data models."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Set

from config import DEFAULT_RETENTION_SCORE

DETAIL_LEVELS = ["Minimal", "Basic", "Balanced", "Detailed", "Comprehensive"]


class Role(str, Enum):
    """Author of a conversation turn."""
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ConversationTurn:
    """Represents a single message in the conversation."""
    text: str
    timestamp: datetime
    role: Role

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "timestamp": self.timestamp.isoformat(),
            "role": self.role.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConversationTurn":
        return cls(
            text=data["text"],
            timestamp=datetime.fromisoformat(data["timestamp"]),
            role=Role(data["role"]),
        )


@dataclass
class StudySession:
    """
    Mutable record of one ongoing study interaction.

    Attributes:
        active: Whether the session is currently being tracked
        start_time: When the session was (re)started, None before first start
        duration_minutes: Minutes elapsed; never decreases while active
        topics: Academic areas touched so far (set semantics, never shrinks)
        retention_score: Displayed retention estimate, 0-100
    """
    active: bool = False
    start_time: Optional[datetime] = None
    duration_minutes: int = 0
    topics: Set[str] = field(default_factory=set)
    retention_score: int = DEFAULT_RETENTION_SCORE

    def start(self, now: datetime, retention_score: int = DEFAULT_RETENTION_SCORE) -> None:
        """Reset the session and begin tracking from `now`."""
        self.active = True
        self.start_time = now
        self.duration_minutes = 0
        self.topics = set()
        self.retention_score = retention_score

    def tick(self) -> None:
        """Advance the duration by one minute; no-op while inactive."""
        if self.active:
            self.duration_minutes += 1

    def sync_duration(self, now: datetime) -> None:
        """Recompute the duration from wall-clock time without ever lowering it."""
        if not self.active or self.start_time is None:
            return
        elapsed = int((now - self.start_time).total_seconds() // 60)
        self.duration_minutes = max(self.duration_minutes, elapsed)

    def add_topics(self, topics: Iterable[str]) -> None:
        self.topics |= set(topics)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "active": self.active,
            "startTime": self.start_time.isoformat() if self.start_time else None,
            "duration": self.duration_minutes,
            "topics": sorted(self.topics),
            "retentionScore": self.retention_score,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StudySession":
        start_time = data.get("startTime")
        return cls(
            active=data["active"],
            start_time=datetime.fromisoformat(start_time) if start_time else None,
            duration_minutes=data["duration"],
            topics=set(data["topics"]),
            retention_score=data["retentionScore"],
        )


@dataclass
class Preferences:
    """
    User preferences persisted to the local key-value store.

    `response_depth` only selects the detail label shown in settings;
    `adaptive_learning` is stored and exported but does not alter responses.
    """
    adaptive_learning: bool = True
    response_depth: int = 3

    def __post_init__(self):
        if not isinstance(self.adaptive_learning, bool):
            raise ValueError(f"adaptive_learning must be a bool, got {self.adaptive_learning!r}")
        if isinstance(self.response_depth, bool) or not isinstance(self.response_depth, int):
            raise ValueError(f"response_depth must be an int, got {self.response_depth!r}")
        if not 1 <= self.response_depth <= len(DETAIL_LEVELS):
            raise ValueError(f"response_depth must be between 1 and 5, got {self.response_depth}")

    @property
    def detail_label(self) -> str:
        return DETAIL_LEVELS[self.response_depth - 1]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "adaptiveLearning": self.adaptive_learning,
            "responseDepth": self.response_depth,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Preferences":
        return cls(
            adaptive_learning=data["adaptiveLearning"],
            response_depth=data["responseDepth"],
        )
