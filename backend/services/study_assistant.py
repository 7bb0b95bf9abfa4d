"""Study assistant chat core: conversation, session tracking and preferences."""
import json
import logging
import sys
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TextIO, Union

from models.session import ConversationTurn, Preferences, Role, StudySession
from services.query_classifier import QueryClassifier, extract_topics
from services.response_generator import ResponseGenerator
from services.preferences_store import PreferencesStore
from services.rendering import first_line, format_time, render_code_blocks
from config import DEFAULT_RETENTION_SCORE, EXPORT_DIR

logger = logging.getLogger(__name__)

KNOWLEDGE_AREAS = ("mathematics", "programming", "science", "literature")


class PresentationPort(ABC):
    """Rendering surface the assistant talks to (chat window, terminal, test double)."""

    @abstractmethod
    def show_message(self, text: str, role: Role, html: str) -> None:
        """Display a chat message; `html` is `text` with code blocks rendered."""

    @abstractmethod
    def speak(self, text: str) -> None:
        """Read text aloud. May raise; the assistant logs and ignores failures."""

    @abstractmethod
    def show_status(self, text: str) -> None:
        """Update the status line (session timer, topic count, retention)."""


class ConsolePresentation(PresentationPort):
    """Plain-text presentation for terminal use."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout

    def show_message(self, text: str, role: Role, html: str) -> None:
        label = "You" if role == Role.USER else "Athena"
        time_str = datetime.now().strftime("%H:%M")
        print(f"[{time_str}] {label}: {text}\n", file=self.stream)

    def speak(self, text: str) -> None:
        logger.debug(f"Speech output: {text[:80]}")

    def show_status(self, text: str) -> None:
        print(f"-- {text}", file=self.stream)


class StudyAssistant:
    """
    One user's study assistant.

    Owns the conversation history, the study session and the preferences.
    Every public operation runs under a lock, so a timer tick arriving from
    another thread only lands between operations.
    """

    def __init__(
        self,
        presentation: PresentationPort,
        preferences_store: Optional[PreferencesStore] = None,
        generator: Optional[ResponseGenerator] = None,
        classifier: Optional[QueryClassifier] = None,
        clock: Optional[Callable[[], datetime]] = None,
        voice_enabled: bool = True
    ):
        """
        Initialize the assistant and load saved preferences.

        Args:
            presentation: Where messages, speech and status updates go
            preferences_store: Local store for preferences (None disables persistence)
            generator: Response generator (inject a seeded one for determinism)
            classifier: Query classifier
            clock: Returns the current time
            voice_enabled: Whether assistant replies are spoken
        """
        self.presentation = presentation
        self.preferences_store = preferences_store
        self.generator = generator or ResponseGenerator()
        self.classifier = classifier or QueryClassifier()
        self.clock = clock or datetime.now
        self.voice_enabled = voice_enabled

        self.session = StudySession(retention_score=DEFAULT_RETENTION_SCORE)
        self.conversation: List[ConversationTurn] = []
        self.preferences = Preferences()
        self.focus_mode = False
        self.recording = False
        self._lock = threading.RLock()

        self.load_preferences()
        logger.info("StudyAssistant initialized")

    # Conversation

    def handle_user_query(self, text: str) -> Optional[str]:
        """
        Answer a user query.

        Args:
            text: Raw user input

        Returns:
            The assistant's reply, or None if the input was blank
        """
        text = (text or "").strip()
        if not text:
            return None

        with self._lock:
            self._add_message(text, Role.USER)

            classification = self.classifier.classify_query(text)
            response = self.generator.generate(classification.category)
            self._add_message(response, Role.ASSISTANT)

            if not self.session.active:
                self.start_study_session()

            self._update_study_metrics(text)
            self._speak(response)
            return response

    def handle_quick_action(self, action: str) -> str:
        """Show the canned prompt for a quick action and speak its first line."""
        with self._lock:
            response = self.generator.quick_action(action)
            self._add_message(response, Role.ASSISTANT)
            self._speak(first_line(response))
            return response

    def show_documentation(self) -> str:
        with self._lock:
            docs = self.generator.documentation()
            self._add_message(docs, Role.ASSISTANT)
            return docs

    def show_analytics(self) -> str:
        with self._lock:
            query_count = sum(1 for turn in self.conversation if turn.role == Role.USER)
            analytics = self.generator.analytics(self.session, query_count, KNOWLEDGE_AREAS)
            self._add_message(analytics, Role.ASSISTANT)
            return analytics

    # Session

    def start_study_session(self) -> None:
        with self._lock:
            self.session.start(self.clock(), retention_score=DEFAULT_RETENTION_SCORE)
            logger.info("Study session started")
            self._add_message("Study session initiated. Tracking progress and retention.", Role.ASSISTANT)
            self._update_status()

    def tick(self) -> None:
        """Advance the session clock by one minute if a session is active."""
        with self._lock:
            if not self.session.active:
                return
            self.session.tick()
            self._update_status()

    def toggle_focus_mode(self) -> bool:
        with self._lock:
            self.focus_mode = not self.focus_mode
            if self.focus_mode:
                self._speak("Focus mode activated. Minimizing distractions")
            else:
                self._speak("Focus mode deactivated")
            return self.focus_mode

    def toggle_recording(self) -> bool:
        with self._lock:
            self.recording = not self.recording
            if self.recording:
                self._add_message(
                    "Study session recording started. All interactions will be logged.", Role.ASSISTANT
                )
            else:
                self._add_message("Session recording stopped. Data saved to archive.", Role.ASSISTANT)
            return self.recording

    # Preferences

    def load_preferences(self) -> None:
        if self.preferences_store is None:
            return
        prefs = self.preferences_store.load()
        if prefs is not None:
            self.preferences = prefs

    def save_settings(self, adaptive_learning: bool, response_depth: int) -> Preferences:
        """
        Validate, apply and persist new preferences.

        Raises:
            ValueError: If response_depth is outside 1-5 or types are wrong
        """
        prefs = Preferences(adaptive_learning=adaptive_learning, response_depth=response_depth)
        with self._lock:
            self.preferences = prefs
            if self.preferences_store is not None:
                self.preferences_store.save(prefs)
            self._add_message("System preferences updated successfully.", Role.ASSISTANT)
            return prefs

    # Export

    def export_data(self) -> Dict[str, Any]:
        """Snapshot the session, conversation and preferences as JSON-ready data."""
        with self._lock:
            return {
                "session": self.session.to_dict(),
                "conversation": [turn.to_dict() for turn in self.conversation],
                "preferences": self.preferences.to_dict(),
                "exportDate": self.clock().isoformat(),
            }

    def export_to_file(self, directory: Union[str, Path, None] = None) -> Path:
        """
        Write the export document to `athena-study-session-YYYY-MM-DD.json`.

        Returns:
            Path of the written file
        """
        with self._lock:
            data = self.export_data()
            target_dir = Path(directory or EXPORT_DIR)
            target_dir.mkdir(parents=True, exist_ok=True)
            path = target_dir / f"athena-study-session-{self.clock().date().isoformat()}.json"
            path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
            logger.info(f"Exported study session to {path}")
            self._add_message("Study session data exported successfully.", Role.ASSISTANT)
            return path

    # Internals

    def _add_message(self, text: str, role: Role) -> None:
        self.conversation.append(ConversationTurn(text=text, timestamp=self.clock(), role=role))
        self.presentation.show_message(text, role, render_code_blocks(text))

    def _update_study_metrics(self, query: str) -> None:
        self.session.sync_duration(self.clock())
        self.session.add_topics(extract_topics(query))
        self._update_status()

    def _update_status(self) -> None:
        self.presentation.show_status(
            f"Session {format_time(self.session.duration_minutes)} | "
            f"Topics {len(self.session.topics)} | "
            f"Retention {self.session.retention_score}%"
        )

    def _speak(self, text: str) -> None:
        if not self.voice_enabled:
            return
        try:
            self.presentation.speak(text)
        except Exception as e:
            logger.warning(f"Speech output failed: {e}")
