"""Unit tests for StudyAssistant, the study session and preferences."""
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

import json
import random
import pytest
from datetime import datetime, timedelta
from unittest.mock import Mock
from config import DEFAULT_RETENTION_SCORE
from models.session import ConversationTurn, Preferences, Role, StudySession
from services.preferences_store import PreferencesStore
from services.query_classifier import Category
from services.response_generator import ResponseGenerator, TEMPLATE_POOLS
from services.study_assistant import StudyAssistant, PresentationPort, ConsolePresentation


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, minutes: int) -> None:
        self.now += timedelta(minutes=minutes)


@pytest.fixture
def presentation():
    return Mock(spec=PresentationPort)


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 14, 9, 30, 0, 123456))


@pytest.fixture
def assistant(presentation, clock):
    return StudyAssistant(
        presentation=presentation,
        generator=ResponseGenerator(random.Random(7)),
        clock=clock
    )


class TestHandleUserQuery:
    """Test suite for StudyAssistant.handle_user_query."""

    @pytest.mark.parametrize("text", ["", "   ", "\n\t", None])
    def test_blank_input_ignored(self, assistant, presentation, text):
        assert assistant.handle_user_query(text) is None
        assert assistant.conversation == []
        assert assistant.session.active is False
        presentation.show_message.assert_not_called()

    def test_math_query_scenario(self, assistant):
        """'solve the integral of x^2' gets a math reply and starts a session."""
        response = assistant.handle_user_query("solve the integral of x^2")

        assert response in TEMPLATE_POOLS[Category.MATHEMATICS]
        assert assistant.session.active is True
        assert assistant.session.topics == set()

    def test_conversation_records_both_roles(self, assistant):
        assistant.handle_user_query("What is calculus?")

        roles = [turn.role for turn in assistant.conversation]
        assert roles[0] == Role.USER
        assert roles[1] == Role.ASSISTANT
        assert assistant.conversation[0].text == "What is calculus?"
        assert all(isinstance(turn, ConversationTurn) for turn in assistant.conversation)

    def test_input_is_trimmed(self, assistant):
        assistant.handle_user_query("  help  ")
        assert assistant.conversation[0].text == "help"

    def test_session_started_only_once(self, assistant, clock):
        assistant.handle_user_query("physics question")
        started_at = assistant.session.start_time
        clock.advance(5)
        assistant.handle_user_query("chemistry question")

        assert assistant.session.start_time == started_at
        assert assistant.session.topics == {"physics", "chemistry"}

    def test_topics_never_shrink(self, assistant):
        assistant.handle_user_query("biology and history")
        assistant.handle_user_query("something unrelated")
        assert assistant.session.topics == {"biology", "history"}

    def test_duration_synced_from_clock(self, assistant, clock):
        assistant.handle_user_query("first")
        clock.advance(12)
        assistant.handle_user_query("second")
        assert assistant.session.duration_minutes == 12

    def test_reply_rendered_with_escaped_code(self, assistant, presentation):
        assistant.handle_user_query("debug my javascript")

        reply_call = presentation.show_message.call_args_list[1]
        text, role, html = reply_call.args
        assert role == Role.ASSISTANT
        assert "```python" in text
        assert '<pre><code class="language-python">' in html
        assert "left &lt;= right" in html

    def test_reply_is_spoken(self, assistant, presentation):
        response = assistant.handle_user_query("can you assist")
        presentation.speak.assert_called_once_with(response)

    def test_voice_disabled(self, presentation, clock):
        assistant = StudyAssistant(presentation=presentation, clock=clock, voice_enabled=False)
        assistant.handle_user_query("help")
        presentation.speak.assert_not_called()

    def test_speech_failure_is_swallowed(self, assistant, presentation, caplog):
        presentation.speak.side_effect = RuntimeError("no audio device")

        response = assistant.handle_user_query("help")

        assert response is not None
        assert "Speech output failed" in caplog.text


class TestSessionClock:
    """Test suite for session ticking and StudySession invariants."""

    def test_tick_noop_when_inactive(self, assistant, presentation):
        assistant.tick()
        assert assistant.session.duration_minutes == 0
        presentation.show_status.assert_not_called()

    def test_tick_increments_when_active(self, assistant):
        assistant.start_study_session()
        assistant.tick()
        assistant.tick()
        assert assistant.session.duration_minutes == 2

    def test_sync_never_lowers_duration(self, clock):
        session = StudySession()
        session.start(clock())
        for _ in range(10):
            session.tick()
        clock.advance(3)
        session.sync_duration(clock())
        assert session.duration_minutes == 10

    def test_inactive_session_is_frozen(self, clock):
        session = StudySession(duration_minutes=4)
        session.tick()
        clock.advance(30)
        session.sync_duration(clock())
        assert session.duration_minutes == 4

    def test_start_resets(self, clock):
        session = StudySession(active=True, duration_minutes=9, topics={"python"}, retention_score=50)
        session.start(clock())
        assert session.duration_minutes == 0
        assert session.topics == set()
        assert session.retention_score == DEFAULT_RETENTION_SCORE
        assert session.start_time == clock()

    def test_default_retention_from_config(self):
        assert StudySession().retention_score == DEFAULT_RETENTION_SCORE


class TestAssistantActions:
    """Test suite for quick actions, toggles and panels."""

    def test_quick_action_speaks_first_line(self, assistant, presentation):
        response = assistant.handle_quick_action("quiz")
        assert response.startswith("**Quiz Generation System**")
        presentation.speak.assert_called_once_with("**Quiz Generation System**")

    def test_unknown_quick_action(self, assistant):
        with pytest.raises(ValueError):
            assistant.handle_quick_action("unknown")

    def test_toggle_focus_mode(self, assistant, presentation):
        assert assistant.toggle_focus_mode() is True
        assert assistant.toggle_focus_mode() is False
        assert presentation.speak.call_count == 2

    def test_toggle_recording(self, assistant):
        assert assistant.toggle_recording() is True
        assert "recording started" in assistant.conversation[-1].text
        assert assistant.toggle_recording() is False
        assert "recording stopped" in assistant.conversation[-1].text

    def test_analytics_counts_user_queries(self, assistant):
        assistant.handle_user_query("physics")
        assistant.handle_user_query("python")
        text = assistant.show_analytics()
        assert "**Queries**: 2 total" in text
        assert "**Topics**: 2 covered" in text

    def test_documentation(self, assistant):
        assert "/explain" in assistant.show_documentation()


class TestPreferences:
    """Test suite for preference handling."""

    @pytest.mark.parametrize("depth,label", [
        (1, "Minimal"), (2, "Basic"), (3, "Balanced"), (4, "Detailed"), (5, "Comprehensive"),
    ])
    def test_detail_labels(self, depth, label):
        assert Preferences(response_depth=depth).detail_label == label

    @pytest.mark.parametrize("depth", [0, 6, -1, "3", 2.5, True])
    def test_invalid_depth_rejected(self, depth):
        with pytest.raises(ValueError):
            Preferences(response_depth=depth)

    def test_invalid_adaptive_flag_rejected(self):
        with pytest.raises(ValueError):
            Preferences(adaptive_learning="yes")

    def test_save_settings_persists(self, presentation, clock, tmp_path):
        store = PreferencesStore(tmp_path / "prefs.json")
        assistant = StudyAssistant(presentation=presentation, preferences_store=store, clock=clock)

        prefs = assistant.save_settings(False, 5)

        assert prefs == Preferences(adaptive_learning=False, response_depth=5)
        assert store.load() == prefs
        assert assistant.conversation[-1].text == "System preferences updated successfully."

    def test_invalid_settings_leave_state_untouched(self, assistant):
        with pytest.raises(ValueError):
            assistant.save_settings(True, 9)
        assert assistant.preferences == Preferences()

    def test_preferences_loaded_at_startup(self, presentation, clock, tmp_path):
        store = PreferencesStore(tmp_path / "prefs.json")
        store.save(Preferences(adaptive_learning=False, response_depth=1))

        assistant = StudyAssistant(presentation=presentation, preferences_store=store, clock=clock)

        assert assistant.preferences == Preferences(adaptive_learning=False, response_depth=1)

    def test_preferences_do_not_change_responses(self, presentation, clock):
        shallow = StudyAssistant(presentation, generator=ResponseGenerator(random.Random(3)), clock=clock)
        deep = StudyAssistant(presentation, generator=ResponseGenerator(random.Random(3)), clock=clock)
        deep.save_settings(False, 5)

        assert shallow.handle_user_query("what is entropy") == deep.handle_user_query("what is entropy")


class TestExport:
    """Test suite for session export."""

    def test_export_shape(self, assistant):
        assistant.handle_user_query("python loops")
        data = assistant.export_data()
        assert set(data) == {"session", "conversation", "preferences", "exportDate"}

    def test_export_round_trip(self, assistant, clock, tmp_path):
        assistant.handle_user_query("statistics homework")
        clock.advance(2)
        assistant.handle_user_query("explain economics")
        assistant.save_settings(False, 4)

        path = assistant.export_to_file(tmp_path)
        loaded = json.loads(path.read_text(encoding="utf-8"))

        assert StudySession.from_dict(loaded["session"]) == assistant.session
        assert [ConversationTurn.from_dict(t) for t in loaded["conversation"]] == assistant.conversation[:-1]
        assert Preferences.from_dict(loaded["preferences"]) == assistant.preferences

    def test_export_filename_uses_date(self, assistant, tmp_path):
        path = assistant.export_to_file(tmp_path)
        assert path.name == "athena-study-session-2026-03-14.json"
        assert assistant.conversation[-1].text == "Study session data exported successfully."


class TestConsolePresentation:
    """Test suite for ConsolePresentation."""

    def test_writes_messages_and_status(self, tmp_path):
        log_path = tmp_path / "console.txt"
        with open(log_path, "w", encoding="utf-8") as stream:
            console = ConsolePresentation(stream)
            console.show_message("hello", Role.USER, "hello")
            console.show_status("Session 00:00")

        output = log_path.read_text(encoding="utf-8")
        assert "You: hello" in output
        assert "-- Session 00:00" in output
