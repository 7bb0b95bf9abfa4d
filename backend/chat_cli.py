"""
Interactive terminal front-end for the Athena Study Assistant.

Usage:
    python chat_cli.py [--preferences PATH] [--export-dir DIR] [--seed N] [--no-voice]

Type a study question, or one of the slash commands listed by /help.
"""
import argparse
import logging
import random
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent))

from services.preferences_store import PreferencesStore
from services.response_generator import ResponseGenerator
from services.session_timer import SessionTimer
from services.study_assistant import StudyAssistant, ConsolePresentation
from config import EXPORT_DIR, PREFERENCES_PATH, SESSION_TICK_SECONDS

logger = logging.getLogger(__name__)

# Slash commands that map onto quick actions
QUICK_ACTION_COMMANDS = {
    "/explain": "explain",
    "/solve": "problem",
    "/summary": "summary",
    "/quiz": "quiz",
}


def dispatch(assistant: StudyAssistant, line: str, export_dir: str) -> bool:
    """
    Handle one line of user input.

    Args:
        assistant: The running assistant
        line: Raw input line
        export_dir: Directory for /export

    Returns:
        False when the user asked to quit, True otherwise
    """
    stripped = line.strip()
    if not stripped.startswith("/"):
        assistant.handle_user_query(stripped)
        return True

    command, *args = stripped.split()
    command = command.lower()

    if command == "/quit":
        return False
    if command in QUICK_ACTION_COMMANDS:
        assistant.handle_quick_action(QUICK_ACTION_COMMANDS[command])
    elif command == "/focus":
        state = assistant.toggle_focus_mode()
        assistant.presentation.show_status(f"Focus mode {'on' if state else 'off'}")
    elif command == "/record":
        assistant.toggle_recording()
    elif command == "/help":
        assistant.show_documentation()
    elif command == "/analytics":
        assistant.show_analytics()
    elif command == "/export":
        path = assistant.export_to_file(export_dir)
        assistant.presentation.show_status(f"Saved {path}")
    elif command == "/settings":
        _apply_settings(assistant, args)
    else:
        assistant.presentation.show_status(f"Unknown command {command}; try /help")
    return True


def _apply_settings(assistant: StudyAssistant, args) -> None:
    if len(args) != 2:
        assistant.presentation.show_status("Usage: /settings on|off DEPTH(1-5)")
        return
    adaptive, depth = args
    try:
        prefs = assistant.save_settings(adaptive.lower() in ("on", "true", "yes", "1"), int(depth))
    except ValueError as e:
        assistant.presentation.show_status(f"Invalid settings: {e}")
        return
    assistant.presentation.show_status(f"Detail level: {prefs.detail_label}")


def main():
    parser = argparse.ArgumentParser(
        description="Terminal chat for the Athena Study Assistant"
    )
    parser.add_argument(
        "--preferences",
        default=PREFERENCES_PATH,
        help=f"Preferences file (default: {PREFERENCES_PATH})"
    )
    parser.add_argument(
        "--export-dir",
        default=EXPORT_DIR,
        help=f"Directory for /export (default: {EXPORT_DIR})"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for response selection (default: random)"
    )
    parser.add_argument(
        "--no-voice",
        action="store_true",
        help="Disable spoken responses"
    )

    args = parser.parse_args()

    assistant = StudyAssistant(
        presentation=ConsolePresentation(),
        preferences_store=PreferencesStore(args.preferences),
        generator=ResponseGenerator(random.Random(args.seed)),
        voice_enabled=not args.no_voice
    )
    timer = SessionTimer(assistant.tick, SESSION_TICK_SECONDS)
    timer.start()

    print("Athena Study Assistant initialized. How may I assist your studies today?")
    print("Type /help for commands, /quit to exit.\n")

    try:
        while True:
            try:
                line = input("> ")
            except EOFError:
                break
            if not dispatch(assistant, line, args.export_dir):
                break
    except KeyboardInterrupt:
        print()
    finally:
        timer.stop()

    sys.exit(0)


if __name__ == "__main__":
    main()
