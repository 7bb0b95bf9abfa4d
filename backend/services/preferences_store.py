"""Local key-value persistence for user preferences."""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from models.session import Preferences
from config import PREFERENCES_PATH

logger = logging.getLogger(__name__)


class PreferencesStore:
    """
    Stores preferences as JSON text under a single key in a local JSON file.

    The file maps keys to JSON-encoded strings, the same shape a browser's
    localStorage holds. Saving overwrites the key wholesale.
    """

    DEFAULT_KEY = "athenaPreferences"

    def __init__(self, path: Union[str, Path, None] = None, key: str = DEFAULT_KEY):
        """
        Initialize the store.

        Args:
            path: JSON file backing the store (defaults to PREFERENCES_PATH)
            key: Key under which preferences are held
        """
        self.path = Path(path or PREFERENCES_PATH)
        self.key = key

    def load(self) -> Optional[Preferences]:
        """
        Read saved preferences.

        Returns:
            Preferences, or None when nothing usable is stored
        """
        raw = self._read_all().get(self.key)
        if raw is None:
            logger.debug(f"No saved preferences under '{self.key}' in {self.path}")
            return None

        try:
            prefs = Preferences.from_dict(json.loads(raw))
        except (TypeError, KeyError, ValueError) as e:
            logger.warning(f"Ignoring unreadable preferences in {self.path}: {e}")
            return None

        logger.info(f"Loaded preferences: {prefs.to_dict()}")
        return prefs

    def save(self, prefs: Preferences) -> None:
        """Overwrite the stored preferences."""
        data = self._read_all()
        data[self.key] = json.dumps(prefs.to_dict())
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        logger.info(f"Saved preferences to {self.path}")

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read preferences file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}
