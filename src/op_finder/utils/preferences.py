"""
User preference management for op-finder.

Persists the view mode flag and a few presentation settings between runs,
in a small JSON file under ``~/.op-finder``.
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from op_finder.config.defaults import PREFERENCES_DIRNAME

logger = logging.getLogger(__name__)

MAX_RECENT_QUERIES = 20


@dataclass
class ViewPreferences:
    """View-related preferences."""

    simple_mode: bool = True
    tree_depth: Optional[int] = None


@dataclass
class FinderPreferences:
    """Complete op-finder preferences."""

    view: ViewPreferences = field(default_factory=ViewPreferences)
    last_registry: Optional[str] = None
    recent_queries: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert preferences to dictionary."""
        return {
            "view": asdict(self.view),
            "last_registry": self.last_registry,
            "recent_queries": list(self.recent_queries),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FinderPreferences":
        """Create preferences from dictionary."""
        view_data = data.get("view", {})
        return cls(
            view=ViewPreferences(**view_data) if view_data else ViewPreferences(),
            last_registry=data.get("last_registry"),
            recent_queries=list(data.get("recent_queries", [])),
        )


class PreferenceManager:
    """Manages op-finder preferences with file persistence."""

    def __init__(self, config_dir: Optional[Path] = None):
        """Initialize preference manager.

        Args:
            config_dir: Optional custom config directory, defaults to ~/.op-finder
        """
        self.config_dir = config_dir or Path.home() / PREFERENCES_DIRNAME
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.preferences_file = self.config_dir / "preferences.json"
        self.preferences = self.load_preferences()

    def load_preferences(self) -> FinderPreferences:
        """Load preferences from file or create defaults."""
        if self.preferences_file.exists():
            try:
                with open(self.preferences_file, "r") as f:
                    data = json.load(f)
                    return FinderPreferences.from_dict(data)
            except (json.JSONDecodeError, KeyError, TypeError) as e:
                # Corrupted preferences are moved aside and replaced by defaults
                logger.warning(f"Ignoring corrupted preferences file: {e}")
                backup_file = self.preferences_file.with_suffix(".json.backup")
                self.preferences_file.rename(backup_file)
                return FinderPreferences()
        return FinderPreferences()

    def save_preferences(self) -> None:
        """Save preferences to file."""
        with open(self.preferences_file, "w") as f:
            json.dump(self.preferences.to_dict(), f, indent=2)

    def get_simple_mode(self) -> bool:
        """Get the persisted view mode flag."""
        return self.preferences.view.simple_mode

    def set_simple_mode(self, simple: bool) -> None:
        """Set and persist the view mode flag."""
        self.preferences.view.simple_mode = simple
        self.save_preferences()

    def get_tree_depth(self) -> Optional[int]:
        return self.preferences.view.tree_depth

    def set_tree_depth(self, depth: Optional[int]) -> None:
        """Set and persist the default browse depth (None shows everything)."""
        if depth is not None and depth < 1:
            raise ValueError(f"Tree depth must be positive: {depth}")
        self.preferences.view.tree_depth = depth
        self.save_preferences()

    def get_last_registry(self) -> Optional[str]:
        return self.preferences.last_registry

    def set_last_registry(self, path: Optional[str]) -> None:
        self.preferences.last_registry = path
        self.save_preferences()

    def add_recent_query(self, query: str) -> None:
        """Remember *query*, most recent first, without duplicates."""
        if not query:
            return
        queries = [q for q in self.preferences.recent_queries if q != query]
        queries.insert(0, query)
        self.preferences.recent_queries = queries[:MAX_RECENT_QUERIES]
        self.save_preferences()

    def get_recent_queries(self) -> List[str]:
        return list(self.preferences.recent_queries)


# Global singleton instance
_preference_manager: Optional[PreferenceManager] = None


__all__ = [
    "PreferenceManager",
    "get_preference_manager",
    "FinderPreferences",
    "ViewPreferences",
]


def get_preference_manager() -> PreferenceManager:
    """Get or create the global preference manager instance."""
    global _preference_manager
    if _preference_manager is None:
        _preference_manager = PreferenceManager()
    return _preference_manager
