"""Per-variant statistics and the last played variant.

Both live as small JSON files in the settings directory (see
:func:`solitaire_kit.common.settings_path`). Broken or missing files load as
empty defaults; failed writes are logged and otherwise ignored.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Dict, Optional

from solitaire_kit.common import _safe_read_json, _safe_write_json, settings_path

STATS_FILE = "stats.json"
USER_CONF_FILE = "config.json"


@dataclass
class GameStat:
    played: int = 0
    won: int = 0


@dataclass
class Stats:
    games: Dict[str, GameStat] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Stats":
        data = _safe_read_json(path or settings_path(STATS_FILE))
        stats = cls()
        if not isinstance(data, dict) or not isinstance(data.get("games"), dict):
            return stats
        for name, st in data["games"].items():
            if not isinstance(st, dict):
                continue
            try:
                stats.games[name] = GameStat(int(st.get("played", 0)), int(st.get("won", 0)))
            except (TypeError, ValueError):
                continue
        return stats

    def save(self, path: Optional[str] = None) -> bool:
        return _safe_write_json(path or settings_path(STATS_FILE), asdict(self))

    def update_stat(self, name: str, won: bool):
        stat = self.games.setdefault(name, GameStat())
        stat.played += 1
        if won:
            stat.won += 1

    def game_stat(self, name: str) -> GameStat:
        """Copy of the statistics of `name`; zeros for a never played variant."""
        st = self.games.get(name)
        if st is None:
            return GameStat()
        return GameStat(st.played, st.won)


@dataclass
class UserConf:
    last_played: str = ""

    @classmethod
    def load(cls, path: Optional[str] = None) -> "UserConf":
        data = _safe_read_json(path or settings_path(USER_CONF_FILE))
        if isinstance(data, dict) and isinstance(data.get("last_played"), str):
            return cls(data["last_played"])
        return cls()

    def save(self, path: Optional[str] = None) -> bool:
        return _safe_write_json(path or settings_path(USER_CONF_FILE), asdict(self))
