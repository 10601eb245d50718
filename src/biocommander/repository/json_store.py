"""JSON-based repository for Bio Commander games."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from pydantic import TypeAdapter

from biocommander.domain import models as dm
from biocommander.domain.zones import validate_connections

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SavedGame:
    """On-disk envelope around a game snapshot."""

    game_id: int
    rules_version: str
    state: dm.GameState


class JsonGameRepository:
    """Persist games as JSON snapshots on disk."""

    def __init__(self, base_path: Path, *, rules_version: str = "1.0") -> None:
        self.base_path = base_path
        self.base_path.mkdir(parents=True, exist_ok=True)
        self.rules_version = rules_version
        self._adapter: TypeAdapter[SavedGame] = TypeAdapter(SavedGame)

    def _path_for(self, game_id: int) -> Path:
        return self.base_path / f"game_{int(game_id)}.json"

    def save(self, game_id: int, state: dm.GameState) -> Path:
        """Serialize a game state to disk and return the snapshot path."""

        path = self._path_for(game_id)
        saved = SavedGame(game_id=int(game_id), rules_version=self.rules_version, state=state)
        path.write_bytes(self._adapter.dump_json(saved, indent=2))
        logger.info("Saved game %s (turn %d) to %s", game_id, state.turn, path)
        return path

    def load(self, game_id: int) -> dm.GameState:
        """Load a previously saved game; raises ``FileNotFoundError`` if absent.

        Zone links are re-validated, so a hand-edited file with asymmetric or
        dangling connections raises ``ValueError``.
        """

        path = self._path_for(game_id)
        saved = self._adapter.validate_json(path.read_bytes())
        if saved.rules_version != self.rules_version:
            logger.warning(
                "Game %s was saved with rules %s, loading under %s",
                game_id,
                saved.rules_version,
                self.rules_version,
            )
        validate_connections(saved.state.zones)
        return saved.state

    def list_games(self) -> list[int]:
        """Return all game ids currently persisted in the repository."""

        ids: list[int] = []
        prefix = "game_"
        suffix = ".json"
        for path in self.base_path.glob("game_*.json"):
            stem = path.name
            if stem.startswith(prefix) and stem.endswith(suffix):
                raw = stem[len(prefix) : -len(suffix)]
                try:
                    ids.append(int(raw))
                except ValueError:
                    logger.warning("Ignoring malformed snapshot name %s", path.name)
        return sorted(ids)

    def delete(self, game_id: int) -> None:
        """Remove a game snapshot if it exists."""

        path = self._path_for(game_id)
        if path.exists():
            path.unlink()
            logger.info("Deleted game %s", game_id)
