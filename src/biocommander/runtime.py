"""Runtime primitives for driving a single Bio Commander game."""

from __future__ import annotations

import logging
from collections import deque
from pathlib import Path
from typing import Any

from biocommander.config import Settings, get_settings
from biocommander.domain import models as dm
from biocommander.domain.actions import Action, apply_action
from biocommander.domain.enums import PLAYERS
from biocommander.domain.rules_config import DEFAULT_RULES, RulesConfig
from biocommander.domain.seed_data import create_initial_state
from biocommander.domain.victory import zone_control_counts
from biocommander.domain.zones import units_owned, validate_connections
from biocommander.repository import JsonGameRepository

logger = logging.getLogger(__name__)


class SessionError(RuntimeError):
    """Raised when a session operation needs something it was not given."""


class GameSession:
    """Owns the current state of one game and serializes writes to it.

    Every accepted action pushes the previous state onto a bounded undo
    stack; rejected actions leave history alone.  The session performs no
    locking, so callers sharing it across threads must serialize access.
    """

    def __init__(
        self,
        game_id: int,
        state: dm.GameState | None = None,
        *,
        repository: JsonGameRepository | None = None,
        rules: RulesConfig = DEFAULT_RULES,
        history_limit: int = 100,
    ) -> None:
        if history_limit < 0:
            raise ValueError("history_limit must be non-negative")
        if state is None:
            state = create_initial_state(rules)
        else:
            validate_connections(state.zones, rules)
        self.game_id = game_id
        self.rules = rules
        self._repository = repository
        self._state = state
        self._undo: deque[dm.GameState] = deque(maxlen=history_limit)
        self._redo: deque[dm.GameState] = deque(maxlen=history_limit)

    @classmethod
    def from_settings(
        cls,
        game_id: int,
        *,
        settings: Settings | None = None,
        rules: RulesConfig = DEFAULT_RULES,
    ) -> GameSession:
        """Start a new game wired to the configured snapshot directory."""

        settings = settings or get_settings()
        repository = JsonGameRepository(settings.data_dir, rules_version=settings.rules_version)
        logger.info("Starting game %s in %s", game_id, settings.data_dir)
        return cls(game_id, repository=repository, rules=rules, history_limit=settings.history_limit)

    @classmethod
    def load(
        cls,
        game_id: int,
        repository: JsonGameRepository,
        *,
        rules: RulesConfig = DEFAULT_RULES,
        history_limit: int = 100,
    ) -> GameSession:
        """Resume a saved game; raises ``FileNotFoundError`` if it is missing."""

        state = repository.load(game_id)
        logger.info("Loaded game %s at turn %d", game_id, state.turn)
        return cls(game_id, state, repository=repository, rules=rules, history_limit=history_limit)

    @property
    def state(self) -> dm.GameState:
        return self._state

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def apply(self, action: Action) -> dm.ActionOutcome:
        """Apply ``action`` to the current state and record history."""

        outcome = apply_action(self._state, action, self.rules)
        if outcome.accepted:
            self._undo.append(self._state)
            self._redo.clear()
            self._state = outcome.state
        return outcome

    def undo(self) -> bool:
        """Step back one accepted action; returns ``False`` if there is none."""

        if not self._undo:
            logger.warning("Game %s: nothing to undo", self.game_id)
            return False
        self._redo.append(self._state)
        self._state = self._undo.pop()
        return True

    def redo(self) -> bool:
        """Re-apply the most recently undone action."""

        if not self._redo:
            logger.warning("Game %s: nothing to redo", self.game_id)
            return False
        self._undo.append(self._state)
        self._state = self._redo.pop()
        return True

    def save(self) -> Path:
        if self._repository is None:
            raise SessionError(f"game {self.game_id} has no repository to save to")
        return self._repository.save(self.game_id, self._state)

    def snapshot(self) -> dict[str, Any]:
        """Return the current state as a JSON-compatible record."""

        return dm.snapshot_to_dict(self._state)

    def summary(self) -> dict[str, object]:
        """Compact overview of the current state for clients."""

        state = self._state
        control = zone_control_counts(state)
        return {
            "game_id": self.game_id,
            "turn": state.turn,
            "current_player": str(state.current_player),
            "phase": str(state.phase),
            "zone_count": len(state.zones),
            "winner": str(state.winner) if state.winner is not None else None,
            "victory_reason": state.victory_reason,
            "players": {
                str(player): {
                    "zones_dominated": control.get(player, 0),
                    "units": units_owned(state, player),
                    "resources": state.resources_of(player).as_dict(),
                }
                for player in PLAYERS
            },
        }
