from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from .ai import AIPlayer, Difficulty
from .errors import GameOverError, IllegalMoveError
from .hashing import state_key
from .models import Color, GameState, Move, Piece, Square, new_game
from .rules import IllegalReason, MoveCheck, is_legal, legal_moves, validate
from .transition import apply_move, declare_stalemate
from .wire import move_from_wire, state_to_wire

logger = logging.getLogger(__name__)


class Game:
    """Holds the authoritative state of one match for the web/relay layer.

    The rules functions are pure; this class is the single place where the
    current state is replaced, one transition at a time.
    """

    def __init__(
        self,
        mode: str = "ai",
        difficulty: Union[Difficulty, str] = Difficulty.MEDIUM,
        first_player: Color = Color.WHITE,
    ) -> None:
        self.state: GameState = new_game(mode, Difficulty(difficulty).value, Color(first_player))

    def reset(
        self,
        mode: Optional[str] = None,
        difficulty: Union[Difficulty, str, None] = None,
        first_player: Color = Color.WHITE,
    ) -> None:
        mode = mode or self.state.mode
        level = Difficulty(difficulty or self.state.difficulty).value
        self.state = new_game(mode, level, Color(first_player))
        logger.info("new %s game (difficulty=%s, first=%s)", mode, level, Color(first_player).value)

    @property
    def turn(self) -> Color:
        return self.state.current_player

    def is_game_over(self) -> bool:
        return self.state.is_over

    def legal_moves(self) -> List[Move]:
        if self.state.is_over:
            return []
        return legal_moves(self.state, self.state.current_player)

    def check(self, origin: Square, to: Square) -> MoveCheck:
        """Validate a board move from ``origin`` for move hints."""
        origin = Square(*origin)
        piece: Optional[Piece] = self.state.piece_at(origin) if origin.in_bounds() else None
        if piece is None:
            return MoveCheck(False, IllegalReason.NO_PIECE, "There is no piece to move.")
        return validate(self.state, piece, origin, to)

    def push(self, move: Move) -> Move:
        """Validate and apply a locally entered move.

        Returns the move as recorded, with the identity of the landed piece
        filled in so it can be relayed to a peer.
        """
        if self.state.is_over:
            raise GameOverError("The game is over.")
        result = is_legal(self.state, move)
        if not result.legal:
            raise IllegalMoveError(result.message, result.reason.value if result.reason else None)
        return self._apply(move)

    def push_remote(self, move: Move) -> Move:
        """Apply a move received from a peer without re-validating it."""
        if self.state.is_over:
            raise GameOverError("The game is over.")
        before = self.state
        recorded = self._apply(move)
        if self.state is before:
            logger.warning("remote move had no effect: %s", move)
        return recorded

    def push_wire(self, payload: Any, remote: bool = False) -> Move:
        move = move_from_wire(payload)
        return self.push_remote(move) if remote else self.push(move)

    def play_ai(self, ai: AIPlayer, difficulty: Union[Difficulty, str, None] = None) -> Optional[Move]:
        """Let ``ai`` move for the side to move.

        A side with no legal move ends the game as a draw.
        """
        if self.state.is_over:
            return None
        move = ai.choose_move(self.state, difficulty)
        if move is None:
            logger.warning("stalemate: %s has no legal moves", self.state.current_player.value)
            self.state = declare_stalemate(self.state)
            return None
        return self._apply(move)

    def _apply(self, move: Move) -> Move:
        before = self.state
        self.state = apply_move(before, move)
        if self.state is before:
            return move
        if self.state.is_over:
            logger.info("game over: %s", self.state.status)
        return self.state.history[-1]

    def key(self) -> str:
        return state_key(self.state)

    def snapshot(self) -> Dict[str, Any]:
        return state_to_wire(self.state)
