"""Canonical position keys for the three-fold repetition rule.

Keys are write-only: they are counted, compared and occasionally sent to a
peer for a consistency check, never parsed back into a state.
"""

from __future__ import annotations

from typing import Dict

from .models import Board, Color, GameState, Hands


def canonical_key(
    board: Board,
    hands: Hands,
    next_player: Color,
    pawn_directions: Dict[Color, int],
) -> str:
    squares = ",".join(
        f"{p.color.value}{p.kind.value}" if p is not None else "-"
        for row in board
        for p in row
    )
    # Hands are multisets: order must not leak into the key.
    hand_w = "".join(sorted(k.value for k in hands[Color.WHITE]))
    hand_b = "".join(sorted(k.value for k in hands[Color.BLACK]))
    dirs = f"{pawn_directions[Color.WHITE]},{pawn_directions[Color.BLACK]}"
    return f"{squares}|{hand_w}|{hand_b}|{next_player.value}|{dirs}"


def state_key(state: GameState) -> str:
    return canonical_key(state.board, state.hands, state.current_player, state.pawn_directions)
