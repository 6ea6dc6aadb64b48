from __future__ import annotations

from dataclasses import replace

import pytest

from chesstoe import Color, Piece, PieceKind, canonical_key, new_game
from chesstoe.constants import GRID_SIZE


def build_state(pieces=None, white_hand="PRNB", black_hand="PRNB", turn="white", directions=None):
    """Build a state from a ``{(r, c): "wR"}`` layout and hand strings."""
    rows = [[None] * GRID_SIZE for _ in range(GRID_SIZE)]
    for n, ((r, c), code) in enumerate(sorted((pieces or {}).items())):
        color = Color.WHITE if code[0] == "w" else Color.BLACK
        rows[r][c] = Piece(kind=PieceKind(code[1]), color=color, id=f"t{n}")
    board = tuple(tuple(row) for row in rows)
    hands = {
        Color.WHITE: tuple(PieceKind(k) for k in white_hand),
        Color.BLACK: tuple(PieceKind(k) for k in black_hand),
    }
    dirs = {Color.WHITE: -1, Color.BLACK: 1}
    if directions:
        dirs.update({Color(k): v for k, v in directions.items()})
    player = Color(turn)
    return replace(
        new_game(),
        board=board,
        hands=hands,
        pawn_directions=dirs,
        current_player=player,
        position_counts={canonical_key(board, hands, player, dirs): 1},
        next_piece_id=100,
    )


@pytest.fixture
def make_state():
    return build_state
