from __future__ import annotations

GRID_SIZE = 4

# One of each kind, in the order hands are dealt.
INITIAL_HAND = ("P", "R", "N", "B")

INITIAL_PAWN_DIRECTIONS = {"white": -1, "black": 1}

DRAW = "draw"

MSG_REPETITION_DRAW = "DRAW: 3-FOLD REPETITION"
MSG_STALEMATE_DRAW = "DRAW: NO LEGAL MOVES"
MSG_WIN = "{color} WINS!"
MSG_TURN = "{color}'s turn."

REPETITION_LIMIT = 3
