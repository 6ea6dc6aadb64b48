"""Chess Tic-Tac-Toe engine: rules, game state, evaluation and AI search.

Modules:
- models: pieces, squares, moves and the immutable game state
- rules: move validation, move generation and four-in-a-line detection
- transition: applying a move to produce the next state
- hashing: canonical position keys for repetition counting
- evaluator: heuristic evaluation function for positions
- ai: random, one-ply and minimax/alpha-beta opponents
- wire: JSON encoding of moves and snapshots
- game: session object holding the authoritative state of a match
"""

from .models import Color, GameState, Move, MoveType, Piece, PieceKind, Square, new_game
from .rules import IllegalReason, MoveCheck, is_legal, legal_moves, validate, winning_line_for
from .transition import apply_move, declare_stalemate
from .hashing import canonical_key, state_key
from .evaluator import Evaluator
from .ai import AIPlayer, Difficulty, SearchResult
from .game import Game

__all__ = [
    "AIPlayer",
    "Color",
    "Difficulty",
    "Evaluator",
    "Game",
    "GameState",
    "IllegalReason",
    "Move",
    "MoveCheck",
    "MoveType",
    "Piece",
    "PieceKind",
    "SearchResult",
    "Square",
    "apply_move",
    "canonical_key",
    "declare_stalemate",
    "is_legal",
    "legal_moves",
    "new_game",
    "state_key",
    "validate",
    "winning_line_for",
]
