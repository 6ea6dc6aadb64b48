"""Movement rules, move generation and the four-in-a-line check."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .constants import GRID_SIZE
from .models import Board, Color, GameState, Move, Piece, PieceKind, Square


class IllegalReason(str, Enum):
    OUT_OF_BOUNDS = "out_of_bounds"
    NO_MOVEMENT = "no_movement"
    FRIENDLY_FIRE = "friendly_fire"
    NOT_STRAIGHT = "not_straight"
    NOT_DIAGONAL = "not_diagonal"
    NOT_L_SHAPE = "not_l_shape"
    PATH_BLOCKED = "path_blocked"
    INVALID_PAWN_MOVE = "invalid_pawn_move"
    UNKNOWN_PIECE_TYPE = "unknown_piece_type"
    NOT_IN_HAND = "not_in_hand"
    SQUARE_OCCUPIED = "square_occupied"
    NO_PIECE = "no_piece"
    WRONG_TURN = "wrong_turn"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class MoveCheck:
    legal: bool
    reason: Optional[IllegalReason] = None
    message: str = ""

    def __bool__(self) -> bool:
        return self.legal


LEGAL = MoveCheck(True)


def _illegal(reason: IllegalReason, message: str) -> MoveCheck:
    return MoveCheck(False, reason, message)


def all_lines(size: int = GRID_SIZE) -> Tuple[Tuple[Square, ...], ...]:
    """Rows, then columns, then the main and anti diagonal."""
    rows = [tuple(Square(r, c) for c in range(size)) for r in range(size)]
    cols = [tuple(Square(r, c) for r in range(size)) for c in range(size)]
    diag = tuple(Square(i, i) for i in range(size))
    anti = tuple(Square(i, size - 1 - i) for i in range(size))
    return tuple(rows + cols + [diag, anti])


LINES = all_lines()
SQUARES = tuple(Square(r, c) for r in range(GRID_SIZE) for c in range(GRID_SIZE))


def line_counts(board: Board, line: Tuple[Square, ...], color: Color) -> Tuple[int, int, List[Square]]:
    """Return (own pieces, opposing pieces, empty squares) on ``line``."""
    mine = theirs = 0
    empty: List[Square] = []
    for sq in line:
        p = board[sq.row][sq.col]
        if p is None:
            empty.append(sq)
        elif p.color == color:
            mine += 1
        else:
            theirs += 1
    return mine, theirs, empty


def winning_line_for(board: Board, color: Color) -> Optional[Tuple[Square, ...]]:
    for line in LINES:
        if all(
            board[sq.row][sq.col] is not None and board[sq.row][sq.col].color == color
            for sq in line
        ):
            return line
    return None


def _sign(n: int) -> int:
    return (n > 0) - (n < 0)


def _path_clear(board: Board, origin: Square, to: Square) -> bool:
    dr, dc = _sign(to.row - origin.row), _sign(to.col - origin.col)
    r, c = origin.row + dr, origin.col + dc
    while (r, c) != (to.row, to.col):
        if board[r][c] is not None:
            return False
        r += dr
        c += dc
    return True


def validate(state: GameState, piece: Piece, origin: Square, to: Square) -> MoveCheck:
    """Check a board move of ``piece`` from ``origin`` to ``to``.

    Failures are returned, not raised, so UIs can use this for move hints.
    """
    origin, to = Square(*origin), Square(*to)
    if not to.in_bounds():
        return _illegal(IllegalReason.OUT_OF_BOUNDS, "Move is out of bounds.")
    if origin == to:
        return _illegal(IllegalReason.NO_MOVEMENT, "The piece must move.")

    board = state.board
    target = board[to.row][to.col]
    if target is not None and target.color == piece.color:
        return _illegal(IllegalReason.FRIENDLY_FIRE, "You cannot capture your own piece.")

    dr = to.row - origin.row
    dc = to.col - origin.col

    if piece.kind == PieceKind.ROOK:
        if dr != 0 and dc != 0:
            return _illegal(IllegalReason.NOT_STRAIGHT, "Rooks move straight.")
        if not _path_clear(board, origin, to):
            return _illegal(IllegalReason.PATH_BLOCKED, "The path is blocked.")
        return LEGAL

    if piece.kind == PieceKind.BISHOP:
        if abs(dr) != abs(dc):
            return _illegal(IllegalReason.NOT_DIAGONAL, "Bishops move diagonally.")
        if not _path_clear(board, origin, to):
            return _illegal(IllegalReason.PATH_BLOCKED, "The path is blocked.")
        return LEGAL

    if piece.kind == PieceKind.KNIGHT:
        if (abs(dr), abs(dc)) not in ((2, 1), (1, 2)):
            return _illegal(IllegalReason.NOT_L_SHAPE, "Knights move in an L-shape.")
        return LEGAL

    if piece.kind == PieceKind.PAWN:
        forward = state.pawn_directions[piece.color]
        if dr == forward and dc == 0:
            if target is not None:
                return _illegal(
                    IllegalReason.INVALID_PAWN_MOVE,
                    "Pawns can only move forward into empty squares.",
                )
            return LEGAL
        if dr == forward and abs(dc) == 1:
            if target is None:
                return _illegal(IllegalReason.INVALID_PAWN_MOVE, "Pawns can only capture diagonally.")
            return LEGAL
        return _illegal(IllegalReason.INVALID_PAWN_MOVE, "Invalid pawn movement.")

    return _illegal(IllegalReason.UNKNOWN_PIECE_TYPE, "Unknown piece type.")


def legal_moves(state: GameState, color: Color) -> List[Move]:
    """All placements then all board moves for ``color``, in a fixed order."""
    board = state.board
    moves: List[Move] = []

    empties = [sq for sq in SQUARES if board[sq.row][sq.col] is None]
    for kind in dict.fromkeys(state.hands[color]):
        for sq in empties:
            moves.append(Move.place(kind, sq))

    for origin in SQUARES:
        piece = board[origin.row][origin.col]
        if piece is None or piece.color != color:
            continue
        for to in SQUARES:
            if to == origin:
                continue
            if validate(state, piece, origin, to).legal:
                moves.append(Move.relocate(piece.kind, origin, to, captured=board[to.row][to.col]))

    return moves


def is_legal(state: GameState, move: Move) -> MoveCheck:
    """Full legality of ``move`` for the player to move in ``state``."""
    if state.is_over:
        return _illegal(IllegalReason.GAME_OVER, "The game is over.")
    to = Square(*move.to)
    if not to.in_bounds():
        return _illegal(IllegalReason.OUT_OF_BOUNDS, "Move is out of bounds.")

    player = state.current_player
    if move.is_placement:
        if move.piece not in state.hands[player]:
            return _illegal(IllegalReason.NOT_IN_HAND, "That piece is not in your hand.")
        if state.piece_at(to) is not None:
            return _illegal(IllegalReason.SQUARE_OCCUPIED, "Pieces can only be placed on empty squares.")
        return LEGAL

    if move.origin is None or not Square(*move.origin).in_bounds():
        return _illegal(IllegalReason.NO_PIECE, "There is no piece to move.")
    piece = state.piece_at(move.origin)
    if piece is None:
        return _illegal(IllegalReason.NO_PIECE, "There is no piece to move.")
    if piece.color != player:
        return _illegal(IllegalReason.WRONG_TURN, "That piece belongs to your opponent.")
    return validate(state, piece, move.origin, to)
