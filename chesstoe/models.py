from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, NamedTuple, Optional, Tuple, Union

from .constants import GRID_SIZE, INITIAL_HAND, INITIAL_PAWN_DIRECTIONS, MSG_TURN


class Color(str, Enum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def label(self) -> str:
        return self.value.capitalize()


class PieceKind(str, Enum):
    PAWN = "P"
    ROOK = "R"
    KNIGHT = "N"
    BISHOP = "B"


class MoveType(str, Enum):
    PLACE = "place"
    MOVE = "move"


class Square(NamedTuple):
    row: int
    col: int

    def in_bounds(self) -> bool:
        return 0 <= self.row < GRID_SIZE and 0 <= self.col < GRID_SIZE

    def label(self) -> str:
        """Human label used in status text, e.g. ``A1`` for (0, 0)."""
        return f"{chr(ord('A') + self.col)}{self.row + 1}"


@dataclass(frozen=True)
class Piece:
    kind: PieceKind
    color: Color
    id: str


Board = Tuple[Tuple[Optional[Piece], ...], ...]
Hands = Dict[Color, Tuple[PieceKind, ...]]
Winner = Union[Color, str, None]


@dataclass(frozen=True)
class Move:
    """A placement from hand or a relocation on the board.

    ``captured`` and ``piece_id`` are bookkeeping: the generator fills the
    prospective capture, and the transition records the identity of the piece
    that landed so the move can be sent to a peer as-is.
    """

    type: MoveType
    piece: PieceKind
    to: Square
    origin: Optional[Square] = None
    captured: Optional[Piece] = None
    piece_id: Optional[str] = None
    explanation: Optional[str] = None

    @classmethod
    def place(cls, piece: PieceKind, to: Square, piece_id: Optional[str] = None) -> "Move":
        return cls(type=MoveType.PLACE, piece=piece, to=Square(*to), piece_id=piece_id)

    @classmethod
    def relocate(
        cls,
        piece: PieceKind,
        origin: Square,
        to: Square,
        captured: Optional[Piece] = None,
    ) -> "Move":
        return cls(
            type=MoveType.MOVE,
            piece=piece,
            to=Square(*to),
            origin=Square(*origin),
            captured=captured,
        )

    @property
    def is_placement(self) -> bool:
        return self.type is MoveType.PLACE

    def with_explanation(self, text: str) -> "Move":
        return replace(self, explanation=text)


@dataclass(frozen=True)
class GameState:
    """Snapshot of one game. Treated as immutable: transitions build new ones."""

    board: Board
    hands: Hands
    pawn_directions: Dict[Color, int]
    current_player: Color = Color.WHITE
    winner: Winner = None
    winning_line: Optional[Tuple[Square, ...]] = None
    history: Tuple[Move, ...] = ()
    status: str = ""
    mode: str = "ai"
    difficulty: str = "medium"
    position_counts: Dict[str, int] = field(default_factory=dict)
    next_piece_id: int = 1

    @property
    def is_over(self) -> bool:
        return self.winner is not None

    def piece_at(self, square: Square) -> Optional[Piece]:
        return self.board[square[0]][square[1]]


def empty_board() -> Board:
    return tuple(tuple(None for _ in range(GRID_SIZE)) for _ in range(GRID_SIZE))


def new_game(
    mode: str = "ai",
    difficulty: str = "medium",
    first_player: Color = Color.WHITE,
    hand: Tuple[str, ...] = INITIAL_HAND,
) -> GameState:
    # Local import: hashing depends on this module's types.
    from .hashing import canonical_key

    board = empty_board()
    kinds = tuple(PieceKind(k) for k in hand)
    hands: Hands = {Color.WHITE: kinds, Color.BLACK: kinds}
    directions = {Color(c): d for c, d in INITIAL_PAWN_DIRECTIONS.items()}
    key = canonical_key(board, hands, first_player, directions)
    return GameState(
        board=board,
        hands=hands,
        pawn_directions=directions,
        current_player=first_player,
        status=MSG_TURN.format(color=first_player.label),
        mode=mode,
        difficulty=difficulty,
        position_counts={key: 1},
    )
