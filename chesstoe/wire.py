"""JSON-ready encoding of moves and game snapshots.

Moves use the same field names the browser client and peers exchange:
``type``, ``piece``, ``from``, ``to``, ``captured``, ``pieceId`` and
``logicFeedback``. Squares are ``{"r": row, "c": col}`` objects.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .errors import MoveFormatError
from .hashing import state_key
from .models import Color, GameState, Move, MoveType, Piece, PieceKind, Square
from .rules import legal_moves


def square_to_wire(square: Optional[Square]) -> Optional[Dict[str, int]]:
    if square is None:
        return None
    return {"r": square[0], "c": square[1]}


def square_from_wire(data: Any, field: str) -> Square:
    if isinstance(data, dict):
        r, c = data.get("r"), data.get("c")
    elif isinstance(data, (list, tuple)) and len(data) == 2:
        r, c = data
    else:
        raise MoveFormatError(f"'{field}' must be an object with 'r' and 'c'")
    if not isinstance(r, int) or not isinstance(c, int) or isinstance(r, bool) or isinstance(c, bool):
        raise MoveFormatError(f"'{field}' coordinates must be integers")
    square = Square(r, c)
    if not square.in_bounds():
        raise MoveFormatError(f"'{field}' is off the board: ({r}, {c})")
    return square


def piece_to_wire(piece: Optional[Piece]) -> Optional[Dict[str, str]]:
    if piece is None:
        return None
    return {"type": piece.kind.value, "color": piece.color.value, "id": piece.id}


def piece_from_wire(data: Any) -> Optional[Piece]:
    if data is None:
        return None
    if not isinstance(data, dict):
        raise MoveFormatError("'captured' must be an object")
    try:
        return Piece(
            kind=PieceKind(data.get("type")),
            color=Color(data.get("color")),
            id=str(data.get("id", "")),
        )
    except ValueError as exc:
        raise MoveFormatError(f"Invalid captured piece: {exc}") from exc


def move_to_wire(move: Move) -> Dict[str, Any]:
    return {
        "type": move.type.value,
        "piece": move.piece.value,
        "from": square_to_wire(move.origin),
        "to": square_to_wire(move.to),
        "captured": piece_to_wire(move.captured),
        "pieceId": move.piece_id,
        "logicFeedback": move.explanation,
    }


def move_from_wire(data: Any) -> Move:
    if not isinstance(data, dict):
        raise MoveFormatError("Move must be a JSON object")
    try:
        move_type = MoveType(data.get("type"))
    except ValueError:
        raise MoveFormatError(f"Unknown move type: {data.get('type')!r}") from None
    try:
        kind = PieceKind(data.get("piece"))
    except ValueError:
        raise MoveFormatError(f"Unknown piece type: {data.get('piece')!r}") from None

    to = square_from_wire(data.get("to"), "to")
    origin = None
    if move_type is MoveType.MOVE:
        origin = square_from_wire(data.get("from"), "from")

    piece_id = data.get("pieceId")
    if piece_id is not None and not isinstance(piece_id, str):
        raise MoveFormatError("'pieceId' must be a string")
    explanation = data.get("logicFeedback")

    return Move(
        type=move_type,
        piece=kind,
        to=to,
        origin=origin,
        captured=piece_from_wire(data.get("captured")),
        piece_id=piece_id,
        explanation=explanation if isinstance(explanation, str) else None,
    )


def board_to_wire(state: GameState) -> List[List[Optional[Dict[str, str]]]]:
    return [[piece_to_wire(p) for p in row] for row in state.board]


def state_to_wire(state: GameState) -> Dict[str, Any]:
    winner = state.winner.value if isinstance(state.winner, Color) else state.winner
    last = state.history[-1] if state.history else None
    return {
        "board": board_to_wire(state),
        "hands": {c.value: [k.value for k in state.hands[c]] for c in Color},
        "pawnDirections": {c.value: state.pawn_directions[c] for c in Color},
        "currentPlayer": state.current_player.value,
        "winner": winner,
        "winningLine": [square_to_wire(sq) for sq in state.winning_line] if state.winning_line else None,
        "statusMessage": state.status,
        "gameMode": state.mode,
        "difficulty": state.difficulty,
        "moveCount": len(state.history),
        "lastMove": move_to_wire(last) if last else None,
        "legalMoves": []
        if state.is_over
        else [move_to_wire(m) for m in legal_moves(state, state.current_player)],
        "key": state_key(state),
    }
