"""Successor-state construction.

``apply_move`` does not re-validate: the search applies moves it generated,
and moves relayed from a peer were validated on the sending side. It must stay
free of side effects so the search can call it speculatively.
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional

from .constants import (
    DRAW,
    GRID_SIZE,
    MSG_REPETITION_DRAW,
    MSG_STALEMATE_DRAW,
    MSG_TURN,
    MSG_WIN,
    REPETITION_LIMIT,
)
from .hashing import canonical_key
from .models import GameState, Move, Piece, PieceKind, Square
from .rules import winning_line_for


def apply_move(state: GameState, move: Move) -> GameState:
    if state.is_over:
        return state

    player = state.current_player
    opponent = player.opponent
    to = Square(*move.to)
    if not to.in_bounds():
        return state

    rows: List[List[Optional[Piece]]] = [list(row) for row in state.board]
    hands = dict(state.hands)
    directions = dict(state.pawn_directions)
    next_id = state.next_piece_id

    if move.is_placement:
        hand = list(hands[player])
        if move.piece not in hand:
            return state
        hand.remove(move.piece)
        hands[player] = tuple(hand)
        piece_id = move.piece_id or f"{player.value[0]}{move.piece.value}{next_id}"
        next_id += 1
        moving = Piece(kind=PieceKind(move.piece), color=player, id=piece_id)
    else:
        if move.origin is None:
            return state
        origin = Square(*move.origin)
        if not origin.in_bounds():
            return state
        moving = rows[origin.row][origin.col]
        if moving is None:
            return state
        rows[origin.row][origin.col] = None

    captured = rows[to.row][to.col]
    if captured is not None:
        # The kind goes back to the player who lost it.
        hands[captured.color] = hands[captured.color] + (captured.kind,)

    rows[to.row][to.col] = moving

    if moving.kind == PieceKind.PAWN:
        if to.row == 0:
            directions[player] = 1
        elif to.row == GRID_SIZE - 1:
            directions[player] = -1

    board = tuple(tuple(row) for row in rows)
    recorded = replace(move, to=to, captured=captured, piece_id=moving.id)
    history = state.history + (recorded,)

    line = winning_line_for(board, player)
    if line is not None:
        return replace(
            state,
            board=board,
            hands=hands,
            pawn_directions=directions,
            winner=player,
            winning_line=line,
            history=history,
            status=MSG_WIN.format(color=player.value.upper()),
            next_piece_id=next_id,
        )

    key = canonical_key(board, hands, opponent, directions)
    counts = dict(state.position_counts)
    counts[key] = counts.get(key, 0) + 1

    if counts[key] >= REPETITION_LIMIT:
        winner = DRAW
        status = MSG_REPETITION_DRAW
    else:
        winner = None
        status = move.explanation or MSG_TURN.format(color=opponent.label)

    return replace(
        state,
        board=board,
        hands=hands,
        pawn_directions=directions,
        current_player=opponent,
        winner=winner,
        winning_line=None,
        history=history,
        status=status,
        position_counts=counts,
        next_piece_id=next_id,
    )


def declare_stalemate(state: GameState) -> GameState:
    """End the game as a draw because the side to move has no legal move."""
    if state.is_over:
        return state
    return replace(state, winner=DRAW, winning_line=None, status=MSG_STALEMATE_DRAW)
