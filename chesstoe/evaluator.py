from __future__ import annotations

from typing import FrozenSet

from .constants import DRAW, GRID_SIZE
from .models import Board, Color, GameState, Hands, Square
from .rules import LINES, winning_line_for


class Evaluator:
    """Static evaluation of a position.

    Scores are from the point of view of the ``color`` argument: positive is
    good for that color. A realized four-in-a-line dominates every other term.
    """

    WIN = 100000
    NEAR_LINE = 1000
    # Opponent near-lines weigh more so the search prefers blocking to racing.
    NEAR_LINE_THREAT = 1500
    HALF_LINE = 100
    CENTER = 80
    PIECE_ON_BOARD = 50
    PIECE_IN_HAND = 30
    DRAW_SCORE = 0

    CENTER_SQUARES: FrozenSet[Square] = frozenset(
        Square(r, c) for r in range(1, GRID_SIZE - 1) for c in range(1, GRID_SIZE - 1)
    )

    @classmethod
    def score(cls, board: Board, hands: Hands, color: Color) -> int:
        opponent = color.opponent
        if winning_line_for(board, color):
            return cls.WIN
        if winning_line_for(board, opponent):
            return -cls.WIN

        score = 0

        for line in LINES:
            mine = theirs = 0
            for sq in line:
                p = board[sq.row][sq.col]
                if p is None:
                    continue
                if p.color == color:
                    mine += 1
                else:
                    theirs += 1
            if theirs == 0:
                if mine == GRID_SIZE - 1:
                    score += cls.NEAR_LINE
                elif mine == GRID_SIZE - 2:
                    score += cls.HALF_LINE
            if mine == 0:
                if theirs == GRID_SIZE - 1:
                    score -= cls.NEAR_LINE_THREAT
                elif theirs == GRID_SIZE - 2:
                    score -= cls.HALF_LINE

        # Material and centre control
        for r, row in enumerate(board):
            for c, p in enumerate(row):
                if p is None:
                    continue
                value = cls.PIECE_ON_BOARD
                if (r, c) in cls.CENTER_SQUARES:
                    value += cls.CENTER
                score += value if p.color == color else -value

        # Reserve retention
        score += cls.PIECE_IN_HAND * len(hands[color])
        score -= cls.PIECE_IN_HAND * len(hands[opponent])

        return score

    @classmethod
    def evaluate(cls, state: GameState, color: Color) -> int:
        if state.winner == DRAW:
            return cls.DRAW_SCORE
        return cls.score(state.board, state.hands, color)
