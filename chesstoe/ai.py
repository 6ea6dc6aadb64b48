from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple, Union

from .constants import GRID_SIZE
from .evaluator import Evaluator
from .models import Color, GameState, Move
from .rules import LINES, legal_moves, line_counts
from .transition import apply_move

logger = logging.getLogger(__name__)

INF = 10**9


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass
class SearchResult:
    best_move: Optional[Move]
    score: int
    nodes: int
    depth: int = 0


class AIPlayer:
    """CPU opponent: random, one-ply tactical, or minimax with alpha-beta pruning.

    The player keeps no search state between calls; only the RNG used by the
    easy and medium strategies lives on the instance.
    """

    def __init__(
        self,
        depth: int = 3,
        time_limit_s: Optional[float] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.depth = depth
        self.time_limit_s = time_limit_s
        self.rng = random.Random(seed)
        self._deadline_ts: Optional[float] = None

    def choose_move(
        self,
        state: GameState,
        difficulty: Union[Difficulty, str, None] = None,
    ) -> Optional[Move]:
        """Pick a move for the player to move, or ``None`` if there is none.

        The returned move carries a short explanation that the transition
        shows as status text.
        """
        level = Difficulty(difficulty or state.difficulty)
        moves = legal_moves(state, state.current_player)
        if not moves:
            logger.warning("no legal moves for %s", state.current_player.value)
            return None

        if level is Difficulty.EASY:
            move = self.rng.choice(moves)
            return move.with_explanation("CPU (Easy): Choosing a move at random.")
        if level is Difficulty.MEDIUM:
            return self._choose_medium(state, moves)
        return self._choose_hard(state)

    def _choose_medium(self, state: GameState, moves: List[Move]) -> Move:
        player = state.current_player
        opponent = player.opponent

        for move in moves:
            if apply_move(state, move).winner == player:
                return move.with_explanation("CPU (Medium): Finishing the line for a win!")

        for line in LINES:
            theirs, _, empty = line_counts(state.board, line, opponent)
            if theirs == GRID_SIZE - 1 and len(empty) == 1:
                target = empty[0]
                for move in moves:
                    if move.to == target:
                        return move.with_explanation(
                            f"CPU (Medium): Blocking threat at {target.label()}"
                        )

        for move in moves:
            if move.captured is not None:
                return move.with_explanation("CPU (Medium): Prioritizing piece capture.")

        return self.rng.choice(moves).with_explanation(
            "CPU (Medium): No immediate threats, moving strategically."
        )

    def _choose_hard(self, state: GameState) -> Optional[Move]:
        result = self.search(state, self.depth, self.time_limit_s)
        move = result.best_move
        if move is None:
            return None
        if move.is_placement:
            feedback = f"CPU (Hard): Tactical drop to {move.to.label()}."
        else:
            where = "Center" if move.to in Evaluator.CENTER_SQUARES else "strategic square"
            feedback = f"CPU (Hard): Calculated move to {where}."
        return move.with_explanation(feedback)

    def search(
        self,
        state: GameState,
        depth: int,
        time_limit_s: Optional[float] = None,
    ) -> SearchResult:
        """Search ``depth`` plies (the root move counts as one).

        The default Hard depth of 3 is the root move plus two replies, one ply
        shallower than the browser version of the game, which searched the root
        plus three.

        With a time limit the search deepens one ply at a time and returns the
        deepest fully-computed result; without one it goes straight to
        ``depth`` and is deterministic.
        """
        started = time.time()
        self._deadline_ts = (started + time_limit_s) if time_limit_s else None
        best = SearchResult(best_move=None, score=-INF, nodes=0)
        nodes_total = 0

        first = 1 if self._deadline_ts is not None else max(1, depth)
        try:
            for d in range(first, max(1, depth) + 1):
                try:
                    result = self._alphabeta_root(state, d)
                except _SearchTimeout:
                    break
                nodes_total += result.nodes
                if result.best_move is not None:
                    best = result
        finally:
            self._deadline_ts = None

        if best.best_move is None:
            # Timed out before depth 1 finished: fall back to the first move.
            moves = legal_moves(state, state.current_player)
            if moves:
                best = SearchResult(best_move=moves[0], score=-INF, nodes=0, depth=0)

        best.nodes = nodes_total
        logger.debug(
            "search depth=%d nodes=%d score=%d elapsed=%.3fs",
            best.depth,
            nodes_total,
            best.score,
            time.time() - started,
        )
        return best

    def _alphabeta_root(self, state: GameState, depth: int) -> SearchResult:
        me = state.current_player
        best_score = -INF
        best_move: Optional[Move] = None
        alpha = -INF
        nodes = 0

        # Generation order: ties keep the first move generated.
        for move in legal_moves(state, me):
            self._guard_time()
            child = apply_move(state, move)
            score, sub_nodes = self._alphabeta(child, depth - 1, alpha, INF, False, me)
            nodes += sub_nodes + 1
            if score > best_score:
                best_score = score
                best_move = move
            alpha = max(alpha, best_score)

        if best_move is None:
            best_score = Evaluator.evaluate(state, me)

        return SearchResult(best_move=best_move, score=best_score, nodes=nodes, depth=depth)

    def _alphabeta(
        self,
        state: GameState,
        depth: int,
        alpha: int,
        beta: int,
        maximizing: bool,
        me: Color,
    ) -> Tuple[int, int]:
        if depth == 0 or state.is_over:
            return Evaluator.evaluate(state, me), 1

        moves = legal_moves(state, state.current_player)
        if not moves:
            return Evaluator.DRAW_SCORE, 1

        # Order moves: prefer captures
        moves.sort(key=lambda m: 0 if m.captured is not None else 1)

        nodes = 0
        if maximizing:
            value = -INF
            for move in moves:
                self._guard_time()
                score, child_nodes = self._alphabeta(
                    apply_move(state, move), depth - 1, alpha, beta, False, me
                )
                nodes += child_nodes + 1
                value = max(value, score)
                alpha = max(alpha, value)
                if beta <= alpha:
                    break
            return value, nodes

        value = INF
        for move in moves:
            self._guard_time()
            score, child_nodes = self._alphabeta(
                apply_move(state, move), depth - 1, alpha, beta, True, me
            )
            nodes += child_nodes + 1
            value = min(value, score)
            beta = min(beta, value)
            if beta <= alpha:
                break
        return value, nodes

    def _guard_time(self) -> None:
        if self._deadline_ts is None:
            return
        if time.time() >= self._deadline_ts:
            raise _SearchTimeout()


class _SearchTimeout(Exception):
    pass
