from __future__ import annotations

import time

import pytest

from chesstoe import AIPlayer, Color, Evaluator, Game, Square, apply_move, legal_moves, new_game
from chesstoe.constants import DRAW


def exhaustive(state, depth, me):
    """Plain minimax without pruning, used as the reference."""
    if depth == 0 or state.is_over:
        return Evaluator.evaluate(state, me)
    moves = legal_moves(state, state.current_player)
    if not moves:
        return Evaluator.DRAW_SCORE
    values = [exhaustive(apply_move(state, m), depth - 1, me) for m in moves]
    return max(values) if state.current_player == me else min(values)


def midgame(make_state):
    return make_state(
        {
            (0, 0): "wR",
            (0, 1): "bN",
            (1, 2): "wN",
            (1, 3): "bB",
            (2, 0): "bP",
            (2, 1): "wP",
            (3, 2): "bR",
            (3, 3): "wB",
        },
        white_hand="",
        black_hand="",
    )


def test_easy_is_reproducible_with_a_seed():
    s = new_game(difficulty="easy")
    a = AIPlayer(seed=5).choose_move(s)
    b = AIPlayer(seed=5).choose_move(s)
    assert a == b
    assert a in [m.with_explanation(a.explanation) for m in legal_moves(s, Color.WHITE)]
    assert a.explanation.startswith("CPU (Easy)")


def test_medium_takes_the_win_before_blocking(make_state):
    s = make_state(
        {(0, 0): "wR", (0, 1): "wN", (0, 2): "wB", (3, 0): "bR", (3, 1): "bN", (3, 2): "bB"},
        white_hand="P",
        black_hand="P",
        turn="black",
    )
    move = AIPlayer(seed=1).choose_move(s, "medium")
    assert move.to == Square(3, 3)
    assert apply_move(s, move).winner is Color.BLACK


def test_medium_blocks_a_three(make_state):
    s = make_state({(0, 0): "wR", (0, 1): "wN", (0, 2): "wB"}, white_hand="P", turn="black")
    move = AIPlayer(seed=1).choose_move(s, "medium")
    assert move.to == Square(0, 3)
    assert "Blocking threat at D1" in move.explanation


def test_medium_prefers_captures(make_state):
    s = make_state({(1, 1): "bR", (1, 3): "wN"}, white_hand="PRB", black_hand="", turn="black")
    move = AIPlayer(seed=1).choose_move(s, "medium")
    assert move.captured is not None
    assert move.to == Square(1, 3)


def test_medium_falls_back_to_a_legal_move():
    s = new_game()
    move = AIPlayer(seed=3).choose_move(s, "medium")
    assert move.is_placement
    assert "No immediate threats" in move.explanation


@pytest.mark.parametrize("depth", [1, 2])
def test_hard_finishes_a_line(make_state, depth):
    s = make_state({(r, 3): "wB" for r in range(3)}, white_hand="PN", black_hand="PRN")
    move = AIPlayer(depth=depth).choose_move(s, "hard")
    assert apply_move(s, move).winner is Color.WHITE


def test_hard_blocks_the_opponent(make_state):
    s = make_state({(0, 0): "wR", (0, 1): "wN", (0, 2): "wB"}, white_hand="P", turn="black")
    move = AIPlayer(depth=2).choose_move(s, "hard")
    assert move.to == Square(0, 3)
    assert move.explanation.startswith("CPU (Hard)")


@pytest.mark.parametrize("depth", [1, 2, 3])
def test_pruning_does_not_change_the_result(make_state, depth):
    s = midgame(make_state)
    me = s.current_player
    result = AIPlayer().search(s, depth)

    values = [exhaustive(apply_move(s, m), depth - 1, me) for m in legal_moves(s, me)]
    best = max(values)
    assert result.score == best
    assert result.best_move == legal_moves(s, me)[values.index(best)]


def test_pruning_matches_exhaustive_search_with_hands(make_state):
    s = make_state({(1, 1): "wN", (2, 2): "bB", (0, 3): "bP"}, white_hand="R", black_hand="N")
    result = AIPlayer().search(s, 2)
    values = [exhaustive(apply_move(s, m), 1, Color.WHITE) for m in legal_moves(s, Color.WHITE)]
    assert result.score == max(values)


def test_hard_is_deterministic_and_does_not_mutate(make_state):
    s = midgame(make_state)
    snapshot = (s.board, dict(s.hands), dict(s.position_counts), s.history)
    first = AIPlayer(depth=2).choose_move(s, "hard")
    second = AIPlayer(depth=2).choose_move(s, "hard")
    assert first == second
    assert (s.board, dict(s.hands), dict(s.position_counts), s.history) == snapshot


def test_time_limited_search_responds_quickly():
    s = apply_move(new_game(), legal_moves(new_game(), Color.WHITE)[5])
    ai = AIPlayer(depth=6, time_limit_s=0.5)
    start = time.time()
    move = ai.choose_move(s, "hard")
    assert move is not None
    assert move in [m.with_explanation(move.explanation) for m in legal_moves(s, s.current_player)]
    assert time.time() - start < 3.0


def test_no_legal_moves_returns_none_and_game_draws(make_state):
    s = make_state({}, white_hand="", black_hand="P")
    assert legal_moves(s, Color.WHITE) == []
    assert AIPlayer().choose_move(s, "hard") is None
    assert AIPlayer().choose_move(s, "easy") is None

    game = Game()
    game.state = s
    assert game.play_ai(AIPlayer()) is None
    assert game.state.winner == DRAW


def test_every_reachable_side_has_a_move():
    ai = AIPlayer(seed=2)
    for seed in range(5):
        ai.rng.seed(seed)
        s = new_game()
        for _ in range(60):
            if s.is_over:
                break
            assert legal_moves(s, s.current_player)
            s = apply_move(s, ai.choose_move(s, "easy"))


def test_default_hard_depth_counts_the_root_move():
    ai = AIPlayer()
    assert ai.depth == 3
    # one ply: every root placement is scored as a leaf
    result = ai.search(new_game(), 1)
    assert result.depth == 1
    assert result.nodes == 2 * 64
