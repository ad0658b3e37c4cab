#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Feb  9 09:47:31 2026

@author: petermillington
"""

"""
Integration tests for complete games

Whole games are played through the public state API; bookkeeping invariants
and observation views are checked along the way.
"""

import pytest
import numpy as np
from core.game import BertrandOligopolyGame, GAME_TYPE
from core.game_config import GameConfig
from core.state import INVALID_PLAYER, SIMULTANEOUS_PLAYER_ID, TERMINAL_PLAYER_ID


def random_playthrough(game, rng):
    """Play one game with random actions, checking invariants after every turn."""
    state = game.new_initial_state()
    size = game.num_players() * game.num_distinct_actions()
    while not state.is_terminal():
        assert state.current_player() == SIMULTANEOUS_PLAYER_ID
        actions = [int(rng.choice(state.legal_actions(p))) for p in range(game.num_players())]
        state.apply_actions(actions)

        assert len(state.actions_history) == len(state.win_sequence) == state.current_turn
        assert state.win_sequence[-1] == (
            actions.index(min(actions)) if actions.count(min(actions)) == 1 else INVALID_PLAYER)
        for p in range(game.num_players()):
            assert state.information_state_tensor(p).shape == (size,)
            assert state.observation_tensor(p).shape == (size,)
            assert isinstance(state.information_state_string(p), str)
            assert isinstance(state.observation_string(p), str)
    return state


class TestRandomSimulations:
    """Random games under many configurations"""

    @pytest.mark.parametrize("params", [
        {},
        {"num_turns": 3},
        {"players": 4, "num_turns": 10, "imp_info": True},
        {"players": 3, "num_turns": 8, "imp_info": True, "egocentric": True},
        {"players": 10, "num_options": 2, "num_turns": 5},
        {"returns_type": "win_loss", "num_turns": 20},
        {"returns_type": "point_difference", "players": 5, "num_turns": 20},
        {"marginal_cost": 2, "num_turns": 15, "returns_type": "total_points"},
    ])
    def test_random_games_complete(self, params):
        game = BertrandOligopolyGame(params)
        rng = np.random.default_rng(1234)

        for _ in range(3):
            state = random_playthrough(game, rng)

            assert state.is_terminal()
            assert state.current_player() == TERMINAL_PLAYER_ID
            assert state.current_turn == game.max_game_length()
            assert state.winners
            assert max(state.points) == state.points[min(state.winners)]

            returns = state.returns()
            if game.utility_sum() is not None:
                assert returns.sum() == pytest.approx(game.utility_sum(), abs=1e-9)
            if game.returns_type().value == "total_points":
                assert np.array_equal(returns, state.points)
                assert np.all(returns >= game.min_utility())
            if game.returns_type().value == "win_loss":
                assert np.all((returns >= -1.0) & (returns <= 1.0))

    def test_same_actions_same_outcome(self):
        game = BertrandOligopolyGame({"players": 3, "num_turns": 10, "imp_info": True})
        a = random_playthrough(game, np.random.default_rng(7))
        b = random_playthrough(game, np.random.default_rng(7))

        assert np.array_equal(a.points, b.points)
        assert a.information_state_string(1) == b.information_state_string(1)

    def test_flat_joint_actions_match_apply_actions(self):
        game = BertrandOligopolyGame({"players": 3, "num_options": 4, "num_turns": 5})
        rng = np.random.default_rng(11)
        flat_state = game.new_initial_state()
        joint_state = game.new_initial_state()

        while not flat_state.is_terminal():
            flat = int(rng.integers(len(flat_state.legal_actions(SIMULTANEOUS_PLAYER_ID))))
            joint_state.apply_actions(joint_state.decode_joint_action(flat))
            flat_state.apply_action(flat)

        assert np.array_equal(flat_state.points, joint_state.points)
        assert flat_state.history() == joint_state.history()


class TestEgocentricView:
    """Swapping seats must not change what the player sees in egocentric mode"""

    @pytest.mark.parametrize("imp_info", [False, True])
    def test_symmetric_action_sequences(self, imp_info):
        game = BertrandOligopolyGame({"egocentric": True, "players": 2,
                                      "num_turns": 3, "imp_info": imp_info})
        seq1 = [3, 2, 0]
        seq2 = [0, 1, 2]

        histories = []
        for as_player in range(game.num_players()):
            state = game.new_initial_state()
            history = []
            for t in range(game.max_game_length()):
                joint = [-1] * game.num_players()
                joint[as_player] = seq1[t]
                joint[(as_player + 1) % game.num_players()] = seq2[t]
                state.apply_actions(joint)
                history.append(state.information_state_tensor(as_player))
            histories.append(history)

        assert len(histories) == game.num_players()
        for t0, t1 in zip(histories[0], histories[1]):
            assert np.array_equal(t0, t1)

    def test_absolute_encoding_differs_by_seat(self):
        game = BertrandOligopolyGame({"egocentric": False, "players": 2,
                                      "num_turns": 3, "imp_info": True})
        views = []
        for as_player in range(2):
            state = game.new_initial_state()
            joint = [0, 0]
            joint[as_player] = 3
            joint[1 - as_player] = 0
            state.apply_actions(joint)
            views.append(state.information_state_tensor(as_player))

        assert not np.array_equal(views[0], views[1])


class TestGameInfo:

    def test_game_type(self):
        game = BertrandOligopolyGame({"imp_info": True, "returns_type": "win_loss"})

        assert GAME_TYPE.short_name == "bertrand_oligopoly"
        assert game.game_type().dynamics == "simultaneous"
        assert game.game_type().information == "imperfect_information"
        assert game.game_type().utility == "zero_sum"
        assert BertrandOligopolyGame().game_type().utility == "general_sum"
        assert BertrandOligopolyGame().game_type().information == "perfect_information"

    def test_static_queries(self):
        game = BertrandOligopolyGame(GameConfig(players=4, num_options=9, num_turns=12))

        assert game.num_players() == 4
        assert game.num_distinct_actions() == 9
        assert game.max_game_length() == 12
        assert game.max_chance_outcomes() == 0
        assert game.utility_sum() is None

    def test_repr_lists_parameters(self):
        text = repr(BertrandOligopolyGame({"players": 3}))

        assert text.startswith("bertrand_oligopoly(")
        assert "players=3" in text
        assert "returns_type=total_points" in text
