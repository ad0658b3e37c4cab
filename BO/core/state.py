#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Feb  2 14:02:19 2026

@author: petermillington
"""
import copy
import logging
from numbers import Integral
from typing import List, Sequence, Set

import numpy as np

from core.demand import net_profits
from core.game_config import DEFAULT_VERTICAL_DIFFERENTIATION
from observation.allocator import ContiguousAllocator

logger = logging.getLogger(__name__)

SIMULTANEOUS_PLAYER_ID = -2
INVALID_PLAYER = -3        # also marks a tied round in the win sequence
TERMINAL_PLAYER_ID = -4


class InvalidActionError(ValueError):
    """Raised when a joint action cannot be applied to a state."""


def round_winner(actions: Sequence[int]) -> int:
    """Player with the strictly lowest price tier, INVALID_PLAYER on a tie."""
    min_price = min(actions)
    if list(actions).count(min_price) == 1:
        return list(actions).index(min_price)
    return INVALID_PLAYER


class BertrandOligopolyState:
    """
    One game in progress.

    Every turn each firm simultaneously picks a price tier. The joint action
    is turned into prices, the market is split with a logit demand model and
    each firm's profit is added to its points. The firm with the unique lowest
    tier is recorded as the round winner; this is only an observable signal
    and does not change points.

    Attributes
    ----------
    game : BertrandOligopolyGame
        Game the state belongs to (shared, never mutated).
    current_turn : int
        Number of completed turns.
    points : np.ndarray
        Shape (players,). Cumulative profit, real valued.
    net_profit : np.ndarray
        Shape (players,). Profit earned on the most recent turn.
    vertical_differentiation : np.ndarray
        Shape (players,). Quality level of each firm, uniform.
    actions_history : List[tuple]
        One joint action per completed turn.
    win_sequence : List[int]
        One round winner (or INVALID_PLAYER for a tie) per completed turn.
    winners : Set[int]
        Players with the highest points, filled when the game ends.

    Notes
    -----
    len(actions_history) == len(win_sequence) == current_turn always holds,
    and the state is terminal exactly when current_turn == num_turns.
    """

    def __init__(self, game):
        self.game = game
        self.num_players = game.num_players()

        self.current_turn = 0
        self.points = np.zeros(self.num_players, dtype=float)
        self.net_profit = np.zeros(self.num_players, dtype=float)
        self.vertical_differentiation = np.full(
            self.num_players, DEFAULT_VERTICAL_DIFFERENTIATION, dtype=float)
        self.actions_history: List[tuple] = []
        self.win_sequence: List[int] = []
        self.winners: Set[int] = set()

        self._current_player = SIMULTANEOUS_PLAYER_ID

    # -------- Node queries --------
    def current_player(self) -> int:
        return self._current_player

    def is_terminal(self) -> bool:
        return self._current_player == TERMINAL_PLAYER_ID

    def is_simultaneous_node(self) -> bool:
        return self._current_player == SIMULTANEOUS_PLAYER_ID

    def legal_actions(self, player: int) -> Sequence[int]:
        """
        Price tiers open to player. For SIMULTANEOUS_PLAYER_ID the flat joint
        actions are returned as a lazy range: there are num_options ** players
        of them.
        """
        if self.is_terminal():
            return []
        if player == SIMULTANEOUS_PLAYER_ID:
            return range(self.game.num_options ** self.num_players)
        self._check_player(player)
        return list(range(self.game.num_options))

    def history(self) -> List[List[int]]:
        return [list(joint) for joint in self.actions_history]

    def prices(self) -> np.ndarray:
        """Shape (current_turn, players): real price charged by every firm."""
        if not self.actions_history:
            return np.zeros((0, self.num_players))
        return self.game.price_grid.price(np.array(self.actions_history, dtype=float))

    # -------- Transitions --------
    def apply_actions(self, actions: Sequence[int]) -> None:
        """Play one turn with one price tier per player."""
        actions = self._validate(actions)
        grid = self.game.price_grid
        cfg = self.game.config

        self.win_sequence.append(round_winner(actions))

        prices = grid.price(np.array(actions, dtype=float))
        self.net_profit = net_profits(prices,
                                      cfg.marginal_cost,
                                      self.vertical_differentiation,
                                      cfg.horizontal_differentiation,
                                      cfg.outside_good)
        self.points = self.points + self.net_profit

        self.actions_history.append(actions)
        self.current_turn += 1
        logger.debug("turn %d: actions=%s winner=%d profit=%s",
                     self.current_turn, actions, self.win_sequence[-1], self.net_profit)

        if self.current_turn == cfg.num_turns:
            self._finish()

    def apply_action(self, flat_action: int) -> None:
        """Apply a flat joint action (player 0 is the least significant digit)."""
        self.apply_actions(self.decode_joint_action(flat_action))

    def decode_joint_action(self, flat_action: int) -> List[int]:
        num_options = self.game.num_options
        if not isinstance(flat_action, Integral) or not (
                0 <= flat_action < num_options ** self.num_players):
            raise InvalidActionError(f"Invalid flat joint action: {flat_action}")
        actions = []
        for _ in range(self.num_players):
            actions.append(int(flat_action % num_options))
            flat_action //= num_options
        return actions

    def _validate(self, actions) -> tuple:
        if self.is_terminal():
            raise InvalidActionError("Cannot apply actions to a terminal state")
        actions = list(actions)
        if len(actions) != self.num_players:
            raise InvalidActionError(
                f"Expected {self.num_players} actions, got {len(actions)}")
        for p, a in enumerate(actions):
            if not isinstance(a, Integral) or not 0 <= a < self.game.num_options:
                raise InvalidActionError(
                    f"Invalid action {a!r} for player {p}: "
                    f"must be in [0, {self.game.num_options})")
        return tuple(int(a) for a in actions)

    def _finish(self) -> None:
        # exact float comparison, no tolerance
        max_points = self.points.max()
        self.winners = {p for p in range(self.num_players) if self.points[p] == max_points}
        self._current_player = TERMINAL_PLAYER_ID
        logger.debug("game over after %d turns: points=%s winners=%s",
                     self.current_turn, self.points, sorted(self.winners))

    # -------- Payoffs --------
    def returns(self) -> np.ndarray:
        if not self.is_terminal():
            return np.zeros(self.num_players)
        return self.game.returns_scheme.returns(self.points, self.winners, self.num_players)

    def player_return(self, player: int) -> float:
        self._check_player(player)
        return float(self.returns()[player])

    def rewards(self) -> np.ndarray:
        """
        Reward for the most recent turn; summed over a game it equals returns().

        When returns are the points themselves this is the turn's profit,
        otherwise the whole return is paid on the terminal turn.
        """
        if self.current_turn == 0:
            return np.zeros(self.num_players)
        if self.game.returns_scheme.profit_rewards:
            return self.net_profit.copy()
        return self.returns()

    # -------- Strings --------
    def action_to_string(self, player: int, action: int) -> str:
        if player == SIMULTANEOUS_PLAYER_ID:
            joint = self.decode_joint_action(action)
            return "[" + ", ".join(self.action_to_string(p, a) for p, a in enumerate(joint)) + "]"
        if not 0 <= action < self.game.num_options:
            raise InvalidActionError(f"Invalid action {action} for player {player}")
        return f"[P{player}]: {action + 1}"

    def to_string(self) -> str:
        result = ""
        for p in range(self.num_players):
            result += f"P{p} profit: {self.net_profit[p]:g}\n"

        # in imperfect information the full state depends on every action sequence
        if self.game.config.imp_info:
            for p in range(self.num_players):
                seq = "".join(f"{joint[p]} " for joint in self.actions_history)
                result += f"P{p} actions: {seq}\n"

        result += "\n"
        points_line = "Points: " + "".join(f"{x:g} " for x in self.points)
        return result + points_line + "\n"

    def __str__(self):
        return self.to_string()

    # -------- Observations --------
    def information_state_string(self, player: int) -> str:
        return self.game.info_state_observer.string_from(self, player)

    def observation_string(self, player: int) -> str:
        return self.game.default_observer.string_from(self, player)

    def information_state_tensor(self, player: int) -> np.ndarray:
        return self.game.info_state_observer.tensor(self, player)

    def observation_tensor(self, player: int) -> np.ndarray:
        return self.game.default_observer.tensor(self, player)

    def write_information_state_tensor(self, player: int, values: np.ndarray) -> None:
        self._check_buffer(values, self.game.information_state_tensor_size())
        self.game.info_state_observer.write_tensor(self, player, ContiguousAllocator(values))

    def write_observation_tensor(self, player: int, values: np.ndarray) -> None:
        self._check_buffer(values, self.game.observation_tensor_size())
        self.game.default_observer.write_tensor(self, player, ContiguousAllocator(values))

    # -------- Helpers --------
    def clone(self) -> "BertrandOligopolyState":
        other = copy.copy(self)
        other.points = self.points.copy()
        other.net_profit = self.net_profit.copy()
        other.vertical_differentiation = self.vertical_differentiation.copy()
        other.actions_history = list(self.actions_history)
        other.win_sequence = list(self.win_sequence)
        other.winners = set(self.winners)
        return other

    def _check_player(self, player):
        if not 0 <= player < self.num_players:
            raise ValueError(f"player must be in [0, {self.num_players}), got {player}")

    @staticmethod
    def _check_buffer(values, size):
        if values.ndim != 1 or values.size != size:
            raise ValueError(f"Expected a flat buffer of {size} values, got shape {values.shape}")
