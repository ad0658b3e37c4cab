#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Feb  2 12:33:40 2026

@author: petermillington
"""

from payoffs.base import ReturnsScheme
from core.game_config import ReturnsType
import numpy as np

class PointsReturnsScheme(ReturnsScheme):
    """Returns computed from final points, plus the static utility bounds of the game."""

    zero_sum = True
    # per-turn profit adds up to the return
    profit_rewards = False

    def min_utility(self, grid, cfg):
        raise NotImplementedError("Must implement min_utility in subclass.")

    def max_utility(self, grid, cfg):
        raise NotImplementedError("Must implement max_utility in subclass.")

    def utility_sum(self):
        """Constant sum of utilities, or None when the game is general-sum"""
        return 0.0 if self.zero_sum else None

class WinLossReturns(PointsReturnsScheme):
    """
    One point split between the players with the highest total, minus one
    point split between everybody else.  A complete draw returns zeros.
    """

    def returns(self, points, winners, num_players):
        num_winners = len(winners)
        if num_winners == num_players:
            return np.zeros(num_players)
        num_losers = num_players - num_winners
        out = np.full(num_players, -1.0 / num_losers)
        for w in winners:
            out[w] = 1.0 / num_winners
        return out

    def min_utility(self, grid, cfg):
        return -1.0

    def max_utility(self, grid, cfg):
        return 1.0

class PointDifferenceReturns(PointsReturnsScheme):
    """
    Points collected minus the average over players, so zero-sum by construction.
    """

    def returns(self, points, winners, num_players):
        points = np.asarray(points, dtype=float)
        return points - points.sum() / num_players

    def min_utility(self, grid, cfg):
        return 0.0

    def max_utility(self, grid, cfg):
        return (grid.monopoly_price - cfg.marginal_cost) * cfg.num_turns

class TotalPointsReturns(PointsReturnsScheme):
    """
    Each player's return is the points they collected.  Not zero-sum, and the
    lower bound goes negative when the cheapest tier undercuts marginal cost.
    """
    zero_sum = False
    profit_rewards = True

    def returns(self, points, winners, num_players):
        return np.array(points, dtype=float)

    def min_utility(self, grid, cfg):
        return min(0.0, (grid.lo - cfg.marginal_cost) * cfg.num_turns)

    def max_utility(self, grid, cfg):
        return (grid.monopoly_price - cfg.marginal_cost) * cfg.num_turns

RETURNS_REGISTRY = {
    ReturnsType.WIN_LOSS: WinLossReturns(),
    ReturnsType.POINT_DIFFERENCE: PointDifferenceReturns(),
    ReturnsType.TOTAL_POINTS: TotalPointsReturns()}
