#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Wed Feb  4 09:12:33 2026

@author: petermillington
"""
import numpy as np
import pandas as pd

from core.state import INVALID_PLAYER

class StatsRecorder:
    def __init__(self, N, rounds, num_options):
        """
        N           : number of firms
        rounds      : number of turns in the game
        num_options : number of price tiers
        """
        self.N = N
        self.rounds = rounds
        self.num_options = num_options

        # --- game-level series ---
        self.round_winner = np.full(rounds, INVALID_PLAYER, dtype=np.int32)

        # --- firm-level per-round series ---
        self.actions = -np.ones((rounds, N), dtype=np.int32)
        self.prices = np.zeros((rounds, N), dtype=float)
        self.profit_per_round = np.zeros((rounds, N), dtype=float)
        # include initial points at t=0
        self.points_per_round = np.zeros((rounds + 1, N), dtype=float)

        self.turns_recorded = 0

        # final summaries (filled at end)
        self.final_points = None
        self.final_returns = None
        self.round_wins = None

    def record_initial_state(self, state):
        """Call once at t=0 before the first turn."""
        self.points_per_round[0, :] = state.points

    def record_round(self, t, state):
        """
        Record after turn t has been applied to state.
        t is 0-based index for turns (0..rounds-1).
        """
        self.actions[t, :] = state.actions_history[t]
        self.prices[t, :] = state.game.price_grid.price(self.actions[t, :])
        self.profit_per_round[t, :] = state.net_profit
        self.points_per_round[t + 1, :] = state.points
        self.round_winner[t] = state.win_sequence[t]
        self.turns_recorded = t + 1

    def finalize(self, state):
        """Compute final summaries after the last turn."""
        played = self.turns_recorded
        winners = self.round_winner[:played]

        self.final_points = np.asarray(state.points, dtype=float).copy()
        self.final_returns = np.asarray(state.returns(), dtype=float)
        self.round_wins = np.array([(winners == p).sum() for p in range(self.N)], dtype=np.int32)

        # Return everything bundled in a dict for convenience
        return {
            "actions": self.actions[:played],
            "prices": self.prices[:played],
            "profit": self.profit_per_round[:played],
            "points": self.points_per_round[:played + 1],
            "round_winner": winners,
            "round_wins": self.round_wins,
            "tie_rounds": int((winners == INVALID_PLAYER).sum()),
            "final_points": self.final_points,
            "final_returns": self.final_returns,
            "winners": sorted(state.winners),
            "mean_price": float(self.prices[:played].mean()) if played else float("nan"),
        }

    def to_frame(self):
        """One row per (turn, firm) for the turns recorded so far."""
        played = self.turns_recorded
        turn = np.repeat(np.arange(played), self.N)
        firm = np.tile(np.arange(self.N), played)
        return pd.DataFrame({
            "turn": turn,
            "firm": firm,
            "action": self.actions[:played].ravel(),
            "price": self.prices[:played].ravel(),
            "profit": self.profit_per_round[:played].ravel(),
            "points": self.points_per_round[1:played + 1].ravel(),
            "round_winner": np.repeat(self.round_winner[:played], self.N),
        })
