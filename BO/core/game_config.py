#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Feb  2 10:14:37 2026

@author: petermillington
"""
# game_config.py
from dataclasses import dataclass, fields
from enum import Enum
from numbers import Integral, Real
from typing import Any, Dict, Optional

MIN_PLAYERS = 2
MAX_PLAYERS = 10

# Approximate equilibrium anchors of the logit model with the default
# parameters. They are calibration constants, not derived per config.
NASH_PRICE = 1.47292
MONOPOLY_PRICE = 1.92498

# All firms share the same quality level: no vertical differentiation.
DEFAULT_VERTICAL_DIFFERENTIATION = 2.0


class ConfigError(ValueError):
    """Raised when a game configuration cannot be built."""


_INT_FIELDS = ("num_options", "num_turns", "players")
_REAL_FIELDS = ("interval_size", "marginal_cost", "horizontal_differentiation", "outside_good")
_BOOL_FIELDS = ("imp_info", "egocentric")


class ReturnsType(Enum):
    WIN_LOSS = "win_loss"
    POINT_DIFFERENCE = "point_difference"
    TOTAL_POINTS = "total_points"

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ConfigError(f"Unrecognized returns_type parameter: {value}") from None


@dataclass(frozen=True)
class GameConfig:
    """
    Configuration of a Bertrand oligopoly pricing game.

    num_options: number of price tiers a firm may choose from (> 1)
    num_turns: number of simultaneous pricing rounds
    interval_size: extension of the price interval beyond [nash, monopoly],
        as a fraction of (monopoly - nash)
    marginal_cost: unit cost of every firm
    horizontal_differentiation: how interchangeable the products are (> 0)
    outside_good: utility of not buying at all
    players: number of firms (2..10)
    returns_type: how terminal utilities are defined
    imp_info: reveal only win/tie sequences instead of every joint action
    egocentric: rotate win sequences so that index 0 is the observer
    """
    num_options: int = 15
    num_turns: int = 100
    interval_size: float = 0.1
    marginal_cost: int = 1
    horizontal_differentiation: float = 0.25
    outside_good: int = 0
    players: int = 2
    returns_type: ReturnsType = ReturnsType.TOTAL_POINTS
    imp_info: bool = False
    egocentric: bool = False

    def __post_init__(self):
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "returns_type", ReturnsType.parse(self.returns_type))

        for name in _INT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Integral):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
            object.__setattr__(self, name, int(value))
        for name in _REAL_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Real):
                raise ConfigError(f"{name} must be a number, got {value!r}")
        for name in _BOOL_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigError(f"{name} must be True or False, got {value!r}")

        if self.num_options <= 1:
            raise ConfigError(f"num_options must be > 1, got {self.num_options}")
        if self.num_turns < 1:
            raise ConfigError(f"num_turns must be >= 1, got {self.num_turns}")
        if not MIN_PLAYERS <= self.players <= MAX_PLAYERS:
            raise ConfigError(
                f"players must be in [{MIN_PLAYERS}, {MAX_PLAYERS}], got {self.players}")
        if self.horizontal_differentiation <= 0:
            raise ConfigError(
                "horizontal_differentiation must be > 0, "
                f"got {self.horizontal_differentiation}")

    @classmethod
    def from_params(cls, params: Optional[Dict[str, Any]] = None) -> "GameConfig":
        """Build a config from a flat parameter dict, defaults for missing keys."""
        params = dict(params or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(params) - known)
        if unknown:
            raise ConfigError(f"Unknown game parameters: {', '.join(unknown)}")
        return cls(**params)

    def to_params(self) -> Dict[str, Any]:
        out = {f.name: getattr(self, f.name) for f in fields(self)}
        out["returns_type"] = self.returns_type.value
        return out

    @property
    def price_grid(self) -> "PriceGrid":
        return PriceGrid.from_config(self)


@dataclass(frozen=True)
class PriceGrid:
    """
    Maps integer price tiers onto real prices.

    The interval [lo, hi] extends [nash, monopoly] by interval_size times its
    width on both sides; tier 0 is lo and tier num_options - 1 is hi.
    """
    nash_price: float
    monopoly_price: float
    lo: float
    hi: float
    step: float

    @classmethod
    def from_config(cls, cfg: GameConfig,
                    nash_price: float = NASH_PRICE,
                    monopoly_price: float = MONOPOLY_PRICE) -> "PriceGrid":
        spread = cfg.interval_size * (monopoly_price - nash_price)
        lo = nash_price - spread
        hi = monopoly_price + spread
        step = (hi - lo) / (cfg.num_options - 1)
        return cls(nash_price, monopoly_price, lo, hi, step)

    def price(self, action):
        return self.lo + action * self.step
