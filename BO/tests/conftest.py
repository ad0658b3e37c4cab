#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Fri Feb  6 09:01:12 2026

@author: petermillington

Shared fixtures. The source root (BO/) is put on sys.path so the tests import
core, payoffs, observation ... the same way the package modules do.
"""
import sys
from pathlib import Path

import pytest

_SOURCE_ROOT = Path(__file__).resolve().parents[1]
if str(_SOURCE_ROOT) not in sys.path:
    sys.path.insert(0, str(_SOURCE_ROOT))

from core.game import BertrandOligopolyGame  # noqa: E402


@pytest.fixture
def default_game():
    return BertrandOligopolyGame()


@pytest.fixture
def make_game():
    """Build a game from keyword game parameters."""
    def _make(**params):
        return BertrandOligopolyGame(params)
    return _make
