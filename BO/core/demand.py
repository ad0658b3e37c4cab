#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Feb  2 11:02:51 2026

@author: petermillington

Multinomial logit demand used to split the market between firms each round.
"""

import numpy as np
from scipy.special import logsumexp


def utilities(prices, vertical_differentiation, horizontal_differentiation):
    """Mean utility (v_p - price_p) / h of each firm's product."""
    prices = np.asarray(prices, dtype=float)
    return (np.asarray(vertical_differentiation, dtype=float) - prices) / horizontal_differentiation


def market_shares(prices, vertical_differentiation, horizontal_differentiation, outside_good=0):
    """
    Logit market share of each firm.

    share_p = exp(u_p) / (exp(u_0) + sum_q exp(u_q)) where u_0 is the outside
    good. Normalised in log space so large utilities do not overflow.
    """
    u = utilities(prices, vertical_differentiation, horizontal_differentiation)
    u_outside = outside_good / horizontal_differentiation
    log_denominator = logsumexp(np.append(u, u_outside))
    return np.exp(u - log_denominator)


def net_profits(prices, marginal_cost, vertical_differentiation,
                horizontal_differentiation, outside_good=0):
    """
    Per-firm profit for one round: (price - cost) * share.

    Negative when a firm prices below marginal cost.
    """
    prices = np.asarray(prices, dtype=float)
    shares = market_shares(prices, vertical_differentiation,
                           horizontal_differentiation, outside_good)
    return (prices - marginal_cost) * shares
