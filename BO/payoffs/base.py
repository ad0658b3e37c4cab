#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Feb  2 12:31:06 2026

@author: petermillington
"""

class ReturnsScheme:
    """Terminal utility of every player from the final points."""
    def returns(self, points, winners, num_players):
        raise NotImplementedError("Must be implemented by subclass.")
