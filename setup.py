#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Setup configuration for BertrandOligopoly package
"""

from setuptools import setup, find_packages

setup(
    name="BertrandOligopoly",
    version="0.1.0",
    description="Repeated Bertrand price competition game with logit demand",
    author="Peter Millington",
    packages=find_packages(where="BO", exclude=["tests", "tests.*"]),
    package_dir={"": "BO"},
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.20.0",
        "scipy>=1.7.0",
        "matplotlib>=3.3.0",
        "pandas>=1.3.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=3.0.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "bertrand-playout=experiments.random_playout:main",
        ]
    },
)
