"""Bonus Rush: crossword word-wheel puzzles with a weekly progression ladder."""

__version__ = "0.1.0"
