"""Routine Tracker - ежедневные рутины, серии и календарь истории."""

__version__ = "0.1.0"
