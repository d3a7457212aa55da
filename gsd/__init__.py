"""GSD: a plan / work / done task manager."""

__version__ = "1.0.0"
