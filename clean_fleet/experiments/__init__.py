"""Experiments layer: CLI-driven batch runs."""

from clean_fleet.experiments.search import main

__all__ = ["main"]
