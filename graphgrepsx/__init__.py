"""Labelled graphs, path index trees with tree filtering, and VF2-family graph matchers."""

__version__ = "3.3.0"