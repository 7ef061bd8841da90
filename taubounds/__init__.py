"""Bounds on Kendall's tau between rankings with ties, with solvers and tools to verify, compare and evaluate them."""

__version__ = "0.1.0"