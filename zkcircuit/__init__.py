"""Rank-1 constraint systems, boolean gadgets and radix-2 evaluation domains over the BLS12-381 scalar field."""

__version__ = "0.1.0"