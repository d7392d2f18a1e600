"""Lattice — deterministic project scaffolding generator."""

__version__ = "0.1.0"
