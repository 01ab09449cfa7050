"""Grid environment, energy-aware action model, conflict table and heuristic tables for multi-agent pickup-and-delivery planning."""

__version__ = "0.1.0"