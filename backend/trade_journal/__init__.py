"""Trade journal performance analytics and pattern heuristics."""

__version__ = "0.1.0"
