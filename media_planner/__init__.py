"""Media Planner - multi-month user acquisition budget planning."""

__version__ = "1.0.0"
