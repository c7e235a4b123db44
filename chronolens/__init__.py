"""ChronoLens: historical events by date and category, with a calendar-aware response cache."""

__version__ = "0.1.0"
