"""cal2 - terminal calendar with public and custom holidays."""

__version__ = "0.3.0"
