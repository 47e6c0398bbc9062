"""UserHub — user registration API and client components."""

__version__ = "1.0.0"
