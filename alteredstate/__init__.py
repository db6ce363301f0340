"""Named directory scenarios: configuration, state, and comparison of directory exports."""

__version__ = "0.1.0"