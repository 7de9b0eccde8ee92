"""A simulated computer with an assembler and a small teaching operating system."""

__version__ = "0.1.0"