"""Building blocks of a small shell: environment, word reading, syntax checks, expansion and commands."""

__version__ = "0.1.0"