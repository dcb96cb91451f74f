"""HLM strength program, milestone and PR engine."""

__version__ = "0.1.0"
