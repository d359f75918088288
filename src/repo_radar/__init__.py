"""Weekly engineering radar over tracked repositories."""

__version__ = "0.1.0"
