"""AccountHub: multi-application account and membership back-office."""

__version__ = "0.1.0"
