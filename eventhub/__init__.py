"""EventHub: in-memory users, locations, events and participants with live updates."""

__version__ = "0.1.0"
