"""Meetup Sync: ephemeral session synchronization service."""

__version__ = "0.1.0"
