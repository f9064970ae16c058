"""Inbox triage for a real-estate agency back office."""

__version__ = "0.1.0"
