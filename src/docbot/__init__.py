"""Scripted browser walkthroughs turned into screenshot-illustrated, searchable guides."""

__version__ = "0.1.0"
