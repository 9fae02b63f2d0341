"""Fuzzy team / escalation-policy search that resolves who is on call."""

__version__ = "1.0.0"
