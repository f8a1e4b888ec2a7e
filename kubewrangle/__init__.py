"""Helpers for Kubernetes-style objects: names, object sets, summaries and schema mapping."""

__version__ = "0.1.0"