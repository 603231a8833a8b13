"""Core models, evaluation context and exceptions for fieldcheck."""
