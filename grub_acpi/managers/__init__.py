"""Orchestration des opérations add/restore."""
