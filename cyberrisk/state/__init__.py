"""Persisted assessment state and the session that drives the engine."""
