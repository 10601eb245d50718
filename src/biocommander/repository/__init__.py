"""Persistence adapters for game snapshots."""

from biocommander.repository.json_store import JsonGameRepository

__all__ = ["JsonGameRepository"]
