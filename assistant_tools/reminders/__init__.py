"""Reminder storage (model, repository, lock-guarded store)."""
