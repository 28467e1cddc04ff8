"""Persistence: engines, capability-scoped data contexts, models, repositories."""
