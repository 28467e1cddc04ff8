"""HTTP API (FastAPI routers, dependencies, caching decorator)."""
