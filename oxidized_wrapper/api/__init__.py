"""HTTP API для Oxidized (FastAPI)."""
