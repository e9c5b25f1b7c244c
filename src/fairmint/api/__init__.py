"""HTTP preview API for the launch page (FastAPI)."""
