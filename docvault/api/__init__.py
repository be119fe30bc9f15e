"""HTTP API layer (Flask + flask-restx)."""
