"""
main.py

Flask backend for docvault: PDF upload, tag search and single-use
download links.

Dependencies:
  - Python packages: Flask, flask-restx, flask-cors, SQLAlchemy, redis, python-dotenv
  - Infrastructure: a SQL database (SQLite by default), Redis when TOKEN_STORE=redis

Notes:
  - API v1 endpoints available at /api/v1/ with Swagger docs at /api/v1/docs
  - Uses application factory pattern for better testability
"""

from dotenv import load_dotenv

load_dotenv()

from docvault.app_factory import create_app  # noqa: E402
from docvault.config.logging_config import configure_logging  # noqa: E402
from docvault.config.settings import AppConfig  # noqa: E402

config = AppConfig()
configure_logging(config.log_level)
app = create_app(config)

if __name__ == "__main__":
    app.run(host=config.host, port=config.port, debug=config.debug)
