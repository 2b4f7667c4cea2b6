"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os


class Config:
    """Default configuration for the Flask backend."""

    DEBUG = os.getenv("FLASK_DEBUG", "0") == "1"

    # Port for ``termgraph serve``
    PORT = int(os.getenv("PORT", "3000"))

    # CORS — origins allowed to call this API
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

    # Triple-store location
    GRAPHDB_URL = os.getenv("GRAPHDB_URL", "http://localhost:7200")
    REPOSITORY_ID = os.getenv("REPOSITORY_ID", "conceptual-repo")

    # Namespace for newly minted term URIs, also home of the Root concept
    BASE_URI = os.getenv("BASE_URI", "http://conceptual-machines.org/")

    # Seconds to wait for the store before giving up
    STORE_TIMEOUT = float(os.getenv("STORE_TIMEOUT", "10"))


class TestConfig(Config):
    """Configuration overrides for testing."""

    TESTING = True
    GRAPHDB_URL = "http://graphdb.test:7200"
    REPOSITORY_ID = "test-repo"
    BASE_URI = "http://example.org/"
    STORE_TIMEOUT = 2.0
