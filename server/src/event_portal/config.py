"""Configuration loader for Event Portal with environment-specific support"""

import os
from pathlib import Path

from dotenv import load_dotenv

server_dir = Path(__file__).parent.parent.parent
env_path = server_dir / ".env"

# Load .env file if it exists. For local development only.
if env_path.exists():
    load_dotenv(env_path)

# Configuration dictionary - set once at initialization
config = {
    "database_url": os.getenv("DATABASE_URL"),
    "port": int(os.getenv("PORT", "8080")),
    "log_level": os.getenv("LOG_LEVEL", "INFO"),
    "app_base_url": os.getenv("APP_BASE_URL"),
    "auth0_domain": os.getenv("AUTH0_DOMAIN"),
    "auth0_client_id": os.getenv("AUTH0_CLIENT_ID"),
    "auth0_client_secret": os.getenv("AUTH0_CLIENT_SECRET"),
    "session_secret_key": os.getenv("SESSION_SECRET_KEY"),
    # Local bucket for uploaded event banners, served under the public prefix
    "banner_storage_dir": os.getenv(
        "BANNER_STORAGE_DIR", str(server_dir / "uploads" / "event-banners")
    ),
    "banner_public_prefix": os.getenv("BANNER_PUBLIC_PREFIX", "/banners"),
    "environment": os.getenv("ENVIRONMENT"),
}
