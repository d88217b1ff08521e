"""Configuration loader for Event Signup with environment-specific support"""

import os
from pathlib import Path

from dotenv import load_dotenv

project_dir = Path(__file__).parent.parent.parent
env_path = project_dir / ".env"

# Load .env file if it exists. For local development only.
if env_path.exists():
    load_dotenv(env_path)

# Configuration dictionary - set once at initialization
config = {
    "database_url": os.getenv("DATABASE_URL"),
    "redis_url": os.getenv("REDIS_URL", "redis://localhost:6379/0"),
    "app_port": int(os.getenv("APP_PORT", "8080")),
    "log_level": os.getenv("LOG_LEVEL", "INFO"),
    "environment": os.getenv("ENVIRONMENT", "development"),
    # Sliding expiry for unsaved field-editor drafts
    "field_draft_ttl_seconds": int(os.getenv("FIELD_DRAFT_TTL_SECONDS", "1800")),
}
