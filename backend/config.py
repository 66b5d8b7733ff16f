"""Application configuration via environment variables."""

import os
from dotenv import load_dotenv

load_dotenv()

APP_VERSION = "1.0.0"

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# CORS ("null" is the origin of a plugin iframe)
CORS_ORIGINS = os.getenv(
    "CORS_ORIGINS", "null,http://localhost:5173,http://localhost:3000"
).split(",")

# Placeholder fill applied to every auto-seeded layer (RGB, 0..1)
PLACEHOLDER_COLOR = tuple(
    float(c) for c in os.getenv("PLACEHOLDER_COLOR", "0.53,0.73,0.93").split(",")
)

# Upper bound on a single uploaded image payload
MAX_IMAGE_BYTES = int(os.getenv("MAX_IMAGE_BYTES", str(20 * 1024 * 1024)))
