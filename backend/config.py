"""Configuration management for Athena Study Assistant."""
import os
import logging
from dotenv import load_dotenv

from logger import setup_logging

# Load environment variables
load_dotenv()

# Server Configuration
PORT = int(os.getenv("PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")  # "text" or "json"

# CORS Configuration (open to all origins unless narrowed)
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

# Local State
PREFERENCES_PATH = os.getenv("PREFERENCES_PATH", ".athena_preferences.json")
EXPORT_DIR = os.getenv("EXPORT_DIR", ".")

# Study Session Configuration
SESSION_TICK_SECONDS = float(os.getenv("SESSION_TICK_SECONDS", "60"))
DEFAULT_RETENTION_SCORE = int(os.getenv("DEFAULT_RETENTION_SCORE", "84"))

# Mock API Configuration
RESEARCH_MAX_RESULTS = int(os.getenv("RESEARCH_MAX_RESULTS", "50"))

# Logging Configuration
if LOG_FORMAT == "json":
    setup_logging(LOG_LEVEL)
else:
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
