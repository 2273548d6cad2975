"""
Configuration Module

This module loads environment variables and defines global configuration settings
for the application, such as the listen port and logging level.

Dependencies:
    - dotenv for loading environment variables
    - logging for application warnings
"""
import os
import logging
from dotenv import load_dotenv, find_dotenv

logger = logging.getLogger(__name__)

# Load environment variables from the .env file, if there is one
if not load_dotenv(find_dotenv()):
    logger.info("No .env file found, using process environment and defaults.")

# -----------------------------------
# Server Configuration
# -----------------------------------
HOST = "0.0.0.0"
PORT = int(os.getenv("PORT", "8080"))

# -----------------------------------
# Logging Configuration
# -----------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# -----------------------------------
# Sample Data
# -----------------------------------
SEED_SAMPLE_DATA = os.getenv("SEED_SAMPLE_DATA", "false").lower() in ("1", "true", "yes")
