"""
Configuration Module

This module manages application configuration settings and environment
variables for the tracker service.

Features:
- Environment loading
- Database settings
- Server settings
- Performance thresholds
- Entry validation rules

Data Model:
- Connection strings
- CORS origins
- Threshold constants
- Field rules

Dependencies:
- certifi for SSL
- os for env
- dotenv for loading

Author: Annotation Tracker Team
"""

import certifi
import os
from dotenv import load_dotenv

load_dotenv()

# MongoDB Configuration
MONGODB_URL = os.getenv("MONGODB_URL", "mongodb://localhost:27017")
DB_NAME = os.getenv("DB_NAME", "annotation-tracker")
ENTRIES_COLLECTION = os.getenv("ENTRIES_COLLECTION", "entries")
MONGODB_TLS = os.getenv("MONGODB_TLS", "false").lower() == "true"

MONGO_SETTINGS = {
    "serverSelectionTimeoutMS": 10000,
    "connectTimeoutMS": 20000,
    "maxPoolSize": 100,
    "retryWrites": True
}
if MONGODB_TLS:
    MONGO_SETTINGS.update({"tls": True, "tlsCAFile": certifi.where()})

DB_INIT_RETRIES = int(os.getenv("DB_INIT_RETRIES", 3))
DB_INIT_RETRY_DELAY = int(os.getenv("DB_INIT_RETRY_DELAY", 5))  # seconds

# Server Configuration
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 5000))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

# Performance thresholds
HOURLY_THRESHOLD = 30   # annotations per time slot
DAILY_THRESHOLD = 500   # annotations per user/day/location

# Entry validation rules, keyed by wire field name
ENTRY_FIELD_RULES = {
    "userName": {"required": True, "min_length": 1, "max_length": 100},
    "qaName": {"required": True, "min_length": 1, "max_length": 100},
    "annotationCount": {"required": True, "numeric_min": 0},
    "anticipatedCount": {"required": True, "numeric_min": 0},
    "timeSlot": {"required": True},
    "location": {"required": True},
    "date": {"required": True},
    "timestamp": {"required": False},
}
