"""
Project settings. Every value can be overridden with an environment variable
of the same name.
"""

import os

LAP_SWIM = "lap swim"

# Fetched PDF text is reused for a week (604800 seconds)
PDF_CACHE_TTL_SECONDS = int(os.environ.get("PDF_CACHE_TTL_SECONDS", 7 * 24 * 60 * 60))

# Optional JSON file for fetched PDF text. Empty keeps the cache in memory only.
PDF_CACHE_FILE = os.environ.get("PDF_CACHE_FILE", "")

MANUAL_SCHEDULES_FILE = os.environ.get("MANUAL_SCHEDULES_FILE", "manual_schedules.json")

MAP_DATA_DIR = os.environ.get("MAP_DATA_DIR", "map_data")

REQUEST_TIMEOUT = float(os.environ.get("REQUEST_TIMEOUT", 30))

MAX_REFRESH_WORKERS = int(os.environ.get("MAX_REFRESH_WORKERS", 8))

# Scrape the facility page for a schedule PDF when a pool has no schedule_url
DISCOVER_SCHEDULE_URLS = os.environ.get("DISCOVER_SCHEDULE_URLS", "").lower() in ("1", "true", "yes")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_JSON = os.environ.get("LOG_JSON", "").lower() in ("1", "true", "yes")
