import os

SPACETRACK_BASE_URL = os.getenv("SPACETRACK_BASE_URL", "https://www.space-track.org")
SPACETRACK_USERNAME = os.getenv("SPACETRACK_USERNAME", "")
SPACETRACK_PASSWORD = os.getenv("SPACETRACK_PASSWORD", "")

NEOWS_API_URL = os.getenv("NEOWS_API_URL", "https://api.nasa.gov/neo/rest/v1/feed")
NASA_API_KEY = os.getenv("NASA_API_KEY", "DEMO_KEY")

UPSTREAM_TIMEOUT_SECONDS = float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "30"))
NEOWS_TIMEOUT_SECONDS = float(os.getenv("NEOWS_TIMEOUT_SECONDS", "10"))

DEFAULT_LIMIT = 1000
MAX_LIMIT = int(os.getenv("MAX_LIMIT", "5000"))

# NeoWs rejects feed requests spanning more than a week
MAX_RANGE_DAYS = 7

CACHE_MAX_AGE = int(os.getenv("CACHE_MAX_AGE", "3600"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
