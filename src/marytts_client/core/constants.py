"""Constants for marytts-client."""

from pathlib import Path

# core/ -> marytts_client/ -> src/ -> project root
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent

# Default paths
CONFIG_DIR = PROJECT_ROOT / "config"
LOGS_DIR = PROJECT_ROOT / "logs"

# Server defaults
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 59125
DEFAULT_TIMEOUT = 30
DEFAULT_MAX_WORKERS = 4

DEFAULT_LOCALE = "en_US"

# REST endpoints, relative to the server base URL
ENDPOINT_PROCESS = "process"
ENDPOINT_VOICES = "voices"
ENDPOINT_LOCALES = "locales"
ENDPOINT_VERSION = "version"

# Used in data URIs when the server sends no Content-Type
FALLBACK_CONTENT_TYPE = "application/octet-stream"

# Values a phoneme record holds until the server transcribes the word
UNKNOWN = "unknown"
