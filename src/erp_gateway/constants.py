"""Application-wide constants for erp-gateway.

Constants that define gateway behavior.
For user-configurable settings per deployment, see config.py.
"""

__all__ = [
    # Application identity
    "APP_NAME",
    "CONFIG_ENV_PREFIX",
    # Backend
    "DEFAULT_BACKEND_URL",
    "TUNNEL_BYPASS_HEADER",
    # Gateway server
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DEFAULT_LOG_DIR",
    # Timeouts
    "LIST_TIMEOUT_SECONDS",
    "FAST_LIST_TIMEOUT_SECONDS",
    "READ_TIMEOUT_SECONDS",
    "WRITE_TIMEOUT_SECONDS",
    "HEAVY_WRITE_TIMEOUT_SECONDS",
    "STATUS_PROBE_TIMEOUT_SECONDS",
    "CLIENT_TIMEOUT_SECONDS",
    "PASSTHROUGH_TIMEOUT_SECONDS",
    # Response headers
    "ALLOWED_METHODS",
    "ALLOWED_HEADERS",
    "FALLBACK_HEADER",
    "CORS_HEADERS",
    # Paging defaults
    "DEFAULT_SKIP",
    "DEFAULT_LIMIT",
]

from platformdirs import user_log_dir

# =============================================================================
# Application identity
# =============================================================================

APP_NAME = "erp-gateway"

# Environment variables are ERP_GATEWAY_<FIELD>
CONFIG_ENV_PREFIX = "ERP_GATEWAY_"

# =============================================================================
# Backend
# =============================================================================

DEFAULT_BACKEND_URL = "http://localhost:8000"

# The reference backend sits behind an ngrok tunnel which serves an HTML
# interstitial unless this header is present.
TUNNEL_BYPASS_HEADER = ("ngrok-skip-browser-warning", "true")

# =============================================================================
# Gateway server
# =============================================================================

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
DEFAULT_LOG_DIR = user_log_dir(APP_NAME)

# =============================================================================
# Outbound timeouts (seconds)
# =============================================================================

# Small reference lists (branches, roles) are expected to be quick
FAST_LIST_TIMEOUT_SECONDS = 5.0
LIST_TIMEOUT_SECONDS = 10.0
READ_TIMEOUT_SECONDS = 10.0
WRITE_TIMEOUT_SECONDS = 15.0
# Invoice updates recompute line totals on the backend
HEAVY_WRITE_TIMEOUT_SECONDS = 45.0
STATUS_PROBE_TIMEOUT_SECONDS = 5.0
CLIENT_TIMEOUT_SECONDS = 60.0
# Generic pass-through and image relay
PASSTHROUGH_TIMEOUT_SECONDS = 30.0

# =============================================================================
# Response headers
# =============================================================================

ALLOWED_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
ALLOWED_HEADERS = "Content-Type, Authorization"
FALLBACK_HEADER = "X-Fallback-Data"

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": ALLOWED_METHODS,
    "Access-Control-Allow-Headers": ALLOWED_HEADERS,
}

# =============================================================================
# Paging defaults for collection reads
# =============================================================================

DEFAULT_SKIP = "0"
DEFAULT_LIMIT = "100"
