"""Application-wide constants for Figma retrieval and asset export.

This is the single source of truth for all tunable parameters.
Modify values here to change behavior across the entire application.
"""
from typing import Literal, get_args

# ============================================================================
# Figma API Constants
# ============================================================================

FIGMA_API_BASE_URL = "https://api.figma.com/v1"

# Header carrying the personal access token
FIGMA_TOKEN_HEADER = "X-Figma-Token"

# The corporate proxy only lets this client string through
FIGMA_USER_AGENT = "curl/8.9.1"

# Upscale factor for every export request
IMAGE_EXPORT_SCALE = 2

IMAGE_FORMATS_LITERAL = Literal["png", "svg"]

ALL_IMAGE_FORMATS = list(get_args(IMAGE_FORMATS_LITERAL))

# ============================================================================
# Network Constants
# ============================================================================

DEFAULT_PROXY_HOST = "fortigate.misa.local"
DEFAULT_PROXY_PORT = 8080

REQUEST_TIMEOUT_SECONDS = 30

# Chunk size for streaming image bodies to disk
DOWNLOAD_CHUNK_SIZE = 64 * 1024

# ============================================================================
# Diagnostics Constants
# ============================================================================

DEVELOPMENT_ENV = "development"
DIAGNOSTICS_DIR = "logs"
DIAGNOSTICS_RAW_FILE = "figma-raw.json"
DIAGNOSTICS_SIMPLIFIED_FILE = "figma-simplified.json"
