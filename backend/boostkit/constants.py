"""API route configuration."""

# Base prefix for all API routes
API_PREFIX = "/api"

# Router prefixes (relative to API_PREFIX)
FEATURES_PREFIX = "/features"

# Entity type used when a request does not name one
DEFAULT_ENTITY_TYPE = "default"


__all__ = [
    "API_PREFIX",
    "FEATURES_PREFIX",
    "DEFAULT_ENTITY_TYPE",
]
