"""
Rate limiting configuration for the ShowSearch proxy.

Uses Flask-Limiter to keep a single client from draining the upstream
search API (TVMaze allows roughly 20 calls per 10 seconds per IP).

Rate Limit Tiers:
- Search: /search/shows (configurable, cache misses cost an upstream call)
- Light:  /health (cheap operations)
"""

import os
from flask import current_app, jsonify
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

DEFAULT_SEARCH_LIMIT = "120 per minute"

# Initialize limiter (will be attached to app in create_app)
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=os.environ.get("RATELIMIT_STORAGE_URI", "memory://"),
    strategy="fixed-window",
    headers_enabled=True,  # Add X-RateLimit-* headers to responses
)


# ==============================================================================
# RATE LIMIT TIERS
# ==============================================================================

LIGHT_LIMIT = "300 per minute"


def _search_limit() -> str:
    return current_app.config.get('SEARCH_RATE_LIMIT') or DEFAULT_SEARCH_LIMIT


def limit_search(f):
    """Apply the configured search limit."""
    return limiter.limit(_search_limit)(f)


def limit_light(f):
    """Apply light rate limit to cheap operations."""
    return limiter.limit(LIGHT_LIMIT)(f)


# ==============================================================================
# ERROR HANDLER
# ==============================================================================

def rate_limit_exceeded_handler(e):
    """Return a JSON 429 with the retry hint."""
    retry_after = getattr(e, 'retry_after', None) or 60
    response = jsonify({
        "error": "Rate limit exceeded",
        "message": str(e.description),
        "retry_after": retry_after
    })
    response.status_code = 429
    response.headers['Retry-After'] = str(retry_after)
    return response


# ==============================================================================
# INITIALIZATION
# ==============================================================================

def init_rate_limiting(app):
    """
    Initialize rate limiting for a Flask app.

    Call this in create_app() after app configuration. Setting
    RATELIMIT_ENABLED=False in the app config turns the limiter off.
    """
    limiter.init_app(app)

    # Register custom error handler
    app.errorhandler(429)(rate_limit_exceeded_handler)

    return limiter
