# Load environment variables FIRST before any other imports
from dotenv import load_dotenv
load_dotenv()

import os
import time
import uuid
from typing import Any, Mapping, Optional

from flask import Flask, jsonify, request, g


def _env_flag(name: str, default: str = 'false') -> bool:
    return os.environ.get(name, default).lower() in ('true', '1', 'yes', 'on')


def create_app(overrides: Optional[Mapping[str, Any]] = None):
    """Create and configure an instance of the Flask application."""
    app = Flask(__name__, instance_relative_config=True)

    # =============================================================================
    # CONFIGURATION
    # =============================================================================
    from .cache import DEFAULT_REDIS_URL
    from .services.search_proxy import DEFAULT_CACHE_TTL
    from .tvmaze_api import DEFAULT_BASE_URL
    from .rate_limit import DEFAULT_SEARCH_LIMIT

    app.config.from_mapping(
        JSON_SORT_KEYS=False,
        REDIS_URL=os.environ.get('REDIS_URL', DEFAULT_REDIS_URL),
        CACHE_TTL=int(os.environ.get('CACHE_TTL', DEFAULT_CACHE_TTL)),
        TVMAZE_BASE_URL=os.environ.get('TVMAZE_BASE_URL') or DEFAULT_BASE_URL,
        PROXY_SINGLE_FLIGHT=_env_flag('PROXY_SINGLE_FLIGHT'),
        SEARCH_RATE_LIMIT=os.environ.get('SEARCH_RATE_LIMIT', DEFAULT_SEARCH_LIMIT),
        RATELIMIT_ENABLED=_env_flag('RATELIMIT_ENABLED', 'true'),
        HOST=os.environ.get('FLASK_HOST', '127.0.0.1'),
        PORT=int(os.environ.get('FLASK_PORT', '5000')),
        DEBUG=_env_flag('FLASK_DEBUG'),
    )
    if overrides:
        app.config.update(overrides)

    # =============================================================================
    # LOGGING and RATE LIMITING
    # =============================================================================
    from .log import log, debug_log_event
    from .rate_limit import init_rate_limiting

    init_rate_limiting(app)

    @app.before_request
    def assign_request_id():
        g.request_id = uuid.uuid4().hex[:12]
        g.request_start = time.time()

    @app.after_request
    def debug_request_log(response):
        request_id = getattr(g, 'request_id', None)
        if request_id:
            response.headers['X-Request-ID'] = request_id
        duration_ms = None
        start_time = getattr(g, 'request_start', None)
        if start_time:
            duration_ms = int((time.time() - start_time) * 1000)
        debug_log_event({
            'event': 'request',
            'request_id': request_id,
            'method': request.method,
            'path': request.path,
            'query': request.query_string.decode('utf-8', errors='ignore'),
            'status': response.status_code,
            'cache': getattr(g, 'cache_status', None),
            'duration_ms': duration_ms,
            'remote_addr': request.remote_addr,
        })
        return response

    @app.teardown_request
    def debug_exception_log(error=None):
        if not error:
            return
        debug_log_event({
            'event': 'exception',
            'request_id': getattr(g, 'request_id', None),
            'path': request.path,
            'error_type': error.__class__.__name__,
            'error': str(error)
        })

    @app.errorhandler(404)
    def not_found(_error):
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(_error):
        return jsonify({'error': 'Method not allowed'}), 405

    # =============================================================================
    # SEARCH PROXY (cache store + upstream client)
    # =============================================================================
    from .cache import create_cache_store
    from .tvmaze_api import TVMazeAPI
    from .services.search_proxy import SearchProxy

    store = app.config.get('CACHE_STORE') or create_cache_store(app.config['REDIS_URL'])
    upstream = app.config.get('UPSTREAM_CLIENT') or TVMazeAPI(app.config['TVMAZE_BASE_URL'])
    app.extensions['search_proxy'] = SearchProxy(
        store,
        upstream,
        ttl=app.config['CACHE_TTL'],
        single_flight=app.config['PROXY_SINGLE_FLIGHT'],
    )

    # =============================================================================
    # BLUEPRINTS & ROUTES
    # =============================================================================
    from .routes.main_api import main_bp
    from .routes.search_api import search_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(search_bp)

    log(f"🔎 ShowSearch proxy ready: upstream={app.config['TVMAZE_BASE_URL']} "
        f"cache={getattr(store, 'name', type(store).__name__)} ttl={app.config['CACHE_TTL']}s")

    return app

# App instance should be created by the caller (run.py or WSGI entrypoint)
