from flask import Blueprint, current_app, jsonify

from showsearch_app.rate_limit import limit_light

main_bp = Blueprint('main_api', __name__)


@main_bp.route('/health')
@limit_light
def health():
    """Report liveness, the cache backend in use, and whether it answers."""
    store = current_app.extensions['search_proxy'].store
    reachable = store.ping()
    return jsonify({
        'status': 'ok' if reachable else 'degraded',
        'cache_backend': getattr(store, 'name', 'unknown'),
        'cache_reachable': reachable,
    })
