"""Show search proxy blueprint.

GET /search/shows?q=<query>
  200  raw TVMaze JSON array, X-Cache: HIT|MISS
  400  {"error": "Missing query param: q"}
  502  {"error": "Upstream error <status>: <reason>"}
  500  {"error": "Proxy failure"}
"""

from flask import Blueprint, Response, current_app, g, jsonify, request

from showsearch_app.errors import InvalidQuery, ShowSearchError, UpstreamError
from showsearch_app.log import log
from showsearch_app.rate_limit import limit_search
from showsearch_app.services.search_proxy import SearchProxy

search_bp = Blueprint('search_api', __name__)

JSON_CONTENT_TYPE = 'application/json; charset=utf-8'
CLIENT_CACHE_CONTROL = 'public, max-age=60'


def get_search_proxy() -> SearchProxy:
    return current_app.extensions['search_proxy']


def _error(message: str, status: int):
    return jsonify({'error': message}), status


@search_bp.route('/search/shows', methods=['GET'])
@limit_search
def search_shows():
    query = request.args.get('q', '')

    try:
        result = get_search_proxy().handle(query)
    except InvalidQuery as e:
        return _error(e.public_message, e.status_code)
    except UpstreamError as e:
        log(f"⚠️ {e} for q={query.strip()!r}")
        return _error(e.public_message, e.status_code)
    except ShowSearchError as e:
        log(f"❌ Proxy failure ({e.__class__.__name__}): {e}")
        return _error(ShowSearchError.public_message, 500)
    except Exception as e:
        log(f"❌ Proxy failure (unexpected {e.__class__.__name__}): {e}")
        return _error(ShowSearchError.public_message, 500)

    g.cache_status = result.cache_status
    response = Response(result.body, status=200, content_type=JSON_CONTENT_TYPE)
    response.headers['X-Cache'] = result.cache_status
    response.headers['Cache-Control'] = CLIENT_CACHE_CONTROL
    return response
