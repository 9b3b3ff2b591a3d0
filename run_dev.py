#!/usr/bin/env python3
"""
ShowSearch Development Server
Runs the proxy on port 5000 with an in-memory cache store (no Redis needed)
"""
import os

from showsearch_app import create_app

if __name__ == '__main__':
    os.environ.setdefault('REDIS_URL', 'memory://')
    app = create_app()
    app.run(
        host='0.0.0.0',
        port=5000,
        debug=True,
        use_reloader=False
    )
