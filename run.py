#!/usr/bin/env python3
"""
Entry point for the Arena esports API.

Usage:
    python run.py

Environment Variables:
    FLASK_ENV: development or production (default: development)
    PORT: Port to listen on (default: 3000)
    MONGO_URI: Entity store connection string (default: mongodb://localhost:27017)
    LOG_LEVEL: Logging level (default: INFO)
"""
import logging
import os
import sys

from pymongo.errors import PyMongoError

logger = logging.getLogger('arena')


def configure_logging():
    from arena.config import config

    settings = config[os.getenv('FLASK_ENV', 'development')]
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format='%(asctime)s - %(levelname)s - [%(name)s] - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def run_api():
    """Run the API; refuses to serve when the store is unreachable."""
    from arena.app import create_app

    try:
        app = create_app()
    except PyMongoError as e:
        logger.error(f"Cannot reach entity store, not serving: {e}")
        sys.exit(1)

    port = app.config['PORT']
    logger.info(f"Starting Arena API on port {port}...")
    app.run(host='0.0.0.0', port=port, debug=app.config['DEBUG'], threaded=True)


if __name__ == '__main__':
    configure_logging()
    run_api()
