import logging
import os

from bson import ObjectId
from flask import Flask, jsonify
from flask.json.provider import DefaultJSONProvider
from pymongo import MongoClient
from pymongo.errors import PyMongoError
from werkzeug.exceptions import HTTPException

from .config import config
from .models import InvalidFieldError
from .reports import ReportQueries
from .store import EntityStore, connect

logger = logging.getLogger(__name__)


class StoreJSONProvider(DefaultJSONProvider):
    """JSON provider that renders ObjectIds as their hex string."""

    @staticmethod
    def default(o):
        if isinstance(o, ObjectId):
            return str(o)
        return DefaultJSONProvider.default(o)


def create_app(config_name: str = None, mongo_client: MongoClient = None) -> Flask:
    """
    Application factory for the arena API.

    ``mongo_client`` lets callers hand in an existing client (tests pass an
    in-memory one); otherwise a client is opened from MONGO_URI.
    """
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    app.json = StoreJSONProvider(app)

    if mongo_client is None:
        mongo_client = connect(app.config['MONGO_URI'], app.config['MONGO_TIMEOUT_MS'])
    database = mongo_client[app.config['MONGO_DB_NAME']]

    # Store handles live on the app for access in routes
    app.store = EntityStore(database)
    app.reports = ReportQueries(database)

    if app.config['STORE_PING_ON_STARTUP']:
        # Fails fast when the store is unreachable
        app.store.ping()
        logger.info(f"Connected to entity store '{app.config['MONGO_DB_NAME']}'")

    register_error_handlers(app)
    register_routes(app)

    from .routes import entities, queries
    app.register_blueprint(entities.bp)
    app.register_blueprint(queries.bp)

    return app


def register_error_handlers(app: Flask):
    """Map request failures to HTTP 500 with the underlying message."""

    @app.errorhandler(InvalidFieldError)
    def handle_invalid_field(e):
        logger.warning(f"Rejected request: {e}")
        return jsonify({'error': str(e)}), 500

    @app.errorhandler(PyMongoError)
    def handle_store_error(e):
        logger.error(f"Entity store failure: {e}")
        return jsonify({'error': str(e)}), 500

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        if isinstance(e, HTTPException):
            return e
        logger.exception(f"Unhandled error: {e}")
        return jsonify({'error': str(e)}), 500


def register_routes(app: Flask):

    @app.route('/health')
    def health_check():
        """Health check endpoint."""
        try:
            db_ok = app.store.ping()
        except PyMongoError as e:
            logger.warning(f"Health check failed: {e}")
            db_ok = False

        status = 'healthy' if db_ok else 'unhealthy'
        code = 200 if db_ok else 503

        return jsonify({
            'status': status,
            'database': 'connected' if db_ok else 'disconnected'
        }), code
