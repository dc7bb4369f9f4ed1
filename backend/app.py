from flask import Flask, g, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from config import load_config
from db.executor import QueryExecutor, build_engine
from db.init_db import create_tables, seed_priorities
from utils.errors import ApiError, InternalError
from utils.logger import get_logger, set_level

logger = get_logger(__name__)


def create_app(environ=None):
    app = Flask(__name__)

    # Config: raises ConfigError before anything is served
    app.config.update(load_config(environ))
    set_level(app.config["LOG_LEVEL"])

    # Enable CORS
    CORS(app)

    # One connection per statement, no pool
    engine = build_engine(app.config["DATABASE_URL"], app.config["DB_CONNECT_TIMEOUT"])
    create_tables(engine)
    executor = QueryExecutor(engine)
    seed_priorities(executor)
    app.extensions["query_executor"] = executor

    @app.before_request
    def attach_executor():
        g.db = executor

    @app.errorhandler(ApiError)
    def handle_api_error(err):
        if err.status_code >= 500:
            logger.error(f"{err.__class__.__name__} on {_where()}: {err}")
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(err):
        return jsonify({"error": err.description}), err.code

    @app.errorhandler(Exception)
    def handle_unexpected(err):
        logger.exception(f"Unhandled error on {_where()}")
        return jsonify(InternalError().to_dict()), 500

    # Health check
    @app.get("/api/health")
    def health():
        return jsonify({"status": "ok"})

    # Blueprints
    from routes import BLUEPRINTS

    for blueprint in BLUEPRINTS:
        app.register_blueprint(blueprint)

    logger.info(f"Registered {len(BLUEPRINTS)} blueprints")
    return app


def _where():
    return f"{request.method} {request.path}"


if __name__ == "__main__":
    application = create_app()
    application.run(host="0.0.0.0", port=application.config["PORT"])
