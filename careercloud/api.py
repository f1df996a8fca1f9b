"""
REST boundary.

One blueprint under /api/careercloud with five routes per resource:

    GET    <endpoint>         list (plain JSON array)
    GET    <endpoint>/<key>   single item or 404
    POST   <endpoint>         one object or an array; 201 with the created items
    PUT    <endpoint>/<key>   full replace, key taken from the path
    DELETE <endpoint>/<key>   204, also when the key does not exist

Every request builds its repositories from the settings and closes them
at teardown.
"""

from typing import Optional

from flask import Blueprint, Flask, g, jsonify, request
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .config import Settings
from .database import create_db_engine
from .errors import NotSupportedError, PayloadError, ValidationErrors
from .logger import get_logger
from .repositories import create_repository
from .resources import API_PREFIX, RESOURCES, Resource
from .serialization import from_dict, parse_key, to_dict, to_list


def _logic_for(app: Flask, resource: Resource):
    repository = create_repository(
        resource.poco_cls, app.config["CAREERCLOUD_SETTINGS"], engine=app.config["CAREERCLOUD_ENGINE"]
    )
    if "repositories" not in g:
        g.repositories = []
    g.repositories.append(repository)
    return resource.logic_cls(repository)


def _json_items():
    body = request.get_json(silent=True)
    if isinstance(body, dict):
        return [body]
    if isinstance(body, list) and body:
        return body
    raise PayloadError("body", "expected a JSON object or a non-empty array")


def _register(bp: Blueprint, app: Flask, resource: Resource) -> None:
    base = f"/{resource.endpoint}"

    def list_items():
        logic = _logic_for(app, resource)
        return jsonify(to_list(logic.get_all()))

    def get_item(key):
        logic = _logic_for(app, resource)
        item = logic.get(parse_key(resource.poco_cls, key))
        if item is None:
            return jsonify({"message": f"{resource.poco_cls.__name__} {key} not found"}), 404
        return jsonify(to_dict(item))

    def create_items():
        logic = _logic_for(app, resource)
        pocos = [from_dict(resource.poco_cls, data) for data in _json_items()]
        logic.add(pocos)
        return jsonify(to_list(pocos)), 201

    def update_item(key):
        logic = _logic_for(app, resource)
        body = request.get_json(silent=True)
        poco = from_dict(resource.poco_cls, body)
        setattr(poco, resource.key_attr, parse_key(resource.poco_cls, key))
        logic.update([poco])
        return jsonify(to_dict(poco))

    def delete_item(key):
        logic = _logic_for(app, resource)
        item = logic.get(parse_key(resource.poco_cls, key))
        if item is not None:
            logic.delete([item])
        return "", 204

    name = resource.name
    bp.add_url_rule(base, f"{name}_list", list_items, methods=["GET"])
    bp.add_url_rule(base, f"{name}_create", create_items, methods=["POST"])
    bp.add_url_rule(f"{base}/<key>", f"{name}_get", get_item, methods=["GET"])
    bp.add_url_rule(f"{base}/<key>", f"{name}_update", update_item, methods=["PUT"])
    bp.add_url_rule(f"{base}/<key>", f"{name}_delete", delete_item, methods=["DELETE"])


def create_api_blueprint(app: Flask) -> Blueprint:
    bp = Blueprint("careercloud", __name__, url_prefix=API_PREFIX)
    for resource in RESOURCES:
        _register(bp, app, resource)
    return bp


def create_app(settings: Settings, engine: Optional[Engine] = None) -> Flask:
    """
    Build the Flask application.

    Args:
        settings: Parsed settings file
        engine: Shared engine; built from the connection string when omitted

    Returns:
        Flask app
    """
    app = Flask(__name__)
    logger = get_logger(level=settings.log_level, log_dir=settings.log_dir)

    if engine is None:
        engine = create_db_engine(settings.connection_string, pooled=settings.backend != "sql")
    app.config["CAREERCLOUD_SETTINGS"] = settings
    app.config["CAREERCLOUD_ENGINE"] = engine

    app.register_blueprint(create_api_blueprint(app))

    @app.teardown_appcontext
    def _close_repositories(_exc):
        for repository in g.pop("repositories", []):
            repository.close()

    @app.errorhandler(ValidationErrors)
    def _validation_failed(err: ValidationErrors):
        return jsonify({"message": str(err), "errors": [e.to_dict() for e in err.errors]}), 400

    @app.errorhandler(PayloadError)
    def _bad_payload(err: PayloadError):
        return jsonify({"message": str(err)}), 400

    @app.errorhandler(NotSupportedError)
    def _not_supported(err: NotSupportedError):
        return jsonify({"message": str(err)}), 501

    @app.errorhandler(SQLAlchemyError)
    def _store_error(err: SQLAlchemyError):
        message = str(err.orig) if getattr(err, "orig", None) else str(err)
        logger.error("Unhandled store error", path=request.path, method=request.method, error=message)
        return jsonify({"message": message}), 500

    @app.errorhandler(404)
    def _not_found(_err):
        return jsonify({"message": f"No route for {request.path}"}), 404

    logger.info("API ready", backend=settings.backend, resources=len(RESOURCES))
    return app
