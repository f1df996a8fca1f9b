import argparse
import json
from contextlib import contextmanager
from pathlib import Path

from . import __version__
from .config import Settings, load_settings
from .database import init_database
from .env import env_flag, load_env
from .errors import ConfigurationError, PayloadError, ValidationErrors
from .logger import get_logger
from .repositories import create_repository
from .resources import RESOURCES, get_resource
from .serialization import from_dict, parse_key, to_dict


def _settings(args: argparse.Namespace) -> Settings:
    try:
        settings = load_settings(Path(args.settings) if args.settings else None)
    except ConfigurationError as e:
        raise SystemExit(str(e))
    get_logger(level=settings.log_level, log_dir=settings.log_dir)
    return settings


def _resource(name: str):
    try:
        return get_resource(name)
    except KeyError:
        raise SystemExit(f"Unknown resource: {name}. Run 'careercloud resources' to list them.")


@contextmanager
def _logic(args: argparse.Namespace):
    settings = _settings(args)
    resource = _resource(args.resource)
    repository = create_repository(resource.poco_cls, settings)
    try:
        yield resource, resource.logic_cls(repository)
    finally:
        repository.close()


def _read_items(resource, input_arg: str) -> list:
    input_path = Path(input_arg)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    with input_path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    rows = data if isinstance(data, list) else [data]
    try:
        return [from_dict(resource.poco_cls, row) for row in rows]
    except PayloadError as e:
        raise SystemExit(f"Invalid input: {e}")


def _print_errors(errors) -> None:
    print("Invalid:")
    for e in errors:
        print(f" - {e.code}: {e.message}")


def cmd_init_db(args: argparse.Namespace) -> None:
    settings = _settings(args)
    engine = init_database(settings.connection_string)
    engine.dispose()
    print(f"Database ready: {settings.connection_string}")


def cmd_resources(args: argparse.Namespace) -> None:
    for r in RESOURCES:
        print(f"{r.name:<28} {r.poco_cls.__name__:<24} {r.path}")


def cmd_list(args: argparse.Namespace) -> None:
    with _logic(args) as (resource, logic):
        items = logic.get_all()
        if not items:
            print(f"No {resource.poco_cls.__name__} rows.")
            return
        for item in items:
            print(json.dumps(to_dict(item), ensure_ascii=False))


def cmd_validate(args: argparse.Namespace) -> None:
    resource = _resource(args.resource)
    items = _read_items(resource, args.input)
    errors = resource.logic_cls(None).verify(items)
    if errors:
        _print_errors(errors)
        raise SystemExit(2)
    print("Valid")


def cmd_add(args: argparse.Namespace) -> None:
    with _logic(args) as (resource, logic):
        items = _read_items(resource, args.input)
        try:
            logic.add(items)
        except ValidationErrors as e:
            _print_errors(e.errors)
            raise SystemExit(2)
        for item in items:
            print(f"Added {resource.poco_cls.__name__} {getattr(item, resource.key_attr)}")
    get_logger().log_metrics_summary()


def cmd_remove(args: argparse.Namespace) -> None:
    with _logic(args) as (resource, logic):
        try:
            key = parse_key(resource.poco_cls, args.key)
        except PayloadError as e:
            raise SystemExit(str(e))
        item = logic.get(key)
        if item is None:
            print(f"No {resource.poco_cls.__name__} {args.key}; nothing removed.")
            return
        try:
            logic.delete([item])
        except ValidationErrors as e:
            _print_errors(e.errors)
            raise SystemExit(2)
        print(f"Removed {resource.poco_cls.__name__} {args.key}")


def cmd_serve(args: argparse.Namespace) -> None:
    from .api import create_app

    settings = _settings(args)
    app = create_app(settings)
    try:
        app.run(host=args.host, port=args.port, debug=env_flag("CAREERCLOUD_DEBUG"))
    finally:
        get_logger().log_metrics_summary()


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--settings",
        help="Path to settings JSON (default: $CAREERCLOUD_SETTINGS or ./appsettings.json)",
    )

    parser = argparse.ArgumentParser(prog="careercloud", description="CareerCloud job-board admin CLI")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")

    init = subparsers.add_parser("init-db", parents=[common], help="Create every table in the configured database")
    init.set_defaults(func=cmd_init_db)

    res = subparsers.add_parser("resources", parents=[common], help="List resource names and REST paths")
    res.set_defaults(func=cmd_resources)

    lst = subparsers.add_parser("list", parents=[common], help="Print every row of a resource as JSON lines")
    lst.add_argument("resource", help="Resource name, e.g. applicant-skill")
    lst.set_defaults(func=cmd_list)

    val = subparsers.add_parser("validate", parents=[common], help="Check a JSON object or array against the business rules")
    val.add_argument("resource", help="Resource name")
    val.add_argument("--input", required=True, help="Path to JSON input")
    val.set_defaults(func=cmd_validate)

    add = subparsers.add_parser("add", parents=[common], help="Validate and insert rows from a JSON file")
    add.add_argument("resource", help="Resource name")
    add.add_argument("--input", required=True, help="Path to JSON input")
    add.set_defaults(func=cmd_add)

    rem = subparsers.add_parser("remove", parents=[common], help="Delete one row by key")
    rem.add_argument("resource", help="Resource name")
    rem.add_argument("--key", required=True, help="Row id, or the code for lookup tables")
    rem.set_defaults(func=cmd_remove)

    srv = subparsers.add_parser("serve", parents=[common], help="Run the REST API")
    srv.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    srv.add_argument("--port", type=int, default=5000, help="Port (default: 5000)")
    srv.set_defaults(func=cmd_serve)

    return parser


def main(argv=None):
    # Load .env if present (CAREERCLOUD_SETTINGS, etc.)
    load_env()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
