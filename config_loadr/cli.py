"""Command line utilities for configuration schemas."""
from __future__ import annotations

import argparse
import json
import os
import sys
from importlib import import_module
from pathlib import Path
from typing import Sequence

from loguru import logger

from config_loadr.errors import ConfigError, ConfigErrors, SchemaError
from config_loadr.logger import configure_logging
from config_loadr.schema import ConfigSchema

LOG_LEVEL_ENV = "CONFIG_LOADR_LOG_LEVEL"


def resolve_schema(reference: str) -> ConfigSchema:
    """Import ``module:attribute`` and return the schema it names."""

    module_name, sep, attribute = reference.partition(":")
    if not sep or not module_name or not attribute:
        raise ConfigError(f"Schema reference must look like 'module:attribute', got {reference!r}")
    try:
        module = import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"Cannot import schema module {module_name!r}: {exc}") from exc
    except SchemaError as exc:
        raise ConfigError(f"Invalid schema in {module_name!r}: {exc}") from exc
    try:
        schema = getattr(module, attribute)
    except AttributeError as exc:
        raise ConfigError(f"Module {module_name!r} has no attribute {attribute!r}") from exc
    if not isinstance(schema, ConfigSchema):
        raise ConfigError(f"{reference} is not a ConfigSchema")
    return schema


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Validate and document environment configuration schemas",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--schema",
        required=True,
        metavar="MODULE:ATTR",
        help="Import path of the ConfigSchema, e.g. myapp.settings:SCHEMA",
    )
    parser.add_argument("--env-file", type=Path, help="dotenv file merged under the environment")
    parser.add_argument("--title", default="Configuration", help="Heading of generated docs")
    parser.add_argument(
        "--log-level",
        default=os.environ.get(LOG_LEVEL_ENV, "WARNING"),
        help=f"Log verbosity (also read from {LOG_LEVEL_ENV})",
    )
    actions = parser.add_mutually_exclusive_group(required=True)
    actions.add_argument("--validate", action="store_true", help="Load the schema from the environment")
    actions.add_argument("--print-docs", action="store_true", help="Print the Markdown reference")
    actions.add_argument("--write-docs", type=Path, metavar="PATH", help="Write the Markdown reference to PATH")
    actions.add_argument("--metadata", action="store_true", help="Print field metadata as JSON")

    args = parser.parse_args(argv)
    logger.remove()
    configure_logging(args.log_level)

    try:
        schema = resolve_schema(args.schema)
        if args.print_docs:
            sys.stdout.write(schema.render_docs(title=args.title))
            return 0
        if args.write_docs:
            target = schema.write_docs(args.write_docs, title=args.title)
            print(f"Documentation written to {target}")
            return 0
        if args.metadata:
            print(json.dumps(schema.metadata().to_dict(), indent=2, ensure_ascii=False))
            return 0
        if args.validate:
            schema.new(env_file=args.env_file)
            print("Configuration OK")
            return 0
    except ConfigErrors as exc:
        print(exc.report(), file=sys.stderr)
        return 1
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - module CLI entry point
    raise SystemExit(main())
