#!/usr/bin/env python3
"""Print the JSON Schema and UI schema for registered record types.

Usage:
    python3 generate_schemas.py                          # List registered types
    python3 generate_schemas.py ContactForm              # JSON output
    python3 generate_schemas.py CustomerForm --yaml      # YAML output
    python3 generate_schemas.py CustomerForm --locale uk --role viewer

Translations and role permissions come from UISCHEMA_TRANSLATIONS and
UISCHEMA_PERMISSIONS, as for the API.
"""
import argparse
import json
import os
import sys

import yaml

REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, os.path.join(REPO_ROOT, "api"))

import config  # noqa: E402
from routes import generate_from_type, registry  # noqa: E402
from registry import TypeNotFoundError  # noqa: E402


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Print schemas for registered record types")
    parser.add_argument("types", nargs="*", metavar="TYPE")
    parser.add_argument("--locale", default=None)
    parser.add_argument("--role", default=None)
    parser.add_argument("--yaml", action="store_true", help="YAML instead of JSON")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if not args.types:
        print("Registered types:")
        for name in registry.names():
            print(f"  {name}")
        return

    opts = config.build_options(locale=args.locale, role=args.role)
    for name in args.types:
        try:
            result = generate_from_type(name, opts)
        except TypeNotFoundError as e:
            print(str(e), file=sys.stderr)
            sys.exit(1)

        if args.yaml:
            print(f"# {name}")
            print(yaml.safe_dump(result, sort_keys=False, allow_unicode=True))
        else:
            print(json.dumps(result, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
