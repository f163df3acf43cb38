"""Evaluate configured dependencies against a JSON snapshot of form fields.

Purpose:
  - Check qualifier configs offline without a live form.
Inputs:
  - --config: dependency config JSON ({"dependencies": [...]}).
  - --fields: field elements JSON ({"fields": {selector: [element, ...]}}).
Outputs:
  - One status line per dependency and a SUMMARY line on stdout.
  - Exit code 2 with a one-line stderr message on unreadable or invalid inputs.
Example:
  - PYTHONPATH=. python3 -m dependson.cli.evaluate_qualifiers --config deps.json --fields fields.json
"""

from __future__ import annotations

import argparse
import json
import sys

from dependson.app_api.factories import create_dependencies
from dependson.config.qualifier_config import load_dependency_config, load_field_elements
from dependson.core.engine.evaluator import set_evaluator_debug
from dependson.infra.fields.form_document import FormDocument
from dependson.cli._debug_utils import _dbg, _debug_enabled, describe_result


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Evaluate field dependency qualifiers")
    parser.add_argument("--config", required=True, help="Dependency config JSON path")
    parser.add_argument("--fields", required=True, help="Field elements JSON path")
    parser.add_argument("--json", action="store_true", help="Print results as JSON lines")
    parser.add_argument("--debug", action="store_true", help="Enable evaluator debug output")
    return parser.parse_args(argv)


def build_document(fields_path: str) -> FormDocument:
    document = FormDocument()
    for selector, elements in load_field_elements(fields_path).items():
        document.register(selector, elements)
    return document


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    if _debug_enabled(args):
        set_evaluator_debug(lambda msg: _dbg(args, msg))

    try:
        try:
            configs = load_dependency_config(args.config)
            document = build_document(args.fields)
        except ValueError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 2
        _dbg(args, f"dependencies={len(configs)} config={args.config}")

        qualified = 0
        for dependency in create_dependencies(document, configs):
            result = dependency.last_result
            if result.qualified:
                qualified += 1
            for token in result.skipped_tokens:
                _dbg(args, f"skipped token={token!r} selector={dependency.selector}")
            if args.json:
                print(
                    json.dumps(
                        {
                            "selector": dependency.selector,
                            "status": result.status.value,
                            "failed": result.failed_token,
                            "skipped": result.skipped_tokens,
                        }
                    )
                )
            else:
                print(describe_result(dependency.selector, result))
            dependency.close()

        print(f"SUMMARY qualified={qualified} total={len(configs)}")
    finally:
        set_evaluator_debug(None)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
