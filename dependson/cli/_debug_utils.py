from __future__ import annotations

import argparse

from dependson.core.engine.result import QualificationResult


def _debug_enabled(args: argparse.Namespace) -> bool:
    return bool(getattr(args, "debug", False))


def _dbg(args: argparse.Namespace, msg: str) -> None:
    if _debug_enabled(args):
        print(f"[debug] {msg}")


def describe_result(selector: str, result: QualificationResult) -> str:
    failed = result.failed_token if result.failed_token is not None else "-"
    return f"selector={selector} status={result.status.value} failed={failed}"
