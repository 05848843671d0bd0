"""
common.py
Small helpers shared by the command-line entry points.
"""

import json
import logging
import pathlib

from option_tools.models import BulkResult


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s"
    )


def user_error_messages(user_errors: list) -> list:
    return [e.get("message", str(e)) for e in user_errors]


def plural(count: int, word: str = "product") -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def write_results_json(path, option_name: str, result) -> pathlib.Path:
    """Save a run's result and per-product jobs as JSON. Creates parent dirs."""
    log_path = pathlib.Path(path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"option_name": option_name, **result.to_dict()}
    with open(log_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)
    return log_path


def write_aborted_results_json(path, option_name: str, jobs: list, error, done_status: str) -> pathlib.Path:
    """Save the jobs completed before a transport error stopped the run."""
    result = BulkResult(
        success=False,
        count=sum(1 for j in jobs if j.get("status") == done_status),
        errors=[f"Aborted: {error}"],
        jobs=jobs,
    )
    return write_results_json(path, option_name, result)
