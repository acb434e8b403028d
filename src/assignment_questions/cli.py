"""Resolution preview CLI — ``assignment-resolve``.

Resolves a question draft file offline and prints the result, which is
handy when checking how an exported or hand-edited form will be numbered
before uploading it.

The input file is JSON or YAML holding either a list of question drafts or
an assignment body with a ``content`` list.

Examples::

    # Print resolved questions as JSON
    uv run assignment-resolve drafts.json

    # Show a numbered table with parents and anomalies
    uv run assignment-resolve drafts.yaml --format table
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

import yaml
from rich.console import Console
from rich.table import Table

from assignment_questions.models.resolution import ResolutionResult
from assignment_questions.resolver import QuestionGraphResolver

logger = logging.getLogger(__name__)


def load_drafts(path: Path | str) -> Any:
    """Load question drafts from a JSON or YAML file.

    A mapping with a ``content`` key is unwrapped; anything else is returned
    as parsed so the resolver can accept or reject it.
    """
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing drafts file: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if isinstance(data, dict) and "content" in data:
        return data["content"]
    return data


def render_table(result: ResolutionResult, console: Console) -> None:
    """Print resolved questions and anomalies as rich tables."""
    table = Table(title=f"Resolved questions ({len(result.questions)})")
    table.add_column("Order", justify="right")
    table.add_column("No.", style="bold")
    table.add_column("Id", style="dim")
    table.add_column("Component")
    table.add_column("Label")
    table.add_column("Shown when")
    for q in result.questions:
        shown_when = ""
        if q.conditional is not None:
            shown_when = f"{q.conditional.field} = {q.conditional.value}"
        table.add_row(str(q.order), q.question_number, q.id, q.component, q.label, shown_when)
    console.print(table)

    console.print(
        f"schoolSelectorId={result.school_selector_id} "
        f"completionDateId={result.completion_date_id} "
        f"completionTimeId={result.completion_time_id}"
    )

    if result.anomalies:
        issues = Table(title="Anomalies", style="yellow")
        issues.add_column("Kind")
        issues.add_column("Question")
        issues.add_column("Reference")
        issues.add_column("Detail")
        for a in result.anomalies:
            issues.add_row(a.kind, a.question_id, a.reference or "", a.detail or "")
        console.print(issues)


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, resolve the file, print the result.  Returns an exit code."""
    parser = argparse.ArgumentParser(
        prog="assignment-resolve",
        description="Resolve assignment question drafts into numbered questions.",
    )
    parser.add_argument("path", help="JSON or YAML file with question drafts")
    parser.add_argument(
        "--format",
        choices=["json", "table"],
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: WARNING)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stderr,
    )

    console = Console()
    try:
        drafts = load_drafts(args.path)
        result = QuestionGraphResolver().resolve(drafts)
    except (OSError, yaml.YAMLError, ValueError) as exc:
        logger.error("Could not resolve %s: %s", args.path, exc)
        console.print(f"[red]error:[/red] {exc}")
        return 1

    if args.format == "table":
        render_table(result, console)
    else:
        print(json.dumps(result.model_dump(by_alias=True, exclude_none=True), indent=2))
    return 0


def cli() -> None:
    """Console-script entry point: ``assignment-resolve``."""
    sys.exit(main())
