"""Command-line access to the local checklist store and the image scanner."""
import argparse
import base64
import json
import logging
import sys
from pathlib import Path

from checkmaster.ai.client import ScanOutcome, VehicleImageAnalyzer
from checkmaster.core.errors import ChecklistError, ValidationFailed
from checkmaster.core.logging import configure_logging
from checkmaster.reporting.history import format_currency, format_date, submissions_to_rows, summarize_history
from checkmaster.reporting.sinks import write_csv, write_excel
from checkmaster.runner.session import ChecklistSession
from checkmaster.storage.store import JsonStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI entry point."""

    parser = argparse.ArgumentParser(description="Vehicle inspection checklists")
    parser.add_argument(
        "--store",
        type=Path,
        help="Path to the JSON store (defaults to CHECKMASTER_STORE or data/checkmaster.json)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("templates", help="List saved templates")
    commands.add_parser("history", help="Show revenue figures and recent submissions")

    export = commands.add_parser("export", help="Export the submission history")
    export.add_argument("--sink", choices=["csv", "excel"], default="csv")
    export.add_argument("--output", type=Path, default=Path("output/submissions.csv"))

    scan = commands.add_parser("scan", help="Run the vehicle scanner on a photo")
    scan.add_argument("image", type=Path, help="JPEG photo of the vehicle, plate or tracker label")

    run = commands.add_parser("run", help="Fill out a template from a JSON answer file and submit it")
    run.add_argument("template_id")
    run.add_argument("--answers", type=Path, help="JSON object mapping field ids to answers")
    run.add_argument("--image", type=Path, help="Photo to scan before submitting")
    return parser


def image_to_data_uri(path: Path) -> str:
    encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:image/jpeg;base64,{encoded}"


def _list_templates(store: JsonStore) -> int:
    templates = store.load_templates()
    if not templates:
        print("No templates yet.")
    for template in templates:
        print(f"{template.id}  {template.name}  ({len(template.fields)} fields)")
    return 0


def _show_history(store: JsonStore) -> int:
    summary = summarize_history(store.load_submissions())
    print(f"Total revenue: {format_currency(summary.total_revenue)}")
    print(f"This month: {summary.month_count} checklists")
    for submission in summary.recent:
        print(f"  {format_date(submission.date)}  {submission.template_name}  +{format_currency(submission.total_value)}")
    return 0


def _export(store: JsonStore, sink: str, output: Path) -> int:
    rows = submissions_to_rows(store.load_submissions())
    if sink == "excel":
        target = output.with_suffix(".xlsx")
        write_excel(rows, target)
    else:
        target = output
        write_csv(rows, target)
    logger.info("Exported %d submissions to %s", len(rows), target)
    print(f"Wrote {target}")
    return 0


def _scan(image: Path) -> int:
    result = VehicleImageAnalyzer().analyze(image_to_data_uri(image))
    if result is None:
        print("No usable extraction.")
        return 1
    print(json.dumps(result.to_dict(), ensure_ascii=False))
    return 0


def _load_answers(path: Path) -> dict | None:
    try:
        answers = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        print(f"Cannot read answers from {path}: {exc}", file=sys.stderr)
        return None
    if not isinstance(answers, dict):
        print(f"Answers file {path} must hold a JSON object of field ids to answers", file=sys.stderr)
        return None
    return answers


def _run(store: JsonStore, template_id: str, answers_path: Path | None, image: Path | None) -> int:
    template = next((item for item in store.load_templates() if item.id == template_id), None)
    if template is None:
        print(f"Unknown template {template_id}", file=sys.stderr)
        return 2

    session = ChecklistSession(template, VehicleImageAnalyzer())
    if answers_path:
        answers = _load_answers(answers_path)
        if answers is None:
            return 2
        for field_id, value in answers.items():
            session.set_answer(field_id, value)
    if image:
        outcome = session.capture(image_to_data_uri(image))
        if outcome.status == ScanOutcome.FAILED:
            print(f"Scan failed: {outcome.error}", file=sys.stderr)

    try:
        submission = session.submit()
    except ValidationFailed as exc:
        for error in exc.errors:
            print(error, file=sys.stderr)
        return 1
    store.append_submission(submission)
    print(f"Saved {submission.id}: {format_currency(submission.total_value)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for the ``checkmaster`` command."""

    configure_logging()
    args = build_parser().parse_args(argv)
    store = JsonStore(args.store)

    try:
        if args.command == "templates":
            return _list_templates(store)
        if args.command == "history":
            return _show_history(store)
        if args.command == "export":
            return _export(store, args.sink, args.output)
        if args.command == "scan":
            return _scan(args.image)
        return _run(store, args.template_id, args.answers, args.image)
    except ChecklistError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
