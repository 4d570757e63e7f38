import argparse
import json
import logging
import os
import sys
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from spendwise.app.service import AnalysisService
from spendwise.core.analysis import grammar
from spendwise.core.analysis.parser import parse
from spendwise.core.analysis.render import build_render_model, render_text, vendor_name
from spendwise.core.errors import GenerationError, InputError, ModelConfigError
from spendwise.core.history.store import HistoryStore
from spendwise.infrastructure.llm.types import model_label
from spendwise.infrastructure.storage.sql import SqlKeyValueStore

logger = logging.getLogger(__name__)


def _configure_logging():
    logging.basicConfig(
        level=os.getenv("SPENDWISE_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _history() -> HistoryStore:
    history = HistoryStore(SqlKeyValueStore())
    history.load()
    return history


def _print_record(record, as_json: bool, meta=None):
    if as_json:
        payload = record.to_dict()
        if meta is not None:
            payload["model"] = {
                "backend": meta["backend"],
                "model": meta["model"],
                "profile": meta["profile"],
            }
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    model = build_render_model(parse(record.formatted_output))
    print("\n=== ANALYSIS ===")
    print(f"id: {record.id}")
    if meta is not None:
        print(f"model: {model_label(meta)}")
    print()
    print(render_text(model))


def cmd_analyze(args) -> int:
    raw_text = args.text if args.text is not None else sys.stdin.read()

    try:
        service = AnalysisService.from_config(SqlKeyValueStore(), args.models_config)
    except ModelConfigError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    if args.language != grammar.NO_TRANSLATION_LANGUAGE:
        print(f"🌐 Translating insights to {args.language}...", file=sys.stderr)

    try:
        record = service.analyze(raw_text, args.language)
    except (InputError, GenerationError):
        print(f"❌ {service.error}", file=sys.stderr)
        return 1
    except SQLAlchemyError as e:
        logger.exception("Failed to store analysis")
        print(f"❌ Analysis finished but could not be saved to history: {e.__class__.__name__}", file=sys.stderr)
        return 1

    _print_record(record, args.json, meta=service.invoker.llm.meta)
    return 0


def cmd_history(args) -> int:
    history = _history()

    if not len(history):
        print("No previous analyses yet.")
        return 0

    for record in history.records:
        created = datetime.fromtimestamp(record.timestamp / 1000).strftime("%Y-%m-%d %H:%M")
        print(f"{record.id}  {created}  {vendor_name(record.formatted_output)}")
    return 0


def cmd_show(args) -> int:
    history = _history()
    record = history.find(args.id)
    if record is None:
        print(f"❌ No analysis with id {args.id}", file=sys.stderr)
        return 1

    _print_record(record, args.json)
    return 0


def cmd_clear(args) -> int:
    if not args.yes:
        answer = input("Are you sure you want to clear your analysis history? [y/N] ")
        if answer.strip().lower() not in ("y", "yes"):
            return 0

    _history().clear()
    print("🗑 History cleared")
    return 0


def cmd_languages(args) -> int:
    for language in grammar.SUPPORTED_LANGUAGES:
        print(language)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser("spendwise", description="Purchase intelligence for receipt text")
    sub = parser.add_subparsers(dest="command", required=True)

    analyze = sub.add_parser("analyze", help="Analyze receipt/invoice text (stdin when TEXT is omitted)")
    analyze.add_argument("text", nargs="?")
    analyze.add_argument(
        "--language",
        default=grammar.NO_TRANSLATION_LANGUAGE,
        choices=grammar.SUPPORTED_LANGUAGES,
    )
    analyze.add_argument("--models-config", default=None)
    analyze.add_argument("--json", action="store_true")
    analyze.set_defaults(func=cmd_analyze)

    history = sub.add_parser("history", help="List recent analyses")
    history.set_defaults(func=cmd_history)

    show = sub.add_parser("show", help="Show a stored analysis")
    show.add_argument("id")
    show.add_argument("--json", action="store_true")
    show.set_defaults(func=cmd_show)

    clear = sub.add_parser("clear", help="Clear analysis history")
    clear.add_argument("--yes", action="store_true")
    clear.set_defaults(func=cmd_clear)

    languages = sub.add_parser("languages", help="List supported output languages")
    languages.set_defaults(func=cmd_languages)

    return parser


def main(argv=None) -> int:
    _configure_logging()
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
