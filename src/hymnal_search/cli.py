"""Command line front end: load a dataset, index it and run one query."""

# ruff: noqa: T201  # CLI intentionally prints results

from __future__ import annotations

import argparse
from collections.abc import Sequence
import logging
from pathlib import Path
import sys

from pydantic import ValidationError

from hymnal_search.browse import SortMode, sort_documents
from hymnal_search.config import Settings
from hymnal_search.dataset import Catalog, load_dataset
from hymnal_search.domain.model import Document
from hymnal_search.observability.logging import configure_logging
from hymnal_search.search.engine import search
from hymnal_search.search.indexer import build_index


logger = logging.getLogger(__name__)


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hymnal-search",
        description="Search a hymn dataset described by a catalog file.",
    )
    parser.add_argument("--catalog", type=Path, default=None, help="Catalog JSON file (default: CATALOG_PATH)")
    parser.add_argument("--dataset", default="0", help="Dataset index or name (default: first dataset)")
    parser.add_argument("--query", "-q", default="", help="Search query; empty lists every hymn")
    parser.add_argument(
        "--sort",
        choices=[mode.value for mode in SortMode],
        default=SortMode.RELEVANCE.value,
        help="Order of the printed results",
    )
    parser.add_argument("--limit", type=int, default=None, help="Maximum results printed (default: RESULT_LIMIT)")
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL)")
    parser.add_argument("--json-logs", action="store_true", help="Emit structured JSON logs")
    return parser


def format_summary(count: int, query: str) -> str:
    if query:
        return f'{count} results for "{query}"'
    return f"{count} hymn{'' if count == 1 else 's'}"


def format_line(document: Document) -> str:
    number = document.number or "-"
    title = document.title or "(Untitled)"
    return f"{number}. {title}"


def _print_results(documents: Sequence[Document], query: str, limit: int) -> None:
    for document in documents[:limit]:
        print(format_line(document))
    if len(documents) > limit:
        print(f"... {len(documents) - limit} more")
    print(format_summary(len(documents), query))


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings()  # type: ignore[call-arg]
    except ValidationError as exc:
        print(f"Invalid settings: {exc}", file=sys.stderr)
        return 1

    configure_logging(args.log_level or settings.log_level, json_output=args.json_logs or settings.log_json)

    catalog_path: Path = args.catalog or settings.catalog_path
    try:
        catalog = Catalog.from_json_file(catalog_path)
        dataset = catalog.select(args.dataset)
        documents = load_dataset(dataset, base_dir=catalog_path.parent)
    except FileNotFoundError as exc:
        logger.error("%s", exc)
        return 1
    except ValueError as exc:
        logger.error("%s", exc)
        return 1

    index = build_index(documents)
    query = args.query.strip()
    results = search(
        index,
        documents,
        query,
        weights=settings.scoring_weights(),
        max_prefix_expansions=settings.max_prefix_expansions,
    )
    results = sort_documents(results, args.sort)

    limit = args.limit if args.limit and args.limit > 0 else settings.result_limit
    _print_results(results, query, limit)
    return 0


if __name__ == "__main__":
    sys.exit(main())
