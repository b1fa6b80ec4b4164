"""
Command-line interface for stored summaries.

Usage:
    python -m docsum summaries list
    python -m docsum summaries show <id>
    python -m docsum summaries delete <id>
"""

import argparse
import sys

from ..exceptions import DocsumError
from ..logging_config import get_logger, setup_logging
from ..storage import SummaryStore
from ..utils import truncate
from .common import build_summary_store


logger = get_logger(__name__)


def list_summaries(store: SummaryStore) -> int:
    summaries = store.list_all()
    if not summaries:
        print("No stored summaries yet.")
        return 0

    print(f"📚 {len(summaries)} stored summaries (newest first):")
    for summary in summaries:
        created = summary.created_at.strftime("%Y-%m-%d %H:%M")
        print(f"  {summary.id}  {created}  [{summary.format}]  {truncate(summary.title, 60)}")
    return len(summaries)


def show_summary(store: SummaryStore, summary_id: str) -> bool:
    summary = store.get(summary_id)
    if summary is None:
        print(f"❌ Summary not found: {summary_id}", file=sys.stderr)
        return False

    meta = summary.metadata
    print(f"# {summary.title}")
    print(f"Created: {summary.created_at.isoformat()}  Format: {summary.format}")
    if meta.file_name:
        print(f"Source: {meta.file_name} ({meta.page_count or '?'} pages)")
    if meta.provider:
        print(f"Model: {meta.provider}/{meta.model}  Tokens: {meta.tokens_used}")
    print()
    print(summary.content)
    return True


def main():
    """Main entry point for the summaries CLI."""
    parser = argparse.ArgumentParser(description="Manage stored summaries")
    subparsers = parser.add_subparsers(dest="action", required=True)

    subparsers.add_parser("list", help="List stored summaries, newest first")
    show_parser = subparsers.add_parser("show", help="Print a stored summary")
    show_parser.add_argument("id", help="Summary id")
    delete_parser = subparsers.add_parser("delete", help="Delete a stored summary")
    delete_parser.add_argument("id", help="Summary id")

    args = parser.parse_args()
    setup_logging()

    try:
        store = build_summary_store()
        if args.action == "list":
            list_summaries(store)
        elif args.action == "show":
            if not show_summary(store, args.id):
                sys.exit(1)
        elif args.action == "delete":
            store.delete_by_id(args.id)
            print(f"🗑️  Deleted summary {args.id}")
    except DocsumError as e:
        logger.error(f"Summary storage error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
