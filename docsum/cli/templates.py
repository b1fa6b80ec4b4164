"""
Command-line interface for prompt templates.

Usage:
    python -m docsum templates list
    python -m docsum templates add --name "Meeting notes" --template-file meeting.txt
    python -m docsum templates delete <id>
"""

import argparse
import sys
from pathlib import Path

from ..exceptions import DocsumError, ValidationError
from ..logging_config import get_logger, setup_logging
from ..prompts import PromptTemplate, TemplateStore
from ..utils import find_placeholders, truncate
from .common import build_template_store


logger = get_logger(__name__)


def list_templates(store: TemplateStore, verbose: bool = False) -> list[PromptTemplate]:
    templates = store.list_templates()
    print(f"📝 {len(templates)} templates:")
    for template in templates:
        kind = "system" if template.is_system_template else "user"
        category = f" ({template.category})" if template.category else ""
        print(f"  {template.id:<34} [{kind}] {template.name}{category}")
        if verbose:
            print(f"      {truncate(template.description, 100)}")
    return templates


def add_template(
    store: TemplateStore,
    name: str,
    template_text: str,
    description: str = "",
    category: str | None = None,
    template_id: str = "",
) -> PromptTemplate:
    """Create (or update, when ``template_id`` names an existing one) a user template."""
    if not name.strip():
        raise ValidationError("Template name cannot be empty")
    if not template_text.strip():
        raise ValidationError("Template text cannot be empty")

    saved = store.save_user_template(
        PromptTemplate(
            id=template_id,
            name=name.strip(),
            description=description,
            template=template_text,
            category=category,
        )
    )

    placeholders = find_placeholders(saved.template)
    print(f"✅ Saved template {saved.id} ({saved.name})")
    if placeholders:
        print(f"   Placeholders: {', '.join(placeholders)}")
    return saved


def main():
    """Main entry point for the templates CLI."""
    parser = argparse.ArgumentParser(description="Manage prompt templates")
    subparsers = parser.add_subparsers(dest="action", required=True)

    list_parser = subparsers.add_parser("list", help="List system and user templates")
    list_parser.add_argument("--verbose", "-v", action="store_true", help="Show descriptions")

    add_parser = subparsers.add_parser("add", help="Create or update a user template")
    add_parser.add_argument("--name", required=True, help="Template name")
    add_parser.add_argument("--template-file", required=True, help="File containing the template text")
    add_parser.add_argument("--description", default="", help="Short description")
    add_parser.add_argument("--category", help="Optional category")
    add_parser.add_argument("--id", default="", help="Id of an existing user template to update")

    delete_parser = subparsers.add_parser("delete", help="Delete a user template")
    delete_parser.add_argument("id", help="Template id")

    args = parser.parse_args()
    setup_logging()

    try:
        store = build_template_store()
        if args.action == "list":
            list_templates(store, verbose=args.verbose)
        elif args.action == "add":
            try:
                template_text = Path(args.template_file).read_text(encoding="utf-8")
            except OSError as e:
                raise ValidationError(f"Cannot read template file {args.template_file}: {e}") from e
            add_template(
                store,
                name=args.name,
                template_text=template_text,
                description=args.description,
                category=args.category,
                template_id=args.id,
            )
        elif args.action == "delete":
            store.delete_user_template(args.id)
            print(f"🗑️  Deleted template {args.id}")
    except DocsumError as e:
        logger.error(f"Template error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
