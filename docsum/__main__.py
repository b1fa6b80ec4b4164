"""
Main entry point for the docsum package.

Enables: python -m docsum [command] [args]
"""

import sys

from docsum.logging_config import get_logger, setup_logging


# Set up logger for main entry point
logger = get_logger(__name__)


def main():
    """Main entry point that delegates to appropriate CLI modules."""
    # Level comes from DOCSUM_LOG_LEVEL until the command applies its own flags
    setup_logging()

    if len(sys.argv) < 2:
        print_help()
        return

    command = sys.argv[1]

    # Remove the command from argv so submodules see the right arguments
    sys.argv = [sys.argv[0]] + sys.argv[2:]

    if command == "chunk":
        from docsum.cli.chunk import main as chunk_main

        chunk_main()
    elif command == "summarize":
        from docsum.cli.summarize import main as summarize_main

        summarize_main()
    elif command == "summaries":
        from docsum.cli.summaries import main as summaries_main

        summaries_main()
    elif command == "templates":
        from docsum.cli.templates import main as templates_main

        templates_main()
    elif command == "providers":
        from docsum.cli.providers import main as providers_main

        providers_main()
    elif command == "help" or command == "-h" or command == "--help":
        print_help()
    else:
        logger.error(f"Unknown command: {command}")
        print_help()
        sys.exit(1)


def print_help():
    """Print main help message."""
    print("docsum - PDF summarization with large language models")
    print()
    print("Usage:")
    print("  python -m docsum <command> [options]")
    print()
    print("Available commands:")
    print("  chunk           Split a PDF or text file into overlapping chunks")
    print("  summarize       Summarize a PDF and store the result")
    print("  summaries       List, show or delete stored summaries")
    print("  templates       List, add or delete prompt templates")
    print("  providers       Show which model providers are configured")
    print("  help            Show this help message")
    print()
    print("Examples:")
    print("  python -m docsum chunk --input report.pdf --preview")
    print("  python -m docsum summarize --input report.pdf --format financial --language French")
    print("  python -m docsum summaries list")
    print("  python -m docsum templates add --name 'Meeting notes' --template-file meeting.txt")
    print("  python -m docsum providers --check")
    print()
    print("For command-specific help:")
    print("  python -m docsum chunk --help")
    print("  python -m docsum summarize --help")
    print("  python -m docsum summaries --help")
    print("  python -m docsum templates --help")


if __name__ == "__main__":
    main()
