"""
Command-line interface listing summarization providers.

Usage:
    python -m docsum providers
    python -m docsum providers --check
"""

import argparse

from ..logging_config import get_logger, setup_logging
from ..providers import KNOWN_PROVIDERS, ProviderRegistry
from .common import build_registry


logger = get_logger(__name__)


def describe_providers(registry: ProviderRegistry, check: bool = False) -> dict[str, dict]:
    """Print availability (and optionally credential validity) for every known provider."""
    report = {}
    print("Providers:")
    for provider in KNOWN_PROVIDERS:
        if not registry.is_available(provider):
            print(f"  ⚪ {provider:<10} not available")
            report[provider] = {"available": False}
            continue

        service = registry.get_service(provider)
        entry = {"available": True, "model": service.model}
        line = f"  🟢 {provider:<10} {service.model}"

        if check:
            ok, error = service.check_credentials()
            entry["credentials_valid"] = ok
            line += "  ✅ key valid" if ok else f"  ❌ {error}"

        print(line)
        report[provider] = entry
    return report


def main():
    """Main entry point for the providers CLI."""
    parser = argparse.ArgumentParser(description="List summarization providers")
    parser.add_argument("--check", action="store_true", help="Validate configured API keys against each provider")
    args = parser.parse_args()

    setup_logging()
    describe_providers(build_registry(), check=args.check)


if __name__ == "__main__":
    main()
