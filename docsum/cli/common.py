"""
Common utilities for CLI modules.
"""

import json
import sys
from pathlib import Path
from typing import Any

from ..config import Config, get_config
from ..prompts import TemplateStore
from ..providers import ProviderRegistry
from ..storage import SummaryStore


def save_json_output(
    data: dict[str, Any], output_path: str, pretty: bool = True
) -> None:
    """
    Save data to JSON file with error handling.

    Args:
        data: Data to save
        output_path: Path to save the JSON file
        pretty: Whether to pretty-print the JSON
    """
    try:
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)

        with open(output_file, "w", encoding="utf-8") as f:
            if pretty:
                json.dump(data, f, indent=2, ensure_ascii=False)
            else:
                json.dump(data, f, ensure_ascii=False)

        print(f"✅ Output saved to: {output_file}")

    except Exception as e:
        print(f"❌ Error saving output to {output_path}: {e}", file=sys.stderr)
        sys.exit(1)


def print_summary_stats(stats: dict[str, Any]) -> None:
    """
    Print formatted summary statistics.

    Args:
        stats: Statistics dictionary to display
    """
    print("\n📊 Summary Statistics:")
    for key, value in stats.items():
        if isinstance(value, float):
            print(f"  {key}: {value:.1f}")
        else:
            print(f"  {key}: {value}")


def parse_variables(pairs: list[str] | None) -> dict[str, str]:
    """Parse ``key=value`` command-line pairs into a dict."""
    variables = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise ValueError(f"Template variable must be key=value, got: {pair}")
        key, value = pair.split("=", 1)
        variables[key.strip()] = value
    return variables


def build_template_store(config: Config | None = None) -> TemplateStore:
    config = config or get_config()
    return TemplateStore(config.templates_file)


def build_summary_store(config: Config | None = None) -> SummaryStore:
    config = config or get_config()
    return SummaryStore(config.summaries_dir)


def build_registry(config: Config | None = None) -> ProviderRegistry:
    """Registry built once per command, with user templates available to every backend."""
    config = config or get_config()
    templates = build_template_store(config).as_mapping()
    return ProviderRegistry.from_config(config, templates=templates)
