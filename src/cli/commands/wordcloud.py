"""CLI commands for phrase clouds, drill-down lookups and district listings."""
from __future__ import annotations

import argparse
import json
import re
import sys
from pathlib import Path
from typing import Any

from src.phrases import DataSourceConfig, WordCloudResult
from src.phrases.config import WordCloudConfig, load_wordcloud_config
from src.phrases.drilldown import find_drilldown_matches
from src.phrases.palette import palette_for
from src.phrases.tagger import TaggerError, get_default_tagger
from src.phrases.wordcloud import build_word_cloud
from src.regions import Record, extract_unique_region_keys, get_field, group_districts_by_area, load_records

__all__ = ["register_commands"]

OUTPUT_TEXT = "text"
OUTPUT_JSON = "json"

_DISTRICT_NUMBER = re.compile(r"[0-9]+")


def register_commands(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    """Add word cloud commands to the main CLI parser."""

    wordcloud_parser = subparsers.add_parser(
        "wordcloud",
        description="Rank salient phrases in records from the selected districts.",
        help="Rank salient phrases in records from the selected districts.",
    )
    _add_source_arguments(wordcloud_parser)
    wordcloud_parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of phrases to return (default from configuration, 50).",
    )
    wordcloud_parser.add_argument(
        "--palette",
        choices=["light", "dark"],
        default=None,
        help="Colour palette used for phrase colours (default from configuration).",
    )
    wordcloud_parser.set_defaults(func=wordcloud_cli, command="wordcloud")

    drilldown_parser = subparsers.add_parser(
        "drilldown",
        description="List the records whose text contains a phrase.",
        help="List the records whose text contains a phrase.",
    )
    _add_source_arguments(drilldown_parser)
    drilldown_parser.add_argument("--phrase", required=True, help="Phrase to look up (case-insensitive).")
    drilldown_parser.set_defaults(func=drilldown_cli, command="drilldown")

    regions_parser = subparsers.add_parser(
        "regions",
        description="List the postcode districts present in a records file, grouped by area.",
        help="List postcode districts present in a records file.",
    )
    regions_parser.add_argument("--records", type=Path, required=True, help="CSV file of records.")
    regions_parser.add_argument(
        "--field",
        default="postcode",
        help="Record field holding the postcode (default: postcode).",
    )
    _add_output_argument(regions_parser)
    regions_parser.set_defaults(func=regions_cli, command="regions")


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--source", required=True, help="Configured data source id (e.g. services).")
    parser.add_argument(
        "--records",
        type=Path,
        help="CSV file of records. Defaults to the file configured for the source.",
    )
    parser.add_argument(
        "--region",
        action="append",
        default=[],
        help="Selected postcode district. Repeat to select several.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a word cloud YAML config (default: config/wordcloud.yaml when present).",
    )
    _add_output_argument(parser)


def _add_output_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--output-format",
        choices=[OUTPUT_TEXT, OUTPUT_JSON],
        default=OUTPUT_TEXT,
        help="Output format: friendly text or JSON.",
    )


def wordcloud_cli(args: argparse.Namespace) -> int:
    try:
        config = load_wordcloud_config(args.config)
        source = config.source(args.source)
        records = _load_source_records(config, source, args.records)
        palette = palette_for(args.palette) if args.palette else config.palette()
        tagger = get_default_tagger(config.model)
        # A missing model is fatal here; per-text tagging failures are only skipped.
        tagger.load()
        result = build_word_cloud(
            records,
            args.region,
            source,
            limit=args.limit if args.limit is not None else config.limit,
            palette=palette,
            tagger=tagger,
            stopwords=config.stopwords(),
        )
    except (FileNotFoundError, ValueError, KeyError, TaggerError) as exc:
        print(f"error: {_describe(exc)}", file=sys.stderr)
        return 1

    if args.output_format == OUTPUT_JSON:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(_render_word_cloud(result))
    return 0


def drilldown_cli(args: argparse.Namespace) -> int:
    try:
        config = load_wordcloud_config(args.config)
        source = config.source(args.source)
        records = _load_source_records(config, source, args.records)
    except (FileNotFoundError, ValueError, KeyError) as exc:
        print(f"error: {_describe(exc)}", file=sys.stderr)
        return 1

    matches = find_drilldown_matches(
        records,
        args.phrase,
        text_field=source.text_field,
        region_field=source.region_field,
        # Without --region every record of the source is searched.
        selected_regions=args.region or None,
    )

    if args.output_format == OUTPUT_JSON:
        payload = {
            "source_id": source.id,
            "phrase": args.phrase,
            "matches": [match.to_dict() for match in matches],
        }
        print(json.dumps(payload, indent=2))
        return 0

    print(f'Sources containing "{args.phrase}"')
    if not matches:
        print("No matching data found")
        return 0
    for match in matches:
        record = match.record
        print(f"- Service: {get_field(record, 'service_name') or '-'}")
        print(f"  Postcode: {get_field(record, source.region_field) or '-'}")
        print(f"  Text: {get_field(record, match.matched_field) or 'No text available'}")
    return 0


def regions_cli(args: argparse.Namespace) -> int:
    try:
        records = load_records(args.records)
    except FileNotFoundError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    districts = extract_unique_region_keys(records, args.field)
    grouped = group_districts_by_area(districts)
    payload: dict[str, Any] = {
        area: sorted(grouped[area], key=_district_sort_key) for area in sorted(grouped)
    }

    if args.output_format == OUTPUT_JSON:
        print(json.dumps(payload, indent=2))
        return 0

    if not payload:
        print("No postcode districts found.")
        return 0
    for area, members in payload.items():
        print(f"{area}: {', '.join(members)}")
    return 0


def _load_source_records(
    config: WordCloudConfig,
    source: DataSourceConfig,
    override: Path | None,
) -> tuple[Record, ...]:
    path = override if override is not None else config.resolve_file(source)
    if path is None:
        raise ValueError(f"No records file configured for source '{source.id}'; pass --records.")
    return load_records(path)


def _render_word_cloud(result: WordCloudResult) -> str:
    selected = result.metadata.get("selected_records", 0)
    total = result.metadata.get("total_records", 0)
    lines = [f"{result.label} ({selected} of {total} records selected)"]
    if not result.entries:
        lines.append("No words found in selected areas")
        return "\n".join(lines)
    width = max(len(str(entry.weight)) for entry in result.entries)
    for entry in result.entries:
        lines.append(f"  {entry.weight:>{width}}  {entry.phrase}")
    return "\n".join(lines)


def _district_sort_key(district: str) -> tuple[int, str]:
    # NE2 sorts before NE10.
    match = _DISTRICT_NUMBER.search(district)
    return (int(match.group(0)) if match else 0, district)


def _describe(exc: Exception) -> str:
    # KeyError wraps its message in quotes when converted with str().
    if isinstance(exc, KeyError) and exc.args:
        return str(exc.args[0])
    return str(exc)
