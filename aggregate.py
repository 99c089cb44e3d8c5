#!/usr/bin/env python3
"""
aggregate.py — Resolve movie release attributes for import units

Pure PRECISION operation. Reads already-extracted evidence (parsed file and
folder names, probed media info, matched release record) and writes the
resolved attribute values. Never touches media files or the library.

Input: a JSON file holding one evidence bundle or a list of bundles, or a
directory of such *.json files. Bundle shape:

  {
    "path": "/downloads/Movie.2019.FRENCH.1080p/Movie.2019.mkv",
    "filename_info": {"languages": ["fr"], "resolution": 1080},
    "folder_info": {"languages": ["fr"]},
    "media_info": {"width": 1920, "height": 800, "audio_languages": ["fre", "eng"]},
    "release_info": null
  }

Output:
  - CSV manifest, one row per import unit, value + confidence per attribute
  - Optional JSON trace with every candidate considered

Usage:
  python aggregate.py <input>                         # default config.yaml
  python aggregate.py <input> --config my.yaml
  python aggregate.py <input> --output PATH --trace PATH
  python aggregate.py <input> --workers 4 --verbose
"""

import sys
import csv
import json
import logging
import argparse
from collections import Counter
from pathlib import Path
from typing import Any, List, Optional, Tuple

from movie_import.candidate import ResolvedRecord
from movie_import.errors import AggregationError, MalformedBundleError
from movie_import.evidence import EvidenceBundle
from movie_import.pipeline import AggregationPipeline
from movie_import.registry import load_pipeline

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def find_input_files(input_path: Path) -> List[Path]:
    """Return the JSON files to read (input_path itself, or *.json inside it)"""
    if input_path.is_dir():
        return sorted(f for f in input_path.iterdir() if f.is_file() and f.suffix.lower() == '.json')
    return [input_path]


def load_bundles(json_path: Path) -> List[Tuple[str, Optional[EvidenceBundle], Optional[Exception]]]:
    """
    Read bundles from one JSON file

    Returns:
        List of (origin, bundle, error). A file that fails to parse yields a
        single entry with the error set; a malformed bundle inside a list only
        fails that entry.
    """
    try:
        with open(json_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not read {json_path}: {e}")
        return [(str(json_path), None, e)]

    items = data if isinstance(data, list) else [data]
    loaded = []
    for index, item in enumerate(items):
        origin = f"{json_path}[{index}]" if isinstance(data, list) else str(json_path)
        try:
            bundle = EvidenceBundle.from_dict(item)
        except MalformedBundleError as e:
            logger.error(f"Malformed evidence in {origin}: {e}")
            loaded.append((origin, None, e))
            continue

        if bundle.path:
            origin = bundle.path
        loaded.append((origin, bundle, None))

    return loaded


def format_value(value: Any) -> str:
    """Render a resolved value for the CSV manifest"""
    if value is None:
        return ''
    if isinstance(value, tuple):
        return ','.join(str(v) for v in value)
    return str(value)


def manifest_fieldnames(attributes: List[str]) -> List[str]:
    fieldnames = ['path', 'status']
    for attribute in attributes:
        fieldnames.extend([attribute, f'{attribute}_confidence'])
    fieldnames.append('error')
    return fieldnames


def manifest_row(origin: str, record: Optional[ResolvedRecord],
                 error: Optional[Exception]) -> dict:
    row = {'path': origin}
    if record is None:
        row['status'] = 'failed'
        row['error'] = str(error) if error else ''
        return row

    row['status'] = 'resolved'
    row['error'] = ''
    for resolved in record.attributes:
        row[resolved.attribute] = format_value(resolved.value)
        row[f'{resolved.attribute}_confidence'] = resolved.confidence.value
    return row


def run_aggregate(
    input_path: Path,
    pipeline: AggregationPipeline,
    output_path: Path,
    trace_path: Optional[Path] = None,
) -> Counter:
    """
    Resolve every bundle under input_path and write the manifest

    Args:
        input_path:  JSON file or directory of JSON files
        pipeline:    Configured AggregationPipeline
        output_path: Path to write the CSV manifest
        trace_path:  Optional path for the JSON candidate trace

    Returns:
        Counter with 'resolved' and 'failed' totals
    """
    stats: Counter = Counter()
    trace = []

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='', encoding='utf-8') as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=manifest_fieldnames(pipeline.attributes))
        writer.writeheader()

        for json_path in find_input_files(input_path):
            for origin, bundle, error in load_bundles(json_path):
                record = None
                if bundle is not None:
                    try:
                        record = pipeline.run(bundle)
                    except AggregationError as e:
                        logger.error(f"Aggregation failed for {origin}: {e}")
                        error = e

                if record is None:
                    stats['failed'] += 1
                else:
                    stats['resolved'] += 1
                    trace.append(record.to_dict(include_trace=True))

                writer.writerow(manifest_row(origin, record, error))

    if trace_path:
        trace_path.parent.mkdir(parents=True, exist_ok=True)
        with open(trace_path, 'w', encoding='utf-8') as f:
            json.dump(trace, f, indent=2, ensure_ascii=False)
        logger.info(f"Wrote candidate trace for {len(trace)} import unit(s) to {trace_path}")

    return stats


def print_stats(stats: Counter, output_path: Path):
    total = stats['resolved'] + stats['failed']
    print("\n" + "=" * 60)
    print("AGGREGATION SUMMARY")
    print("=" * 60)
    print(f"Import units:  {total}")
    print(f"Resolved:      {stats['resolved']}")
    print(f"Failed:        {stats['failed']}")
    print(f"Manifest:      {output_path}")
    print("=" * 60)


def main():
    parser = argparse.ArgumentParser(
        description='Resolve movie release attributes from file, folder, media and release evidence'
    )
    parser.add_argument('input', type=Path,
                        help='Evidence JSON file or directory of JSON files')
    parser.add_argument('--config', type=Path, default=Path('config.yaml'),
                        help='Attribute registration (default: config.yaml, built-in if missing)')
    parser.add_argument('--output', type=Path, default=Path('output/resolved_attributes.csv'),
                        help='CSV manifest path (default: output/resolved_attributes.csv)')
    parser.add_argument('--trace', type=Path, default=None,
                        help='Write full candidate trace as JSON')
    parser.add_argument('--workers', type=int, default=None,
                        help='Resolve attributes on N threads (overrides config max_workers)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Log every attribute decision')

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    # Hard gate: input must exist
    if not args.input.exists():
        logger.error(f"Input not found: {args.input}")
        return 1

    try:
        pipeline = load_pipeline(args.config)
        if args.workers is not None:
            pipeline = AggregationPipeline(pipeline.aggregators, max_workers=args.workers)
    except AggregationError as e:
        logger.error(f"Invalid registration in {args.config}: {e}")
        return 1

    stats = run_aggregate(args.input, pipeline, args.output, args.trace)
    print_stats(stats, args.output)

    return 0 if stats['failed'] == 0 else 1


if __name__ == '__main__':
    sys.exit(main())
