#!/usr/bin/env python3
"""
Command-line interface for one-off ranking against a CSV dataset.

Usage:
    shapematch rank shapes.csv --query 0.1,0.9,0.2,0.5,0.3,0.5 --top-n 5
    shapematch rank shapes.csv --like A01 --json
    shapematch inspect shapes.csv
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Optional

import click

from .core.errors import DatasetLoadError, InvalidQueryError, RecordNotFoundError
from .core.types import DEFAULT_FEATURE_KEYS, DEFAULT_MIN_COMMON_DIMS, DEFAULT_TOP_N
from .dataset.dataset import Dataset
from .dataset.loader import load_dataset
from .features.normalize import fill_missing, parse_feature_value
from .ranking.engine import rank_top_n
from .similarity.traits import key_differences, shared_traits, similarity_label

logger = logging.getLogger("shapematch.cli")


def _split_keys(value: str) -> list[str]:
    keys = [k.strip() for k in value.split(",") if k.strip()]
    if not keys:
        raise click.BadParameter("at least one feature key is required")
    return keys


def _load(path: str, feature_keys: str, id_column: str, name_column: str) -> Dataset:
    try:
        return load_dataset(
            path,
            feature_keys=_split_keys(feature_keys),
            id_column=id_column,
            name_column=name_column,
        )
    except (FileNotFoundError, DatasetLoadError) as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(1)


def _parse_query(value: str, dimensions: int) -> tuple[float, ...]:
    parts = value.split(",")
    if len(parts) != dimensions:
        raise InvalidQueryError(f"Query must have {dimensions} values, got {len(parts)}")
    values = [parse_feature_value(p) for p in parts]
    if any(v is None for v in values):
        raise InvalidQueryError(f"Query values must be numbers: {value}")
    return tuple(values)


def dataset_options(func):
    func = click.option("--name-column", default="name", show_default=True)(func)
    func = click.option("--id-column", default="id", show_default=True)(func)
    func = click.option(
        "--feature-keys",
        default=",".join(DEFAULT_FEATURE_KEYS),
        show_default=True,
        help="Comma-separated feature columns, in axis order",
    )(func)
    return func


@click.group()
@click.option("--log-level", default="WARNING", show_default=True, help="Logging level")
def cli(log_level: str):
    """Shape similarity ranking CLI."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@cli.command()
@click.argument("dataset_path", type=click.Path(dir_okay=False))
@click.option("--query", "query_text", help="Comma-separated query values in [0,1]")
@click.option("--like", "like_id", help="Use this record's shape as the query")
@click.option("--top-n", default=DEFAULT_TOP_N, show_default=True, type=click.IntRange(min=0))
@click.option(
    "--min-common-dims",
    default=DEFAULT_MIN_COMMON_DIMS,
    show_default=True,
    type=click.IntRange(min=1),
)
@click.option("--json", "as_json", is_flag=True, help="Emit JSON instead of a table")
@dataset_options
def rank(
    dataset_path: str,
    query_text: Optional[str],
    like_id: Optional[str],
    top_n: int,
    min_common_dims: int,
    as_json: bool,
    feature_keys: str,
    id_column: str,
    name_column: str,
):
    """Rank DATASET_PATH records against a query shape."""
    if bool(query_text) == bool(like_id):
        click.echo("ERROR: pass exactly one of --query or --like", err=True)
        sys.exit(1)

    dataset = _load(dataset_path, feature_keys, id_column, name_column)

    try:
        if like_id:
            query = fill_missing(dataset.require(like_id).vector, 0.0)
        else:
            query = _parse_query(query_text, dataset.dimensions)
    except (InvalidQueryError, RecordNotFoundError) as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(1)

    result = rank_top_n(query, dataset, top_n, min_common_dims=min_common_dims)
    keys = dataset.feature_keys

    if as_json:
        payload = result.to_dict()
        for item, candidate in zip(payload["candidates"], result.candidates):
            item["similarity_label"] = similarity_label(candidate.score)
            item["shared_traits"] = shared_traits(query, candidate.record.vector, keys)
            item["key_differences"] = key_differences(query, candidate.record.vector, keys)
        click.echo(json.dumps(payload, indent=2))
        return

    click.echo(f"Query: {', '.join(f'{k}={v:.2f}' for k, v in zip(keys, query))}")
    click.echo(
        f"Considered {result.considered}, excluded by peak {result.excluded_by_peak}, "
        f"incomparable {result.incomparable}"
    )
    click.echo("=" * 60)

    if not result.candidates:
        click.echo("No comparable records.")
        return

    for candidate in result.candidates:
        record = candidate.record
        click.echo(
            f"{candidate.rank:>3}. {record.name:<24} {candidate.score:.4f}  "
            f"{similarity_label(candidate.score)}"
        )


@cli.command()
@click.argument("dataset_path", type=click.Path(dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Emit JSON instead of text")
@dataset_options
def inspect(
    dataset_path: str,
    as_json: bool,
    feature_keys: str,
    id_column: str,
    name_column: str,
):
    """Summarize axis coverage and peak distribution of DATASET_PATH."""
    dataset = _load(dataset_path, feature_keys, id_column, name_column)
    summary = dataset.summary()

    if as_json:
        click.echo(json.dumps(summary, indent=2))
        return

    click.echo("\nDataset Summary")
    click.echo("=" * 50)
    click.echo(f"Records: {summary['records']:,}")
    click.echo(f"Skipped rows: {summary['skipped']:,}")
    click.echo(f"Dimensions: {summary['dimensions']}")
    click.echo()
    click.echo("Observed values per axis:")
    for key, count in summary["observed"].items():
        click.echo(f"  {key}: {count:,}")
    click.echo()
    click.echo("Peak axis distribution:")
    for key, count in summary["peaks"].items():
        click.echo(f"  {key}: {count:,}")

    if dataset.is_empty:
        click.echo("\nNo usable records.")


if __name__ == "__main__":
    cli()
