"""Log source dispatcher: routes CLI args to the record loader."""

from __future__ import annotations

from typing import Tuple

from .csv_file import LoadResult, load_csv


def read_records(args) -> Tuple[LoadResult, str]:
    """Load records for the input named on *args*.

    Returns:
        A tuple of ``(load_result, source_description)`` where the
        description identifies the source for report output
        (e.g. ``"csv:data/subset_500.csv"``).

    Raises:
        RuntimeError: If no input was set on *args* or the file is missing.
    """
    if args.input:
        return load_csv(args.input), f"csv:{args.input}"

    raise RuntimeError("No log source provided.")
