"""
Data File Parser
================
Turns the plain-text data file into a Dataset.

File layout::

    line 1: <title>
    line 2: <source node label>
    line 3..N: <label token> [<label token> ...] <value>

Tokens are separated by single spaces. The last token of a data line is the
value, everything before it (joined back with single spaces) is the label.
"""
from __future__ import annotations

import io
import logging
import os
import re
from typing import Iterable, Union

from sankeyplot.model.dataset import (
    Dataset, FlowRecord, FormatError, NumericError, LoadError, LoadResult,
)

logger = logging.getLogger(__name__)

# Optional sign, digits with an optional decimal point (or ".5"), optional exponent.
# float() alone would also let "nan", "inf" and "1_000" through.
_REAL_LITERAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

HEADER_LINES = 2


def parse_value(token: str, line_number: int | None = None) -> float:
    """Convert a real-number literal to float, raising NumericError otherwise.

    Whitespace around the literal is ignored.
    """
    literal = token.strip()
    if not _REAL_LITERAL.fullmatch(literal):
        raise NumericError(f"'{token}' is not a number", line_number)
    return float(literal)


def parse_record(line: str, line_number: int | None = None) -> FlowRecord:
    """Parse one data line into a FlowRecord."""
    parts = line.split(" ")
    # Trailing separators do not produce tokens
    while parts and parts[-1] == "":
        parts.pop()
    if len(parts) < 2:
        raise FormatError(f"expected '<label> <value>', got '{line}'", line_number)

    label = " ".join(parts[:-1])
    value = parse_value(parts[-1], line_number)
    return FlowRecord(label=label, value=value)


def parse_lines(lines: Iterable[str]) -> Dataset:
    """
    Build a Dataset from an iterable of text lines.

    Records are collected locally and the Dataset is only constructed after
    the last line parsed, so a failure never yields a partial result.

    A label that appears twice keeps its first position but takes the later
    value.

    Raises:
        FormatError: Missing header lines or a data line with < 2 tokens.
        NumericError: A trailing token that is not a number.
    """
    title: str | None = None
    source_label: str | None = None
    records: dict[str, float] = {}

    for line_number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if line_number == 1:
            title = line
            continue
        if line_number == 2:
            source_label = line
            continue

        record = parse_record(line, line_number)
        if record.label in records:
            logger.warning(
                f"Duplicate label '{record.label}' on line {line_number}: "
                f"{records[record.label]} replaced by {record.value}"
            )
        if record.value < 0:
            logger.warning(f"Negative value {record.value} for '{record.label}' on line {line_number}")
        records[record.label] = record.value

    if title is None:
        raise FormatError("missing title line", 1)
    if source_label is None:
        raise FormatError("missing source label line", 2)

    dataset = Dataset.from_pairs(title, source_label, records.items())
    logger.debug(f"Parsed dataset '{dataset.title}' with {len(dataset)} records (total {dataset.total})")
    return dataset


def parse_text(text: str) -> Dataset:
    """Parse a whole file's content. Accepts \\n, \\r\\n and \\r line endings."""
    # newline=None turns every line ending into "\n"
    return parse_lines(io.StringIO(text, newline=None))


def read_dataset(path: Union[str, os.PathLike]) -> LoadResult:
    """
    Read and parse a data file.

    All failures (unreadable file, malformed line, bad number) come back as a
    LoadResult carrying a LoadError; nothing is raised.
    """
    path = os.fspath(path)
    logger.info(f"Loading data file: {path}")
    try:
        with open(path, "r", encoding="utf-8") as fh:
            dataset = parse_lines(fh)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Could not read '{path}': {e}")
        return LoadResult.failure(LoadError.from_exception(e, path))
    except (FormatError, NumericError) as e:
        logger.error(f"Invalid data in '{path}': {e}")
        return LoadResult.failure(LoadError.from_exception(e, path))

    logger.info(f"Loaded '{dataset.title}': {len(dataset)} flows from '{dataset.source_label}'")
    return LoadResult.success(dataset)
