"""
Flow Dataset (Data Model)
=========================
Immutable containers for one loaded data file.

A Dataset is never edited after construction: every successful load builds
a new instance which then replaces the previous one as a whole.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Iterable, Optional


# ------------------------------------------------------------------------------
# Errors
# ------------------------------------------------------------------------------
class ErrorKind(StrEnum):
    """Classification of a failed load. Internal only, never shown to the user."""
    FORMAT = "format"
    NUMERIC = "numeric"
    IO = "io"


class DatasetError(ValueError):
    """Base class for problems found in the content of a data file."""
    kind: ErrorKind = ErrorKind.FORMAT

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class FormatError(DatasetError):
    """A line does not have the expected shape (e.g. fewer than 2 tokens)."""
    kind = ErrorKind.FORMAT


class NumericError(DatasetError):
    """The trailing token of a data line is not a real-number literal."""
    kind = ErrorKind.NUMERIC


# ------------------------------------------------------------------------------
# Data Structures
# ------------------------------------------------------------------------------
@dataclass(frozen=True)
class FlowRecord:
    """One labelled flow from the source node to a target node."""
    label: str
    value: float


@dataclass(frozen=True)
class Dataset:
    """
    The parsed content of a data file.

    Record order equals input order and drives the vertical stacking of the
    target nodes.
    """
    title: str
    source_label: str
    records: tuple[FlowRecord, ...] = field(default_factory=tuple)

    @classmethod
    def from_pairs(cls, title: str, source_label: str, pairs: Iterable[tuple[str, float]]) -> Dataset:
        return cls(title, source_label, tuple(FlowRecord(label, float(value)) for label, value in pairs))

    @property
    def labels(self) -> list[str]:
        return [r.label for r in self.records]

    @property
    def values(self) -> list[float]:
        return [r.value for r in self.records]

    @property
    def total(self) -> float:
        return sum(self.values)

    @property
    def is_empty(self) -> bool:
        return not self.records

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class LoadError:
    """Why a load failed. Carried through signals; the user only sees a generic message."""
    kind: ErrorKind
    message: str
    line_number: Optional[int] = None
    path: Optional[str] = None

    @classmethod
    def from_exception(cls, exc: Exception, path: Optional[str] = None) -> LoadError:
        if isinstance(exc, DatasetError):
            return cls(exc.kind, str(exc), exc.line_number, path)
        return cls(ErrorKind.IO, str(exc), None, path)


@dataclass(frozen=True)
class LoadResult:
    """Outcome of reading a data file: exactly one of `dataset` / `error` is set."""
    dataset: Optional[Dataset] = None
    error: Optional[LoadError] = None

    def __post_init__(self) -> None:
        if (self.dataset is None) == (self.error is None):
            raise ValueError("LoadResult needs exactly one of 'dataset' or 'error'.")

    @property
    def ok(self) -> bool:
        return self.dataset is not None

    @classmethod
    def success(cls, dataset: Dataset) -> LoadResult:
        return cls(dataset=dataset)

    @classmethod
    def failure(cls, error: LoadError) -> LoadResult:
        return cls(error=error)
