"""Karnaugh map indexing, cell classification and implicant overlay helpers."""

from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import (
    Any,
    Dict,
    FrozenSet,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from .config import HIGHLIGHT_PALETTE, MAX_INPUTS, MIN_INPUTS, VARIABLE_NAMES
from .errors import RangeError, StructuralError

logger = logging.getLogger(__name__)

PATTERN_CHARS = frozenset("01-")


class CellValue(str, Enum):
    """Classification of a single K-map cell."""

    ON = "on"
    OFF = "off"
    DONT_CARE = "dontCare"


@dataclass(frozen=True)
class Implicant:
    """Product term supplied by the solver: a pattern plus the minterms it covers."""

    pattern: str
    covered: Tuple[int, ...]
    covered_set: FrozenSet[int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "covered", tuple(self.covered))
        object.__setattr__(self, "covered_set", frozenset(self.covered))

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Implicant":
        """Build from a solver payload entry ({"bits": ..., "covered": [...]})."""
        pattern = payload.get("bits", payload.get("pattern"))
        if pattern is None or "covered" not in payload:
            raise StructuralError(f"Implicant entry is missing bits/covered: {dict(payload)!r}")
        covered = payload["covered"]
        if not isinstance(covered, (list, tuple)):
            raise StructuralError(
                f"Implicant {pattern!r} covered must be a list of minterms, got {covered!r}"
            )
        return cls(pattern=str(pattern), covered=tuple(covered))

    def covers(self, minterm: int) -> bool:
        return minterm in self.covered_set

    def to_dict(self) -> Dict[str, Any]:
        return {"bits": self.pattern, "covered": list(self.covered)}


ImplicantLike = Union[Implicant, Mapping[str, Any]]


@dataclass(frozen=True)
class AxisSplit:
    """Distribution of the input variables between the row and column axes."""

    row_vars: int
    col_vars: int

    @property
    def num_inputs(self) -> int:
        return self.row_vars + self.col_vars

    @property
    def rows(self) -> int:
        return 1 << self.row_vars

    @property
    def cols(self) -> int:
        return 1 << self.col_vars

    @property
    def row_names(self) -> Tuple[str, ...]:
        return variable_names(self.num_inputs)[: self.row_vars]

    @property
    def col_names(self) -> Tuple[str, ...]:
        return variable_names(self.num_inputs)[self.row_vars :]


@dataclass(frozen=True)
class GridCell:
    """One resolved cell of the map."""

    row_gray: int
    col_gray: int
    minterm: int
    bit_string: str
    value: CellValue
    covering_implicant_indexes: Tuple[int, ...] = ()

    @property
    def primary_implicant(self) -> Optional[int]:
        """Index of the implicant that drives the cell highlight, if any."""
        if self.covering_implicant_indexes:
            return self.covering_implicant_indexes[0]
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mintermIndex": self.minterm,
            "bitString": self.bit_string,
            "value": self.value.value,
            "coveringImplicantIndexes": list(self.covering_implicant_indexes),
        }


@dataclass(frozen=True)
class GridRow:
    """A row of cells sharing the same row Gray value."""

    gray_value: int
    cells: Tuple[GridCell, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"grayValue": self.gray_value, "cells": [c.to_dict() for c in self.cells]}


@dataclass(frozen=True)
class KMapGrid:
    """Render-ready K-map: Gray-ordered rows of classified, overlaid cells."""

    split: AxisSplit
    rows: Tuple[GridRow, ...]
    implicants: Tuple[Implicant, ...] = ()

    @property
    def num_inputs(self) -> int:
        return self.split.num_inputs

    @property
    def row_vars(self) -> int:
        return self.split.row_vars

    @property
    def col_vars(self) -> int:
        return self.split.col_vars

    @property
    def row_labels(self) -> List[str]:
        return [to_bits_string(row.gray_value, self.row_vars) for row in self.rows]

    @property
    def col_labels(self) -> List[str]:
        if not self.rows:
            return []
        return [to_bits_string(cell.col_gray, self.col_vars) for cell in self.rows[0].cells]

    def cells(self) -> Iterator[GridCell]:
        """Iterate cells row by row, each row in column Gray order."""
        for row in self.rows:
            yield from row.cells

    def cell_at(self, row: int, col: int) -> GridCell:
        return self.rows[row].cells[col]

    def cell_for(self, minterm: int) -> GridCell:
        r, c = minterm_to_rc(self.num_inputs, minterm)
        return self.cell_at(r, c)

    def covering_implicants(self, cell: GridCell) -> List[Implicant]:
        return [self.implicants[i] for i in cell.covering_implicant_indexes]

    def highlight_color(
        self, cell: GridCell, palette: Sequence[str] = HIGHLIGHT_PALETTE
    ) -> Optional[str]:
        return highlight_color(cell.primary_implicant, palette)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rowVars": self.row_vars,
            "colVars": self.col_vars,
            "rows": [row.to_dict() for row in self.rows],
        }


def gray_sequence(bits: int) -> List[int]:
    """Return the reflected binary Gray ordering of range(2**bits)."""
    if bits <= 0:
        return [0]
    return [i ^ (i >> 1) for i in range(1 << bits)]


def gray_rank(gray: int) -> int:
    """Return the position of a Gray value inside its Gray sequence."""
    if gray < 0:
        raise ValueError("Gray values are non-negative.")
    rank = 0
    while gray:
        rank ^= gray
        gray >>= 1
    return rank


def to_bits_string(value: int, width: int) -> str:
    """Binary representation of value, zero-padded to width, MSB first."""
    return format(value, "b").zfill(width)


def variable_names(n: int) -> Tuple[str, ...]:
    """Return the first n variable names (A, B, C, ...)."""
    if n < 0 or n > len(VARIABLE_NAMES):
        raise RangeError(f"Only {len(VARIABLE_NAMES)} variable names are available, got {n}.")
    return tuple(VARIABLE_NAMES[:n])


def validate_num_inputs(n: int) -> int:
    """Reject variable counts outside [MIN_INPUTS, MAX_INPUTS]; return n as a plain int."""
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise RangeError(f"Number of inputs must be an integer, got {n!r}.")
    if n < MIN_INPUTS or n > MAX_INPUTS:
        raise RangeError(
            f"K-map available for {MIN_INPUTS}-{MAX_INPUTS} variables, got {n}."
        )
    return int(n)


def split_axes(n: int) -> AxisSplit:
    """Split n variables into row bits (floor) and column bits (ceil)."""
    n = validate_num_inputs(n)
    row_vars = n // 2
    return AxisSplit(row_vars=row_vars, col_vars=n - row_vars)


def minterm_to_rc(n: int, minterm: int) -> Tuple[int, int]:
    """Translate a minterm index to (row, col) positions on the Gray-ordered grid."""
    split = split_axes(n)
    n = split.num_inputs
    if minterm < 0 or minterm >= 1 << n:
        raise StructuralError(f"Minterm {minterm} is outside 0-{(1 << n) - 1}.")
    row_gray = minterm >> split.col_vars
    col_gray = minterm & (split.cols - 1)
    return gray_rank(row_gray), gray_rank(col_gray)


def classify(minterm: int, on_set: FrozenSet[int], dont_care_set: FrozenSet[int]) -> CellValue:
    if minterm in on_set:
        return CellValue.ON
    if minterm in dont_care_set:
        return CellValue.DONT_CARE
    return CellValue.OFF


def resolve_cells(
    split: AxisSplit, on_set: Iterable[int], dont_care_set: Iterable[int] = ()
) -> Tuple[GridRow, ...]:
    """Build every cell, rows in Gray order and columns in Gray order."""
    ones = frozenset(on_set)
    dcs = frozenset(dont_care_set)
    n = split.num_inputs
    col_gray = gray_sequence(split.col_vars)

    rows: List[GridRow] = []
    for rg in gray_sequence(split.row_vars):
        cells = []
        for cg in col_gray:
            minterm = (rg << split.col_vars) | cg
            cells.append(
                GridCell(
                    row_gray=rg,
                    col_gray=cg,
                    minterm=minterm,
                    bit_string=to_bits_string(minterm, n),
                    value=classify(minterm, ones, dcs),
                )
            )
        rows.append(GridRow(gray_value=rg, cells=tuple(cells)))
    return tuple(rows)


def overlay_implicants(
    rows: Sequence[GridRow], implicants: Sequence[Implicant]
) -> Tuple[GridRow, ...]:
    """Attach, per cell, the indexes of every implicant covering it (list order kept)."""
    overlaid = []
    for row in rows:
        cells = tuple(
            replace(
                cell,
                covering_implicant_indexes=tuple(
                    i for i, imp in enumerate(implicants) if imp.covers(cell.minterm)
                ),
            )
            for cell in row.cells
        )
        overlaid.append(GridRow(gray_value=row.gray_value, cells=cells))
    return tuple(overlaid)


def highlight_color(index: Optional[int], palette: Sequence[str] = HIGHLIGHT_PALETTE) -> Optional[str]:
    """Palette color for an implicant index; colors repeat once the palette runs out."""
    if index is None or not palette:
        return None
    return palette[index % len(palette)]


def validate_index_set(indices: Iterable[int], n: int, label: str) -> FrozenSet[int]:
    values = frozenset(indices)
    limit = 1 << n
    invalid = sorted(m for m in values if m < 0 or m >= limit)
    if invalid:
        raise StructuralError(
            f"{label} out of range for {n} variables (0-{limit - 1}): {invalid}"
        )
    return values


def validate_implicants(implicants: Iterable[ImplicantLike], n: int) -> Tuple[Implicant, ...]:
    """Normalise solver implicants and check they fit n variables."""
    limit = 1 << n
    checked: List[Implicant] = []
    for pos, item in enumerate(implicants):
        imp = item if isinstance(item, Implicant) else Implicant.from_dict(item)
        if len(imp.pattern) != n:
            raise StructuralError(
                f"Implicant {pos} pattern {imp.pattern!r} has length {len(imp.pattern)}, expected {n}."
            )
        if not set(imp.pattern) <= PATTERN_CHARS:
            raise StructuralError(
                f"Implicant {pos} pattern {imp.pattern!r} may only use '0', '1' and '-'."
            )
        invalid = sorted({m for m in imp.covered if m < 0 or m >= limit})
        if invalid:
            raise StructuralError(
                f"Implicant {pos} ({imp.pattern}) covers minterms outside 0-{limit - 1}: {invalid}"
            )
        checked.append(imp)
    return tuple(checked)


def build_grid(
    num_inputs: int,
    on_set: Iterable[int],
    dont_care_set: Iterable[int] = (),
    implicants: Iterable[ImplicantLike] = (),
) -> KMapGrid:
    """Compute the full K-map grid model for one solve."""
    split = split_axes(num_inputs)
    num_inputs = split.num_inputs
    ones = validate_index_set(on_set, num_inputs, "Minterms")
    dcs = validate_index_set(dont_care_set, num_inputs, "Don't cares")
    overlap = sorted(ones & dcs)
    if overlap:
        raise StructuralError(f"Indices listed as both minterm and don't care: {overlap}")
    groups = validate_implicants(implicants, num_inputs)

    rows = overlay_implicants(resolve_cells(split, ones, dcs), groups)
    logger.debug(
        "Built %dx%d grid for %d inputs with %d implicants",
        split.rows, split.cols, num_inputs, len(groups),
    )
    return KMapGrid(split=split, rows=rows, implicants=groups)


__all__ = [
    "AxisSplit",
    "CellValue",
    "GridCell",
    "GridRow",
    "Implicant",
    "KMapGrid",
    "build_grid",
    "classify",
    "gray_rank",
    "gray_sequence",
    "highlight_color",
    "minterm_to_rc",
    "overlay_implicants",
    "resolve_cells",
    "split_axes",
    "to_bits_string",
    "validate_implicants",
    "validate_index_set",
    "validate_num_inputs",
    "variable_names",
]
