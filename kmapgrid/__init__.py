"""Convenience exports for the K-map grid model and solver helpers."""

from .errors import InputError, KMapError, RangeError, StructuralError
from .kmap_engine import (
    AxisSplit,
    CellValue,
    GridCell,
    GridRow,
    Implicant,
    KMapGrid,
    build_grid,
    gray_rank,
    gray_sequence,
    highlight_color,
    minterm_to_rc,
    overlay_implicants,
    resolve_cells,
    split_axes,
    to_bits_string,
    variable_names,
)
from .logic import (
    SolveResult,
    get_variables,
    parse_index_list,
    solve_kmap,
    validate_minterm_range,
)

__all__ = [
    "AxisSplit",
    "CellValue",
    "GridCell",
    "GridRow",
    "Implicant",
    "InputError",
    "KMapError",
    "KMapGrid",
    "RangeError",
    "SolveResult",
    "StructuralError",
    "build_grid",
    "get_variables",
    "gray_rank",
    "gray_sequence",
    "highlight_color",
    "minterm_to_rc",
    "overlay_implicants",
    "parse_index_list",
    "resolve_cells",
    "solve_kmap",
    "split_axes",
    "to_bits_string",
    "validate_minterm_range",
    "variable_names",
]
