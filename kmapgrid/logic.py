"""Boolean logic utilities: input parsing and the SymPy-backed SOP solver."""

from __future__ import annotations

import itertools
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from sympy import And, Not, Or, Symbol, latex, simplify_logic, symbols
from sympy.logic.boolalg import BooleanFalse, BooleanTrue, SOPform

from .config import VARIABLE_NAMES
from .errors import InputError, RangeError, StructuralError
from .kmap_engine import Implicant, validate_num_inputs

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolveResult:
    """Solver output: SOP text, its LaTeX form and the chosen implicants."""

    expression: str
    latex: str
    selected_implicants: Tuple[Implicant, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "expression": self.expression,
            "latex": self.latex,
            "selectedImplicants": [imp.to_dict() for imp in self.selected_implicants],
        }


def get_variables(n: int) -> Tuple[Symbol, ...]:
    """Return SymPy symbols (A, B, C, ...) for the requested variable count."""
    if n < 1:
        raise RangeError("Number of variables must be positive.")
    if n > len(VARIABLE_NAMES):
        raise RangeError(f"At most {len(VARIABLE_NAMES)} variables are supported.")
    return tuple(symbols(" ".join(VARIABLE_NAMES[:n]), seq=True))


def parse_index_list(raw: str) -> List[int]:
    """Parse comma-separated minterm text ("0, 2,5") into integers."""
    if raw is None or not raw.strip():
        return []
    values = []
    for token in raw.split(","):
        token = token.strip()
        if not token:
            continue
        try:
            values.append(int(token))
        except ValueError as exc:
            raise InputError(f"'{token}' is not an integer index.") from exc
    return values


def validate_minterm_range(minterms: Iterable[int], n: int) -> None:
    """Ensure all minterms are within the range for the current variable count."""
    mins = list(minterms)
    negative = sorted({m for m in mins if m < 0})
    if negative:
        raise RangeError(f"Minterms and don't cares must be non-negative integers: {negative}")
    if not mins:
        return
    max_valid = (1 << n) - 1
    highest = max(mins)
    if highest > max_valid:
        required = math.ceil(math.log2(highest + 1))
        raise RangeError(
            f"Index m{highest} is out of range for {n} inputs (valid 0-{max_valid}). "
            f"Use at least {required} inputs or reduce your indices."
        )


def check_disjoint(minterms: Iterable[int], dontcares: Iterable[int]) -> None:
    overlap = sorted(set(minterms) & set(dontcares))
    if overlap:
        raise InputError(f"Indices listed as both minterm and don't care: {overlap}")


def simplify_to_dnf(expr):
    """Simplify expression using SymPy and return a DNF expression."""
    return simplify_logic(expr, form="dnf")


def simplify_from_minterms(vars_tuple, minterms, dontcares=None):
    """Return the simplified DNF expression for minterms and optional don't cares."""
    expr = SOPform(list(vars_tuple), sorted(set(minterms)), sorted(set(dontcares or [])))
    return simplify_to_dnf(expr)


def _term_fixed_bits(term, vars_tuple) -> Dict[Symbol, int]:
    factors = list(term.args) if isinstance(term, And) else [term]
    fixed = {}
    for factor in factors:
        if isinstance(factor, Symbol):
            fixed[factor] = 1
        elif isinstance(factor, Not) and isinstance(factor.args[0], Symbol):
            fixed[factor.args[0]] = 0
        else:
            raise StructuralError(f"Unsupported factor within implicant: {factor}")
    unknown = set(fixed) - set(vars_tuple)
    if unknown:
        names = ", ".join(sorted(str(sym) for sym in unknown))
        raise StructuralError(f"Implicant uses variables outside the selected set: {names}")
    return fixed


def term_to_implicant(term, vars_tuple) -> Implicant:
    """Turn one product term into its bit pattern and the minterms it covers."""
    fixed = _term_fixed_bits(term, vars_tuple)
    pattern = "".join(str(fixed[v]) if v in fixed else "-" for v in vars_tuple)

    mins = []
    free_vars = [v for v in vars_tuple if v not in fixed]
    for bits in itertools.product([0, 1], repeat=len(free_vars)):
        assignment = fixed.copy()
        assignment.update(dict(zip(free_vars, bits)))
        idx = 0
        for var in vars_tuple:
            idx = (idx << 1) | assignment[var]
        mins.append(idx)
    return Implicant(pattern=pattern, covered=tuple(sorted(mins)))


def expression_to_implicants(expr, vars_tuple) -> List[Implicant]:
    """Split a simplified DNF expression into implicants, ordered by first covered minterm."""
    if isinstance(expr, BooleanFalse):
        return []
    n = len(vars_tuple)
    if isinstance(expr, BooleanTrue):
        return [Implicant(pattern="-" * n, covered=tuple(range(1 << n)))]

    terms = list(expr.args) if isinstance(expr, Or) else [expr]
    implicants = [term_to_implicant(term, vars_tuple) for term in terms]
    implicants.sort(key=lambda imp: (imp.covered, imp.pattern))
    return implicants


def pattern_to_term(pattern: str, var_order: Sequence[Symbol]) -> str:
    """Render a bit pattern as a product term in prime notation ("A'BD")."""
    pieces = []
    for bit, var in zip(pattern, var_order):
        if bit == "1":
            pieces.append(str(var))
        elif bit == "0":
            pieces.append(f"{var}'")
    return "".join(pieces) or "1"


def prime_format(implicants: Sequence[Implicant], var_order: Sequence[Symbol]) -> str:
    """Format implicants as SOP text following var_order."""
    if not implicants:
        return "0"
    return " + ".join(pattern_to_term(imp.pattern, var_order) for imp in implicants)


def solve_kmap(num_inputs: int, minterms: Iterable[int], dontcares: Iterable[int] = ()) -> SolveResult:
    """Minimise the function and return expression, LaTeX and selected implicants."""
    num_inputs = validate_num_inputs(num_inputs)
    mins = list(minterms)
    dcs = list(dontcares)
    validate_minterm_range(mins + dcs, num_inputs)
    check_disjoint(mins, dcs)

    vars_tuple = get_variables(num_inputs)
    simplified = simplify_from_minterms(vars_tuple, mins, dcs)
    implicants = expression_to_implicants(simplified, vars_tuple)
    expression = prime_format(implicants, vars_tuple)

    if isinstance(simplified, (BooleanFalse, BooleanTrue)):
        tex = expression
    else:
        tex = latex(simplified)

    logger.info(
        "Solved %d-input map: %d minterms, %d don't cares -> F = %s",
        num_inputs, len(set(mins)), len(set(dcs)), expression,
    )
    return SolveResult(expression=expression, latex=tex, selected_implicants=tuple(implicants))


__all__ = [
    "SolveResult",
    "check_disjoint",
    "expression_to_implicants",
    "get_variables",
    "parse_index_list",
    "pattern_to_term",
    "prime_format",
    "simplify_from_minterms",
    "simplify_to_dnf",
    "solve_kmap",
    "term_to_implicant",
    "validate_minterm_range",
]
