import sys, os
sys.path.append(os.path.dirname(__file__))

import streamlit as st
import matplotlib.pyplot as plt

from kmapgrid.config import (
    DEFAULT_DONT_CARES,
    DEFAULT_MINTERMS,
    DEFAULT_NUM_INPUTS,
    MAX_INPUTS,
    MIN_INPUTS,
    VARIABLE_NAMES,
)
from kmapgrid.errors import KMapError
from kmapgrid.kmap_engine import build_grid
from kmapgrid.logging_config import setup_logging
from kmapgrid.logic import parse_index_list, solve_kmap
from kmapgrid.render import draw_kmap, format_grid_text
from kmapgrid.session import SolveSequencer

logger = setup_logging()

# ------------------------------- Page setup -------------------------------

st.set_page_config(page_title="K-Map (SOP) Solver", layout="wide")
st.title("K-Map (SOP) Solver")
st.caption(
    f"Enter minterms / don't cares and solve for a simplified SOP expression. "
    f"Supports {MIN_INPUTS}-{MAX_INPUTS} inputs."
)
st.markdown("---")

if "sequencer" not in st.session_state:
    st.session_state.sequencer = SolveSequencer()
sequencer: SolveSequencer = st.session_state.sequencer

input_options = list(range(MIN_INPUTS, MAX_INPUTS + 1))
n = st.selectbox(
    f"Number of inputs ({', '.join(VARIABLE_NAMES)})",
    input_options,
    index=input_options.index(DEFAULT_NUM_INPUTS),
)
raw_mins = st.text_input("Σ Minterms (comma-separated):", value=DEFAULT_MINTERMS, placeholder="0,2,5,7...")
raw_dcs = st.text_input("Don't cares (optional, comma-separated):", value=DEFAULT_DONT_CARES, placeholder="e.g. 1,9")

solve_col, clear_col = st.columns([1, 6])
solve_clicked = solve_col.button("Solve")
if clear_col.button("Clear Output"):
    sequencer.clear()

# ------------------------------- On solve -------------------------------
if solve_clicked:
    request_id = sequencer.issue()
    try:
        mins = parse_index_list(raw_mins)
        dcs = parse_index_list(raw_dcs)

        result = solve_kmap(n, mins, dcs)
        grid = build_grid(n, mins, dcs, result.selected_implicants)
        sequencer.accept(request_id, (result, grid))
    except KMapError as exc:
        sequencer.clear()
        logger.warning("Solve request %d rejected: %s", request_id, exc)
        st.error(f"Error\n\n{exc}")

# ------------------------------- Output -------------------------------
if sequencer.result is not None:
    result, grid = sequencer.result

    st.markdown("**Expression**")
    st.code(f"F = {result.expression}", language=None)

    with st.container():
        st.markdown("### Karnaugh Map")
        st.caption(
            f"{''.join(grid.split.row_names) or '—'} vs {''.join(grid.split.col_names) or '—'}"
        )
        fig = draw_kmap(grid)
        st.pyplot(fig)
        plt.close(fig)

        with st.expander("Cell details"):
            st.code(format_grid_text(grid), language=None)
            details = []
            for cell in grid.cells():
                groups = ", ".join(imp.pattern for imp in grid.covering_implicants(cell)) or "None"
                details.append(
                    {
                        "minterm": f"m{cell.minterm}",
                        f"bits ({''.join(VARIABLE_NAMES[:grid.num_inputs])})": cell.bit_string,
                        "value": cell.value.value,
                        "groups": groups,
                    }
                )
            st.table(details)

    st.markdown("**LaTeX**")
    st.code(result.latex, language="latex")
    st.latex(result.latex)

    st.markdown("**Selected Implicants**")
    if result.selected_implicants:
        st.markdown(
            "\n".join(
                f"- `{imp.pattern}` → covers {', '.join(str(m) for m in imp.covered)}"
                for imp in result.selected_implicants
            )
        )
    else:
        st.markdown("_None_")
