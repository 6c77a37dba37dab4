import time

import matplotlib.pyplot as plt
import streamlit as st

from kmap_simplifier.kmap_engine import implicant_groups
from kmap_simplifier.logic import verify_minimization
from kmap_simplifier.quine_mccluskey import Mode
from kmap_simplifier.session import (
    Session,
    check_syntax,
    collect,
    evaluate_expression,
    export_terms,
    import_terms,
    reset,
    simplify,
    with_mode,
)
from kmap_simplifier.plotting import draw_kmap
from kmap_simplifier.settings import MAX_KMAP_VARS, configure_logging

configure_logging()

# ------------------------------- Page setup -------------------------------

st.set_page_config(page_title="Boolean Expression & K-Map Simplifier", layout="wide")
st.title("🧮 Boolean Expression & K-Map Simplifier")
st.markdown("---")

if "session" not in st.session_state:
    st.session_state.session = Session.for_variables(["A", "B", "C", "D"])
    st.session_state.evaluation = None
    st.session_state.result = None
    st.session_state.elapsed = None

mode_name = st.radio("Output form:", [Mode.SOP.value, Mode.POS.value], horizontal=True)
if Mode(mode_name) is not st.session_state.session.mode:
    st.session_state.session = with_mode(st.session_state.session, mode_name)
    if st.session_state.session.layout is not None:
        st.session_state.result = simplify(st.session_state.session)

raw_expr = st.text_input("Expression (e.g. AB' + C, !A & B | C, (A + B)(A' + C)):")
col_eval, col_check, col_reset = st.columns(3)


def _timed(action):
    start = time.perf_counter()
    value = action()
    st.session_state.elapsed = (time.perf_counter() - start) * 1000
    return value


# ------------------------------- Actions -------------------------------
if col_eval.button("Evaluate 🚀"):
    try:
        session, evaluation = _timed(
            lambda: evaluate_expression(st.session_state.session, raw_expr)
        )
        st.session_state.session = session
        st.session_state.evaluation = evaluation
        st.session_state.result = evaluation.result
        st.success(f"Evaluated: {len(evaluation.minterms)} minterm(s) found.")
    except ValueError as e:
        st.session_state.result = None
        st.error(f"Could not evaluate the expression:\n{e}")

if col_check.button("Check syntax"):
    try:
        count, names = check_syntax(raw_expr)
        st.success(f"Valid syntax: {count} tokens, {len(names)} variable(s): {', '.join(names)}")
    except ValueError as e:
        st.error(f"Invalid syntax: {e}")

if col_reset.button("Reset K-map"):
    st.session_state.session = reset(st.session_state.session)
    st.session_state.result = None

session = st.session_state.session
evaluation = st.session_state.evaluation

# ------------------------------- Truth table -------------------------------
if evaluation is not None:
    st.markdown("### Truth table")
    table = [
        {**row.env, "Y": row.output, "m": row.index}
        for row in evaluation.rows
    ]
    st.dataframe(table, hide_index=True)

# ------------------------------- Minterm import/export -------------------------------
st.markdown("### Minterms")
terms_text = st.text_input("Minterm list (e.g. 0,1,5,7 +d(2,3)):", value=export_terms(session))
if st.button("Import & simplify"):
    try:
        session, result = _timed(lambda: import_terms(session, terms_text))
        st.session_state.session = session
        st.session_state.result = result
        st.session_state.evaluation = None
    except ValueError as e:
        st.error(f"Invalid minterm list:\n{e}")

# ------------------------------- Result -------------------------------
result = st.session_state.result
if evaluation is not None and len(evaluation.variables) > MAX_KMAP_VARS:
    st.info(f"K-map is only available up to {MAX_KMAP_VARS} variables.")
elif result is not None:
    minterms, dontcares = collect(session)
    st.success(f"**{session.mode.value}:**  \nF = {result.text}")
    ok = verify_minimization(result.text, minterms, dontcares, session.variables)
    st.caption(("✓ verified" if ok else "✗ mismatch") + " against the grid contents")
    if st.session_state.elapsed is not None:
        n = session.nvars
        st.caption(
            f"{st.session_state.elapsed:.3f} ms · {len(minterms)} terms, "
            f"{len(dontcares)} DC · O(3^{n} × {n}²)"
        )

    # ------------------------------- K-map -------------------------------
    if session.layout is not None:
        with st.container():
            st.markdown("### 🗺️ K-Map")
            # POS groups outline the zeros they cover
            groups = implicant_groups(session.layout, result.implicants)
            labels = [
                impl.to_product(session.variables)
                if session.mode is Mode.SOP
                else impl.to_sum(session.variables)
                for impl in result.implicants
            ]
            fig = draw_kmap(session, groups, labels)
            st.pyplot(fig)
            plt.close(fig)
