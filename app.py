# -----------------------------------------------
# Weekly Working Time (Streamlit)
# -----------------------------------------------
# Requires: streamlit, pandas
# Reads per-employee hours from WEEKLY_HOURS_CSV or an uploaded CSV
# (employee_id, employee_name, Mon..Sun).

import logging

import streamlit as st

import settings
from domain import FormatError
from services import WeeklySummaryBuilder, compute_week_window, current_week, next_week, previous_week
from utils import format_period, load_records_csv, status_styles, summaries_to_dataframe

logger = logging.getLogger(__name__)

st.set_page_config(page_title="Weekly Working Time", page_icon="⏱️", layout="wide")

# =========================
# Logging + threshold policy
# =========================
try:
    logging.basicConfig(level=settings.log_level())
    policy = settings.build_policy()
except (FormatError, ValueError) as e:
    st.error(f"Invalid configuration: {e}")
    st.stop()

# =========================
# Week navigation (caller-held reference date)
# =========================
if "reference_date" not in st.session_state:
    st.session_state["reference_date"] = current_week()

def _go(to):
    st.session_state["reference_date"] = to

window = compute_week_window(st.session_state["reference_date"])

head, prev_col, today_col, next_col = st.columns([6, 1, 1, 1])
with head:
    st.subheader("Weekly Working Time")
    st.caption(f"Period: {format_period(window)}")
prev_col.button("◀", help="Previous Week", on_click=_go, args=(previous_week(st.session_state["reference_date"]),))
today_col.button("Today", on_click=_go, args=(current_week(),))
next_col.button("▶", help="Next Week", on_click=_go, args=(next_week(st.session_state["reference_date"]),))

# =========================
# Data
# =========================
@st.cache_data
def _load(path_or_buffer):
    return load_records_csv(path_or_buffer)

source = settings.WEEKLY_HOURS_CSV or st.file_uploader("Weekly hours (CSV)", type="csv")
if not source:
    st.info("No data loaded.")
    st.stop()

with st.spinner("Loading…"):
    try:
        records = _load(source)
    except (ValueError, OSError) as e:
        logger.error(f"Could not load weekly hours: {e}")
        st.error(f"Could not load weekly hours: {e}")
        st.stop()

summaries = WeeklySummaryBuilder(policy).build(records, window)
df = summaries_to_dataframe(summaries, window)
css = status_styles(summaries, window)
st.dataframe(df.style.apply(lambda _: css, axis=None), use_container_width=True, hide_index=True)

thresholds = ", ".join(f"{d} {h:g} h" for d, h in policy.as_dict().items())
st.caption(f"Thresholds: {thresholds}")
