from __future__ import annotations

import json
from datetime import datetime, timedelta
from typing import List

import pandas as pd
import streamlit as st

from time_intervals.calculator import calculate
from time_intervals.config import DEFAULT_HOLIDAY_COUNTRY, DEFAULT_SLOT_MINUTES, DT_FORMAT
from time_intervals.errors import DayRangeError
from time_intervals.formatting import fmt_dt, fmt_duration_dhm
from time_intervals.io_json import request_from_dict, request_to_dict, result_to_dict
from time_intervals.models import AvailabilityRequest
from time_intervals.parsing import parse_dt
from time_intervals.tables import days_to_frame, frame_to_intervals, intervals_to_frame, slots_to_frame


# ----------------------------
# Helpers UI
# ----------------------------

def today_str(offset_days: int = 0) -> str:
    d = datetime.now().replace(hour=0, minute=0, second=0, microsecond=0) + timedelta(days=offset_days)
    return fmt_dt(d)


def empty_intervals_df() -> pd.DataFrame:
    return pd.DataFrame(columns=["start", "end"])


def init_session_state() -> None:
    if "start_day_str" not in st.session_state:
        st.session_state.start_day_str = today_str()

    if "end_day_str" not in st.session_state:
        st.session_state.end_day_str = today_str(6)

    if "slot_minutes" not in st.session_state:
        st.session_state.slot_minutes = DEFAULT_SLOT_MINUTES

    if "holiday_country" not in st.session_state:
        st.session_state.holiday_country = ""

    if "include_weekends" not in st.session_state:
        st.session_state.include_weekends = False

    if "available_df" not in st.session_state:
        st.session_state.available_df = pd.DataFrame(
            [{"start": today_str(), "end": today_str(1)}]
        )

    if "blocked_df" not in st.session_state:
        st.session_state.blocked_df = empty_intervals_df()


def _str_frame(df: pd.DataFrame) -> pd.DataFrame:
    # data_editor works on text columns; the tables helpers parse them back
    return df.astype(str).replace({"nan": "", "None": "", "NaT": ""})


def build_request() -> AvailabilityRequest:
    return AvailabilityRequest(
        available=frame_to_intervals(_str_frame(st.session_state.available_df)),
        blocked=frame_to_intervals(_str_frame(st.session_state.blocked_df)),
        start_day=parse_dt(st.session_state.start_day_str),
        end_day=parse_dt(st.session_state.end_day_str),
        slot_minutes=int(st.session_state.slot_minutes) or None,
        holiday_country=st.session_state.holiday_country.strip() or None,
        include_weekends=bool(st.session_state.include_weekends),
    )


def validate_request(request: AvailabilityRequest) -> List[str]:
    errors: List[str] = []

    for label, intervals in (("Available", request.available), ("Blocked", request.blocked)):
        for idx, iv in enumerate(intervals, start=1):
            if iv.end < iv.start:
                errors.append(f"{label} #{idx}: end must not be before start.")

    if request.slot_minutes is not None and request.slot_minutes < 0:
        errors.append("Slot width must be positive.")

    return errors


def load_case() -> None:
    # on_change callback: runs before the widgets of the next run exist
    uploaded = st.session_state.case_file
    if uploaded is not None:
        apply_case(uploaded.getvalue())


def apply_case(raw: bytes) -> None:
    """Copy a JSON case into widget state. Must run before the widgets are built."""
    try:
        loaded = request_from_dict(json.loads(raw.decode("utf-8")))
    except (KeyError, ValueError) as e:
        st.session_state.load_message = ("error", f"Could not load case: {e}")
        return

    st.session_state.start_day_str = fmt_dt(loaded.start_day)
    st.session_state.end_day_str = fmt_dt(loaded.end_day)
    st.session_state.slot_minutes = loaded.slot_minutes or 0
    st.session_state.holiday_country = loaded.holiday_country or ""
    st.session_state.include_weekends = loaded.include_weekends
    st.session_state.available_df = intervals_to_frame(loaded.available)[["start", "end"]]
    st.session_state.blocked_df = intervals_to_frame(loaded.blocked)[["start", "end"]]
    st.session_state.load_message = ("success", "Case loaded.")


def interval_editor(label: str, key: str) -> None:
    st.session_state[key] = st.data_editor(
        _str_frame(st.session_state[key]),
        num_rows="dynamic",
        use_container_width=True,
        key=f"{key}_editor",
        column_config={
            "start": st.column_config.TextColumn(f"{label} start", required=True),
            "end": st.column_config.TextColumn(f"{label} end", required=True),
        },
    )


# ----------------------------
# App
# ----------------------------

def main() -> None:
    st.set_page_config(page_title="Availability calculator", layout="wide")
    init_session_state()

    st.title("Availability calculator")

    st.caption(
        "Free time = available windows minus blocked windows (half-open intervals, UTC). "
        "Overlapping or touching windows are merged; results are grouped per day and optionally cut into slots."
    )

    col_left, col_right = st.columns([1.1, 1.4], gap="large")

    # -------- Left: Inputs
    with col_left:
        st.subheader("1) Day range")

        st.text_input(f"First day ({DT_FORMAT})", key="start_day_str")
        st.text_input(f"Last day ({DT_FORMAT})", key="end_day_str")
        st.number_input("Slot width (minutes, 0 = no slots)", min_value=0, step=5, key="slot_minutes")

        c1, c2 = st.columns(2)
        with c1:
            st.text_input(f"Holiday country (e.g. {DEFAULT_HOLIDAY_COUNTRY})", key="holiday_country")
        with c2:
            st.checkbox("Block weekends", key="include_weekends")

        st.subheader("2) Available windows")
        interval_editor("Available", "available_df")

        st.subheader("3) Blocked windows")
        interval_editor("Blocked", "blocked_df")

        if st.button("Clear blocked"):
            st.session_state.blocked_df = empty_intervals_df()

        st.divider()
        st.file_uploader("Load case (JSON)", type=["json"], key="case_file", on_change=load_case)
        message = st.session_state.pop("load_message", None)
        if message is not None:
            level, text = message
            if level == "error":
                st.error(text)
            else:
                st.success(text)

    # -------- Right: Results
    with col_right:
        st.subheader("4) Results")

        btn_calc = st.button("Calculate availability", type="primary", use_container_width=True)

        if btn_calc:
            try:
                request = build_request()
            except ValueError as e:
                st.error(f"Invalid input: {e}")
                return

            errors = validate_request(request)
            if errors:
                for err in errors:
                    st.error(err)
                return

            try:
                res = calculate(request)
            except DayRangeError as e:
                st.error(f"Invalid day range: {e}")
                return
            except ValueError as e:
                st.error(f"Invalid input: {e}")
                return

            metric_cols = st.columns(3)
            metric_cols[0].metric("Free time", fmt_duration_dhm(res.free_seconds))
            metric_cols[1].metric("Free intervals", len(res.free))
            metric_cols[2].metric("Slots", len(res.slots) if request.slot_minutes else "—")

            st.divider()

            st.markdown("**Per day**")
            st.dataframe(days_to_frame(res.days), use_container_width=True)

            st.markdown("**Free intervals**")
            st.dataframe(intervals_to_frame(res.free), use_container_width=True)

            if request.slot_minutes:
                st.markdown(f"**Slots ({request.slot_minutes} min)**")
                st.dataframe(slots_to_frame(res.slots), use_container_width=True)

            with st.expander("Evidence (merged intervals and decisions)"):
                st.json(res.explain)

            # Export buttons
            b1, b2 = st.columns(2)
            with b1:
                st.download_button(
                    "Export case (JSON)",
                    data=json.dumps(request_to_dict(request), ensure_ascii=False, indent=2),
                    file_name="case.json",
                    mime="application/json",
                    use_container_width=True,
                )
            with b2:
                st.download_button(
                    "Export result (JSON)",
                    data=json.dumps(result_to_dict(res), ensure_ascii=False, indent=2),
                    file_name="result.json",
                    mime="application/json",
                    use_container_width=True,
                )


if __name__ == "__main__":
    main()
