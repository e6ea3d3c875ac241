"""
LoadCombo - Streamlit Dashboard
ASCE 7-16 / ASCE 7-22 Load Combination Calculator
"""

import logging
from pathlib import Path

import streamlit as st

from src.combos.scenarios import (
    COMBO_INPUT_IDS,
    COMBO_TEXT_IDS,
    SCENARIOS_BY_KEY,
    SUMMARY_ORDER,
    WIND_SURFACE_PAIRS,
    combo_inputs_from_form,
    run_combinations,
    safe_calculation,
)
from src.core.config import AppConfig, configure_logging
from src.core.constants import COMBO_STORAGE_KEY, SNOW_STORAGE_KEY
from src.core.data_models import ComboRunResult
from src.core.input_store import InputFileError, InputStore, meaningful_imports
from src.core.validation import (
    VALIDATION_RULES,
    combo_warnings,
    gather_inputs,
    validate_inputs,
)
from src.engines.snow_engine import SNOW_INPUT_IDS, SNOW_TEXT_IDS, SnowEngine, snow_inputs_from_form
from src.report.report_generator import (
    ComboReportGenerator,
    base_combos_dataframe,
    envelope_dataframe,
    export_combination_table,
    scenario_dataframe,
)
from src.ui.components import create_envelope_chart, get_load_badge, governing_card
from src.ui.sidebar import render_sidebar
from src.ui.snow_panel import render_snow_inputs, render_snow_results
from src.ui.state import apply_form_values, get_state, init_session_state, set_state
from src.ui.theme import apply_theme

logger = logging.getLogger(__name__)


# Page Configuration
st.set_page_config(
    page_title="LoadCombo | ASCE 7 Load Combinations",
    page_icon="🏗️",
    layout="wide",
    initial_sidebar_state="expanded"
)


def load_config() -> AppConfig:
    """Configuration from the environment, plus ./.env when present"""
    env_file = Path(".env")
    return AppConfig.from_env(str(env_file) if env_file.exists() else None)


def restore_snapshots(store: InputStore) -> None:
    """Restore the last auto-saved inputs once per session."""
    if get_state("snapshots_restored"):
        return
    for key, input_ids in ((COMBO_STORAGE_KEY, COMBO_INPUT_IDS), (SNOW_STORAGE_KEY, SNOW_INPUT_IDS)):
        try:
            apply_form_values(store.load_snapshot(key, input_ids))
        except InputFileError as e:
            logger.warning(f"Ignoring saved inputs: {e}")
    set_state("snapshots_restored", True)


def consume_load_handoff(store: InputStore) -> None:
    """Apply loads sent by another calculator, once."""
    payload = store.pop_loads_for_combos()
    if payload is None:
        return
    loads = payload["loads"]
    apply_form_values(loads)
    set_state("import_banner", {
        "source": payload.get("source", "another calculator"),
        "type": payload.get("type", "load"),
        "ids": meaningful_imports(loads),
    })
    logger.info(f"Imported {len(loads)} loads from {payload.get('source')}")


def send_snow_to_combos(store: InputStore) -> None:
    result = get_state("snow_result")
    if result is None:
        return
    store.send_loads_to_combos(result.loads_for_combos(), source="Snow Calculator", load_type="snow")


def autosave(store: InputStore, key: str, values) -> None:
    try:
        store.save_snapshot(key, values)
    except OSError:
        logger.warning(f"Could not auto-save inputs to {store.data_dir}", exc_info=True)


def render_import_banner() -> None:
    banner = get_state("import_banner")
    if not banner:
        return
    if banner["ids"]:
        st.markdown(
            f"{get_load_badge('IMPORTED')} {len(banner['ids'])} {banner['type']} load(s) "
            f"imported from {banner['source']}.",
            unsafe_allow_html=True,
        )
    if st.button("Dismiss", key="dismiss_import_banner"):
        set_state("import_banner", None)
        st.rerun()


def render_combinator(raw_inputs, store: InputStore) -> None:
    """Validate, run and display the load combinator."""
    render_import_banner()

    inputs = gather_inputs(raw_inputs, COMBO_INPUT_IDS, COMBO_TEXT_IDS)
    validation = validate_inputs(inputs, VALIDATION_RULES["combo"])
    if not validation.is_valid:
        for error in validation.errors:
            st.error(error)
        return

    autosave(store, COMBO_STORAGE_KEY, inputs)

    warnings = combo_warnings(inputs, WIND_SURFACE_PAIRS)
    run_result, error = safe_calculation(
        run_combinations,
        combo_inputs_from_form(inputs),
        warnings,
        error_message="An unexpected error occurred during the load combination calculation.",
    )
    if error:
        st.error(error)
        return

    render_results(run_result)


def render_results(run_result: ComboRunResult) -> None:
    unit = run_result.inputs.unit_system.pressure_unit

    if run_result.standard != run_result.inputs.standard:
        st.info(f"{run_result.inputs.jurisdiction} adopts {run_result.standard.value}; its formulas are used.")
    for note in run_result.adjustment_notes:
        st.info(note)
    for warning in run_result.warnings:
        st.warning(warning)
    if run_result.base_combos.pattern_load_required:
        st.markdown(
            f"{get_load_badge('PATTERN L', 'warning')} Live load exceeds "
            f"{run_result.inputs.unit_system.live_load_threshold:g} {unit}; "
            f"combinations are also evaluated with 0.75L.",
            unsafe_allow_html=True,
        )

    envelope = run_result.envelope
    col1, col2, col3 = st.columns(3)
    combo, value = run_result.base_combos.governing()
    col1.metric("Governing (S = W = E = 0)", f"{value:.2f} {unit}" if combo else "-", help=combo)
    if envelope.overall_max and envelope.overall_min:
        col2.metric("Overall Max Pressure", f"{envelope.overall_max.value:.2f} {unit}",
                    help=f"{envelope.overall_max.title}: {envelope.overall_max.combo}")
        col3.metric("Overall Min (Uplift/Suction)", f"{envelope.overall_min.value:.2f} {unit}",
                    help=f"{envelope.overall_min.title}: {envelope.overall_min.combo}")

    st.markdown("### Base Combinations")
    st.dataframe(base_combos_dataframe(run_result.base_combos).style.format({"Result": "{:.2f}"}),
                 hide_index=True, use_container_width=True)

    st.markdown("### Governing Load Summary")
    titles = [SCENARIOS_BY_KEY[key].title for key in SUMMARY_ORDER]
    cards = [envelope.per_scenario[title] for title in titles if title in envelope.per_scenario]
    columns = st.columns(3)
    for index, scenario_envelope in enumerate(cards):
        with columns[index % 3]:
            st.markdown(governing_card(scenario_envelope, unit), unsafe_allow_html=True)

    st.plotly_chart(create_envelope_chart(envelope, titles, unit), use_container_width=True)

    st.markdown("### Scenario Details")
    for scenario in run_result.scenarios:
        with st.expander(scenario.title):
            number_format = {"Max Wind": "{:.2f}", "Min Wind": "{:.2f}"}
            st.dataframe(scenario_dataframe(scenario).style.format(number_format),
                         hide_index=True, use_container_width=True)
            if scenario.pattern_load_required:
                st.caption("Pattern live load (0.75L)")
                st.dataframe(scenario_dataframe(scenario, pattern=True).style.format(number_format),
                             hide_index=True, use_container_width=True)

    st.markdown("### Export")
    col1, col2, col3 = st.columns(3)
    with col1:
        st.download_button(
            label="Download Report (HTML)",
            data=ComboReportGenerator(run_result).generate(),
            file_name="load-combinations-report.html",
            mime="text/html",
            use_container_width=True,
        )
    with col2:
        st.download_button(
            label="Download Envelope (CSV)",
            data=envelope_dataframe(envelope).to_csv(index=False),
            file_name="load-combinations-envelope.csv",
            mime="text/csv",
            use_container_width=True,
        )
    with col3:
        st.download_button(
            label="Download Tables (Markdown)",
            data=export_combination_table(run_result, format="markdown"),
            file_name="load-combinations.md",
            mime="text/markdown",
            use_container_width=True,
        )


def render_snow_calculator(store: InputStore) -> None:
    """Snow calculator with hand-off to the combinator."""
    raw_inputs = render_snow_inputs()
    inputs = gather_inputs(raw_inputs, SNOW_INPUT_IDS, SNOW_TEXT_IDS)
    validation = validate_inputs(inputs, VALIDATION_RULES["snow"])
    if not validation.is_valid:
        for error in validation.errors:
            st.error(error)
        return

    autosave(store, SNOW_STORAGE_KEY, inputs)

    result, error = safe_calculation(
        lambda: SnowEngine(snow_inputs_from_form(inputs)).calculate(),
        error_message="An unexpected error occurred during the snow calculation.",
    )
    if error:
        st.error(error)
        return

    set_state("snow_result", result)
    render_snow_results(result)
    st.button(
        "Send Snow Loads to Combinator",
        type="primary",
        on_click=send_snow_to_combos,
        args=(store,),
    )


def main():
    config = load_config()
    configure_logging(config.log_level)
    init_session_state(config)
    apply_theme()

    store = InputStore(config.data_dir)
    restore_snapshots(store)
    consume_load_handoff(store)

    # Header
    st.markdown("## LoadCombo")
    st.caption("ASCE 7-16 / ASCE 7-22 load combinations with governing envelope")

    raw_inputs = render_sidebar()

    combo_tab, snow_tab = st.tabs(["Load Combinations", "Snow Loads"])
    with combo_tab:
        render_combinator(raw_inputs, store)
    with snow_tab:
        render_snow_calculator(store)


if __name__ == "__main__":
    main()
