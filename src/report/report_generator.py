"""
HTML Report Generator for LoadCombo

Generates a print-ready HTML report of an ASCE 7 load combination run:
- Input summary and load-level adjustment notes
- Base combinations (no wind, snow or seismic)
- Per-scenario tables at maximum and minimum wind, with pattern live load
- Governing load summary per scenario and overall
- Equations of the formula table in use
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd
from jinja2 import Environment, BaseLoader, select_autoescape

from src.combos.envelope import is_scenario_combo
from src.combos.formula_table import ComboFormulaLibrary
from src.combos.scenarios import SCENARIOS_BY_KEY, SUMMARY_ORDER
from src.core.data_models import (
    ComboResult,
    ComboRunResult,
    GoverningEnvelope,
    GoverningValue,
    ScenarioResult,
)


# =============================================================================
# STYLES
# =============================================================================

CSS_STYLES = '''
:root {
    --primary: #1a365d;
    --primary-light: #2c5282;
    --accent: #3182ce;
    --success: #38a169;
    --warning: #d69e2e;
    --danger: #e53e3e;
    --dark: #1a202c;
    --gray-100: #f7fafc;
    --gray-300: #e2e8f0;
    --gray-600: #718096;
    --font-primary: 'Inter', -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif;
    --font-mono: 'SF Mono', 'Fira Code', monospace;
}

* { margin: 0; padding: 0; box-sizing: border-box; }

body {
    font-family: var(--font-primary);
    font-size: 10.5pt;
    line-height: 1.5;
    color: var(--dark);
    background: white;
}

@page { size: letter; margin: 15mm; }

.page { max-width: 216mm; margin: 0 auto; padding: 2rem; }

.report-header {
    background: linear-gradient(135deg, var(--primary) 0%, var(--primary-light) 100%);
    color: white;
    padding: 1.5rem 2rem;
    border-radius: 8px;
    margin-bottom: 1.5rem;
}

.report-header h1 { font-size: 1.6rem; font-weight: 700; }
.report-header .subtitle { opacity: 0.85; }

h2 {
    font-size: 1.15rem;
    color: var(--primary);
    border-bottom: 2px solid var(--accent);
    padding-bottom: 0.25rem;
    margin: 1.5rem 0 0.75rem;
}

h3 { font-size: 1rem; margin: 1rem 0 0.5rem; }

table { width: 100%; border-collapse: collapse; margin-bottom: 1rem; page-break-inside: avoid; }
th, td { border: 1px solid var(--gray-300); padding: 0.3rem 0.5rem; text-align: left; }
th { background: var(--gray-100); font-weight: 600; }
td.num { text-align: right; font-family: var(--font-mono); }
td.formula { font-family: var(--font-mono); font-size: 0.85em; color: var(--gray-600); }

.notice { border-left: 4px solid var(--accent); background: var(--gray-100); padding: 0.5rem 0.75rem; margin-bottom: 0.5rem; }
.notice.warning { border-color: var(--warning); }
.notice.pattern { border-color: var(--danger); }

.summary-grid { display: grid; grid-template-columns: repeat(2, 1fr); gap: 0.75rem; }
.summary-card { border: 1px solid var(--gray-300); border-radius: 6px; padding: 0.75rem; page-break-inside: avoid; }
.summary-card .label { font-size: 0.8em; color: var(--gray-600); }
.summary-card .value { font-size: 1.3rem; font-weight: 700; }
.summary-card .value.max { color: var(--danger); }
.summary-card .value.min { color: var(--accent); }
.summary-card .source { font-size: 0.8em; color: var(--gray-600); }

.footer { margin-top: 2rem; font-size: 0.8em; color: var(--gray-600); }
'''


# =============================================================================
# HTML TEMPLATE
# =============================================================================

HTML_TEMPLATE = '''<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{ title }}</title>
    <style>
{{ css_styles }}
    </style>
</head>
<body>
<div class="page">

    <header class="report-header">
        <h1>{{ title }}</h1>
        <p class="subtitle">{{ standard }} {{ method }} Load Combinations</p>
    </header>

    <h2>Input Loads</h2>
    <table>
        <tr><th>Parameter</th><th>Value</th></tr>
        {% for row in input_rows %}
        <tr><td>{{ row.label }}</td><td>{{ row.value }}</td></tr>
        {% endfor %}
    </table>

    {% if notes %}
    <h2>Load Level Adjustments</h2>
    {% for note in notes %}
    <div class="notice">{{ note }}</div>
    {% endfor %}
    {% endif %}

    {% if warnings %}
    <h2>Warnings</h2>
    {% for warning in warnings %}
    <div class="notice warning">{{ warning }}</div>
    {% endfor %}
    {% endif %}

    <h2>Base Combinations</h2>
    <p>Combinations without wind, snow or seismic load are the same in every scenario.</p>
    <table>
        <tr><th>Combination</th><th>Formula</th><th>Result ({{ unit }})</th></tr>
        {% for row in base_rows %}
        <tr><td>{{ row.combo }}</td><td class="formula">{{ row.formula }}</td><td class="num">{{ row.value }}</td></tr>
        {% endfor %}
    </table>
    {% if base_governing %}
    <p><strong>Governing combination with S = W = E = 0:</strong> {{ base_governing.combo }} = {{ base_governing.value }} {{ unit }}</p>
    {% endif %}

    {% for scenario in scenarios %}
    <h2>{{ scenario.title }}</h2>
    <table>
        <tr><th>Combination</th><th>Formula</th><th>Max Wind ({{ unit }})</th><th>Min Wind ({{ unit }})</th></tr>
        {% for row in scenario.rows %}
        <tr><td>{{ row.combo }}</td><td class="formula">{{ row.formula }}</td><td class="num">{{ row.wmax }}</td><td class="num">{{ row.wmin }}</td></tr>
        {% endfor %}
    </table>
    {% if scenario.pattern_rows %}
    <div class="notice pattern">Live load exceeds {{ threshold }} {{ unit }}: pattern live load (0.75L) results shown below.</div>
    <table>
        <tr><th>Combination (0.75L)</th><th>Formula</th><th>Max Wind ({{ unit }})</th><th>Min Wind ({{ unit }})</th></tr>
        {% for row in scenario.pattern_rows %}
        <tr><td>{{ row.combo }}</td><td class="formula">{{ row.formula }}</td><td class="num">{{ row.wmax }}</td><td class="num">{{ row.wmin }}</td></tr>
        {% endfor %}
    </table>
    {% endif %}
    {% endfor %}

    <h2>Governing Load Summary</h2>
    <div class="summary-grid">
        {% for item in summary %}
        <div class="summary-card">
            <h3>{{ item.title }}</h3>
            <div class="label">Max Pressure</div>
            <div class="value max">{{ item.max_value }} {{ unit }}</div>
            <div class="source">From: {{ item.max_combo }}</div>
            <div class="label">Min (Uplift/Suction)</div>
            <div class="value min">{{ item.min_value }} {{ unit }}</div>
            <div class="source">From: {{ item.min_combo }}</div>
        </div>
        {% endfor %}
    </div>

    {% if overall %}
    <h2>Overall Governing Loads</h2>
    <table>
        <tr><th></th><th>Value ({{ unit }})</th><th>Scenario</th><th>Combination</th></tr>
        <tr><td>Maximum Pressure</td><td class="num">{{ overall.max.value }}</td><td>{{ overall.max.title }}</td><td>{{ overall.max.combo }}</td></tr>
        <tr><td>Minimum (Uplift/Suction)</td><td class="num">{{ overall.min.value }}</td><td>{{ overall.min.title }}</td><td>{{ overall.min.combo }}</td></tr>
    </table>
    {% endif %}

    <h2>Combination Equations</h2>
    <table>
        <tr><th>Combination</th><th>Equation</th></tr>
        {% for row in equations %}
        <tr><td>{{ row.combo }}</td><td class="formula">{{ row.equation }}</td></tr>
        {% endfor %}
    </table>

    <div class="footer">Generated {{ generation_date }}</div>
</div>
</body>
</html>
'''


def _fmt(value: float) -> str:
    return f"{value:.2f}"


def _short(title: str) -> str:
    return title.replace(" Analysis", "")


def _combo_label(governing: GoverningValue) -> str:
    return f"{governing.combo} (0.75L)" if governing.pattern else governing.combo


# =============================================================================
# PANDAS TABLES
# =============================================================================

def base_combos_dataframe(result: ComboResult) -> pd.DataFrame:
    """Base combinations (no W, S or E) as a DataFrame."""
    rows = [
        {"Combination": combo, "Formula": result.final_formulas.get(combo, ""), "Result": value}
        for combo, value in result.results.items()
        if not is_scenario_combo(combo)
    ]
    return pd.DataFrame(rows, columns=["Combination", "Formula", "Result"])


def scenario_dataframe(scenario: ScenarioResult, pattern: bool = False) -> pd.DataFrame:
    """Varying combinations of one scenario at max and min wind."""
    wmax = scenario.wmax.pattern_results if pattern else scenario.wmax.results
    wmin = scenario.wmin.pattern_results if pattern else scenario.wmin.results
    rows = [
        {
            "Combination": combo,
            "Formula": scenario.wmax.final_formulas.get(combo, ""),
            "Max Wind": value,
            "Min Wind": wmin[combo],
        }
        for combo, value in wmax.items()
        if is_scenario_combo(combo)
    ]
    return pd.DataFrame(rows, columns=["Combination", "Formula", "Max Wind", "Min Wind"])


def envelope_dataframe(envelope: GoverningEnvelope) -> pd.DataFrame:
    """Per-scenario governing max/min in summary order."""
    rows = []
    for title in _summary_titles(envelope):
        env = envelope.per_scenario[title]
        rows.append({
            "Scenario": _short(title),
            "Max": env.max.value,
            "Max Combination": _combo_label(env.max),
            "Min": env.min.value,
            "Min Combination": _combo_label(env.min),
        })
    return pd.DataFrame(rows, columns=["Scenario", "Max", "Max Combination", "Min", "Min Combination"])


def _summary_titles(envelope: GoverningEnvelope) -> List[str]:
    titles = [SCENARIOS_BY_KEY[key].title for key in SUMMARY_ORDER]
    ordered = [title for title in titles if title in envelope.per_scenario]
    # Any scenario outside the fixed order goes last
    ordered.extend(title for title in envelope.per_scenario if title not in ordered)
    return ordered


# =============================================================================
# TABLE EXPORT
# =============================================================================

def export_combination_table(run_result: ComboRunResult, format: str = "text") -> str:
    """Export the evaluated combinations for reporting.

    Args:
        run_result: Completed combinator run
        format: Export format ("text", "markdown")

    Returns:
        Formatted table string
    """
    if format == "markdown":
        return _export_markdown_table(run_result)
    return _export_text_table(run_result)


def _export_text_table(run_result: ComboRunResult) -> str:
    unit = run_result.inputs.unit_system.pressure_unit
    lines = []
    lines.append("=" * 100)
    lines.append(f"LOAD COMBINATIONS SUMMARY - {run_result.standard.value} {run_result.inputs.method.value}")
    lines.append("=" * 100)

    lines.append("Base combinations")
    lines.append(f"{'Combination':<50} {'Result (' + unit + ')':>15}")
    lines.append("-" * 100)
    for combo, value in run_result.base_combos.results.items():
        if not is_scenario_combo(combo):
            lines.append(f"{combo:<50} {value:>15.2f}")

    for scenario in run_result.scenarios:
        lines.append("")
        lines.append(scenario.title)
        lines.append(f"{'Combination':<50} {'Max Wind':>15} {'Min Wind':>15}")
        lines.append("-" * 100)
        for combo, value in scenario.wmax.results.items():
            if is_scenario_combo(combo):
                lines.append(f"{combo:<50} {value:>15.2f} {scenario.wmin.results[combo]:>15.2f}")

    overall_max = run_result.envelope.overall_max
    overall_min = run_result.envelope.overall_min
    lines.append("=" * 100)
    if overall_max and overall_min:
        lines.append(f"Overall max: {overall_max.value:.2f} {unit} ({_short(overall_max.title)}: {overall_max.combo})")
        lines.append(f"Overall min: {overall_min.value:.2f} {unit} ({_short(overall_min.title)}: {overall_min.combo})")
    lines.append("")
    return "\n".join(lines)


def _export_markdown_table(run_result: ComboRunResult) -> str:
    unit = run_result.inputs.unit_system.pressure_unit
    lines = []
    lines.append(f"## Load Combinations Summary ({run_result.standard.value} {run_result.inputs.method.value})")
    lines.append("")
    lines.append(f"| Combination | Result ({unit}) |")
    lines.append("|-------------|--------|")
    for combo, value in run_result.base_combos.results.items():
        if not is_scenario_combo(combo):
            lines.append(f"| {combo} | {value:.2f} |")

    for scenario in run_result.scenarios:
        lines.append("")
        lines.append(f"### {scenario.title}")
        lines.append("")
        lines.append(f"| Combination | Max Wind ({unit}) | Min Wind ({unit}) |")
        lines.append("|-------------|----------|----------|")
        for combo, value in scenario.wmax.results.items():
            if is_scenario_combo(combo):
                lines.append(f"| {combo} | {value:.2f} | {scenario.wmin.results[combo]:.2f} |")

    lines.append("")
    return "\n".join(lines)


# =============================================================================
# REPORT GENERATOR
# =============================================================================

class ComboReportGenerator:
    """
    HTML Report Generator for a load combination run.

    Sections: inputs, adjustment notes, warnings, base combinations,
    scenario tables, governing summary and overall governing loads.
    """

    def __init__(self, run_result: ComboRunResult, title: str = "ASCE 7 Load Combination Report"):
        """Initialize with a completed run."""
        self.run_result = run_result
        self.title = title
        self.env = Environment(
            loader=BaseLoader(),
            autoescape=select_autoescape(['html', 'xml'])
        )
        self.template = self.env.from_string(HTML_TEMPLATE)

    def _build_input_rows(self) -> List[Dict[str, str]]:
        inputs = self.run_result.inputs
        unit = inputs.unit_system.pressure_unit
        rows = [
            {"label": "ASCE Standard", "value": inputs.standard.value},
            {"label": "Jurisdiction", "value": inputs.jurisdiction},
            {"label": "Design Method", "value": inputs.method.value},
            {"label": "Input Load Level", "value": inputs.input_load_level.value},
            {"label": "Dead Load (D)", "value": f"{_fmt(inputs.D)} {unit}"},
            {"label": "Live Load (L)", "value": f"{_fmt(inputs.L)} {unit}"},
            {"label": "Roof Live Load (Lr)", "value": f"{_fmt(inputs.Lr)} {unit}"},
            {"label": "Rain Load (R)", "value": f"{_fmt(inputs.R)} {unit}"},
            {"label": "Seismic Load (E)", "value": f"{_fmt(inputs.E)} {unit}"},
        ]
        if self.run_result.standard != inputs.standard:
            rows.insert(1, {"label": "Formulas Used", "value": self.run_result.standard.value})
        for scenario in self.run_result.scenarios:
            loads = inputs.scenarios.get(scenario.key)
            if loads is None:
                continue
            rows.append({
                "label": scenario.short_title,
                "value": f"S = {_fmt(loads.S)}, W max = {_fmt(loads.W_max)}, W min = {_fmt(loads.W_min)} {unit}",
            })
        return rows

    def _build_base_rows(self) -> List[Dict[str, str]]:
        base = self.run_result.base_combos
        return [
            {"combo": combo, "formula": base.final_formulas.get(combo, ""), "value": _fmt(value)}
            for combo, value in base.results.items()
            if not is_scenario_combo(combo)
        ]

    def _build_base_governing(self) -> Optional[Dict[str, str]]:
        combo, value = self.run_result.base_combos.governing()
        if combo is None:
            return None
        return {"combo": combo, "value": _fmt(value)}

    @staticmethod
    def _rows(scenario: ScenarioResult, pattern: bool) -> List[Dict[str, str]]:
        frame = scenario_dataframe(scenario, pattern=pattern)
        return [
            {
                "combo": row["Combination"],
                "formula": row["Formula"],
                "wmax": _fmt(row["Max Wind"]),
                "wmin": _fmt(row["Min Wind"]),
            }
            for row in frame.to_dict("records")
        ]

    def _build_scenarios(self) -> List[Dict[str, Any]]:
        scenarios = []
        for scenario in self.run_result.scenarios:
            scenarios.append({
                "title": scenario.title,
                "rows": self._rows(scenario, pattern=False),
                "pattern_rows": self._rows(scenario, pattern=True) if scenario.pattern_load_required else [],
            })
        return scenarios

    def _build_summary(self) -> List[Dict[str, str]]:
        frame = envelope_dataframe(self.run_result.envelope)
        return [
            {
                "title": row["Scenario"],
                "max_value": _fmt(row["Max"]),
                "max_combo": row["Max Combination"],
                "min_value": _fmt(row["Min"]),
                "min_combo": row["Min Combination"],
            }
            for row in frame.to_dict("records")
        ]

    def _build_overall(self) -> Optional[Dict[str, Dict[str, str]]]:
        envelope = self.run_result.envelope
        if envelope.overall_max is None or envelope.overall_min is None:
            return None
        return {
            key: {"value": _fmt(value.value), "title": _short(value.title), "combo": _combo_label(value)}
            for key, value in (("max", envelope.overall_max), ("min", envelope.overall_min))
        }

    def _build_equations(self) -> List[Dict[str, str]]:
        formulas = ComboFormulaLibrary.get_formulas(self.run_result.standard, self.run_result.inputs.method)
        return [{"combo": formula.label, "equation": formula.to_equation()} for formula in formulas]

    def generate(self) -> str:
        """
        Generate the complete HTML report.

        Returns:
            Complete HTML string ready for rendering or saving
        """
        inputs = self.run_result.inputs
        context = {
            'title': self.title,
            'css_styles': CSS_STYLES,
            'standard': self.run_result.standard.value,
            'method': inputs.method.value,
            'unit': inputs.unit_system.pressure_unit,
            'threshold': f"{inputs.unit_system.live_load_threshold:g}",
            'input_rows': self._build_input_rows(),
            'notes': self.run_result.adjustment_notes,
            'warnings': self.run_result.warnings,
            'base_rows': self._build_base_rows(),
            'base_governing': self._build_base_governing(),
            'scenarios': self._build_scenarios(),
            'summary': self._build_summary(),
            'overall': self._build_overall(),
            'equations': self._build_equations(),
            'generation_date': datetime.now().strftime('%Y-%m-%d %H:%M'),
        }
        return self.template.render(**context)

    def save(self, filepath: Union[str, Path]) -> str:
        """
        Generate and save the HTML report to a file.

        Returns:
            The filepath where the report was saved
        """
        html = self.generate()
        with open(filepath, 'w', encoding='utf-8') as f:
            f.write(html)
        return str(filepath)


# =============================================================================
# CONVENIENCE FUNCTION
# =============================================================================

def generate_report(run_result: ComboRunResult, filepath: Optional[str] = None) -> str:
    """
    Convenience function to generate a report.

    Returns:
        HTML string if no filepath, otherwise the saved filepath
    """
    generator = ComboReportGenerator(run_result)
    if filepath:
        return generator.save(filepath)
    return generator.generate()
