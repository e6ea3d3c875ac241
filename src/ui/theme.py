"""Dark theme tokens and Streamlit CSS for LoadCombo."""

THEME_TOKENS = {
    "colors": {
        "bg_base": "#131314",        # Near-black background
        "bg_surface": "#1f1f1f",     # Elevated surface
        "bg_elevated": "#2d2e2f",    # Cards/panels
        "text_primary": "#e3e3e3",   # Main text
        "text_secondary": "#9aa0a6", # Secondary text
        "accent_blue": "#8ab4f8",    # Primary accent, minimum/uplift values
        "accent_red": "#f28b82",     # Maximum pressure values
        "success": "#81c995",
        "warning": "#fdd663",
        "error": "#f28b82",
        "border_subtle": "rgba(255, 255, 255, 0.08)"
    },
    "typography": {
        "font_family": "'Inter', 'Segoe UI', system-ui, sans-serif",
        "font_mono": "'JetBrains Mono', 'Consolas', monospace",
        "weight_medium": 500,
    },
}


def get_streamlit_css() -> str:
    """Generate Streamlit custom CSS from tokens."""
    colors = THEME_TOKENS["colors"]
    typo = THEME_TOKENS["typography"]

    return f"""
    /* Background */
    .stApp {{ background-color: {colors["bg_base"]}; }}
    .stSidebar {{ background-color: {colors["bg_surface"]}; }}

    /* Typography */
    .stApp {{ font-family: {typo["font_family"]}; color: {colors["text_primary"]}; }}
    h1, h2, h3 {{ color: {colors["text_primary"]}; font-weight: {typo["weight_medium"]}; }}

    /* Governing value cards */
    .governing-card {{
        background-color: {colors["bg_elevated"]};
        border-radius: 12px;
        padding: 16px;
        margin-bottom: 8px;
        border: 1px solid {colors["border_subtle"]};
    }}
    .governing-title {{
        font-weight: 600;
        color: {colors["text_primary"]};
        margin-bottom: 8px;
    }}
    .governing-value {{
        font-size: 24px;
        font-weight: 700;
        margin: 0;
        font-family: {typo["font_mono"]};
    }}
    .governing-value.max {{ color: {colors["accent_red"]}; }}
    .governing-value.min {{ color: {colors["accent_blue"]}; }}
    .governing-source {{
        font-size: 12px;
        color: {colors["text_secondary"]};
        white-space: nowrap;
        overflow: hidden;
        text-overflow: ellipsis;
    }}

    /* Badges */
    .load-badge {{
        color: #000000;
        padding: 2px 10px;
        border-radius: 12px;
        font-weight: 600;
        font-size: 12px;
        display: inline-block;
    }}

    /* Hide Streamlit branding */
    #MainMenu {{visibility: hidden;}}
    footer {{visibility: hidden;}}
    """


def apply_theme() -> None:
    """Inject theme CSS into Streamlit app."""
    import streamlit as st
    st.markdown(f"<style>{get_streamlit_css()}</style>", unsafe_allow_html=True)
