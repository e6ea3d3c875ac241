from src.ui.components import get_load_badge, governing_card, create_envelope_chart
from src.ui.state import init_session_state, get_state, set_state
from src.ui.theme import THEME_TOKENS, get_streamlit_css, apply_theme
