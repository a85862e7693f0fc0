"""
streamlit_app.py — streamlit 렌더러 진입점

실행: streamlit run streamlit_app.py

세션마다 SurveyFlowController 하나를 st.session_state에 두고,
현재 화면에 맞는 뷰로 분기한다.
"""

import os
import sys

_BASE_DIR = os.path.dirname(os.path.abspath(__file__))
if _BASE_DIR not in sys.path:
    sys.path.insert(0, _BASE_DIR)

import streamlit as st

from feedback_survey.models.session_state import Screen
from feedback_survey.services.survey_flow import SurveyFlowController
from feedback_survey.views import survey_view, thank_you_view, welcome_view

_CSS = """
<style>
.survey-card { background:#ffffff; border-radius:16px; padding:28px 32px;
               box-shadow:0 4px 18px rgba(26,26,46,0.08); }
.survey-title { text-align:center; font-size:2rem; font-weight:800; color:#1f2937;
                margin-bottom:12px; }
.survey-subtitle { text-align:center; font-size:0.95rem; color:#4b5563; }
.question-card { padding:18px 4px 12px 4px; }
.question-badge { font-size:0.72rem; color:#6b7280; text-transform:uppercase;
                  letter-spacing:0.05em; }
.question-text { font-size:1.2rem; font-weight:600; color:#1f2937; text-align:center;
                 line-height:1.6; margin:8px 0 18px 0; }
.countdown-display { text-align:center; font-size:0.9rem; color:#6b7280; margin-top:16px; }
.survey-divider { border:none; border-top:1px solid #e5eaf2; margin:18px 0; }
</style>
"""

_VIEWS = {
    Screen.WELCOME: welcome_view.render,
    Screen.SURVEY: survey_view.render,
    Screen.THANK_YOU: thank_you_view.render,
}


def _controller() -> SurveyFlowController:
    if "survey_controller" not in st.session_state:
        st.session_state.survey_controller = SurveyFlowController()
    return st.session_state.survey_controller


st.set_page_config(page_title="Feedback Survey", page_icon="📝", layout="centered")
st.markdown(_CSS, unsafe_allow_html=True)

flow = _controller()
_VIEWS[flow.screen](flow)
