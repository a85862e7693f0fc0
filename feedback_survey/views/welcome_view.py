"""
views/welcome_view.py — 시작 화면
"""

from __future__ import annotations

import streamlit as st

from feedback_survey.services.survey_flow import SurveyFlowController


def render(flow: SurveyFlowController) -> None:
    """시작 화면 렌더링."""

    _, col, _ = st.columns([1, 2.2, 1])

    with col:
        st.markdown('<div class="survey-card">', unsafe_allow_html=True)
        st.markdown('<p class="survey-title">Welcome! 👋</p>', unsafe_allow_html=True)
        st.markdown(
            '<p class="survey-subtitle">We value your feedback and would love to hear '
            'about your experience with us.</p>'
            '<p class="survey-subtitle">This survey will take just a few minutes to complete.</p>',
            unsafe_allow_html=True,
        )

        st.button(
            "Start Survey",
            key="start_survey",
            type="primary",
            on_click=flow.start_survey,
        )

        st.markdown("</div>", unsafe_allow_html=True)
