"""
views/thank_you_view.py — 제출 완료 화면

카운트다운은 컨트롤러의 타이머가 진행한다. 이 화면은 1초마다 다시 그려
남은 시간을 보여주고, 컨트롤러가 시작 화면으로 돌아가면 자연히 빠져나간다.
"""

from __future__ import annotations

import time

import streamlit as st

from feedback_survey.services.survey_flow import SurveyFlowController
from feedback_survey.views.components import countdown

_POLL_SECONDS = 1.0


def render(flow: SurveyFlowController) -> None:
    """감사 화면 렌더링."""

    _, col, _ = st.columns([1, 2.2, 1])

    with col:
        st.markdown('<div class="survey-card">', unsafe_allow_html=True)
        st.markdown('<p class="survey-title">Thank You! 🎉</p>', unsafe_allow_html=True)
        st.markdown(
            '<p class="survey-subtitle">Your feedback has been successfully submitted.</p>'
            '<p class="survey-subtitle">We appreciate you taking the time to share your '
            'thoughts with us.</p>',
            unsafe_allow_html=True,
        )
        countdown.render(flow.countdown or 0)
        st.markdown("</div>", unsafe_allow_html=True)

    time.sleep(_POLL_SECONDS)
    st.rerun()
