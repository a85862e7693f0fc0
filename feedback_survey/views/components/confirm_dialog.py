"""
views/components/confirm_dialog.py

제출 확인 게이트. confirm_pending일 때만 그려진다.
"""

from __future__ import annotations

import streamlit as st

from feedback_survey.services.survey_flow import SurveyFlowController


def render(flow: SurveyFlowController) -> None:
    st.markdown('<hr class="survey-divider">', unsafe_allow_html=True)
    st.markdown("**Submit Survey**")
    st.warning("Are you sure you want to submit your responses?")

    col_no, col_yes = st.columns(2)
    with col_no:
        st.button(
            "Cancel",
            key="confirm_no",
            on_click=flow.cancel_submit,
        )
    with col_yes:
        st.button(
            "Yes, Submit",
            key="confirm_yes",
            type="primary",
            on_click=flow.confirm_submit,
        )
