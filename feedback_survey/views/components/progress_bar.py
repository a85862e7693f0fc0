"""
views/components/progress_bar.py

"Question n of N" 표시와 진행 막대.
"""

from __future__ import annotations

import streamlit as st


def render(question_number: int, total: int, answered: int) -> None:
    st.markdown(
        f"""
        <div style="display:flex; justify-content:space-between;
                    font-size:0.85rem; color:#6b7280; margin-bottom:4px;">
            <span>Question {question_number} of {total}</span>
            <span>answered <b>{answered}</b></span>
        </div>
        """,
        unsafe_allow_html=True,
    )
    st.progress(question_number / total if total > 0 else 0)
