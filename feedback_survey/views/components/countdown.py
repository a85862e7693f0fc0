"""
views/components/countdown.py

감사 화면의 "Returning to start in N seconds..." 표시.
숫자는 컨트롤러가 타이머 스레드에서 줄여 나가며, 여기서는 읽기만 한다.
"""

import streamlit as st


def render(seconds: int) -> None:
    unit = "second" if seconds == 1 else "seconds"
    st.markdown(
        f'<p class="countdown-display">Returning to start in {seconds} {unit}...</p>',
        unsafe_allow_html=True,
    )
