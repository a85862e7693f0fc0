"""
views/components/question_input.py

문항 유형에 맞는 입력 위젯 (평점 버튼 / 텍스트 영역).
위젯 경계에서 값을 검증한 뒤에만 set_answer를 호출한다.
"""

from __future__ import annotations

import logging

import streamlit as st

from feedback_survey.models.question_model import AnswerValue, QuestionDefinition
from feedback_survey.services.survey_flow import SurveyFlowController

logger = logging.getLogger(__name__)


def _save(flow: SurveyFlowController, question: QuestionDefinition, value: AnswerValue) -> None:
    try:
        checked = question.validate_answer(value)
    except ValueError as e:
        logger.warning(f"입력값 거부: {e}")
        return
    flow.set_answer(question.id, checked)


def _save_text(flow: SurveyFlowController, question: QuestionDefinition, widget_key: str) -> None:
    _save(flow, question, st.session_state.get(widget_key, ""))


def render(flow: SurveyFlowController, question: QuestionDefinition, saved: AnswerValue) -> None:
    """
    입력 위젯 렌더링.

    Args:
        flow:     설문 컨트롤러 (클릭/입력 시 set_answer 호출 대상)
        question: 현재 문항
        saved:    이미 저장된 답 (없거나 건너뛴 경우 None)
    """
    max_rating = question.kind.max_rating

    # ── 자유 서술형 ───────────────────────────────────────────────────────
    if max_rating is None:
        # 세션 ID를 키에 포함: 새 설문 시작 시 이전 입력이 남지 않도록
        widget_key = f"text_{flow.session_id}_{question.id}"
        if widget_key not in st.session_state:
            st.session_state[widget_key] = saved if isinstance(saved, str) else ""
        st.text_area(
            "Your answer",
            key=widget_key,
            placeholder="Please share your thoughts...",
            height=120,
            label_visibility="collapsed",
            on_change=_save_text,
            args=(flow, question, widget_key),
        )
        return

    # ── 평점형 (1 ~ max) ──────────────────────────────────────────────────
    cols = st.columns(max_rating)
    for num in range(1, max_rating + 1):
        with cols[num - 1]:
            st.button(
                str(num),
                key=f"rate_{question.id}_{num}",
                type="primary" if saved == num else "secondary",
                on_click=_save,
                args=(flow, question, num),
            )

    st.markdown(
        "<div style='display:flex; justify-content:space-between; "
        "font-size:0.8rem; color:#9ca3af;'><span>Poor</span><span>Excellent</span></div>",
        unsafe_allow_html=True,
    )
