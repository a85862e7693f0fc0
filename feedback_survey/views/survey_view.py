"""
views/survey_view.py — 설문 응답 화면

레이아웃:
  - 진행 표시 (Question n of N + 진행 막대)
  - 문항 카드 + 입력 위젯
  - 이전 / 건너뛰기 / 다음(마지막 문항이면 제출)
  - 제출 확인 대화상자 (confirm_pending일 때)

버튼 활성 조건은 렌더러 책임:
  - 이전: 첫 문항이면 비활성
  - 건너뛰기: 필수 문항이거나 마지막 문항이면 비활성
"""

from __future__ import annotations

import streamlit as st

from feedback_survey.services.survey_flow import SurveyFlowController
from feedback_survey.views.components import confirm_dialog
from feedback_survey.views.components import progress_bar
from feedback_survey.views.components import question_input


def render(flow: SurveyFlowController) -> None:
    """설문 화면 렌더링."""

    question = flow.current_question
    if question is None:
        # 화면 전이 직후 재실행 사이의 틈. 다음 rerun에서 올바른 뷰가 그려진다
        return

    index = flow.question_index
    total = flow.total_questions
    locked = flow.confirm_pending

    _, col, _ = st.columns([0.6, 2.8, 0.6])

    with col:
        st.markdown('<div class="survey-card">', unsafe_allow_html=True)

        progress_bar.render(index + 1, total, flow.answered_count)

        # ── 문항 카드 ─────────────────────────────────────────────────────
        badge = "Required" if question.required else "Optional"
        st.markdown(
            f"""
            <div class="question-card">
                <span class="question-badge">{badge}</span>
                <p class="question-text">{question.text}</p>
            </div>
            """,
            unsafe_allow_html=True,
        )

        question_input.render(flow, question, flow.answers.get(question.id))

        # ── 이전 / 건너뛰기 / 다음 ────────────────────────────────────────
        st.markdown("<br>", unsafe_allow_html=True)
        nav_left, nav_center, nav_right = st.columns([1, 1, 1])

        with nav_left:
            st.button(
                "Previous",
                key="prev_btn",
                disabled=locked or not flow.can_go_back,
                on_click=flow.go_previous,
            )

        with nav_center:
            st.button(
                "Skip",
                key="skip_btn",
                disabled=locked or not flow.can_skip,
                on_click=flow.skip,
            )

        with nav_right:
            if flow.is_last_question:
                st.button(
                    "Submit Survey",
                    key="submit_btn",
                    type="primary",
                    disabled=locked,
                    on_click=flow.request_submit,
                )
            else:
                st.button(
                    "Next",
                    key="next_btn",
                    type="primary",
                    disabled=locked,
                    on_click=flow.go_next,
                )

        if locked:
            confirm_dialog.render(flow)

        st.markdown("</div>", unsafe_allow_html=True)
