"""
services/survey_flow.py

설문 흐름 상태 머신 (SurveyFlowController).

화면 전이:
  welcome --start_survey--> survey --confirm_submit--> thankyou --카운트다운 0--> welcome

설계 원칙:
- 렌더러(streamlit 뷰, HTTP 라우트)가 명령을 호출하고, 상태를 다시 읽어 화면을 그린다.
- 전제조건 위반은 예외가 아니라 no-op. 명령은 적용 여부(bool)만 반환한다.
- 상태 객체는 불변이며 명령마다 통째로 교체된다. 카운트다운 틱은 타이머 스레드에서
  들어오므로 모든 명령은 RLock으로 직렬화한다.
- 카운트다운 타이머 해제는 전이 로직 안에서 처리한다. 렌더러가 취소를 기억할 필요 없음.
"""

import logging
import threading
import time
import uuid
from typing import Any, Dict, Iterable, Optional

from config import COUNTDOWN_INTERVAL_SECONDS, THANK_YOU_COUNTDOWN_SECONDS
from feedback_survey.models.question_model import AnswerValue, QuestionDefinition
from feedback_survey.models.response_model import SubmittedResponse
from feedback_survey.models.session_state import (
    Screen,
    SessionState,
    SurveyState,
    ThankYouState,
    WelcomeState,
)
from feedback_survey.services.countdown import (
    CountdownHandle,
    CountdownScheduler,
    ThreadCountdownScheduler,
)
from feedback_survey.services.question_catalog import Catalog, SURVEY_QUESTIONS, build_catalog
from feedback_survey.services.submission_sink import SubmissionSink, log_submission

logger = logging.getLogger(__name__)


def generate_session_id() -> str:
    """벽시계 시각(ms) + 난수 9자리로 세션 ID 생성."""
    return f"session_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


class SurveyFlowController:
    def __init__(
        self,
        catalog: Iterable[QuestionDefinition] = SURVEY_QUESTIONS,
        sink: SubmissionSink = log_submission,
        scheduler: Optional[CountdownScheduler] = None,
        countdown_seconds: int = THANK_YOU_COUNTDOWN_SECONDS,
        tick_interval: float = COUNTDOWN_INTERVAL_SECONDS,
    ):
        if countdown_seconds < 1:
            raise ValueError("countdown_seconds는 1 이상이어야 합니다.")

        self._catalog: Catalog = build_catalog(catalog)
        self._sink = sink
        self._scheduler = scheduler or ThreadCountdownScheduler()
        self._countdown_seconds = countdown_seconds
        self._tick_interval = tick_interval

        self._lock = threading.RLock()
        self._state: SessionState = WelcomeState()
        self._timer: Optional[CountdownHandle] = None
        self._timer_token: Optional[object] = None

    # ══════════════════════════════════════════════════════════════════════
    # 읽기 전용 상태
    # ══════════════════════════════════════════════════════════════════════

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def screen(self) -> Screen:
        return self._state.screen

    @property
    def total_questions(self) -> int:
        return len(self._catalog)

    @property
    def session_id(self) -> Optional[str]:
        return getattr(self._state, "session_id", None)

    @property
    def question_index(self) -> Optional[int]:
        """survey 화면에서만 의미 있음. 그 외에는 None."""
        state = self._state
        return state.question_index if isinstance(state, SurveyState) else None

    @property
    def current_question(self) -> Optional[QuestionDefinition]:
        state = self._state
        if not isinstance(state, SurveyState):
            return None
        return self._catalog[state.question_index]

    @property
    def answers(self) -> Dict[int, AnswerValue]:
        """응답지 사본. survey 화면이 아니면 빈 dict."""
        state = self._state
        return dict(state.answers) if isinstance(state, SurveyState) else {}

    @property
    def answered_count(self) -> int:
        return sum(1 for v in self.answers.values() if v is not None)

    @property
    def confirm_pending(self) -> bool:
        state = self._state
        return isinstance(state, SurveyState) and state.confirm_pending

    @property
    def countdown(self) -> Optional[int]:
        state = self._state
        return state.countdown if isinstance(state, ThankYouState) else None

    @property
    def is_last_question(self) -> bool:
        state = self._state
        return isinstance(state, SurveyState) and state.question_index == len(self._catalog) - 1

    @property
    def can_go_back(self) -> bool:
        state = self._state
        return isinstance(state, SurveyState) and state.question_index > 0

    @property
    def can_skip(self) -> bool:
        """렌더러용 건너뛰기 버튼 활성 조건 (선택 문항이면서 마지막 문항이 아님)."""
        question = self.current_question
        return question is not None and not question.required and not self.is_last_question

    def snapshot(self) -> Dict[str, Any]:
        """
        렌더러용 상태 dict.

        타이머 스레드가 상태를 교체할 수 있으므로 락 안에서 상태 객체 하나만 읽어
        모든 필드를 만든다. 개별 프로퍼티를 차례로 읽으면 두 상태가 섞일 수 있다.
        """
        with self._lock:
            state = self._state

        last = len(self._catalog) - 1
        survey = state if isinstance(state, SurveyState) else None
        question = self._catalog[survey.question_index] if survey else None
        answers = dict(survey.answers) if survey else {}
        return {
            "screen": state.screen.value,
            "session_id": getattr(state, "session_id", None),
            "question_index": survey.question_index if survey else None,
            "total": len(self._catalog),
            "current_question": question,
            "answers": answers,
            "answered_count": sum(1 for v in answers.values() if v is not None),
            "confirm_pending": bool(survey and survey.confirm_pending),
            "countdown": state.countdown if isinstance(state, ThankYouState) else None,
            "is_last_question": bool(survey and survey.question_index == last),
            "can_go_back": bool(survey and survey.question_index > 0),
            "can_skip": bool(
                question is not None and not question.required and survey.question_index != last
            ),
        }

    # ══════════════════════════════════════════════════════════════════════
    # 명령
    # ══════════════════════════════════════════════════════════════════════

    def start_survey(self) -> bool:
        """어느 화면에서든 새 세션 시작. 이전 응답과 카운트다운은 폐기."""
        with self._lock:
            self._release_timer()
            self._state = SurveyState(session_id=generate_session_id())
            logger.info(f"설문 시작 - session: {self._state.session_id}")
            return True

    def set_answer(self, question_id: int, value: AnswerValue) -> bool:
        with self._lock:
            state = self._state
            if not isinstance(state, SurveyState) or state.confirm_pending:
                return self._ignored("set_answer")
            if not any(q.id == question_id for q in self._catalog):
                return self._ignored(f"set_answer(알 수 없는 문항 {question_id})")

            answers = dict(state.answers)
            answers[question_id] = value
            self._state = state.model_copy(update={"answers": answers})
            return True

    def go_next(self) -> bool:
        """다음 문항으로. 필수 문항 미응답이어도 막지 않는다."""
        with self._lock:
            state = self._survey_state_for("go_next")
            if state is None:
                return False
            if state.question_index >= len(self._catalog) - 1:
                return self._ignored("go_next(마지막 문항)")
            self._state = state.model_copy(update={"question_index": state.question_index + 1})
            return True

    def go_previous(self) -> bool:
        with self._lock:
            state = self._survey_state_for("go_previous")
            if state is None:
                return False
            if state.question_index == 0:
                return self._ignored("go_previous(첫 문항)")
            self._state = state.model_copy(update={"question_index": state.question_index - 1})
            return True

    def skip(self) -> bool:
        """
        선택 문항 건너뛰기.

        응답을 None(건너뜀 표시)으로 기록한 뒤 go_next와 같이 이동한다.
        마지막 문항이면 표시만 남기고 이동하지 않는다. 필수 문항은 no-op.
        """
        with self._lock:
            state = self._survey_state_for("skip")
            if state is None:
                return False
            question = self._catalog[state.question_index]
            if question.required:
                return self._ignored(f"skip(필수 문항 {question.id})")

            answers = dict(state.answers)
            answers[question.id] = None
            index = state.question_index
            if index < len(self._catalog) - 1:
                index += 1
            self._state = state.model_copy(update={"answers": answers, "question_index": index})
            return True

    def request_submit(self) -> bool:
        """마지막 문항에서 제출 확인 대화상자를 연다."""
        with self._lock:
            state = self._state
            if not isinstance(state, SurveyState):
                return self._ignored("request_submit")
            if state.question_index != len(self._catalog) - 1:
                return self._ignored("request_submit(마지막 문항 아님)")
            if not state.confirm_pending:
                self._state = state.model_copy(update={"confirm_pending": True})
            return True

    def cancel_submit(self) -> bool:
        with self._lock:
            state = self._state
            if not isinstance(state, SurveyState) or not state.confirm_pending:
                return self._ignored("cancel_submit")
            self._state = state.model_copy(update={"confirm_pending": False})
            return True

    def confirm_submit(self) -> bool:
        """
        유일한 커밋 지점.

        응답 스냅샷을 sink로 넘기고 감사 화면으로 전이한 뒤 카운트다운을 시작한다.
        확인 대기 상태가 아니면 no-op. 연속 호출해도 제출은 한 번뿐.
        """
        with self._lock:
            state = self._state
            if not isinstance(state, SurveyState) or not state.confirm_pending:
                return self._ignored("confirm_submit")

            response = SubmittedResponse(
                session_id=state.session_id,
                answers=dict(state.answers),
            )
            try:
                self._sink(response)
            except Exception:
                # sink는 fire-and-forget. 실패해도 흐름은 계속된다
                logger.exception(f"제출 응답 전달 실패 - session: {state.session_id}")

            self._state = ThankYouState(
                session_id=state.session_id,
                countdown=self._countdown_seconds,
            )
            self._start_timer()
            return True

    def tick_countdown(self) -> bool:
        """감사 화면 카운트다운 1 감소. 0이 되면 시작 화면으로 돌아가고 타이머 해제."""
        with self._lock:
            return self._tick()

    def close(self) -> None:
        """앱 종료 시 남은 타이머 정리."""
        with self._lock:
            self._release_timer()

    # ══════════════════════════════════════════════════════════════════════
    # 내부 헬퍼
    # ══════════════════════════════════════════════════════════════════════

    def _survey_state_for(self, command: str) -> Optional[SurveyState]:
        """문항 이동 계열 명령의 공통 전제조건 (survey 화면 + 확인 대기 아님)."""
        state = self._state
        if not isinstance(state, SurveyState) or state.confirm_pending:
            self._ignored(command)
            return None
        return state

    def _ignored(self, command: str) -> bool:
        logger.debug(f"명령 무시됨 ({self._state.screen.value}): {command}")
        return False

    def _tick(self) -> bool:
        state = self._state
        if not isinstance(state, ThankYouState):
            return self._ignored("tick_countdown")

        remaining = state.countdown - 1
        if remaining <= 0:
            self._release_timer()
            self._state = WelcomeState()
            logger.info(f"카운트다운 종료, 시작 화면으로 복귀 - session: {state.session_id}")
        else:
            self._state = state.model_copy(update={"countdown": remaining})
        return True

    def _start_timer(self) -> None:
        self._release_timer()
        token = object()
        self._timer_token = token
        self._timer = self._scheduler.every(
            self._tick_interval,
            lambda: self._on_timer_fired(token),
        )

    def _on_timer_fired(self, token: object) -> None:
        with self._lock:
            # 이미 해제된 타이머가 뒤늦게 깨어난 경우 무시
            if token is not self._timer_token:
                return
            self._tick()

    def _release_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None
        self._timer_token = None
