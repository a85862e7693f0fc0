"""
models/session_state.py

설문 진행 상태를 화면별 태그 유니온으로 표현한다.
화면마다 필요한 필드만 갖기 때문에 "환영 화면인데 문항 인덱스가 있음" 같은
조합은 아예 만들 수 없다. 모든 모델은 frozen이며 명령마다 상태 전체를 교체한다.
UI 코드 없음.
"""

from enum import Enum
from typing import Annotated, Dict, Literal, Union

from pydantic import BaseModel, Field

from feedback_survey.models.question_model import AnswerValue


class Screen(str, Enum):
    WELCOME = "welcome"
    SURVEY = "survey"
    THANK_YOU = "thankyou"


class WelcomeState(BaseModel):
    """시작 화면. 진행 중인 세션 없음."""

    screen: Literal[Screen.WELCOME] = Screen.WELCOME

    model_config = {"frozen": True}


class SurveyState(BaseModel):
    """
    설문 응답 중 상태.

    Attributes:
        session_id:      설문 시작 시마다 새로 발급되는 세션 ID.
        question_index:  현재 문항 인덱스 (0-based).
        answers:         응답지. {question.id: 값}. 값이 None이면 "건너뜀".
        confirm_pending: 제출 확인 대화상자 표시 여부.
    """

    screen: Literal[Screen.SURVEY] = Screen.SURVEY
    session_id: str = Field(..., min_length=1)
    question_index: int = Field(
        default=0,
        ge=0,
        description="현재 문항 인덱스 (0-based)"
    )
    answers: Dict[int, AnswerValue] = Field(
        default_factory=dict,
        description="응답지. key: question.id, value: 평점(int), 텍스트(str) 또는 건너뜀(None)"
    )
    confirm_pending: bool = Field(
        default=False,
        description="제출 확인 대기 여부"
    )

    model_config = {"frozen": True}


class ThankYouState(BaseModel):
    """제출 완료 화면. countdown이 0이 되면 시작 화면으로 돌아간다."""

    screen: Literal[Screen.THANK_YOU] = Screen.THANK_YOU
    session_id: str = Field(..., min_length=1)
    countdown: int = Field(
        ...,
        ge=0,
        description="시작 화면 복귀까지 남은 초"
    )

    model_config = {"frozen": True}


SessionState = Annotated[
    Union[WelcomeState, SurveyState, ThankYouState],
    Field(discriminator="screen"),
]
