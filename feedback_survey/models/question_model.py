"""
models/question_model.py

설문 문항 정의 모델.
Pydantic v2 적용. 카탈로그는 프로세스 시작 시 한 번 만들어지고 변경되지 않는다.
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

AnswerValue = Optional[Union[int, str]]


class QuestionKind(str, Enum):
    """문항 입력 방식."""

    RATING_5 = "rating-5"
    RATING_10 = "rating-10"
    FREE_TEXT = "text"

    @property
    def max_rating(self) -> Optional[int]:
        """평점형이면 최대 점수, 자유 서술형이면 None."""
        if self is QuestionKind.RATING_5:
            return 5
        if self is QuestionKind.RATING_10:
            return 10
        return None


class QuestionDefinition(BaseModel):
    """
    고객 만족도 설문 문항 모델
    """
    id: int = Field(
        ...,
        ge=1,
        description="문항 번호 (고유 식별자, 정렬 기준)"
    )
    text: str = Field(
        ...,
        min_length=1,
        description="문항 내용"
    )
    kind: QuestionKind = Field(
        ...,
        description="입력 방식 (rating-5, rating-10, text)"
    )
    required: bool = Field(
        default=False,
        description="필수 응답 여부. True이면 건너뛰기 불가"
    )

    model_config = {"frozen": True}

    @field_validator('text')
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("문항 내용(text)이 비어 있습니다.")
        return v

    def validate_answer(self, value: AnswerValue) -> AnswerValue:
        """
        입력 위젯 경계에서 사용하는 답안 검증.

        컨트롤러는 값 범위를 검사하지 않으므로, 위젯(HTTP 라우트, streamlit 입력)이
        set_answer 호출 전에 이 메서드로 문항 유형에 맞는 값인지 확인한다.
        None은 건너뛰기 표시로 그대로 허용한다.

        Raises:
            ValueError: 문항 유형에 맞지 않는 값.
        """
        if value is None:
            return None

        max_rating = self.kind.max_rating
        if max_rating is None:
            if not isinstance(value, str):
                raise ValueError(f"문항 {self.id}은(는) 텍스트 답변만 허용합니다.")
            return value

        # bool은 int의 하위 타입이므로 명시적으로 거부
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"문항 {self.id}은(는) 정수 평점만 허용합니다.")
        if not 1 <= value <= max_rating:
            raise ValueError(f"문항 {self.id}의 평점은 1~{max_rating} 범위여야 합니다.")
        return value
