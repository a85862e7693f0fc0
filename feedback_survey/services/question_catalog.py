"""
services/question_catalog.py

설문 문항 카탈로그.
Public API:
  - SURVEY_QUESTIONS                       : 기본 5문항 카탈로그 (tuple, 불변)
  - build_catalog(items) -> tuple           : 문항 정의 검증 후 불변 카탈로그 생성
  - find_question(catalog, question_id)     : ID로 문항 조회

컨트롤러는 문항을 위치가 아닌 ID로만 다룬다. 3번/4번 문항이 같은 평점 척도를
공유하는 것은 데이터일 뿐 로직이 아니다.
"""

from typing import Iterable, Mapping, Optional, Tuple, Union

from feedback_survey.models.question_model import QuestionDefinition, QuestionKind

Catalog = Tuple[QuestionDefinition, ...]


def build_catalog(
    items: Iterable[Union[QuestionDefinition, Mapping[str, object]]],
) -> Catalog:
    """
    문항 정의 리스트를 검증하여 불변 카탈로그로 만든다.

    Raises:
        ValueError: 문항이 하나도 없거나 ID가 중복된 경우.
                    (개별 항목 오류는 pydantic ValidationError, ValueError 하위 타입)
    """
    questions = tuple(
        item if isinstance(item, QuestionDefinition) else QuestionDefinition.model_validate(item)
        for item in items
    )
    if not questions:
        raise ValueError("설문 문항이 최소 1개 이상 필요합니다.")

    seen = set()
    for q in questions:
        if q.id in seen:
            raise ValueError(f"문항 ID가 중복되었습니다: {q.id}")
        seen.add(q.id)
    return questions


def find_question(catalog: Catalog, question_id: int) -> Optional[QuestionDefinition]:
    for q in catalog:
        if q.id == question_id:
            return q
    return None


# ── 기본 카탈로그 ────────────────────────────────────────────────────────────
SURVEY_QUESTIONS: Catalog = build_catalog([
    QuestionDefinition(
        id=1,
        text="How satisfied are you with our service?",
        kind=QuestionKind.RATING_5,
        required=True,
    ),
    QuestionDefinition(
        id=2,
        text="How likely are you to recommend us to a friend or colleague?",
        kind=QuestionKind.RATING_10,
        required=True,
    ),
    QuestionDefinition(
        id=3,
        text="How would you rate the value for money of our product?",
        kind=QuestionKind.RATING_5,
        required=False,
    ),
    QuestionDefinition(
        id=4,
        text="How satisfied are you with the quality of our customer support?",
        kind=QuestionKind.RATING_5,
        required=False,
    ),
    QuestionDefinition(
        id=5,
        text="Do you have any suggestions for improvement?",
        kind=QuestionKind.FREE_TEXT,
        required=False,
    ),
])
