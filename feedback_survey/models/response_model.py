"""
models/response_model.py

제출된 설문 응답 스냅샷. 제출 시 한 번 만들어져 submission sink로 넘겨지고,
코어는 제출 이력을 보관하지 않는다.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Literal

from pydantic import BaseModel, Field

from feedback_survey.models.question_model import AnswerValue


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SubmittedResponse(BaseModel):
    session_id: str = Field(..., min_length=1)
    timestamp: datetime = Field(
        default_factory=_utc_now,
        description="제출 시각 (UTC)"
    )
    answers: Dict[int, AnswerValue] = Field(
        default_factory=dict,
        description="제출 시점 응답지 사본"
    )
    status: Literal["COMPLETED"] = "COMPLETED"

    model_config = {"frozen": True}

    def to_log_dict(self) -> Dict[str, Any]:
        """JSON 직렬화용 dict. 문항 ID 키는 문자열로 변환된다."""
        data = self.model_dump(mode="json")
        data["answers"] = {str(k): v for k, v in self.answers.items()}
        return data
