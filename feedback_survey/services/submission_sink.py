"""
services/submission_sink.py

제출된 응답을 받아가는 외부 협력자.
현재는 진단 로그만 남긴다. 저장소/네트워크 호출 없음.
"""

import json
import logging
from typing import Callable

from feedback_survey.models.response_model import SubmittedResponse

logger = logging.getLogger(__name__)

SubmissionSink = Callable[[SubmittedResponse], None]


def log_submission(response: SubmittedResponse) -> None:
    """제출 응답을 JSON 한 줄로 INFO 로그에 기록한다."""
    logger.info(
        "설문 제출 완료: %s",
        json.dumps(response.to_log_dict(), ensure_ascii=False, sort_keys=True),
    )
