"""
api/routes.py — FastAPI 엔드포인트

렌더러 경계를 JSON으로 노출한다. 명령 엔드포인트는 no-op이어도 200을 반환하고
{"ok": false}로 적용 여부만 알린다 (컨트롤러의 no-op 의미 유지).
HTTP 오류는 입력 위젯 경계 검증(/api/answer)에서만 발생한다.
"""

from typing import Callable, Optional, Union

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, StrictInt, StrictStr

from feedback_survey.models.question_model import QuestionDefinition
from feedback_survey.models.session_state import Screen
from feedback_survey.services.question_catalog import find_question
from feedback_survey.services.survey_flow import SurveyFlowController

router = APIRouter()

# ── Pydantic request bodies ──────────────────────────────────────────────────

class AnswerBody(BaseModel):
    question_id: int
    # strict: JSON true가 1로 바뀌지 않도록
    value: Optional[Union[StrictInt, StrictStr]] = None


# ── 헬퍼 ─────────────────────────────────────────────────────────────────────

def _controller(request: Request) -> SurveyFlowController:
    return request.app.state.controller


def _question_to_dict(q: QuestionDefinition) -> dict:
    return {
        "id": q.id,
        "text": q.text,
        "kind": q.kind.value,
        "max_rating": q.kind.max_rating,
        "required": q.required,
    }


def _state_to_dict(flow: SurveyFlowController) -> dict:
    # 필드마다 프로퍼티를 읽지 않고 한 시점의 스냅샷에서 만든다 (타이머 스레드와 경합)
    snap = flow.snapshot()
    current = snap["current_question"]
    snap["current_question"] = _question_to_dict(current) if current else None
    snap["answers"] = {str(k): v for k, v in snap["answers"].items()}
    return snap


def _run(request: Request, command: Callable[[SurveyFlowController], bool]) -> dict:
    flow = _controller(request)
    ok = command(flow)
    return {"ok": ok, "state": _state_to_dict(flow)}


# ── 엔드포인트 ───────────────────────────────────────────────────────────────

@router.get("/api/questions")
async def list_questions(request: Request):
    flow = _controller(request)
    return {"questions": [_question_to_dict(q) for q in flow.catalog]}


@router.get("/api/state")
async def get_state(request: Request):
    return _state_to_dict(_controller(request))


@router.post("/api/start")
async def start_survey(request: Request):
    return _run(request, lambda flow: flow.start_survey())


@router.post("/api/answer")
async def save_answer(request: Request, body: AnswerBody):
    flow = _controller(request)
    if flow.screen is not Screen.SURVEY:
        raise HTTPException(status_code=409, detail="진행 중인 설문이 없습니다.")

    question = find_question(flow.catalog, body.question_id)
    if question is None:
        raise HTTPException(status_code=404, detail="문항을 찾을 수 없습니다.")
    try:
        value = question.validate_answer(body.value)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return _run(request, lambda f: f.set_answer(question.id, value))


@router.post("/api/next")
async def go_next(request: Request):
    return _run(request, lambda flow: flow.go_next())


@router.post("/api/previous")
async def go_previous(request: Request):
    return _run(request, lambda flow: flow.go_previous())


@router.post("/api/skip")
async def skip_question(request: Request):
    return _run(request, lambda flow: flow.skip())


@router.post("/api/submit")
async def request_submit(request: Request):
    return _run(request, lambda flow: flow.request_submit())


@router.post("/api/submit/confirm")
async def confirm_submit(request: Request):
    return _run(request, lambda flow: flow.confirm_submit())


@router.post("/api/submit/cancel")
async def cancel_submit(request: Request):
    return _run(request, lambda flow: flow.cancel_submit())


@router.post("/api/tick")
async def tick_countdown(request: Request):
    return _run(request, lambda flow: flow.tick_countdown())
