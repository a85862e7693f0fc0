import itertools
import re

from feedback_survey.models.session_state import Screen, SurveyState, ThankYouState, WelcomeState
from feedback_survey.services.question_catalog import SURVEY_QUESTIONS
from feedback_survey.services.survey_flow import SurveyFlowController, generate_session_id


def _to_last_question(flow):
    flow.start_survey()
    while flow.go_next():
        pass


def test_initial_state_is_welcome(flow):
    assert flow.screen is Screen.WELCOME
    assert isinstance(flow.state, WelcomeState)
    assert flow.question_index is None
    assert flow.current_question is None
    assert flow.answers == {}
    assert flow.session_id is None


def test_start_survey_resets_everything(flow):
    flow.start_survey()
    first_sid = flow.session_id
    flow.set_answer(1, 4)
    flow.go_next()
    flow.go_next()

    assert flow.start_survey() is True
    assert flow.screen is Screen.SURVEY
    assert flow.question_index == 0
    assert flow.answers == {}
    assert flow.confirm_pending is False
    assert flow.session_id != first_sid


def test_start_survey_from_confirm_pending(flow):
    _to_last_question(flow)
    flow.request_submit()
    flow.start_survey()
    assert flow.confirm_pending is False
    assert flow.question_index == 0


def test_session_id_format_and_uniqueness():
    ids = {generate_session_id() for _ in range(500)}
    assert len(ids) == 500
    assert all(re.fullmatch(r"session_\d+_[0-9a-f]{9}", sid) for sid in ids)


def test_navigation_stays_in_bounds(flow):
    flow.start_survey()
    last = len(SURVEY_QUESTIONS) - 1
    moves = [flow.go_next, flow.go_previous]
    for seq in itertools.product(moves, repeat=7):
        flow.start_survey()
        for move in seq:
            move()
            assert 0 <= flow.question_index <= last


def test_boundary_moves_are_noops(flow):
    flow.start_survey()
    assert flow.go_previous() is False
    assert flow.question_index == 0

    _to_last_question(flow)
    assert flow.question_index == len(SURVEY_QUESTIONS) - 1
    assert flow.go_next() is False
    assert flow.question_index == len(SURVEY_QUESTIONS) - 1


def test_go_next_does_not_require_answer(flow):
    flow.start_survey()
    assert flow.current_question.required is True
    assert flow.go_next() is True
    assert flow.question_index == 1
    assert flow.answers == {}


def test_go_previous_keeps_answers(flow):
    flow.start_survey()
    flow.set_answer(1, 3)
    flow.go_next()
    flow.set_answer(2, 7)
    flow.go_previous()
    assert flow.question_index == 0
    assert flow.answers == {1: 3, 2: 7}


def test_set_answer_upserts(flow):
    flow.start_survey()
    flow.set_answer(1, 2)
    flow.set_answer(1, 5)
    assert flow.answers == {1: 5}


def test_set_answer_ignores_unknown_question(flow):
    flow.start_survey()
    assert flow.set_answer(99, 3) is False
    assert flow.answers == {}


def test_commands_outside_survey_are_noops(flow):
    assert flow.set_answer(1, 3) is False
    assert flow.go_next() is False
    assert flow.go_previous() is False
    assert flow.skip() is False
    assert flow.request_submit() is False
    assert flow.confirm_submit() is False
    assert flow.cancel_submit() is False
    assert flow.tick_countdown() is False
    assert isinstance(flow.state, WelcomeState)


def test_skip_required_question_is_rejected(flow):
    flow.start_survey()
    before = flow.state
    assert flow.skip() is False
    assert flow.state == before
    assert flow.question_index == 0
    assert flow.answers == {}


def test_skip_optional_question_marks_and_advances(flow):
    flow.start_survey()
    flow.go_next()
    flow.go_next()
    assert flow.current_question.required is False

    assert flow.skip() is True
    assert flow.answers == {3: None}
    assert flow.question_index == 3


def test_skip_on_last_optional_question_does_not_move(flow):
    _to_last_question(flow)
    assert flow.skip() is True
    assert flow.answers == {5: None}
    assert flow.question_index == len(SURVEY_QUESTIONS) - 1


def test_skip_overwrites_existing_answer(flow):
    flow.start_survey()
    flow.go_next()
    flow.go_next()
    flow.set_answer(3, 4)
    flow.skip()
    assert flow.answers[3] is None


def test_request_submit_only_on_last_question(flow):
    flow.start_survey()
    assert flow.request_submit() is False
    assert flow.confirm_pending is False

    _to_last_question(flow)
    assert flow.request_submit() is True
    assert flow.confirm_pending is True
    assert flow.screen is Screen.SURVEY


def test_cancel_submit_keeps_position_and_emits_nothing(flow, submissions):
    _to_last_question(flow)
    index = flow.question_index
    flow.request_submit()

    assert flow.cancel_submit() is True
    assert flow.screen is Screen.SURVEY
    assert flow.question_index == index
    assert flow.confirm_pending is False
    assert submissions == []
    assert flow.cancel_submit() is False


def test_navigation_locked_while_confirm_pending(flow):
    _to_last_question(flow)
    flow.request_submit()
    assert flow.go_previous() is False
    assert flow.set_answer(5, "late edit") is False
    assert flow.skip() is False
    assert flow.question_index == len(SURVEY_QUESTIONS) - 1


def test_confirm_submit_once(flow, submissions, scheduler):
    _to_last_question(flow)
    assert flow.confirm_submit() is False
    flow.request_submit()

    assert flow.confirm_submit() is True
    assert flow.confirm_submit() is False
    assert len(submissions) == 1
    assert flow.screen is Screen.THANK_YOU
    assert flow.countdown == 5
    assert len(scheduler.handles) == 1
    assert scheduler.handles[0].interval == 1.0


def test_full_scenario(flow, submissions):
    flow.start_survey()
    assert flow.question_index == 0
    sid = flow.session_id

    flow.set_answer(1, 4)
    flow.go_next()
    assert flow.question_index == 1
    flow.set_answer(2, 9)
    flow.go_next()
    assert flow.question_index == 2
    flow.skip()
    assert flow.answers[3] is None
    assert flow.question_index == 3
    flow.skip()
    assert flow.answers[4] is None
    assert flow.question_index == 4
    flow.set_answer(5, "Great service")
    flow.request_submit()
    assert flow.confirm_pending is True
    flow.confirm_submit()

    assert len(submissions) == 1
    response = submissions[0]
    assert response.session_id == sid
    assert response.status == "COMPLETED"
    assert response.answers == {1: 4, 2: 9, 3: None, 4: None, 5: "Great service"}
    assert response.timestamp.tzinfo is not None
    assert flow.screen is Screen.THANK_YOU
    assert flow.countdown == 5


def test_submission_snapshot_is_detached(flow, submissions):
    _to_last_question(flow)
    flow.request_submit()
    flow.confirm_submit()
    flow.start_survey()
    flow.set_answer(1, 1)
    assert submissions[0].answers == {}


def test_countdown_returns_to_welcome(flow, scheduler):
    _to_last_question(flow)
    flow.request_submit()
    flow.confirm_submit()
    handle = scheduler.handles[0]

    for expected in (4, 3, 2, 1):
        handle.fire()
        assert flow.countdown == expected
        assert flow.screen is Screen.THANK_YOU

    handle.fire()
    assert flow.screen is Screen.WELCOME
    assert handle.cancelled is True
    assert flow.countdown is None

    # 해제 후 늦게 깨어난 틱은 무시
    handle.fire()
    assert isinstance(flow.state, WelcomeState)
    assert flow.tick_countdown() is False


def test_manual_ticks_drive_countdown(flow, scheduler):
    _to_last_question(flow)
    flow.request_submit()
    flow.confirm_submit()
    for _ in range(5):
        assert flow.tick_countdown() is True
    assert flow.screen is Screen.WELCOME
    assert scheduler.active == []


def test_start_survey_cancels_countdown(flow, scheduler):
    _to_last_question(flow)
    flow.request_submit()
    flow.confirm_submit()
    handle = scheduler.handles[0]

    flow.start_survey()
    assert handle.cancelled is True
    sid = flow.session_id

    handle.fire()
    assert flow.screen is Screen.SURVEY
    assert flow.session_id == sid


def test_second_submission_uses_fresh_timer(flow, scheduler):
    for _ in range(2):
        _to_last_question(flow)
        flow.request_submit()
        flow.confirm_submit()
    first, second = scheduler.handles
    assert first.cancelled is True
    assert second.cancelled is False

    first.fire()
    assert flow.countdown == 5
    second.fire()
    assert flow.countdown == 4


def test_sink_failure_does_not_block_transition(scheduler):
    def broken_sink(response):
        raise RuntimeError("sink down")

    flow = SurveyFlowController(sink=broken_sink, scheduler=scheduler)
    _to_last_question(flow)
    flow.request_submit()
    assert flow.confirm_submit() is True
    assert isinstance(flow.state, ThankYouState)


def test_close_releases_timer(flow, scheduler):
    _to_last_question(flow)
    flow.request_submit()
    flow.confirm_submit()
    flow.close()
    assert scheduler.active == []


def test_renderer_flags(flow):
    flow.start_survey()
    assert flow.can_go_back is False
    assert flow.can_skip is False  # 필수 문항
    flow.go_next()
    flow.go_next()
    assert flow.can_go_back is True
    assert flow.can_skip is True
    flow.go_next()
    flow.go_next()
    assert flow.is_last_question is True
    assert flow.can_skip is False  # 마지막 문항


def test_answered_count_excludes_skipped(flow):
    flow.start_survey()
    flow.set_answer(1, 5)
    flow.go_next()
    flow.go_next()
    flow.skip()
    assert flow.answered_count == 1


def test_custom_catalog_and_countdown(scheduler, submissions):
    catalog = [
        {"id": 10, "text": "Only question", "kind": "text", "required": False},
    ]
    flow = SurveyFlowController(
        catalog=catalog, sink=submissions.append, scheduler=scheduler, countdown_seconds=2
    )
    flow.start_survey()
    assert flow.is_last_question is True
    assert flow.go_next() is False
    flow.request_submit()
    flow.confirm_submit()
    assert flow.countdown == 2
    flow.tick_countdown()
    flow.tick_countdown()
    assert flow.screen is Screen.WELCOME


def test_state_snapshots_are_immutable(flow):
    flow.start_survey()
    snapshot = flow.state
    flow.go_next()
    assert isinstance(snapshot, SurveyState)
    assert snapshot.question_index == 0
    assert flow.question_index == 1


def test_snapshot_matches_properties(flow):
    snap = flow.snapshot()
    assert snap["screen"] == "welcome"
    assert snap["session_id"] is None
    assert snap["countdown"] is None

    flow.start_survey()
    flow.set_answer(1, 3)
    flow.go_next()
    snap = flow.snapshot()
    assert snap["screen"] == "survey"
    assert snap["session_id"] == flow.session_id
    assert snap["question_index"] == 1
    assert snap["current_question"] == SURVEY_QUESTIONS[1]
    assert snap["answers"] == {1: 3}
    assert snap["answered_count"] == 1
    assert snap["can_go_back"] is True
    assert snap["can_skip"] is False   # 2번 문항은 필수
    assert snap["is_last_question"] is False

    while flow.go_next():
        pass
    flow.request_submit()
    flow.confirm_submit()
    snap = flow.snapshot()
    assert snap["screen"] == "thankyou"
    assert snap["countdown"] == 5
    assert snap["question_index"] is None
    assert snap["current_question"] is None
    assert snap["answers"] == {}
    assert snap["confirm_pending"] is False


def test_snapshot_is_a_copy(flow):
    flow.start_survey()
    flow.set_answer(1, 2)
    flow.snapshot()["answers"][1] = 5
    assert flow.answers[1] == 2
