import pytest

from feedback_survey.services.survey_flow import SurveyFlowController


class _ManualHandle:
    def __init__(self, interval, callback):
        self.interval = interval
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True

    def fire(self):
        # 실제 타이머처럼 취소 후에도 한 번 더 깨어날 수 있다고 가정
        self.callback()


class ManualScheduler:
    """테스트용 스케줄러. 스레드 없이 fire()로 틱을 직접 발생시킨다."""

    def __init__(self):
        self.handles = []

    def every(self, interval, callback):
        handle = _ManualHandle(interval, callback)
        self.handles.append(handle)
        return handle

    @property
    def active(self):
        return [h for h in self.handles if not h.cancelled]


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def submissions():
    return []


@pytest.fixture
def flow(scheduler, submissions):
    controller = SurveyFlowController(sink=submissions.append, scheduler=scheduler)
    yield controller
    controller.close()
