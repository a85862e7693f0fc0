"""
services/countdown.py

감사 화면 카운트다운용 주기 실행기.
타이머 핸들은 cancel() 한 번으로 멈추며, 취소 여부 확인은 컨트롤러 쪽 토큰
검사와 함께 동작한다 (취소 직전에 이미 깨어난 틱은 컨트롤러가 버린다).
"""

import logging
import threading
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class CountdownHandle(Protocol):
    def cancel(self) -> None: ...


class CountdownScheduler(Protocol):
    def every(self, interval: float, callback: Callable[[], None]) -> CountdownHandle: ...


class RepeatingTimer(threading.Thread):
    """interval초마다 callback을 호출하는 데몬 스레드. cancel() 전까지 반복."""

    def __init__(self, interval: float, callback: Callable[[], None]):
        super().__init__(daemon=True, name="survey-countdown")
        self.interval = interval
        self.callback = callback
        self._stopped = threading.Event()

    def run(self) -> None:
        while not self._stopped.wait(self.interval):
            try:
                self.callback()
            except Exception:
                logger.exception("카운트다운 콜백 실행 중 오류 발생")

    def cancel(self) -> None:
        # join 하지 않음: 콜백 안에서(같은 스레드) 취소하는 경우가 있다
        self._stopped.set()

    @property
    def cancelled(self) -> bool:
        return self._stopped.is_set()


class ThreadCountdownScheduler:
    """RepeatingTimer를 만들어 바로 시작한다."""

    def every(self, interval: float, callback: Callable[[], None]) -> RepeatingTimer:
        timer = RepeatingTimer(interval, callback)
        timer.start()
        return timer
