"""
main.py — 고객 만족도 설문 키오스크 진입점

로컬 uvicorn 서버를 백그라운드 스레드로 띄우고, 준비되면 브라우저를 앱 창으로 연다.
환경변수 PORT를 지정하면 그 포트를, 아니면 빈 포트를 사용한다.
"""

import os
import socket
import subprocess
import sys
import time
import threading
import logging
import traceback

# ── 패키지 경로 설정 (반드시 최상단) ──────────────────────────────────────────
_BASE_DIR = os.path.dirname(os.path.abspath(__file__))
if _BASE_DIR not in sys.path:
    sys.path.insert(0, _BASE_DIR)

from config import BASE_DIR, LOG_FILE, LOG_LEVEL, DEFAULT_HOST, DEFAULT_PORT, DEFAULT_TIMEOUT

logger = logging.getLogger("survey_kiosk")


class _NullStream:
    """windowed 실행 파일(콘솔 없음)에서 stdout/stderr 대용."""
    def write(self, data): pass
    def flush(self): pass
    def isatty(self): return False
    def close(self): pass


def _configure_logging() -> None:
    if sys.stdout is None: sys.stdout = _NullStream()
    if sys.stderr is None: sys.stderr = _NullStream()

    fmt = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
    try:
        logging.basicConfig(
            level=LOG_LEVEL,
            format=fmt,
            handlers=[
                logging.FileHandler(LOG_FILE, encoding='utf-8'),
                logging.StreamHandler(sys.stdout),
            ],
        )
    except PermissionError:
        # 로그 파일 점유 시 콘솔 출력만 사용
        logging.basicConfig(level=LOG_LEVEL, format=fmt)


# ── 서버 및 네트워크 유틸 ───────────────────────────────────────────────────

def _resolve_port() -> int:
    if DEFAULT_PORT:
        return DEFAULT_PORT
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind((DEFAULT_HOST, 0))
        return s.getsockname()[1]


def _server_ready(port: int, timeout: float = DEFAULT_TIMEOUT) -> bool:
    deadline = time.time() + timeout
    while time.time() < deadline:
        try:
            with socket.create_connection((DEFAULT_HOST, port), timeout=0.5):
                return True
        except OSError:
            time.sleep(0.1)
    return False


def _launch_browser(url: str) -> None:
    app_mode_browsers = [
        r"C:\Program Files\Google\Chrome\Application\chrome.exe",
        r"C:\Program Files (x86)\Google\Chrome\Application\chrome.exe",
        r"C:\Program Files\Microsoft\Edge\Application\msedge.exe",
        r"C:\Program Files (x86)\Microsoft\Edge\Application\msedge.exe",
    ]
    for path in app_mode_browsers:
        if os.path.exists(path):
            logger.info(f"앱 모드 브라우저 실행: {path}")
            subprocess.Popen([path, f"--app={url}", "--no-first-run", "--window-size=1024,768"])
            return

    import webbrowser
    webbrowser.open(url)


def _serve(port: int) -> None:
    try:
        import uvicorn
        from api.app import create_app
        logger.info(f"설문 서버 시작 - {DEFAULT_HOST}:{port}")
        uvicorn.run(create_app(), host=DEFAULT_HOST, port=port, log_level="error")
    except Exception:
        logger.error(f"서버 오류 발생:\n{traceback.format_exc()}")


def main() -> int:
    _configure_logging()
    logger.info("=== Feedback Survey Kiosk Started ===")
    os.chdir(BASE_DIR)

    port = _resolve_port()
    threading.Thread(target=_serve, args=(port,), daemon=True).start()

    if not _server_ready(port):
        logger.error("서버 시작 제한 시간을 초과했습니다. 포트를 점유한 기존 프로세스를 종료해 보세요.")
        return 1

    logger.info("서버 준비 완료. 설문 화면을 엽니다.")
    _launch_browser(f"http://{DEFAULT_HOST}:{port}")

    # 메인 스레드 유지
    try:
        while True:
            time.sleep(10)
    except KeyboardInterrupt:
        logger.info("사용자에 의해 종료되었습니다.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
