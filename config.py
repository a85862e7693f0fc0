import os
import sys

# 기본 디렉토리 설정 (PyInstaller 패키징 시 _MEIPASS 사용)
IF_FROZEN = getattr(sys, "frozen", False)
BASE_DIR = sys._MEIPASS if IF_FROZEN else os.path.dirname(os.path.abspath(__file__))

# 경로 설정
STATIC_DIR = os.path.join(BASE_DIR, "static")
LOG_FILE = os.getenv("SURVEY_LOG_FILE", os.path.join(BASE_DIR, "launch.log"))

# 서버 설정
DEFAULT_HOST = os.getenv("HOST", "127.0.0.1")
DEFAULT_PORT = int(os.getenv("PORT", "0"))   # 0이면 빈 포트 자동 선택
DEFAULT_TIMEOUT = 15.0

# 로깅 설정
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# 설문 흐름 설정
THANK_YOU_COUNTDOWN_SECONDS = int(os.getenv("THANK_YOU_COUNTDOWN_SECONDS", "5"))   # 감사 화면 → 시작 화면 복귀까지
COUNTDOWN_INTERVAL_SECONDS = float(os.getenv("COUNTDOWN_INTERVAL_SECONDS", "1.0"))  # 카운트다운 틱 간격
