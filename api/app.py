"""
api/app.py — FastAPI 앱 인스턴스 + 설문 컨트롤러 + static 파일 서빙
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.responses import FileResponse

from config import STATIC_DIR
from api.routes import router
from feedback_survey.services.survey_flow import SurveyFlowController

logger = logging.getLogger(__name__)


def create_app(controller: Optional[SurveyFlowController] = None) -> FastAPI:
    # 단일 사용자 키오스크: 프로세스당 컨트롤러 하나
    flow = controller or SurveyFlowController()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        # 종료 시 감사 화면 카운트다운 타이머 정리
        flow.close()
        logger.info("설문 컨트롤러 종료")

    app = FastAPI(title="Feedback Survey", docs_url=None, redoc_url=None, lifespan=lifespan)
    app.state.controller = flow

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    # static 파일 마운트
    if os.path.isdir(STATIC_DIR):
        app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    # 루트 → index.html
    @app.get("/")
    async def serve_index():
        index_path = os.path.join(STATIC_DIR, "index.html")
        if os.path.exists(index_path):
            return FileResponse(index_path)
        return {"error": "index.html not found"}

    return app
