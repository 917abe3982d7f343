from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from skillquiz.api.routes.health import router as health_router
from skillquiz.api.routes.quiz import router as quiz_router
from skillquiz.core.config import Settings, get_settings
from skillquiz.core.logging import configure_logging
from skillquiz.questions.pipeline import QuestionSourcingPipeline, build_question_pipeline
from skillquiz.workers.cache_eviction import start_cache_eviction


def create_app(
    settings: Settings | None = None,
    *,
    pipeline: QuestionSourcingPipeline | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level, json_logs=settings.app_env != "dev")

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        task, stop_event = start_cache_eviction(
            app.state.question_pipeline,
            interval_seconds=settings.question_cache_eviction_interval_seconds,
        )
        try:
            yield
        finally:
            stop_event.set()
            await task

    app = FastAPI(
        title="SkillQuiz Question API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.question_pipeline = pipeline or build_question_pipeline(settings)
    app.include_router(health_router)
    app.include_router(quiz_router)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "skillquiz.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_env == "dev",
    )


if __name__ == "__main__":
    run()
