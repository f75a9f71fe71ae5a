from __future__ import annotations

from fastapi import FastAPI

from calculator.api.operations import router as operations_router
from calculator.config import Settings, get_settings
from calculator.observability.logging import LogSink, configure_logging
from calculator.observability.middleware import ResponseCaptureMiddleware
from calculator.services.dispatcher import OperationDispatcher


def create_app(settings: Settings | None = None, sink: LogSink | None = None) -> FastAPI:
    settings = settings or get_settings()
    if sink is None:
        configure_logging(settings.log_level, settings.log_path)
        sink = LogSink(service=settings.service_name)

    app = FastAPI(title="Calculator Microservice", version="0.1.0")
    app.state.sink = sink
    app.state.dispatcher = OperationDispatcher(sink)
    app.add_middleware(ResponseCaptureMiddleware, sink=sink)
    app.include_router(operations_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
