from __future__ import annotations

from collections.abc import AsyncIterator, Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from calculator.main import create_app
from calculator.observability.logging import LEVELS, LogSink


@dataclass
class Record:
    level: str
    message: str
    metadata: dict[str, Any] = field(default_factory=dict)


class RecordingSink(LogSink):
    """Keeps records in memory instead of handing them to structlog."""

    def __init__(self) -> None:
        super().__init__(service="calculator_microservice")
        self.records: list[Record] = []

    def write(self, level: str, message: str, metadata: Mapping[str, Any] | None = None) -> None:
        if level not in LEVELS:
            raise ValueError(f"Unknown log level: {level!r}")
        self.records.append(Record(level, message, dict(metadata or {})))

    def messages(self) -> list[str]:
        return [record.message for record in self.records]

    def matching(self, prefix: str) -> list[Record]:
        return [record for record in self.records if record.message.startswith(prefix)]


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def app(sink: RecordingSink) -> FastAPI:
    return create_app(sink=sink)


@pytest.fixture
async def api_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
