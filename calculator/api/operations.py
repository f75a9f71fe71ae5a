from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from calculator.services.dispatcher import OperationDispatcher


router = APIRouter(tags=["operations"])


class EnvelopeResponse(JSONResponse):
    """JSON response that writes NaN and infinite results as ``NaN``/``Infinity``."""

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=True,
            indent=None,
            separators=(",", ":"),
        ).encode("utf-8")


def get_dispatcher(request: Request) -> OperationDispatcher:
    return request.app.state.dispatcher


def _perform(request: Request, dispatcher: OperationDispatcher, operation_name: str) -> EnvelopeResponse:
    status_code, envelope = dispatcher.handle(
        operation_name,
        dict(request.query_params),
        route=request.url.path,
    )
    return EnvelopeResponse(status_code=status_code, content=envelope.model_dump())


@router.get("/add", response_class=EnvelopeResponse)
async def add(request: Request, dispatcher: OperationDispatcher = Depends(get_dispatcher)) -> EnvelopeResponse:
    return _perform(request, dispatcher, "add")


@router.get("/subtract", response_class=EnvelopeResponse)
async def subtract(request: Request, dispatcher: OperationDispatcher = Depends(get_dispatcher)) -> EnvelopeResponse:
    return _perform(request, dispatcher, "subtract")


@router.get("/multiply", response_class=EnvelopeResponse)
async def multiply(request: Request, dispatcher: OperationDispatcher = Depends(get_dispatcher)) -> EnvelopeResponse:
    return _perform(request, dispatcher, "multiply")


@router.get("/divide", response_class=EnvelopeResponse)
async def divide(request: Request, dispatcher: OperationDispatcher = Depends(get_dispatcher)) -> EnvelopeResponse:
    return _perform(request, dispatcher, "divide")


@router.get("/exponentiate", response_class=EnvelopeResponse)
async def exponentiate(request: Request, dispatcher: OperationDispatcher = Depends(get_dispatcher)) -> EnvelopeResponse:
    return _perform(request, dispatcher, "exponentiate")


@router.get("/squareRoot", response_class=EnvelopeResponse)
async def square_root(request: Request, dispatcher: OperationDispatcher = Depends(get_dispatcher)) -> EnvelopeResponse:
    return _perform(request, dispatcher, "squareRoot")


@router.get("/modulo", response_class=EnvelopeResponse)
async def modulo(request: Request, dispatcher: OperationDispatcher = Depends(get_dispatcher)) -> EnvelopeResponse:
    return _perform(request, dispatcher, "modulo")
