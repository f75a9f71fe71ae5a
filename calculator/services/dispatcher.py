from __future__ import annotations

import math
from collections.abc import Mapping

from calculator.models.schemas import Envelope, ErrorEnvelope, SuccessEnvelope, as_whole_number
from calculator.observability.logging import LogSink
from calculator.services.operands import parse_operand
from calculator.services.operations import ErrorKind, Failure, Operation, Outcome, get_operation


# Sent without the "Error: " prefix earlier clients of this service received.
INVALID_OPERANDS_MESSAGE = "One or both numbers are incorrectly defined"
INVALID_OPERAND_MESSAGE = "The number is incorrectly defined"


def _first_present(query: Mapping[str, str], *keys: str) -> str | None:
    for key in keys:
        value = query.get(key)
        if value:
            return value
    return None


def extract_operands(operation: Operation, query: Mapping[str, str]) -> list[str | None]:
    """Pick the raw operand strings for ``operation`` out of the query map.

    Two-operand operations accept ``base``/``exponent`` as aliases for
    ``num1``/``num2`` (the alias wins when both are given); square root reads
    ``number``.
    """

    if operation.arity == 1:
        return [query.get("number")]
    return [
        _first_present(query, "base", "num1"),
        _first_present(query, "exponent", "num2"),
    ]


def format_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return str(as_whole_number(value))


class OperationDispatcher:
    """Validates query operands, runs one operation and shapes the envelope.

    Every failure, bad input or domain error alike, is answered with HTTP 500
    and a message string; nothing escapes ``handle`` as an exception.
    """

    def __init__(self, sink: LogSink) -> None:
        self.sink = sink

    def handle(
        self,
        operation_name: str,
        raw_query: Mapping[str, str],
        route: str | None = None,
    ) -> tuple[int, Envelope]:
        operation = get_operation(operation_name)
        raw_operands = extract_operands(operation, raw_query)

        if operation.arity == 1:
            self.sink.info(
                f"New {operation.label} operation requested: {operation.label} of {raw_operands[0]}"
            )
        else:
            self.sink.info(
                f"New {operation.label} operation requested: "
                f"{raw_operands[0]} {operation.label} {raw_operands[1]}"
            )
        self.sink.info(
            "Handling request",
            route=route or f"/{operation.name}",
            query=dict(raw_query),
        )

        operands = [parse_operand(raw) for raw in raw_operands]
        if any(value is None for value in operands):
            message = INVALID_OPERAND_MESSAGE if operation.arity == 1 else INVALID_OPERANDS_MESSAGE
            outcome: Outcome = Failure(ErrorKind.INVALID_INPUT, message)
        else:
            outcome = operation.evaluate(*operands)

        if isinstance(outcome, Failure):
            self.sink.error(outcome.message, kind=outcome.kind.value, operation=operation.name)
            return 500, ErrorEnvelope(statuscode=500, msg=outcome.message)

        shown = [format_number(value) for value in operands]
        if operation.arity == 1:
            expression = f"{operation.label} of {shown[0]}"
        else:
            expression = f"{shown[0]} {operation.label} {shown[1]}"
        self.sink.info(
            f"Operation successful: {expression} = {format_number(outcome)}",
            operation=operation.name,
            operands=operands,
            result=outcome,
        )
        return 200, SuccessEnvelope(statuscode=200, data=outcome)
