"""JSON-RPC 2.0 request building and response classification."""

import json
import logging
import random
from collections.abc import Container, Sequence
from typing import Any

from divirpc.core.errors import (
    ApplicationError,
    ArityError,
    AuthError,
    OverloadError,
    ProtocolError,
)
from divirpc.rpc.catalogue import MethodDescriptor
from divirpc.rpc.types import Outcome, Request, Response

logger = logging.getLogger(__name__)

# Exact body the daemon sends with HTTP 500 when its RPC work queue is full
WORK_QUEUE_EXCEEDED = "Work queue depth exceeded"

MAX_REQUEST_ID = 100000


def new_request_id(taken: Container[int] = ()) -> int:
    """Return a random correlation id not present in ``taken``.

    Ids only need to be unique within one exchange, so a small random range
    is enough.
    """
    while True:
        request_id = random.randrange(MAX_REQUEST_ID)
        if request_id not in taken:
            return request_id


def build_request(
    descriptor: MethodDescriptor,
    args: Sequence[Any],
    *,
    request_id: int | None = None,
) -> Request:
    """Build a request for a catalogue method.

    Only the first ``descriptor.arity`` arguments become params. Anything
    after them is the caller's completion handler and is not sent. A callable
    is never a parameter, so one inside the declared slots ends the count.

    Args:
        descriptor: The catalogue entry being called.
        args: Positional arguments as supplied by the caller.
        request_id: Correlation id to use. A random one is drawn if None.

    Returns:
        The Request, ready for serialization.

    Raises:
        ArityError: If fewer arguments than the declared arity were supplied.
    """
    params = list(args[: descriptor.arity])
    received = next((i for i, arg in enumerate(params) if callable(arg)), len(params))
    if received < descriptor.arity:
        raise ArityError(descriptor.name, descriptor.arity, received)

    return Request(
        method=descriptor.name,
        params=params,
        id=new_request_id() if request_id is None else request_id,
    )


def _request_to_dict(request: Request) -> dict[str, Any]:
    return {
        "jsonrpc": request.jsonrpc,
        "method": request.method,
        "params": request.params,
        "id": request.id,
    }


def serialize_request(request: Request | Sequence[Request]) -> str:
    """Serialize one request, or a batch as a JSON array.

    Returns:
        Compact JSON text.
    """
    if isinstance(request, Request):
        data: Any = _request_to_dict(request)
    else:
        data = [_request_to_dict(r) for r in request]
    return json.dumps(data, separators=(",", ":"))


def classify_response(status_code: int, reason: str, body: str) -> Outcome:
    """Decide what an HTTP reply from the daemon means.

    Checks run in order:
        1. 401/403 -> AuthError
        2. 500 with the work-queue body -> OverloadError
        3. body is not JSON -> ProtocolError (raw body logged)
        4. object with a non-empty "error" member -> ApplicationError
        5. anything else -> success with the parsed value unchanged

    Auth and overload come first because the daemon answers those with
    plain-text bodies.

    Args:
        status_code: HTTP status code.
        reason: HTTP reason phrase.
        body: Full response body.

    Returns:
        Outcome holding the parsed JSON value or the classified error.
    """
    if status_code in (401, 403):
        return Outcome.failure(AuthError(status_code, reason))

    if status_code == 500 and body == WORK_QUEUE_EXCEEDED:
        return Outcome.failure(OverloadError(body))

    try:
        parsed = json.loads(body)
    except json.JSONDecodeError as e:
        logger.error("Failed to parse daemon response", exc_info=True)
        logger.error("%s", body)
        logger.error("HTTP Status code: %d", status_code)
        return Outcome.failure(ProtocolError(str(e), body, status_code))

    if isinstance(parsed, dict) and parsed.get("error"):
        return Outcome.failure(ApplicationError.from_error(parsed["error"]))

    return Outcome.success(parsed)


def parse_response(data: Any, *, status_code: int = 200) -> Response:
    """Turn a classified single-call value into a Response.

    Raises:
        ProtocolError: If the value is not a JSON object.
    """
    if not isinstance(data, dict):
        raise ProtocolError(
            f"Response must be a JSON object, got {type(data).__name__}",
            json.dumps(data),
            status_code,
        )
    return Response(id=data.get("id"), result=data.get("result"), error=data.get("error"))


def parse_batch_response(
    data: Any,
    requests: Sequence[Request],
    *,
    status_code: int = 200,
) -> list[Response]:
    """Turn a classified batch value into Responses in submission order.

    When every request id appears exactly once in the reply, responses are
    matched to requests by id. Otherwise (including replies whose ids are
    not plain numbers or strings) the daemon's order is kept.

    Raises:
        ProtocolError: If the value is not an array of objects.
    """
    if not isinstance(data, list):
        raise ProtocolError(
            f"Batch response must be a JSON array, got {type(data).__name__}",
            json.dumps(data),
            status_code,
        )
    responses = [parse_response(item, status_code=status_code) for item in data]

    if all(isinstance(response.id, int | str) for response in responses):
        by_id = {response.id: response for response in responses}
        if len(by_id) == len(responses) == len(requests) and all(
            r.id in by_id for r in requests
        ):
            return [by_id[r.id] for r in requests]
    else:
        logger.debug("Batch reply carries non-scalar ids; keeping reply order")

    if len(responses) != len(requests):
        logger.warning(
            "Batch reply has %d responses for %d requests", len(responses), len(requests)
        )
    return responses
