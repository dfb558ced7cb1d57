"""JSON-RPC 2.0 client machinery for the Divi daemon.

Layers, leaves first:

    catalogue   declarative method table, parsed once at import
    protocol    request building and response classification
    transport   one authenticated HTTP POST per exchange
    dispatcher  build -> send -> classify, reported as an Outcome
    batch       collect several calls into one exchange
"""

from divirpc.rpc.batch import BatchCollector, BatchContext
from divirpc.rpc.catalogue import (
    CALLSPEC,
    CATALOGUE,
    MethodDescriptor,
    ParamKind,
    ParamSlot,
    bind_catalogue,
    get_descriptor,
    parse_signature,
)
from divirpc.rpc.dispatcher import Dispatcher
from divirpc.rpc.protocol import (
    WORK_QUEUE_EXCEEDED,
    build_request,
    classify_response,
    new_request_id,
    parse_batch_response,
    parse_response,
    serialize_request,
)
from divirpc.rpc.transport import HttpTransport, basic_auth_header
from divirpc.rpc.types import Outcome, RawResponse, Request, Response

__all__ = [
    # Types
    "Request",
    "Response",
    "RawResponse",
    "Outcome",
    # Catalogue
    "CALLSPEC",
    "CATALOGUE",
    "MethodDescriptor",
    "ParamKind",
    "ParamSlot",
    "bind_catalogue",
    "get_descriptor",
    "parse_signature",
    # Protocol
    "WORK_QUEUE_EXCEEDED",
    "build_request",
    "classify_response",
    "new_request_id",
    "parse_batch_response",
    "parse_response",
    "serialize_request",
    # Transport / dispatch
    "HttpTransport",
    "basic_auth_header",
    "Dispatcher",
    # Batching
    "BatchCollector",
    "BatchContext",
]
