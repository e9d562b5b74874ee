"""JSON-RPC 1.0/2.0 wire protocol: envelopes, request building, response checks."""

from simple_jsonrpc.protocol.builder import BuiltRequest, IdCounter, RequestBuilder
from simple_jsonrpc.protocol.envelope import (
    SUPPORTED_VERSIONS,
    VERSION_1,
    VERSION_2,
    RequestEnvelope,
    ResponseEnvelope,
    V1Request,
    V1Response,
    V2Request,
    V2Response,
    decode_body,
    encode,
    validate_version,
)
from simple_jsonrpc.protocol.interpreter import InterpretedResponse, ResponseInterpreter
from simple_jsonrpc.protocol.transport import HttpTransport, Transport, TransportResult

__all__ = [
    "BuiltRequest",
    "HttpTransport",
    "IdCounter",
    "InterpretedResponse",
    "RequestBuilder",
    "RequestEnvelope",
    "ResponseEnvelope",
    "ResponseInterpreter",
    "SUPPORTED_VERSIONS",
    "Transport",
    "TransportResult",
    "V1Request",
    "V1Response",
    "V2Request",
    "V2Response",
    "VERSION_1",
    "VERSION_2",
    "decode_body",
    "encode",
    "validate_version",
]
