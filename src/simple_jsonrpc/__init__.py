"""simple-jsonrpc - JSON-RPC 1.0 and 2.0 over HTTP.

Exports:
  - JsonRpcClient   - calls remote methods, tracks request ids
  - Dispatcher      - serves calls against a handler registry
  - HandlerRegistry - method name -> callable mapping
  - JsonRpcWsgiApp  - WSGI wrapper around a Dispatcher
"""

from simple_jsonrpc.client import JsonRpcClient
from simple_jsonrpc.config import RpcConfig, load_config
from simple_jsonrpc.errors import (
    ConfigLoadError,
    ConfigurationError,
    EmptyResponse,
    IdMismatch,
    InvalidParams,
    JsonRpcError,
    RemoteError,
    TransportFailure,
)
from simple_jsonrpc.registry import HandlerRegistry
from simple_jsonrpc.server import DispatchResult, Dispatcher, IncomingRequest, handle
from simple_jsonrpc.wsgi import JsonRpcWsgiApp

__version__ = "1.0.0"
__all__ = [
    "ConfigLoadError",
    "ConfigurationError",
    "DispatchResult",
    "Dispatcher",
    "EmptyResponse",
    "HandlerRegistry",
    "IdMismatch",
    "IncomingRequest",
    "InvalidParams",
    "JsonRpcClient",
    "JsonRpcError",
    "JsonRpcWsgiApp",
    "RemoteError",
    "RpcConfig",
    "TransportFailure",
    "handle",
    "load_config",
]
