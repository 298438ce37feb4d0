"""
RPC Module - Black Box Interface

Purpose: Describe invokable facade operations
Interface: MethodDescriptor, RpcParameter, RpcReceiver, @rpc, RPC errors
Hidden: Declaration storage, parameter binding rules

Facades register themselves by describing their own methods; the registry
depends on nothing but RpcReceiver.rpc_descriptors().
"""

from .descriptor import MethodDescriptor, RpcParameter, RpcReceiver, rpc
from .errors import (
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    SERVER_ERROR,
    DuplicateRpcError,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    RpcError,
)

__all__ = [
    "MethodDescriptor",
    "RpcParameter",
    "RpcReceiver",
    "rpc",
    "INVALID_PARAMS",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "SERVER_ERROR",
    "DuplicateRpcError",
    "InvalidParamsError",
    "InvalidRequestError",
    "MethodNotFoundError",
    "RpcError",
]
