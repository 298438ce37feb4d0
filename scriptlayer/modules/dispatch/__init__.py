"""
Dispatch Module - Black Box Interface

Purpose: Route RPC calls of a session to facade instances
Interface: FacadeManager.invoke(), FacadeManager.handle(), FacadeManager.shutdown()
Hidden: Lazy facade construction, parameter binding, error mapping

Transport (sockets, framing) belongs to the server embedding this module.
"""

from .manager import FacadeManager
from .models import RpcErrorBody, RpcRequest, RpcResponse

__all__ = ["FacadeManager", "RpcErrorBody", "RpcRequest", "RpcResponse"]
