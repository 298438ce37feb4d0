"""
Request and response shapes for RPC dispatch.

These mirror JSON-RPC objects; reading and writing them on a socket is the
server's job.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from ..rpc import RpcError


class RpcRequest(BaseModel):
    """A single RPC call."""

    id: Optional[Union[int, str]] = Field(None, description="Caller-chosen request id")
    method: str = Field(..., description="RPC method name", min_length=1)
    params: Optional[Union[List[Any], Dict[str, Any]]] = Field(
        None, description="Positional (list) or named (object) parameters"
    )


class RpcErrorBody(BaseModel):
    """Error object of a failed call."""

    code: int
    message: str
    data: Optional[Any] = None


class RpcResponse(BaseModel):
    """Outcome of a call: exactly one of result or error is meaningful."""

    id: Optional[Union[int, str]] = None
    result: Optional[Any] = None
    error: Optional[RpcErrorBody] = None

    @classmethod
    def success(cls, request_id: Optional[Union[int, str]], result: Any) -> "RpcResponse":
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: Optional[Union[int, str]], error: RpcError) -> "RpcResponse":
        return cls(id=request_id, error=RpcErrorBody(**error.to_dict()))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = self.model_dump()
        if data["error"] is not None and data["error"]["data"] is None:
            del data["error"]["data"]
        return data
