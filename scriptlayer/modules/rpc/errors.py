"""
RPC error types shared by the registry and the dispatcher.

Codes follow JSON-RPC 2.0 so a server can copy them onto the wire.
"""

from typing import Any, Dict, Optional

INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
SERVER_ERROR = -32000


class RpcError(RuntimeError):
    """Error carrying a JSON-RPC code, message and optional data."""

    code = SERVER_ERROR

    def __init__(self, message: str, data: Any = None, code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.data = data
        if code is not None:
            self.code = code

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-RPC error object."""
        error: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            error["data"] = self.data
        return error


class InvalidRequestError(RpcError):
    code = INVALID_REQUEST


class MethodNotFoundError(RpcError):
    code = METHOD_NOT_FOUND

    def __init__(self, method: str):
        super().__init__(f"Unknown RPC: {method}", data={"method": method})
        self.method = method


class InvalidParamsError(RpcError):
    code = INVALID_PARAMS


class DuplicateRpcError(RpcError):
    """Two facades expose the same method name under the REJECT policy."""

    def __init__(self, name: str, first: type, second: type):
        super().__init__(
            f"RPC {name} is exposed by both {first.__name__} and {second.__name__}",
            data={"method": name, "receivers": [first.__name__, second.__name__]},
        )
        self.name = name
        self.first = first
        self.second = second
