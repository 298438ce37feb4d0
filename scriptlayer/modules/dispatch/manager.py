"""
Facade manager - routes RPC calls of one session to facade instances.

The registry only knows facade types. A FacadeManager owns the instances for
one client session: it creates each facade the first time one of its methods
is called and shuts them all down when the session ends.
"""

import logging
import threading
from typing import Any, Dict, List, Optional, Type

from pydantic import ValidationError

from ..facades import PlatformContext
from ..registry import FacadeConfiguration
from ..rpc import InvalidRequestError, MethodNotFoundError, RpcError, RpcReceiver
from .models import RpcRequest, RpcResponse

logger = logging.getLogger("scriptlayer.dispatch")


class FacadeManager:
    """Per-session facade instances and call dispatch."""

    def __init__(
        self,
        configuration: FacadeConfiguration,
        context: Optional[PlatformContext] = None,
    ):
        """
        Initialize manager.

        Args:
            configuration: Registry to resolve method names against
            context: Platform backends handed to every facade
        """
        self.configuration = configuration.initialize()
        self.context = context if context is not None else PlatformContext()

        self._lock = threading.RLock()
        self._receivers: Dict[Type[RpcReceiver], RpcReceiver] = {}
        self._shut_down = False

    @property
    def receivers(self) -> List[RpcReceiver]:
        """Facade instances created so far."""
        with self._lock:
            return list(self._receivers.values())

    def get_receiver(self, receiver_type: Type[RpcReceiver]) -> RpcReceiver:
        """
        Get the session's instance of a facade, creating it on first use.

        Raises:
            KeyError: If the facade is not part of the registry
            RpcError: If the session has been shut down
        """
        if receiver_type not in self.configuration.provider_types():
            raise KeyError(f"{receiver_type.__name__} is not a registered facade")

        with self._lock:
            if self._shut_down:
                raise RpcError("Session has been shut down")

            receiver = self._receivers.get(receiver_type)
            if receiver is None:
                receiver = receiver_type(self.context)
                self._receivers[receiver_type] = receiver
                logger.debug(f"Created {receiver_type.__name__} for session")
            return receiver

    def invoke(self, method: str, params: Any = None) -> Any:
        """
        Call an RPC method.

        Args:
            method: RPC method name
            params: List (positional), dict (named) or None

        Returns:
            Whatever the facade method returns

        Raises:
            MethodNotFoundError: Unknown method name
            InvalidParamsError: Params do not match the descriptor
            RpcError: The facade could not be created or raised; the original error is chained
        """
        descriptor = self.configuration.lookup(method)
        if descriptor is None:
            raise MethodNotFoundError(method)

        args = descriptor.bind(params)

        try:
            receiver = self.get_receiver(descriptor.receiver)
            return getattr(receiver, descriptor.attribute_name)(*args)
        except RpcError:
            raise
        except Exception as e:
            logger.error(f"RPC {method} failed: {e}")
            raise RpcError(
                f"{type(e).__name__}: {e}",
                data={"method": method},
            ) from e

    def handle(self, request: Any) -> Dict[str, Any]:
        """
        Handle one decoded request object and build the response object.

        Never raises for bad input; failures become error responses.
        """
        request_id = request.get("id") if isinstance(request, dict) else None

        try:
            rpc_request = RpcRequest.model_validate(request)
        except ValidationError as e:
            logger.warning(f"Invalid RPC request: {e.error_count()} validation errors")
            problems = [
                f"{'.'.join(str(part) for part in err['loc']) or 'request'}: {err['msg']}"
                for err in e.errors()
            ]
            error = InvalidRequestError("Invalid request", data={"errors": problems})
            if not isinstance(request_id, (int, str)) or isinstance(request_id, bool):
                request_id = None
            return RpcResponse.failure(request_id, error).to_dict()

        try:
            result = self.invoke(rpc_request.method, rpc_request.params)
        except RpcError as e:
            return RpcResponse.failure(rpc_request.id, e).to_dict()

        return RpcResponse.success(rpc_request.id, result).to_dict()

    def shutdown(self) -> None:
        """Shut down every facade created by this session."""
        with self._lock:
            if self._shut_down:
                return
            self._shut_down = True
            receivers = list(self._receivers.values())
            self._receivers.clear()

        for receiver in receivers:
            try:
                receiver.shutdown()
            except Exception as e:
                logger.error(f"Failed to shut down {type(receiver).__name__}: {e}")

        logger.info(f"Session shut down ({len(receivers)} facades)")

    def __enter__(self) -> "FacadeManager":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()
