"""
Method descriptors and the receiver contract.

A facade describes its own operations. Methods are marked with ``@rpc`` and
every parameter is declared explicitly, so the registry never has to guess a
signature:

    class ContactsFacade(RpcReceiver):
        @rpc(
            "Returns contact attributes specified by Id.",
            params=[
                RpcParameter("id", int, "contact ID"),
                RpcParameter("attributes", list, optional=True),
            ],
        )
        def contactsGetById(self, id, attributes=None):
            ...

``RpcReceiver.rpc_descriptors()`` turns those declarations into immutable
``MethodDescriptor`` values. Providers that build their descriptors some
other way only have to override that classmethod.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from .errors import InvalidParamsError

_RPC_INFO_ATTR = "__rpc_info__"


@dataclass(frozen=True)
class RpcParameter:
    """One declared parameter of an RPC method."""

    name: str
    type: Optional[type] = None
    description: str = ""
    optional: bool = False
    default: Any = None

    def __post_init__(self):
        if not self.name:
            raise ValueError("RPC parameter name must not be empty")
        # A default value implies the parameter may be omitted
        if self.default is not None and not self.optional:
            object.__setattr__(self, "optional", True)

    @property
    def type_name(self) -> str:
        return self.type.__name__ if self.type is not None else "Any"

    def accepts(self, value: Any) -> bool:
        """Check a JSON-decoded value against the declared type."""
        if value is None or self.type is None:
            return True
        if isinstance(value, bool) and self.type is not bool:
            return False
        if self.type is float and isinstance(value, int):
            return True
        return isinstance(value, self.type)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type_name,
            "description": self.description,
            "optional": self.optional,
            "default": self.default,
        }


@dataclass(frozen=True)
class MethodDescriptor:
    """
    Describes one invokable operation of a facade.

    Immutable once constructed. ``attribute`` names the Python method that
    implements the operation when it differs from the RPC name.
    """

    name: str
    receiver: type
    description: str = ""
    parameters: Tuple[RpcParameter, ...] = field(default_factory=tuple)
    returns: Optional[str] = None
    attribute: Optional[str] = None

    def __post_init__(self):
        if not self.name:
            raise ValueError("RPC name must not be empty")
        object.__setattr__(self, "parameters", tuple(self.parameters))

        seen = set()
        for param in self.parameters:
            if param.name in seen:
                raise ValueError(f"RPC {self.name} declares parameter {param.name} twice")
            seen.add(param.name)

    @property
    def attribute_name(self) -> str:
        return self.attribute or self.name

    @property
    def receiver_name(self) -> str:
        return self.receiver.__name__

    def help(self) -> str:
        """Render a one-line signature followed by the description."""
        params = []
        for param in self.parameters:
            text = f"{param.type_name} {param.name}"
            if param.optional:
                if param.default is not None:
                    text += f"[optional, default {param.default}]"
                else:
                    text += "[optional]"
            if param.description:
                text += f": {param.description}"
            params.append(text)

        result = f"{self.name}({', '.join(params)})"
        if self.description:
            result += f"\n\n{self.description}"
        if self.returns:
            result += f"\n\nReturns:\n  {self.returns}"
        return result

    def bind(self, params: Any) -> List[Any]:
        """
        Bind JSON-RPC params to positional call arguments.

        Args:
            params: None, a list (positional) or a dict (named)

        Returns:
            Argument list in declaration order, with defaults filled in

        Raises:
            InvalidParamsError: On too many, unknown, missing or mistyped params
        """
        if params is None:
            params = []

        if isinstance(params, Mapping):
            unknown = sorted(set(params) - {p.name for p in self.parameters})
            if unknown:
                raise InvalidParamsError(
                    f"{self.name} got unexpected parameters: {', '.join(unknown)}",
                    data={"method": self.name, "unexpected": unknown},
                )
            supplied = {p.name: params[p.name] for p in self.parameters if p.name in params}
        elif isinstance(params, (list, tuple)):
            if len(params) > len(self.parameters):
                raise InvalidParamsError(
                    f"{self.name} takes {len(self.parameters)} parameters "
                    f"but {len(params)} were given",
                    data={"method": self.name},
                )
            supplied = {p.name: value for p, value in zip(self.parameters, params)}
        else:
            raise InvalidParamsError(
                f"Parameters for {self.name} must be a list or an object",
                data={"method": self.name},
            )

        args = []
        for param in self.parameters:
            value = supplied.get(param.name)
            if value is None:
                if not param.optional:
                    raise InvalidParamsError(
                        f"{self.name} requires parameter {param.name}",
                        data={"method": self.name, "missing": param.name},
                    )
                value = param.default
            elif not param.accepts(value):
                raise InvalidParamsError(
                    f"Parameter {param.name} of {self.name} must be {param.type_name}",
                    data={"method": self.name, "parameter": param.name},
                )
            args.append(value)
        return args

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for introspection output."""
        return {
            "name": self.name,
            "receiver": self.receiver_name,
            "description": self.description,
            "parameters": [p.to_dict() for p in self.parameters],
            "returns": self.returns,
        }


def rpc(
    description: str,
    returns: Optional[str] = None,
    params: Sequence[RpcParameter] = (),
    name: Optional[str] = None,
) -> Callable:
    """Mark a facade method as an RPC and declare its parameters."""

    def decorator(func: Callable) -> Callable:
        setattr(
            func,
            _RPC_INFO_ATTR,
            {
                "name": name or func.__name__,
                "description": description,
                "returns": returns,
                "parameters": tuple(params),
            },
        )
        return func

    return decorator


class RpcReceiver:
    """
    Base class for facades.

    Subclasses receive the session's platform context on construction and
    must release any platform resource before each operation returns.
    """

    def __init__(self, context: Any = None):
        self.context = context

    @classmethod
    def rpc_descriptors(cls) -> List[MethodDescriptor]:
        """Return descriptors for every method declared with ``@rpc``."""
        infos: Dict[str, Dict[str, Any]] = {}
        for klass in reversed(cls.__mro__):
            for attribute, value in vars(klass).items():
                info = getattr(value, _RPC_INFO_ATTR, None)
                if info is not None:
                    infos[attribute] = info
                else:
                    # An undecorated override hides the inherited RPC
                    infos.pop(attribute, None)

        return [
            MethodDescriptor(
                name=info["name"],
                receiver=cls,
                description=info["description"],
                parameters=info["parameters"],
                returns=info["returns"],
                attribute=attribute,
            )
            for attribute, info in sorted(infos.items())
        ]

    def shutdown(self) -> None:
        """Release session resources. Called once when the session ends."""
