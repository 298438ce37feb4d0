"""
Method registry - the list of supported facades and their RPC table.

FacadeConfiguration decides which facades a platform gets, asks each one for
its method descriptors and flattens them into a single name-sorted table.

Design Principles:
- Built once: the first initialize() builds under a lock, later calls are no-ops
- Read-only afterwards: readers never see a partially built table
- Deterministic: facades are processed in rule order, so the owner of a
  colliding method name does not depend on set iteration order
- Never fatal for bad input: an unusable version or a failing facade makes
  the table smaller, not the process crash
"""

import logging
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Tuple, Type

from ...config import CollisionPolicy, EnvConfigProvider, RegistryConfig
from ..facades import (
    BluetoothFacade,
    ContactsFacade,
    EventFacade,
    EyesFreeFacade,
    SignalStrengthFacade,
    TextToSpeechFacade,
)
from ..rpc import DuplicateRpcError, MethodDescriptor, RpcReceiver

logger = logging.getLogger("scriptlayer.registry")


@dataclass(frozen=True)
class FacadeRule:
    """
    Inclusion rule for one candidate facade.

    The facade is included when ``min_version <= platform_version`` and
    ``platform_version < max_version``; an unset bound always passes.
    """

    receiver: Type[RpcReceiver]
    min_version: Optional[int] = None
    max_version: Optional[int] = None

    def applies_to(self, platform_version: int) -> bool:
        if self.min_version is not None and platform_version < self.min_version:
            return False
        if self.max_version is not None and platform_version >= self.max_version:
            return False
        return True


# Candidate facades in processing order. Later entries win name collisions.
DEFAULT_RULES: Tuple[FacadeRule, ...] = (
    FacadeRule(ContactsFacade),
    FacadeRule(EventFacade),
    FacadeRule(TextToSpeechFacade, min_version=4),
    FacadeRule(EyesFreeFacade, max_version=4),
    FacadeRule(BluetoothFacade, min_version=5),
    FacadeRule(SignalStrengthFacade, min_version=7),
)


def select_receivers(
    rules: Iterable[FacadeRule], platform_version: int
) -> Tuple[Type[RpcReceiver], ...]:
    """Return the facades included for a platform version, in rule order."""
    selected: List[Type[RpcReceiver]] = []
    for rule in rules:
        if rule.applies_to(platform_version) and rule.receiver not in selected:
            selected.append(rule.receiver)
    return tuple(selected)


class FacadeConfiguration:
    """Encapsulates the list of supported facades and their RPC table."""

    def __init__(
        self,
        config: Optional[RegistryConfig] = None,
        rules: Sequence[FacadeRule] = DEFAULT_RULES,
    ):
        """
        Initialize the registry. Nothing is built until initialize().

        Args:
            config: Platform version and collision policy
            rules: Candidate facades in processing order
        """
        self.config = config or RegistryConfig()
        self.rules = tuple(rules)

        self._lock = threading.Lock()
        self._initialized = False
        self._table: Mapping[str, MethodDescriptor] = MappingProxyType({})
        self._providers: Tuple[Type[RpcReceiver], ...] = ()

    @property
    def platform_version(self) -> int:
        return self.config.platform_version

    @property
    def initialized(self) -> bool:
        return self._initialized

    def included_rules(self) -> Tuple[FacadeRule, ...]:
        """Rules whose version bounds admit the configured platform version."""
        return tuple(rule for rule in self.rules if rule.applies_to(self.platform_version))

    def initialize(self) -> "FacadeConfiguration":
        """
        Build the method table exactly once.

        Concurrent callers block until the first build finishes.

        Raises:
            DuplicateRpcError: Under CollisionPolicy.REJECT when two facades
                expose the same method name; nothing is published then
        """
        if self._initialized:
            return self

        with self._lock:
            if self._initialized:
                return self

            table, providers = self._build()

            self._table = MappingProxyType(dict(sorted(table.items())))
            self._providers = providers
            self._initialized = True

        logger.info(
            f"Registered {len(self._table)} RPCs from {len(self._providers)} facades "
            f"(platform version {self.platform_version})"
        )
        return self

    def _collect(self, receiver: Type[RpcReceiver]) -> Optional[List[MethodDescriptor]]:
        try:
            descriptors = list(receiver.rpc_descriptors())
        except Exception as e:
            logger.error(f"Failed to collect RPCs from {receiver.__name__}: {e}")
            return None

        valid = []
        for descriptor in descriptors:
            if descriptor.receiver is not receiver:
                logger.error(
                    f"{receiver.__name__} described {descriptor.name} as owned by "
                    f"{descriptor.receiver.__name__}, skipping"
                )
                continue
            valid.append(descriptor)
        return valid

    def _build(self) -> Tuple[Dict[str, MethodDescriptor], Tuple[Type[RpcReceiver], ...]]:
        table: Dict[str, MethodDescriptor] = {}
        providers: List[Type[RpcReceiver]] = []

        for receiver in select_receivers(self.included_rules(), self.platform_version):
            descriptors = self._collect(receiver)
            if descriptors is None:
                continue
            providers.append(receiver)

            for descriptor in descriptors:
                existing = table.get(descriptor.name)
                if existing is not None:
                    if self.config.collision_policy == CollisionPolicy.REJECT:
                        raise DuplicateRpcError(
                            descriptor.name, existing.receiver, descriptor.receiver
                        )
                    logger.warning(
                        f"RPC {descriptor.name} from {descriptor.receiver_name} "
                        f"overrides {existing.receiver_name}"
                    )
                table[descriptor.name] = descriptor
                logger.debug(f"Registered RPC {descriptor.name} ({descriptor.receiver_name})")

        return table, tuple(providers)

    def list_descriptors(self) -> List[MethodDescriptor]:
        """Returns all method descriptors, ordered by name."""
        self.initialize()
        return list(self._table.values())

    def lookup(self, name: str) -> Optional[MethodDescriptor]:
        """Returns a method descriptor by name, or None if there is none."""
        self.initialize()
        return self._table.get(name)

    get_method_descriptor = lookup

    def provider_types(self) -> FrozenSet[Type[RpcReceiver]]:
        """Returns the set of included facade classes."""
        self.initialize()
        return frozenset(self._providers)

    def ordered_provider_types(self) -> Tuple[Type[RpcReceiver], ...]:
        """Returns the included facade classes in processing order."""
        self.initialize()
        return self._providers

    def method_names(self) -> List[str]:
        self.initialize()
        return list(self._table)

    def __contains__(self, name: object) -> bool:
        self.initialize()
        return name in self._table

    def __len__(self) -> int:
        self.initialize()
        return len(self._table)


# Singleton instance
_instance: Optional[FacadeConfiguration] = None
_instance_lock = threading.Lock()


def get_facade_configuration(config: Optional[RegistryConfig] = None) -> FacadeConfiguration:
    """
    Get the process-wide registry, building it on first use.

    Without a config the first call reads EnvConfigProvider. A config passed
    after the registry exists is ignored with a warning.
    """
    global _instance
    instance = _instance
    if instance is None:
        with _instance_lock:
            if _instance is None:
                if config is None:
                    config = EnvConfigProvider().get_registry_config()
                # Publish only a fully built registry
                _instance = FacadeConfiguration(config).initialize()
            instance = _instance
    elif config is not None and config != instance.config:
        logger.warning(
            f"Registry already built for platform version {instance.platform_version}, "
            f"ignoring new configuration"
        )
    return instance


def reset_facade_configuration() -> None:
    """Drop the process-wide registry. Intended for tests."""
    global _instance
    with _instance_lock:
        _instance = None


def collect_rpc_descriptors() -> List[MethodDescriptor]:
    """Returns descriptors for all facades of the process-wide registry."""
    return get_facade_configuration().list_descriptors()


def get_method_descriptor(name: str) -> Optional[MethodDescriptor]:
    """Returns a method of the process-wide registry by name."""
    return get_facade_configuration().lookup(name)


def get_facade_classes() -> FrozenSet[Type[RpcReceiver]]:
    return get_facade_configuration().provider_types()
