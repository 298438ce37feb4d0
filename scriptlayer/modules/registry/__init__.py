"""
Registry Module - Black Box Interface

Purpose: Canonical name -> method descriptor table for all facades
Interface: list_descriptors(), lookup(), provider_types()
Hidden: Inclusion rules, collision handling, one-time build locking

Built once per process; read concurrently without locks afterwards.
"""

from .configuration import (
    DEFAULT_RULES,
    FacadeConfiguration,
    FacadeRule,
    collect_rpc_descriptors,
    get_facade_classes,
    get_facade_configuration,
    get_method_descriptor,
    reset_facade_configuration,
    select_receivers,
)

__all__ = [
    "DEFAULT_RULES",
    "FacadeConfiguration",
    "FacadeRule",
    "collect_rpc_descriptors",
    "get_facade_classes",
    "get_facade_configuration",
    "get_method_descriptor",
    "reset_facade_configuration",
    "select_receivers",
]
