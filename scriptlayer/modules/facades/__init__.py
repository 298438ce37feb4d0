"""
Facades Module - Black Box Interface

Purpose: Platform capabilities exposed as RPC methods
Interface: RpcReceiver subclasses constructed with a PlatformContext
Hidden: Backend calls, cursor handling, event buffering

Each facade talks to the platform only through the backends in its context.
"""

from .bluetooth import BluetoothFacade
from .contacts import ContactsFacade
from .context import BluetoothAdapter, PlatformContext, SpeechEngine, TelephonyManager
from .events import EventFacade
from .signal_strength import SignalStrengthFacade
from .speech import EyesFreeFacade, TextToSpeechFacade

__all__ = [
    "BluetoothAdapter",
    "BluetoothFacade",
    "ContactsFacade",
    "EventFacade",
    "EyesFreeFacade",
    "PlatformContext",
    "SignalStrengthFacade",
    "SpeechEngine",
    "TelephonyManager",
    "TextToSpeechFacade",
]
