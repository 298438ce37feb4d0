"""Platform backends handed to facades when a session creates them."""
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Protocol

from ...config import ConfigProvider, EnvConfigProvider
from ..content import ContentResolver, SqliteContentResolver


class SpeechEngine(Protocol):
    """Protocol for text-to-speech engines."""

    def speak(self, text: str) -> None:
        ...

    def is_speaking(self) -> bool:
        ...

    def shutdown(self) -> None:
        ...


class BluetoothAdapter(Protocol):
    """Protocol for the local bluetooth adapter."""

    def is_enabled(self) -> bool:
        ...

    def enable(self) -> bool:
        ...

    def disable(self) -> bool:
        ...

    def get_remote_device_name(self, address: str) -> Optional[str]:
        ...


class TelephonyManager(Protocol):
    """Protocol for signal strength notifications."""

    def listen_signal_strengths(self, callback: Callable[[Dict[str, int]], None]) -> None:
        ...

    def stop_listening(self) -> None:
        ...


@dataclass
class PlatformContext:
    """Backends available to a session; missing ones are None."""
    content_resolver: Optional[ContentResolver] = None
    speech_engine: Optional[SpeechEngine] = None
    bluetooth_adapter: Optional[BluetoothAdapter] = None
    telephony: Optional[TelephonyManager] = None

    @classmethod
    def from_config(cls, provider: Optional[ConfigProvider] = None) -> "PlatformContext":
        """
        Build a context from configuration.

        Only the content resolver can be configured; device backends are
        supplied by the host.
        """
        provider = provider or EnvConfigProvider()
        db_path = provider.get_content_db_path()
        if not db_path:
            return cls()
        return cls(content_resolver=SqliteContentResolver(db_path))
