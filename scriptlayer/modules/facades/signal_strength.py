"""Signal strength facade (SDK 7 and later)."""

import logging
import threading
from typing import Dict, Optional

from ..rpc import RpcReceiver, rpc

logger = logging.getLogger("scriptlayer.facades.signal_strength")


class SignalStrengthFacade(RpcReceiver):
    """Tracks the latest signal strength reported by the telephony backend."""

    def __init__(self, context=None):
        super().__init__(context)
        self._lock = threading.Lock()
        self._strengths: Optional[Dict[str, int]] = None
        self._tracking = False

    def _on_signal_strengths(self, strengths: Dict[str, int]) -> None:
        with self._lock:
            self._strengths = dict(strengths)

    @rpc("Starts tracking signal strengths.")
    def startTrackingSignalStrengths(self) -> None:
        telephony = getattr(self.context, "telephony", None)
        if telephony is None:
            logger.warning("No telephony backend available")
            return
        if self._tracking:
            return
        telephony.listen_signal_strengths(self._on_signal_strengths)
        self._tracking = True

    @rpc("Returns the current signal strengths.", returns="A map of gsm_signal_strength and friends")
    def readSignalStrengths(self) -> Optional[Dict[str, int]]:
        with self._lock:
            return dict(self._strengths) if self._strengths is not None else None

    @rpc("Stops tracking signal strength.")
    def stopTrackingSignalStrengths(self) -> None:
        if not self._tracking:
            return
        self.context.telephony.stop_listening()
        self._tracking = False

    def shutdown(self) -> None:
        self.stopTrackingSignalStrengths()
