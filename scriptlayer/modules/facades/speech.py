"""
Speech facades.

TextToSpeechFacade needs a platform text-to-speech engine (SDK 4 and later).
EyesFreeFacade is the fallback for older platforms and only speaks.
"""

import logging
from typing import Any, Optional

from ..rpc import RpcParameter, RpcReceiver, rpc
from .context import SpeechEngine

logger = logging.getLogger("scriptlayer.facades.speech")


class _SpeechFacadeBase(RpcReceiver):
    @property
    def engine(self) -> Optional[SpeechEngine]:
        engine = getattr(self.context, "speech_engine", None)
        if engine is None:
            logger.warning(f"{type(self).__name__}: no speech engine available")
        return engine


class TextToSpeechFacade(_SpeechFacadeBase):
    """Provides text-to-speech through the platform engine."""

    @rpc("Speaks the provided message via TTS.", params=[RpcParameter("message", str)])
    def ttsSpeak(self, message: str) -> None:
        engine = self.engine
        if engine is not None:
            engine.speak(message)

    @rpc("Returns True if speech is currently in progress.")
    def ttsIsSpeaking(self) -> bool:
        engine = self.engine
        return bool(engine.is_speaking()) if engine is not None else False

    def shutdown(self) -> None:
        engine = getattr(self.context, "speech_engine", None)
        if engine is not None:
            engine.shutdown()


class EyesFreeFacade(_SpeechFacadeBase):
    """Speech for platforms without a text-to-speech service."""

    @rpc("Speaks the provided message via TTS.", params=[RpcParameter("message", str)])
    def ttsSpeak(self, message: str) -> None:
        engine = self.engine
        if engine is not None:
            engine.speak(message)
