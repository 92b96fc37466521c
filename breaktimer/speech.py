"""
Best-effort text-to-speech for prompts.
"""

from __future__ import annotations

from typing import Any, Optional

import pyttsx3

from . import logger as app_logger

_LOGGER = app_logger.get_logger()


class Speaker:
    """
    Speaks text through pyttsx3. The engine is created on first use; if it
    cannot be created or fails while speaking, speech is disabled for the rest
    of the session and scheduling carries on unaffected.
    """

    def __init__(self, *, enabled: bool = True) -> None:
        self._enabled = enabled
        self._engine: Optional[Any] = None

    @property
    def enabled(self) -> bool:
        return self._enabled

    def say(self, text: str) -> None:
        if not self._enabled or not text:
            return
        engine = self._get_engine()
        if engine is None:
            return
        try:
            engine.say(text)
            engine.runAndWait()
        except (RuntimeError, OSError) as exc:
            _LOGGER.debug("Speech failed; disabling: {}", exc)
            self._enabled = False

    def _get_engine(self) -> Optional[Any]:
        if self._engine is not None:
            return self._engine
        try:
            self._engine = pyttsx3.init()
        except (RuntimeError, OSError, ImportError) as exc:
            _LOGGER.debug("No speech backend available: {}", exc)
            self._enabled = False
            return None
        return self._engine


class SilentSpeaker(Speaker):
    def __init__(self) -> None:
        super().__init__(enabled=False)
