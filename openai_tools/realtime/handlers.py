"""
Push-style dispatch of Realtime server events.

:class:`EventHandler` maps event types to callbacks. Callbacks may be plain
functions or coroutines; each receives the typed event. Events with no
registered callback go to the fallback registered with :meth:`on_any`, if any.
"""

import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from openai_tools.config.constants import LOGGER_NAME
from openai_tools.realtime.events import ServerEvent

logger = logging.getLogger(LOGGER_NAME)

# Type hint for handler functions
HandlerFunc = Callable[[ServerEvent], Union[None, Awaitable[None]]]


class EventHandler:
    """
    Registry of callbacks keyed by server event type.

    Usage example:
    ```python
    handler = EventHandler()
    handler.on_text_delta(lambda event: print(event.delta, end=""))

    @handler.on("response.done")
    async def finished(event):
        print("status:", event.response.status)

    await session.run(handler)
    ```
    """

    def __init__(self):
        self.handlers: Dict[str, List[HandlerFunc]] = {}
        self._fallback: Optional[HandlerFunc] = None

    def on(self, event_type: str, callback: Optional[HandlerFunc] = None):
        """
        Register ``callback`` for ``event_type``.

        Can be used directly or as a decorator when ``callback`` is omitted.
        """
        if callback is None:
            def decorator(func: HandlerFunc) -> HandlerFunc:
                self.on(event_type, func)
                return func
            return decorator
        self.handlers.setdefault(event_type, []).append(callback)
        return self

    def on_any(self, callback: HandlerFunc) -> "EventHandler":
        """Register a callback for events without a specific handler."""
        self._fallback = callback
        return self

    def on_session_created(self, callback: HandlerFunc) -> "EventHandler":
        return self.on("session.created", callback)

    def on_session_updated(self, callback: HandlerFunc) -> "EventHandler":
        return self.on("session.updated", callback)

    def on_item_created(self, callback: HandlerFunc) -> "EventHandler":
        return self.on("conversation.item.created", callback)

    def on_transcription_completed(self, callback: HandlerFunc) -> "EventHandler":
        return self.on("conversation.item.input_audio_transcription.completed", callback)

    def on_speech_started(self, callback: HandlerFunc) -> "EventHandler":
        return self.on("input_audio_buffer.speech_started", callback)

    def on_speech_stopped(self, callback: HandlerFunc) -> "EventHandler":
        return self.on("input_audio_buffer.speech_stopped", callback)

    def on_response_created(self, callback: HandlerFunc) -> "EventHandler":
        return self.on("response.created", callback)

    def on_response_done(self, callback: HandlerFunc) -> "EventHandler":
        return self.on("response.done", callback)

    def on_text_delta(self, callback: HandlerFunc) -> "EventHandler":
        return self.on("response.text.delta", callback)

    def on_text_done(self, callback: HandlerFunc) -> "EventHandler":
        return self.on("response.text.done", callback)

    def on_audio_delta(self, callback: HandlerFunc) -> "EventHandler":
        return self.on("response.audio.delta", callback)

    def on_audio_done(self, callback: HandlerFunc) -> "EventHandler":
        return self.on("response.audio.done", callback)

    def on_audio_transcript_delta(self, callback: HandlerFunc) -> "EventHandler":
        return self.on("response.audio_transcript.delta", callback)

    def on_audio_transcript_done(self, callback: HandlerFunc) -> "EventHandler":
        return self.on("response.audio_transcript.done", callback)

    def on_function_call_arguments_delta(self, callback: HandlerFunc) -> "EventHandler":
        return self.on("response.function_call_arguments.delta", callback)

    def on_function_call_arguments_done(self, callback: HandlerFunc) -> "EventHandler":
        return self.on("response.function_call_arguments.done", callback)

    def on_rate_limits_updated(self, callback: HandlerFunc) -> "EventHandler":
        return self.on("rate_limits.updated", callback)

    def on_error(self, callback: HandlerFunc) -> "EventHandler":
        return self.on("error", callback)

    async def handle(self, event: ServerEvent) -> bool:
        """
        Dispatch ``event`` to its callbacks.

        Returns:
            bool: True if at least one callback ran
        """
        callbacks: List[Any] = list(self.handlers.get(event.type, []))
        if not callbacks and self._fallback is not None:
            callbacks = [self._fallback]
        if not callbacks:
            logger.debug(f"Unhandled realtime event: {event.type}")
            return False
        for callback in callbacks:
            result = callback(event)
            if inspect.isawaitable(result):
                await result
        return True
