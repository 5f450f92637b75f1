import logging
from typing import Callable, List

from .errors import ReentrantActionError

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class GameEvents:
    """The game's own list of "state changed" listeners.

    - Listeners are zero-argument callables, called synchronously in
      registration order after each action settles.
    - A listener raising is logged and does not stop the remaining listeners,
      except for ReentrantActionError which always propagates.
    - ``notifying`` is True while listeners run; the game uses it to reject
      mutating calls made from inside a listener.
    """

    def __init__(self) -> None:
        self._listeners: List[Listener] = []
        self._notifying = False

    @property
    def notifying(self) -> bool:
        return self._notifying

    def subscribe(self, listener: Listener) -> None:
        if not callable(listener):
            raise TypeError("listener must be callable")
        if listener not in self._listeners:
            self._listeners.append(listener)
            logger.debug("Subscribed listener %s", getattr(listener, "__name__", str(listener)))

    def unsubscribe(self, listener: Listener) -> None:
        """Remove a listener. Silently ignores if not present."""
        if listener in self._listeners:
            self._listeners.remove(listener)
            logger.debug("Unsubscribed listener %s", getattr(listener, "__name__", str(listener)))

    def notify(self) -> None:
        listeners = list(self._listeners)
        logger.debug("Notifying %d listeners", len(listeners))
        self._notifying = True
        try:
            for listener in listeners:
                try:
                    listener()
                except ReentrantActionError:
                    raise
                except Exception as exc:  # noqa: BLE001 - we want to log any exception from listeners
                    logger.exception("Error in game listener: %s", exc)
        finally:
            self._notifying = False

    def __len__(self) -> int:
        return len(self._listeners)
