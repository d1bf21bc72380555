"""Publish/subscribe channel for prediction updates.

Subscribers are plain callables `(chat_id, prediction) -> None`. An empty
prediction means "no current suggestion" and may be delivered repeatedly.
"""

from collections.abc import Callable

PredictionListener = Callable[[str, str], None]


class Subscription:
    """Disposer handle returned by `PredictionChannel.subscribe`.

    Calling it (or `dispose()`) unsubscribes the listener. Disposing twice
    is harmless.
    """

    def __init__(self, channel: "PredictionChannel", listener: PredictionListener) -> None:
        self._channel = channel
        self._listener = listener
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def dispose(self) -> None:
        if self._active:
            self._channel.remove(self._listener)
            self._active = False

    def __call__(self) -> None:
        self.dispose()


class PredictionChannel:
    """Set of prediction listeners with insertion-ordered delivery.

    Adding the same callable twice keeps a single registration; removal
    is by equality with the registered callable.
    """

    def __init__(self) -> None:
        # dict keys give set semantics with stable ordering
        self._listeners: dict[PredictionListener, None] = {}

    def add(self, listener: PredictionListener) -> None:
        self._listeners[listener] = None

    def remove(self, listener: PredictionListener) -> None:
        self._listeners.pop(listener, None)

    def subscribe(self, listener: PredictionListener) -> Subscription:
        """Register a listener and return a handle that removes it."""
        self.add(listener)
        return Subscription(self, listener)

    def publish(self, chat_id: str, prediction: str) -> None:
        """Deliver a prediction to every listener.

        Iterates over a snapshot so listeners may unsubscribe while being
        notified. Listener exceptions propagate to the caller.
        """
        for listener in list(self._listeners):
            listener(chat_id, prediction)

    def __contains__(self, listener: object) -> bool:
        return listener in self._listeners

    def __len__(self) -> int:
        return len(self._listeners)
