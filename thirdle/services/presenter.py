"""
Presentation Collaborators

The engine never draws anything itself. It talks to a presenter that shows
and clears typed letters and plays back render queues, calling the engine
back once a queue has finished playing.
"""

import threading
from typing import Callable, Dict, List, Optional, Protocol, Sequence

from ..models.game import SlotUpdate
from ..models.errors import AnimationStateError


CompletionCallback = Callable[[], None]


class Presenter(Protocol):
    """Contract every presentation collaborator fulfils."""

    def show_letter(self, try_index: int, letter_offset: int, letter: str) -> None:
        ...

    def clear_letter(self, try_index: int, letter_offset: int) -> None:
        ...

    def play_updates(self, updates: Sequence[Optional[SlotUpdate]], on_complete: CompletionCallback) -> None:
        """Apply `updates` in order, then call `on_complete` exactly once."""
        ...


class QueuedPresenter:
    """
    Presenter that records everything it is asked to do.

    Used when the real renderer lives elsewhere (a browser client polling the
    HTTP API): events are queued until drained, and the completion callback of
    the last render queue is held until the client acknowledges playback.
    """

    def __init__(self, auto_complete: bool = False):
        self.auto_complete = auto_complete
        self.events: List[Dict] = []
        self._pending_completion: Optional[CompletionCallback] = None
        self._lock = threading.Lock()

    def show_letter(self, try_index: int, letter_offset: int, letter: str) -> None:
        self._record({'type': 'show_letter', 'try': try_index, 'letter_offset': letter_offset, 'letter': letter})

    def clear_letter(self, try_index: int, letter_offset: int) -> None:
        self._record({'type': 'clear_letter', 'try': try_index, 'letter_offset': letter_offset})

    def play_updates(self, updates: Sequence[Optional[SlotUpdate]], on_complete: CompletionCallback) -> None:
        self._record({
            'type': 'play_updates',
            'updates': [
                None if update is None else {
                    'slot': update.slot,
                    'result': update.result.name,
                    'color': update.result.color,
                }
                for update in updates
            ],
        })

        if self.auto_complete:
            on_complete()
            return

        with self._lock:
            if self._pending_completion is not None:
                raise AnimationStateError("Previous render queue has not been acknowledged")
            self._pending_completion = on_complete

    @property
    def playing(self) -> bool:
        return self._pending_completion is not None

    def acknowledge(self) -> None:
        """Signals that the client finished playing the last render queue."""
        with self._lock:
            callback = self._pending_completion
            self._pending_completion = None

        if callback is None:
            raise AnimationStateError("No render queue is waiting for acknowledgement")
        callback()

    def drain(self) -> List[Dict]:
        """Returns and forgets all recorded events."""
        with self._lock:
            events, self.events = self.events, []
        return events

    def _record(self, event: Dict) -> None:
        with self._lock:
            self.events.append(event)
