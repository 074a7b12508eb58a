"""
Cooperative per-frame sky animation.

The animator never owns an event loop. It asks a scheduler for one frame
callback at a time (the requestAnimationFrame pattern), advances the sky
clock when the frame fires, hands the new state to on_frame, and schedules
the next frame. stop() cancels the pending callback so nothing is left
queued.
"""
import logging
from typing import Callable, Dict, Iterator, Optional, Protocol

from isometric_city.rendering.sky import SkyState

logger = logging.getLogger(__name__)

DEFAULT_CLOCK_STEP = 0.01


class FrameScheduler(Protocol):
    def request_frame(self, callback: Callable[[], None]) -> int: ...

    def cancel_frame(self, handle: int) -> None: ...


class ManualScheduler:
    """In-process scheduler: frames run only when run_pending() is called"""

    def __init__(self):
        self._next_handle = 1
        self._pending: Dict[int, Callable[[], None]] = {}

    def request_frame(self, callback: Callable[[], None]) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def run_pending(self) -> int:
        """Run every callback queued before this call; returns how many ran"""
        batch = list(self._pending.items())
        self._pending.clear()
        for _, callback in batch:
            callback()
        return len(batch)


class SkyAnimator:
    """Advances SkyState.animation_clock once per frame while running"""

    def __init__(
        self,
        sky: SkyState,
        on_frame: Callable[[SkyState], None],
        scheduler: FrameScheduler,
        step: float = DEFAULT_CLOCK_STEP,
    ):
        self.sky = sky
        self.on_frame = on_frame
        self.scheduler = scheduler
        self.step = step
        self._handle: Optional[int] = None
        self._active = False

    @property
    def running(self) -> bool:
        return self._active

    def start(self):
        """Begin animating; a no-op if already running"""
        if self.running:
            return
        logger.debug("Starting sky animation")
        self._active = True
        self._tick()

    def stop(self):
        """Cancel the pending frame; the last computed sky state is kept"""
        if not self._active:
            return
        self._active = False
        if self._handle is not None:
            self.scheduler.cancel_frame(self._handle)
            self._handle = None
        logger.debug(f"Stopped sky animation at clock {self.sky.animation_clock:.2f}")

    def _tick(self):
        self._handle = None
        self.sky = self.sky.advanced(self.step)
        self.on_frame(self.sky)
        # on_frame may have stopped us
        if self._active:
            self._handle = self.scheduler.request_frame(self._tick)


def iter_frames(sky: SkyState, count: int, step: float = DEFAULT_CLOCK_STEP) -> Iterator[SkyState]:
    """Successive sky states for offline rendering, starting with sky itself"""
    for _ in range(count):
        yield sky
        sky = sky.advanced(step)
