"""Overlay lifecycle: one surface per mounted host, redrawn on every change.

States are ``Unmounted → Mounted → Unmounted``. Mounting creates the surface
and subscribes to the host's viewport notifications; unmounting releases
both, on every exit path.
"""

from __future__ import annotations

import logging
import weakref
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from overlay.errors import AlreadyMounted
from overlay.host import MapHost, OverlaySurface
from overlay.range_filter import ClimateSample, RangeSelection, filter_samples
from overlay.renderer import GridRenderer

logger = logging.getLogger(__name__)


@dataclass
class OverlayState:
    host: MapHost
    surface: OverlaySurface
    renderer: GridRenderer
    unsubscribe: Optional[Callable[[], None]] = None
    is_mounted: bool = True


# host → live OverlayState; at most one overlay per host across lifecycles
_LIVE_OVERLAYS: "weakref.WeakKeyDictionary" = weakref.WeakKeyDictionary()


class OverlayLifecycle:
    """Owns the overlay surface and keeps it in sync with host and inputs."""

    def __init__(self) -> None:
        self._state: OverlayState | None = None
        self._samples: Sequence[ClimateSample] = ()
        self._selection: RangeSelection | None = None
        self._last_cells: list = []

    @property
    def is_mounted(self) -> bool:
        return self._state is not None and self._state.is_mounted

    @property
    def cells(self) -> list:
        """Cells drawn by the most recent render."""
        return list(self._last_cells)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def mount(self, host: MapHost) -> OverlayHandle:
        if self.is_mounted:
            raise AlreadyMounted("overlay is already mounted; unmount it first")
        live = _LIVE_OVERLAYS.get(host)
        if live is not None and live.is_mounted:
            raise AlreadyMounted("host already has a mounted overlay")

        pane = host.get_render_pane()
        surface = pane.create_surface()
        state = OverlayState(host=host, surface=surface,
                             renderer=GridRenderer(host, surface))
        self._state = state
        _LIVE_OVERLAYS[host] = state
        try:
            state.unsubscribe = host.on_viewport_change(
                lambda: self._on_viewport_change(state))
            self._render()
        except BaseException:
            self.unmount()
            raise
        logger.info("Overlay mounted")
        return OverlayHandle(self, state)

    def update(self, samples: Sequence[ClimateSample] | None,
               selection: RangeSelection | None) -> None:
        """Store the latest inputs and redraw if mounted."""
        self._samples = samples or ()
        self._selection = selection
        if not self.is_mounted:
            logger.debug("update() ignored: overlay is not mounted")
            return
        self._render()

    def unmount(self) -> None:
        state = self._state
        if state is None:
            return
        self._state = None
        self._last_cells = []
        state.is_mounted = False
        if _LIVE_OVERLAYS.get(state.host) is state:
            del _LIVE_OVERLAYS[state.host]
        try:
            if state.unsubscribe is not None:
                state.unsubscribe()
        finally:
            state.host.get_render_pane().remove_surface(state.surface)
            logger.info("Overlay unmounted")

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def owns(self, state: OverlayState) -> bool:
        """Whether ``state`` is the live mount of this lifecycle."""
        return state is self._state and state.is_mounted

    def _on_viewport_change(self, state: OverlayState) -> None:
        # A notification already queued by the host may arrive after unmount
        if not self.owns(state):
            return
        self._render()

    def _render(self) -> None:
        state = self._state
        if self._selection is None:
            filtered = []
        else:
            filtered = filter_samples(self._samples, self._selection)
        self._last_cells = state.renderer.render(filtered)


class OverlayHandle:
    """Handle returned by ``mount``; also usable as a context manager.

    Bound to the mount that created it: once that mount is gone, every call
    is a no-op, even if the lifecycle has been mounted again since.
    """

    def __init__(self, lifecycle: OverlayLifecycle, state: OverlayState) -> None:
        self._lifecycle = lifecycle
        self._state = state

    @property
    def is_mounted(self) -> bool:
        return self._lifecycle.owns(self._state)

    @property
    def cells(self) -> list:
        return self._lifecycle.cells if self.is_mounted else []

    def update(self, samples, selection) -> None:
        if not self.is_mounted:
            logger.debug("update() ignored: handle's overlay was unmounted")
            return
        self._lifecycle.update(samples, selection)

    def unmount(self) -> None:
        if self.is_mounted:
            self._lifecycle.unmount()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.unmount()
        return False


def mount(host: MapHost) -> OverlayHandle:
    """Mount a fresh overlay on ``host``."""
    return OverlayLifecycle().mount(host)
