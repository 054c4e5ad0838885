from __future__ import annotations
import logging
import time
from typing import Callable, Optional, Sequence, Tuple
from ..colors.color_point import ColorPoint, DEFAULT_POINTS, as_points
from ..raster.config import DEFAULT_BLEND_RADIUS, PreviewSettings, validate_blend_radius, validate_size
from ..raster.mesh import MeshRasterizer
from ..types.format_type import RenderQuality
from ..utils.default import value_or_default
from .render_scheduler import PublishedRender, RenderRequest, RenderScheduler
from .timing import Debouncer, Throttle

logger = logging.getLogger(__name__)


class PreviewSession:
    """
    Current mesh design plus the policy for when to re-render it.

    - While an interaction (drag, slider) is active, updates render low
      quality previews, throttled to ``settings.throttle_seconds``.
    - Otherwise updates are debounced by ``settings.debounce_seconds`` and
      rendered at idle preview quality.
    - Ending an interaction schedules an idle preview after the same quiet
      period.

    All rendering goes through a ``RenderScheduler``, so only the newest
    request is ever published.
    """

    def __init__(
        self,
        width: int,
        height: int,
        points: Sequence[ColorPoint] = DEFAULT_POINTS,
        blend_radius: float = DEFAULT_BLEND_RADIUS,
        *,
        settings: Optional[PreviewSettings] = None,
        scheduler: Optional[RenderScheduler] = None,
        on_publish: Optional[Callable[[PublishedRender], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        validate_size(width, height)
        validate_blend_radius(blend_radius)
        self.settings = value_or_default(settings, PreviewSettings())
        self._owns_scheduler = scheduler is None
        self.scheduler = scheduler if scheduler is not None else RenderScheduler(
            MeshRasterizer(self.settings), on_publish=on_publish
        )
        self._points = as_points(points)
        if not self._points:
            raise ValueError("A preview session needs at least one color point")
        self._blend_radius = blend_radius
        self._size = (width, height)
        self._interacting = False
        self._throttle = Throttle(self.settings.throttle_seconds, clock)
        self._debouncer = Debouncer(self.settings.debounce_seconds, self._submit_idle)

    # ------------------ DESIGN STATE ------------------
    @property
    def points(self) -> Tuple[ColorPoint, ...]:
        return self._points

    @property
    def blend_radius(self) -> float:
        return self._blend_radius

    @property
    def size(self) -> Tuple[int, int]:
        return self._size

    @property
    def interacting(self) -> bool:
        return self._interacting

    def snapshot(self, quality: RenderQuality = RenderQuality.PREVIEW) -> RenderRequest:
        return RenderRequest(
            self._points,
            self._blend_radius,
            self._size[0],
            self._size[1],
            quality,
            interacting=self._interacting and quality == RenderQuality.PREVIEW,
        )

    # ------------------ UPDATES ------------------
    def update(
        self,
        points: Optional[Sequence[ColorPoint]] = None,
        blend_radius: Optional[float] = None,
        size: Optional[Tuple[int, int]] = None,
    ) -> Optional[int]:
        """
        Replace parts of the design and schedule a preview.

        Returns:
            The render generation when a preview was submitted right away
            (throttled interactive path), otherwise None.
        """
        if points is not None:
            snapshot = as_points(points)
            if not snapshot:
                raise ValueError("A preview session needs at least one color point")
            self._points = snapshot
        if blend_radius is not None:
            validate_blend_radius(blend_radius)
            self._blend_radius = blend_radius
        if size is not None:
            validate_size(*size)
            self._size = (size[0], size[1])

        if self._interacting:
            if self._throttle.allow():
                return self.scheduler.submit(self.snapshot())
            return None
        self._debouncer.trigger()
        return None

    def begin_interaction(self) -> None:
        self._interacting = True
        self._debouncer.cancel()

    def end_interaction(self) -> None:
        self._interacting = False
        self._throttle.reset()
        self._debouncer.trigger()

    def flush(self) -> bool:
        """Submit a pending debounced preview now."""
        return self._debouncer.flush()

    def request_preview(self) -> int:
        """Submit an idle preview immediately, bypassing the debounce."""
        self._debouncer.cancel()
        return self._submit_idle()

    def _submit_idle(self) -> int:
        generation = self.scheduler.submit(self.snapshot())
        logger.debug("Submitted idle preview generation %d", generation)
        return generation

    def wait(self, timeout: Optional[float] = None) -> Optional[PublishedRender]:
        return self.scheduler.wait(timeout)

    def close(self) -> None:
        self._debouncer.cancel()
        if self._owns_scheduler:
            self.scheduler.shutdown()

    def __enter__(self) -> PreviewSession:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
