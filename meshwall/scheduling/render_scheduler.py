from __future__ import annotations
import logging
import threading
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional, Tuple
from ..colors.color_point import ColorPoint, as_points
from ..raster.config import validate_blend_radius, validate_size
from ..raster.mesh import MeshRasterizer
from ..raster.target import RenderTarget
from ..types.format_type import RenderQuality
from ..utils.default import value_or_default

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderRequest:
    """Immutable snapshot of everything one render needs."""
    points: Tuple[ColorPoint, ...]
    blend_radius: float
    width: int
    height: int
    quality: RenderQuality = RenderQuality.PREVIEW
    interacting: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", as_points(self.points))
        object.__setattr__(self, "quality", RenderQuality(self.quality))
        if not self.points:
            raise ValueError("A render request needs at least one color point")
        validate_size(self.width, self.height)
        validate_blend_radius(self.blend_radius)


@dataclass(frozen=True)
class PublishedRender:
    generation: int
    request: RenderRequest
    target: RenderTarget


class RenderScheduler:
    """
    Runs render requests so that only the newest one is ever published.

    Every ``submit`` bumps a generation counter. A request that is already
    stale when the worker picks it up is skipped, and a finished render is
    dropped unless its generation is still the newest, so a slow old render
    can never overwrite a newer result. ``latest`` is updated under a lock;
    ``on_publish`` is then called without the lock held, from the worker
    thread, and is skipped if a newer request arrived in the meantime.
    """

    def __init__(
        self,
        rasterizer: Optional[MeshRasterizer] = None,
        on_publish: Optional[Callable[[PublishedRender], None]] = None,
        executor: Optional[Executor] = None,
    ) -> None:
        self._rasterizer = value_or_default(rasterizer, MeshRasterizer())
        self._on_publish = on_publish
        self._owns_executor = executor is None
        self._executor = executor if executor is not None else ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="meshwall-render"
        )
        self._lock = threading.RLock()
        self._resolved_cond = threading.Condition(self._lock)
        self._generation = 0
        self._resolved = 0
        self._latest: Optional[PublishedRender] = None
        self._error: Optional[BaseException] = None
        self._closed = False

    # ------------------ STATE ------------------
    @property
    def generation(self) -> int:
        """Generation of the newest submitted request."""
        with self._lock:
            return self._generation

    @property
    def latest(self) -> Optional[PublishedRender]:
        with self._lock:
            return self._latest

    def is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    # ------------------ SUBMISSION ------------------
    def submit(self, request: RenderRequest) -> int:
        """Queue ``request``, superseding anything not yet published. Returns its generation."""
        with self._lock:
            if self._closed:
                raise RuntimeError("RenderScheduler has been shut down")
            self._generation += 1
            generation = self._generation
            self._error = None
        self._executor.submit(self._run, generation, request)
        return generation

    def _run(self, generation: int, request: RenderRequest) -> None:
        if not self.is_current(generation):
            logger.debug("Skipping superseded render generation %d", generation)
            return
        try:
            target = self._rasterizer.render(
                request.points,
                request.blend_radius,
                request.width,
                request.height,
                request.quality,
                interacting=request.interacting,
            )
        except Exception as exc:
            with self._lock:
                if generation == self._generation:
                    self._error = exc
                    self._resolved = generation
                    self._resolved_cond.notify_all()
            logger.debug("Render generation %d failed: %s", generation, exc)
            return

        with self._lock:
            if generation != self._generation:
                logger.debug("Dropping stale render generation %d", generation)
                return
            published = PublishedRender(generation, request, target)
            self._latest = published
        logger.debug("Published render generation %d (%dx%d)", generation, target.width, target.height)

        # The callback runs unlocked so it may read state or submit from any thread.
        error: Optional[BaseException] = None
        if self._on_publish is not None and self.is_current(generation):
            try:
                self._on_publish(published)
            except Exception as exc:
                error = exc
                logger.exception("on_publish callback failed for generation %d", generation)

        with self._lock:
            if generation == self._generation:
                # Surfaced to the caller through wait().
                self._error = error
            self._resolved = max(self._resolved, generation)
            self._resolved_cond.notify_all()

    def wait(self, timeout: Optional[float] = None) -> Optional[PublishedRender]:
        """
        Block until the newest request has been published or has failed.

        Returns:
            The published render, or None on timeout.

        Raises:
            Exception: Whatever the newest render raised.
        """
        with self._lock:
            done = self._resolved_cond.wait_for(lambda: self._resolved >= self._generation, timeout)
            if not done:
                return None
            if self._error is not None:
                raise self._error
            return self._latest

    def render_now(self, request: RenderRequest, timeout: Optional[float] = None) -> Optional[PublishedRender]:
        self.submit(request)
        return self.wait(timeout)

    # ------------------ LIFECYCLE ------------------
    def shutdown(self, wait: bool = True) -> None:
        with self._lock:
            self._closed = True
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def __enter__(self) -> RenderScheduler:
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()
