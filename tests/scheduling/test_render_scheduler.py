import threading
import pytest
from meshwall.raster import RenderQuality, RenderTarget
from meshwall.scheduling import RenderRequest, RenderScheduler

TIMEOUT = 5.0


class GatedRasterizer:
    """Records render widths; the first render blocks until released."""

    def __init__(self, fail_widths=()):
        self.calls = []
        self.started = threading.Event()
        self.release = threading.Event()
        self.fail_widths = set(fail_widths)

    def render(self, points, blend_radius, width, height, quality, *, interacting=False):
        self.calls.append(width)
        if len(self.calls) == 1:
            self.started.set()
            assert self.release.wait(TIMEOUT)
        if width in self.fail_widths:
            raise RuntimeError(f"render {width} failed")
        return RenderTarget(1, 1, bytes((width, 0, 0, 255)))


def _request(points, width):
    return RenderRequest(points, 0.4, width, 10, RenderQuality.PREVIEW)


def test_request_is_a_frozen_snapshot(red_blue_diagonal):
    points = list(red_blue_diagonal)
    request = RenderRequest(points, 0.4, 10, 10, "full")
    points.clear()
    assert len(request.points) == 2
    assert request.quality is RenderQuality.FULL
    with pytest.raises(AttributeError):
        request.width = 5


def test_request_validation(red_blue_diagonal):
    with pytest.raises(ValueError):
        RenderRequest((), 0.4, 10, 10)
    with pytest.raises(ValueError):
        RenderRequest(red_blue_diagonal, -1, 10, 10)
    with pytest.raises(ValueError):
        RenderRequest(red_blue_diagonal, 0.4, 0, 10)


def test_only_newest_request_is_published(red_blue_diagonal):
    rasterizer = GatedRasterizer()
    published = []
    with RenderScheduler(rasterizer, on_publish=published.append) as scheduler:
        assert scheduler.submit(_request(red_blue_diagonal, 1)) == 1
        assert rasterizer.started.wait(TIMEOUT)
        scheduler.submit(_request(red_blue_diagonal, 2))
        scheduler.submit(_request(red_blue_diagonal, 3))
        assert not scheduler.is_current(1)
        rasterizer.release.set()
        result = scheduler.wait(TIMEOUT)

    # The first render finished late and was dropped; the second never ran.
    assert rasterizer.calls == [1, 3]
    assert [p.generation for p in published] == [3]
    assert result.generation == 3
    assert result.target.pixel(0, 0) == (3, 0, 0, 255)
    assert scheduler.latest is result


def test_wait_times_out_while_rendering(red_blue_diagonal):
    rasterizer = GatedRasterizer()
    scheduler = RenderScheduler(rasterizer)
    try:
        scheduler.submit(_request(red_blue_diagonal, 1))
        assert rasterizer.started.wait(TIMEOUT)
        assert scheduler.wait(0.05) is None
    finally:
        rasterizer.release.set()
        scheduler.shutdown()


def test_render_error_reaches_waiter(red_blue_diagonal):
    rasterizer = GatedRasterizer(fail_widths={1})
    rasterizer.release.set()
    with RenderScheduler(rasterizer) as scheduler:
        scheduler.submit(_request(red_blue_diagonal, 1))
        with pytest.raises(RuntimeError, match="render 1 failed"):
            scheduler.wait(TIMEOUT)
        # A newer request clears the error.
        result = scheduler.render_now(_request(red_blue_diagonal, 2), TIMEOUT)
        assert result.generation == 2


def test_callback_error_reaches_waiter(red_blue_diagonal):
    rasterizer = GatedRasterizer()
    rasterizer.release.set()

    def explode(published):
        raise KeyError("display gone")

    with RenderScheduler(rasterizer, on_publish=explode) as scheduler:
        scheduler.submit(_request(red_blue_diagonal, 4))
        with pytest.raises(KeyError):
            scheduler.wait(TIMEOUT)
        # The render itself was still published.
        assert scheduler.latest.generation == 1


def test_callback_may_use_scheduler_from_another_thread(red_blue_diagonal):
    rasterizer = GatedRasterizer()
    rasterizer.release.set()
    seen = []

    def hand_off(published):
        reader = threading.Thread(target=lambda: seen.append((scheduler.latest, scheduler.generation)))
        reader.start()
        reader.join(TIMEOUT)
        assert not reader.is_alive()

    with RenderScheduler(rasterizer, on_publish=hand_off) as scheduler:
        result = scheduler.render_now(_request(red_blue_diagonal, 5), TIMEOUT)

    assert seen == [(result, 1)]


def test_submit_after_shutdown(red_blue_diagonal):
    scheduler = RenderScheduler(GatedRasterizer())
    scheduler.shutdown()
    with pytest.raises(RuntimeError):
        scheduler.submit(_request(red_blue_diagonal, 1))


def test_real_render(red_blue_diagonal):
    with RenderScheduler() as scheduler:
        assert scheduler.wait(0) is None
        request = RenderRequest(red_blue_diagonal, 0.4, 4, 4, RenderQuality.FULL)
        result = scheduler.render_now(request, TIMEOUT)
    assert result.request is request
    assert result.target.size == (4, 4)
    assert result.target.pixel(0, 0) == (255, 0, 0, 255)
