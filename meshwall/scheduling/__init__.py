from .render_scheduler import RenderRequest, PublishedRender, RenderScheduler
from .timing import Debouncer, Throttle
from .session import PreviewSession

__all__ = [
    "RenderRequest",
    "PublishedRender",
    "RenderScheduler",
    "Debouncer",
    "Throttle",
    "PreviewSession",
]
