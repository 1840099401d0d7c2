"""Frame-driven session: one detection batch and one reconcile per tick."""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .landmarks import HandDetection
from .visibility import VisibilityController

logger = logging.getLogger(__name__)


@dataclass
class DetectionBatch:
    """Detections for one video frame."""
    timestamp: float
    detections: List[HandDetection] = field(default_factory=list)
    frame: Optional[Any] = None


class Session:
    """State shared by the frame loop, controller and renderer."""
    def __init__(self, registry, controller=None):
        self.registry = registry
        self.controller = controller or VisibilityController()
        self.running = False
        self.last_batch: Optional[DetectionBatch] = None
        self.last_timestamp = -1.0
        self.frame_count = 0

    @property
    def last_detections(self):
        return self.last_batch.detections if self.last_batch else []

    @property
    def last_frame(self):
        return self.last_batch.frame if self.last_batch else None


class FrameLoop:
    """Pulls one batch per tick from `source` and reconciles it.

    `source` provides `read()` returning a DetectionBatch, or None once the
    input is exhausted, and optionally `close()`.
    """
    def __init__(self, session: Session, source, on_frame=None):
        self.session = session
        self.source = source
        self.on_frame = on_frame

    def start(self):
        self.session.running = True

    def stop(self):
        if not self.session.running:
            return
        self.session.running = False
        close = getattr(self.source, "close", None)
        if close is not None:
            close()
        logger.info("Frame loop stopped after %d frames", self.session.frame_count)

    def tick(self) -> bool:
        """Process at most one batch. Returns False once the loop has stopped."""
        session = self.session
        if not session.running:
            return False
        batch = self.source.read()
        if batch is None:
            self.stop()
            return False
        # same video frame as last tick: nothing new to reconcile
        if batch.timestamp <= session.last_timestamp:
            return True

        session.controller.reconcile(batch.detections, session.registry)
        session.last_batch = batch
        session.last_timestamp = batch.timestamp
        session.frame_count += 1
        if self.on_frame is not None:
            self.on_frame(session, batch)
        return True

    def run(self, max_ticks=None):
        """Tick until the source is exhausted, stop() is called or max_ticks is hit."""
        self.start()
        ticks = 0
        try:
            while self.tick():
                ticks += 1
                if max_ticks is not None and ticks >= max_ticks:
                    break
        finally:
            self.stop()
        return ticks
