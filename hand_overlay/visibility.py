import logging

from .errors import InvalidLandmarkSet
from .pose import PoseMapper

logger = logging.getLogger(__name__)


class VisibilityController:
    """Per-frame reconciliation of hand detections against model bindings.

    A binding is shown while a detection with its handedness is present in
    the current frame and hidden otherwise; the state is recomputed from
    scratch each frame. A detection whose landmarks cannot be mapped leaves
    its binding exactly as it was for that frame.
    """
    def __init__(self, mapper=None):
        self.mapper = mapper or PoseMapper()
        self.last_visible = frozenset()

    def reconcile(self, detections, registry):
        seen = set()
        for detection in detections:
            binding = registry.get(detection.handedness)
            if binding is None:
                logger.debug("No model bound to the %s hand, ignoring", detection.handedness)
                continue
            # a hand present this frame is never hidden, even if mapping fails
            seen.add(binding.handedness)
            try:
                transform = self.mapper.compute_transform(detection.landmarks)
            except InvalidLandmarkSet as exc:
                logger.warning("Skipping %s hand this frame: %s", detection.handedness, exc)
                continue
            binding.show()
            binding.apply(transform)

        for binding in registry:
            if binding.handedness not in seen:
                binding.hide()

        self.last_visible = frozenset(b.handedness for b in registry if b.visible)
