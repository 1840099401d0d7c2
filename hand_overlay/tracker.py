"""
Camera capture and hand tracking using MediaPipe.
"""

import logging
import time

import cv2
import mediapipe as mp

from .landmarks import detections_from_results
from .session import DetectionBatch

logger = logging.getLogger(__name__)


class HandTracker:
    """MediaPipe Hands wrapper returning HandDetection records."""
    def __init__(self, max_num_hands=2, detection_conf=0.5, tracking_conf=0.5):
        self.mp_hands = mp.solutions.hands
        self.hands = self.mp_hands.Hands(static_image_mode=False,
                                         max_num_hands=max_num_hands,
                                         model_complexity=1,
                                         min_detection_confidence=detection_conf,
                                         min_tracking_confidence=tracking_conf)

    @classmethod
    def from_config(cls, tracker_cfg):
        return cls(max_num_hands=tracker_cfg.max_num_hands,
                   detection_conf=tracker_cfg.min_detection_confidence,
                   tracking_conf=tracker_cfg.min_tracking_confidence)

    def process(self, frame_bgr):
        # landmarks come back normalized to [0,1] of the frame
        rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        results = self.hands.process(rgb)
        return detections_from_results(results)

    def close(self):
        self.hands.close()


class CameraSource:
    """Reads webcam frames and runs the tracker once per new frame."""
    def __init__(self, tracker, camera_index=0, mirror=True, frame_size=(640, 480)):
        self.tracker = tracker
        self.mirror = mirror
        self.cap = cv2.VideoCapture(camera_index)
        if not self.cap.isOpened():
            raise RuntimeError(f"Cannot open camera {camera_index}")
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, frame_size[0])
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, frame_size[1])
        logger.info("Opened camera %d", camera_index)

    @classmethod
    def from_config(cls, tracker_cfg):
        return cls(HandTracker.from_config(tracker_cfg),
                   camera_index=tracker_cfg.camera_index,
                   mirror=tracker_cfg.mirror,
                   frame_size=(tracker_cfg.frame_width, tracker_cfg.frame_height))

    def read(self):
        ret, frame = self.cap.read()
        if not ret:
            logger.warning("Camera read failed, closing source")
            return None
        if self.mirror:
            frame = cv2.flip(frame, 1)
        timestamp = self.cap.get(cv2.CAP_PROP_POS_MSEC) / 1000.0
        if timestamp <= 0:
            # live devices often report no position
            timestamp = time.monotonic()
        detections = self.tracker.process(frame)
        return DetectionBatch(timestamp, detections, frame)

    def close(self):
        if self.cap is not None:
            self.cap.release()
            self.cap = None
            self.tracker.close()
