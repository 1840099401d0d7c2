"""
Application wiring: camera + hand tracking -> reconcile -> OpenGL overlay.
"""

import argparse
import logging
import sys
from typing import Optional

from .config import AppConfig, get_default_config, load_config
from .errors import HandOverlayError
from .pose import PoseMapper
from .registry import build_registry
from .session import FrameLoop, Session
from .visibility import VisibilityController

logger = logging.getLogger(__name__)

QUIT_KEYS = (b'q', b'\x1b')


class HandOverlayApp:
    """Main hand overlay application."""

    def __init__(self, config: Optional[AppConfig] = None):
        self.config = config or get_default_config()
        registry = build_registry(self.config.models)
        controller = VisibilityController(PoseMapper.from_config(self.config.pose))
        self.session = Session(registry, controller)
        self.source = None
        self.renderer = None
        self.loop: Optional[FrameLoop] = None

    def _on_frame(self, session, batch):
        frame = batch.frame
        if frame is None:
            return
        if self.config.render.show_landmarks:
            from .display import draw_landmarks, draw_status
            frame = frame.copy()
            draw_landmarks(frame, batch.detections)
            draw_status(frame, session)
        self.renderer.set_frame(frame)

    def run(self):
        """Open the camera and window and enter the GLUT main loop."""
        # GL and mediapipe are only needed for the live app
        from OpenGL.GLUT import (glutDisplayFunc, glutIdleFunc, glutKeyboardFunc,
                                 glutLeaveMainLoop, glutMainLoop, glutPostRedisplay)
        from .renderer import OpenGLRenderer
        from .tracker import CameraSource

        if self.session.running:
            print("Application is already running!")
            return

        self.source = CameraSource.from_config(self.config.tracker)
        self.renderer = OpenGLRenderer.from_config(self.config.render)
        self.loop = FrameLoop(self.session, self.source, on_frame=self._on_frame)

        def idle():
            if not self.loop.tick():
                glutLeaveMainLoop()
                return
            glutPostRedisplay()

        def display():
            self.renderer.display(self.session.registry)

        def keyboard(key, x, y):
            if key in QUIT_KEYS:
                self.stop()
                glutLeaveMainLoop()

        glutDisplayFunc(display)
        glutIdleFunc(idle)
        glutKeyboardFunc(keyboard)

        print('Starting hand overlay. Press q in the window to quit.')
        self.loop.start()
        try:
            glutMainLoop()
        except KeyboardInterrupt:
            print("Stopping...")
        finally:
            self.stop()

    def stop(self):
        """Stop the frame loop and release the camera."""
        if self.loop is not None:
            self.loop.stop()
        self.session.running = False


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Overlay 3D models on tracked hands")
    parser.add_argument("--config", help="Path to a JSON configuration file")
    parser.add_argument("--camera", type=int, help="Camera device index")
    parser.add_argument("--no-landmarks", action="store_true", help="Do not draw hand landmarks")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        config = load_config(args.config) if args.config else get_default_config()
        if args.camera is not None:
            config.tracker.camera_index = args.camera
        if args.no_landmarks:
            config.render.show_landmarks = False
        app = HandOverlayApp(config)
    except HandOverlayError as exc:
        logger.error("%s", exc)
        return 1
    try:
        app.run()
    except RuntimeError as exc:
        # camera could not be opened
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
