"""
Main application: camera, hand tracking, gesture trigger and constellation.
"""
import argparse
import asyncio
import logging
from typing import List, Optional

import cv2

from .config import load_config
from .gestures import GestureProcessor
from .hud import FrameRateMeter, draw_status
from .landmarks import HandsTracker, draw_landmarks
from .particles import ParticleEngine
from .renderer import OpenCVSurface
from .scheduler import AsyncioFrameScheduler, monotonic_ms

logger = logging.getLogger(__name__)


class ConstellationApp:
    """Main application class for the gesture constellation."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize the application with configuration."""
        self.config = load_config(config_path)
        self.tracker = HandsTracker(
            max_num_hands=self.config.mediapipe.max_num_hands,
            model_complexity=self.config.mediapipe.model_complexity,
            min_detection_conf=self.config.mediapipe.min_detection_confidence,
            min_tracking_conf=self.config.mediapipe.min_tracking_confidence
        )
        self.processor = GestureProcessor(self.config.gesture, self.config.trigger)
        self.surface = OpenCVSurface(glow=self.config.display.glow)
        self.engine = ParticleEngine(
            cfg=self.config.particles,
            surface=self.surface,
            scheduler=AsyncioFrameScheduler(fps=self.config.display.render_fps)
        )
        self.fps_meter = FrameRateMeter()

        # Initialize camera
        self.cap = cv2.VideoCapture(self.config.camera.index)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.camera.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.camera.height)
        self.cap.set(cv2.CAP_PROP_FPS, self.config.camera.fps)

        if not self.cap.isOpened():
            raise RuntimeError(f"Failed to open camera {self.config.camera.index}")

    async def run(self):
        """Run the main application loop."""
        logger.info(f"🚀 Starting {self.config.display.window_name}")
        logger.info("Hold both hands together and still to summon the constellation. 'r' resets, 'q' quits")

        while True:
            ret, frame = self.cap.read()
            if not ret:
                logger.error("❌ Failed to read frame from camera")
                break

            if self.config.camera.mirror:
                frame = cv2.flip(frame, 1)

            hands = self.tracker.process(frame)
            t_now = monotonic_ms()

            result, spawn = self.processor.process_frame(hands, t_now)
            if spawn is not None:
                height, width = frame.shape[:2]
                center = (spawn.center[0] * width, spawn.center[1] * height)
                self.engine.spawn_constellation(center, now=t_now)

            if self.config.display.show_landmarks and hands:
                frame = draw_landmarks(frame, hands)

            self.surface.composite(frame)
            self.fps_meter.tick(t_now)
            draw_status(frame, self.processor.state, hands,
                        self.fps_meter if self.config.display.show_fps else None)

            cv2.imshow(self.config.display.window_name, frame)

            key = cv2.waitKey(1) & 0xFF
            if key == ord('q'):
                break
            if key == ord('r') and self.engine.running:
                self.engine.stop()
                self.processor.classifier.reset()

            # Let the particle tick loop run
            await asyncio.sleep(0)

        self.close()

    def close(self):
        """Release camera, tracker and windows."""
        self.engine.stop()
        if self.cap.isOpened():
            self.cap.release()
        self.tracker.close()
        cv2.destroyAllWindows()


async def main(argv: Optional[List[str]] = None):
    """Entry point for the application."""
    parser = argparse.ArgumentParser(description="Summon a particle constellation with a two-hand gesture")
    parser.add_argument("--config", help="Path to a YAML config file")
    parser.add_argument("--debug", action="store_true", help="Log per-frame details")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)

    app = None
    try:
        app = ConstellationApp(config_path=args.config)
        await app.run()
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
        if app is not None:
            app.close()
    except (RuntimeError, FileNotFoundError) as e:
        logger.error(f"❌ {e}")
        raise SystemExit(1)


def run():
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
