import logging
import os
from datetime import datetime

import cv2
import numpy as np
import pygame

logger = logging.getLogger(__name__)


def default_output_file(label: str, directory: str = "recordings") -> str:
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    os.makedirs(directory, exist_ok=True)
    return os.path.join(directory, f"{label}_{ts}.mp4")


class VideoRecorder:
    """Writes pygame surfaces to an mp4 file, one frame per capture."""

    def __init__(self, active=False, output_file=None, fps=30):
        self.active = active
        self.output_file = output_file
        self.fps = fps
        self.writer = None
        self.frame_count = 0

    def capture_frame(self, surface: pygame.Surface):
        if not self.active:
            return

        if self.writer is None:
            if not self.output_file:
                self.output_file = default_output_file("maze_run")
            fourcc = cv2.VideoWriter_fourcc(*'mp4v')
            self.writer = cv2.VideoWriter(self.output_file, fourcc, self.fps, surface.get_size())
            logger.info(f"Recording started: {self.output_file}")

        # surfarray is (width, height, 3) RGB, OpenCV wants (height, width, 3) BGR
        frame = np.transpose(pygame.surfarray.array3d(surface), (1, 0, 2))
        self.writer.write(cv2.cvtColor(frame, cv2.COLOR_RGB2BGR))
        self.frame_count += 1

    def stop(self):
        if self.writer:
            self.writer.release()
            logger.info(f"Video saved: {self.output_file} ({self.frame_count} frames)")
            self.writer = None
