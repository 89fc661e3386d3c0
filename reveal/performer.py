"""
Laser Reveal — Live Preview Window

pygame host for the engine: owns the window and the frame-paced loop,
pumps the engine's scheduler once per display refresh with
pygame.time.get_ticks(), and blits the canvas to the screen.

Hotkeys:
    Space  = pause / resume (replays once completed)
    R      = reset to the first cell
    Esc    = quit
"""

import cv2
import numpy as np

try:
    import pygame
except ImportError:
    pygame = None

from reveal.canvas import Canvas
from reveal.engine import EngineState, LaserEngine

MAX_DISPLAY = (1280, 800)


def fit_to_display(width, height, max_size=MAX_DISPLAY):
    """Display size keeping aspect ratio, never upscaling."""
    scale = min(1.0, max_size[0] / max(width, 1), max_size[1] / max(height, 1))
    return max(1, int(width * scale)), max(1, int(height * scale))


class PreviewWindow:
    """Interactive reveal preview.

    Args:
        image: Source raster (ndarray, PIL image or Canvas).
        options: LaserOptions or partial dict.
        highlight: Highlight name or callable.
        autostart: Start the reveal as soon as the image is set.
        fps: Display refresh cap.
    """

    def __init__(self, image, options=None, highlight="laser", autostart=True, fps=60):
        if pygame is None:
            raise RuntimeError("pygame required for preview mode. Install: pip install pygame")
        self.canvas = Canvas()
        self.engine = LaserEngine(self.canvas, options, highlight=highlight)
        self.image = image
        self.autostart = autostart
        self.fps = fps
        self.running = True

        self._screen = None
        self._clock = None
        self._font = None
        self._display_size = None

    def init_display(self):
        pygame.init()
        self._display_size = fit_to_display(self.canvas.width, self.canvas.height)
        self._screen = pygame.display.set_mode(self._display_size)
        pygame.display.set_caption("Laser Reveal")
        self._clock = pygame.time.Clock()
        self._font = pygame.font.SysFont("monospace", 14)

    def _handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_SPACE:
                    if self.engine.running:
                        self.engine.pause()
                    else:
                        self.engine.start()
                    print(f"  [{self.engine.state.value.upper()}]")
                elif event.key == pygame.K_r:
                    self.engine.reset()
                    self.engine.draw()
                    print("  [RESET]")

    def _frame_surface(self):
        """Canvas composited over a checkerboard, scaled to the window."""
        rgba = self.canvas.pixels.astype(np.float32) / 255.0
        h, w = rgba.shape[:2]
        ys, xs = np.mgrid[0:h, 0:w]
        checker = np.where(((xs // 8 + ys // 8) % 2)[..., None] == 0, 0.25, 0.35)
        rgb = rgba[..., :3] * rgba[..., 3:4] + checker * (1.0 - rgba[..., 3:4])
        frame = (rgb * 255).astype(np.uint8)
        if (w, h) != self._display_size:
            frame = cv2.resize(frame, self._display_size, interpolation=cv2.INTER_AREA)
        return pygame.surfarray.make_surface(frame.swapaxes(0, 1))

    def _render_to_screen(self):
        self._screen.blit(self._frame_surface(), (0, 0))
        label = f"{self.engine.state.value.upper()}  {self.engine.progress * 100:5.1f}%"
        self._screen.blit(self._font.render(label, True, (200, 200, 200)), (10, 10))
        pygame.display.flip()

    def run(self):
        """Main loop: events, scheduler pump, display."""
        self.engine.set_image(self.image)
        if self.canvas.width <= 0 or self.canvas.height <= 0:
            print("  Image has no pixels, nothing to preview.")
            return
        self.init_display()
        if self.autostart:
            self.engine.start()

        print("  Space=Pause/Resume  R=Reset  Esc=Exit")
        last_state = None
        try:
            while self.running:
                self._handle_events()
                self.engine.scheduler.run_pending(pygame.time.get_ticks())
                state = self.engine.state
                if state is EngineState.COMPLETED and last_state is EngineState.RUNNING:
                    print("  [COMPLETED]")
                last_state = state
                self._render_to_screen()
                self._clock.tick(self.fps)
        except KeyboardInterrupt:
            print("\n  [INTERRUPTED]")
        finally:
            self._cleanup()

    def _cleanup(self):
        self.engine.destroy()
        if pygame and pygame.get_init():
            pygame.quit()
