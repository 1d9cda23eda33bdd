"""Frameless always-on-top notification window drawn with pygame"""
import logging
import os
import threading
import time

# Suppress pygame messages before import
os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = '1'
os.environ['SDL_VIDEO_X11_NET_WM_BYPASS_COMPOSITOR'] = '0'

from ..core.controller import FADE_SECONDS

logger = logging.getLogger(__name__)

# Colors per theme: (background, foreground, border)
THEME_COLORS = {
    "dark": ((24, 24, 27), (244, 244, 245), (63, 63, 70)),
    "light": ((250, 250, 250), (24, 24, 27), (212, 212, 216)),
    "custom": ((0, 0, 0), (255, 255, 255), (0, 0, 0)),
}

# Window settings
WIDTH = 260
HEIGHT = 72
MARGIN = 24
CORNER_RADIUS = 16
OPACITY = 0.95


def corner_position(corner: str, screen_w: int, screen_h: int) -> tuple[int, int]:
    """Top-left window coordinate for a screen corner."""
    left = MARGIN
    right = screen_w - WIDTH - MARGIN
    top = MARGIN
    bottom = screen_h - HEIGHT - MARGIN
    return {
        "top_left": (left, top),
        "top_right": (right, top),
        "bottom_left": (left, bottom),
    }.get(corner, (right, bottom))


class PygameOverlayTarget:
    """Notification window running its own pygame loop in a thread.

    Setters only record state under the lock; the pygame thread picks it up
    on the next frame. Pointer callbacks run on the pygame thread, so callers
    should hand them to their event loop (``loop.call_soon_threadsafe``).
    """

    def __init__(self, on_pointer_enter=None, on_pointer_leave=None):
        self.on_pointer_enter = on_pointer_enter
        self.on_pointer_leave = on_pointer_leave
        self.running = False
        self.thread = None
        self.lock = threading.Lock()
        self._ready = threading.Event()
        self._theme = "dark"
        self._corner = "bottom_right"
        self._icon = None
        self._message = None
        self._image = None
        self._visible = False
        self._fade_started = None
        self._image_cache = {}

    def start(self):
        """Start overlay in separate thread"""
        if self.running:
            return

        self.running = True
        self._ready.clear()
        self.thread = threading.Thread(target=self._run, name="ClipPop-Overlay", daemon=True)
        self.thread.start()
        self._ready.wait(timeout=2.0)

    def stop(self):
        """Stop overlay"""
        self.running = False
        if self.thread:
            self.thread.join(timeout=1.0)

    def apply_theme(self, theme: str) -> None:
        with self.lock:
            self._theme = theme

    def apply_corner(self, corner: str) -> None:
        with self.lock:
            self._corner = corner

    def set_icon(self, icon) -> None:
        with self.lock:
            self._icon = icon

    def set_message(self, text) -> None:
        with self.lock:
            self._message = text

    def set_image(self, resource) -> None:
        with self.lock:
            self._image = resource

    def set_visible(self, visible: bool) -> None:
        with self.lock:
            if visible:
                self._visible = True
                self._fade_started = None
            elif self._visible and self._fade_started is None:
                self._fade_started = time.monotonic()

    def _opacity(self) -> float:
        """Current opacity; completes a finished fade. Caller holds the lock."""
        if not self._visible:
            return 0.0
        if self._fade_started is None:
            return OPACITY
        progress = (time.monotonic() - self._fade_started) / FADE_SECONDS
        if progress >= 1.0:
            self._visible = False
            self._fade_started = None
            return 0.0
        return OPACITY * (1.0 - progress)

    def _run(self):
        """Main overlay loop"""
        try:
            import pygame

            pygame.init()

            info = pygame.display.Info()
            screen_w, screen_h = info.current_w, info.current_h
            pos_x, pos_y = corner_position(self._corner, screen_w, screen_h)
            os.environ['SDL_VIDEO_WINDOW_POS'] = f'{pos_x},{pos_y}'

            screen = pygame.display.set_mode((WIDTH, HEIGHT), pygame.NOFRAME)
            pygame.display.set_caption("ClipPop")

            # Window control (position, show/hide, opacity) needs SDL2 bindings
            window = None
            try:
                from pygame._sdl2.video import Window
                window = Window.from_display_module()
                window.hide()
            except Exception as e:
                logger.warning("Overlay window control unavailable: %s", e)

            font = pygame.font.Font(None, 28)
            clock = pygame.time.Clock()
            shown = False
            placed_corner = None
            self._ready.set()

            while self.running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                        break
                    if event.type == pygame.WINDOWENTER and self.on_pointer_enter:
                        self.on_pointer_enter()
                    elif event.type == pygame.WINDOWLEAVE and self.on_pointer_leave:
                        self.on_pointer_leave()

                with self.lock:
                    opacity = self._opacity()
                    frame = (self._theme, self._corner, self._icon, self._message, self._image)

                if window is not None:
                    if frame[1] != placed_corner:
                        window.position = corner_position(frame[1], screen_w, screen_h)
                        placed_corner = frame[1]
                    if opacity > 0 and not shown:
                        window.show()
                        shown = True
                    elif opacity == 0 and shown:
                        window.hide()
                        shown = False
                    if shown:
                        window.opacity = opacity

                if opacity > 0:
                    self._draw(screen, pygame, font, *frame)
                clock.tick(60)

            pygame.quit()

        except Exception as e:
            logger.error("Overlay error: %s", e)
            self._ready.set()

    def _load_image(self, pygame, path):
        if path not in self._image_cache:
            try:
                image = pygame.image.load(path).convert_alpha()
                scale = min(WIDTH / image.get_width(), HEIGHT / image.get_height(), 1.0)
                size = (int(image.get_width() * scale), int(image.get_height() * scale))
                self._image_cache[path] = pygame.transform.smoothscale(image, size)
            except Exception as e:
                logger.warning("Cannot load custom image %s: %s", path, e)
                self._image_cache[path] = None
        return self._image_cache[path]

    def _draw(self, screen, pygame, font, theme, corner, icon, message, image):
        """Draw the rounded card with icon and message, or the custom image"""
        background, foreground, border = THEME_COLORS.get(theme, THEME_COLORS["dark"])
        screen.fill(background)

        if image:
            surface = self._load_image(pygame, image)
            if surface is not None:
                rect = surface.get_rect(center=(WIDTH // 2, HEIGHT // 2))
                screen.blit(surface, rect)
            pygame.display.flip()
            return

        pygame.draw.rect(screen, border, (0, 0, WIDTH, HEIGHT), width=2, border_radius=CORNER_RADIUS)

        if icon:
            self._draw_icon(screen, pygame, icon, foreground, (36, HEIGHT // 2))
        if message:
            text = font.render(message, True, foreground)
            screen.blit(text, text.get_rect(midleft=(64, HEIGHT // 2)))

        pygame.display.flip()

    def _draw_icon(self, screen, pygame, icon, color, center):
        x, y = center
        if icon == "clear":
            pygame.draw.line(screen, color, (x - 9, y - 9), (x + 9, y + 9), 3)
            pygame.draw.line(screen, color, (x - 9, y + 9), (x + 9, y - 9), 3)
        elif icon in ("settings", "power"):
            pygame.draw.circle(screen, color, center, 10, width=3)
        else:
            # Two overlapping sheets
            pygame.draw.rect(screen, color, (x - 10, y - 12, 16, 18), width=2, border_radius=3)
            pygame.draw.rect(screen, color, (x - 5, y - 6, 16, 18), width=2, border_radius=3)
