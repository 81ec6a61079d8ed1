"""
Live preview window.

pygame supplies the display refresh loop and raw input; everything it
learns is written to the driver's ``InputState`` and read back by the next
tick.
"""

import numpy as np
import pygame

from driftcanvas.driver import AnimationDriver


def _blit(screen: pygame.Surface, frame: np.ndarray):
    # pygame uses (width, height) but numpy frames are (height, width)
    surf = pygame.surfarray.make_surface(frame.swapaxes(0, 1))
    screen.blit(surf, (0, 0))


def run_preview(driver: AnimationDriver, fps: int = 60, title: str = "driftcanvas") -> int:
    """
    Run the driver in a resizable window until closed or ESC.

    Returns:
        Number of frames rendered.
    """
    pygame.init()
    try:
        screen = pygame.display.set_mode(driver.surface.size, pygame.RESIZABLE)
        pygame.display.set_caption(f"{title}  -  click to trigger, ESC to quit")
        clock = pygame.time.Clock()
        inputs = driver.inputs
        running = True

        while running:
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT:
                    running = False
                elif ev.type == pygame.KEYDOWN and ev.key == pygame.K_ESCAPE:
                    running = False
                elif ev.type == pygame.MOUSEMOTION:
                    inputs.move_pointer(*ev.pos)
                elif ev.type == pygame.MOUSEBUTTONDOWN:
                    inputs.trigger(*ev.pos)
                elif ev.type == pygame.FINGERDOWN:
                    w, h = driver.surface.size
                    inputs.trigger(ev.x * w, ev.y * h)
                elif ev.type == pygame.FINGERMOTION:
                    # Touch coordinates are normalized
                    w, h = driver.surface.size
                    inputs.move_pointer(ev.x * w, ev.y * h)
                elif ev.type in (pygame.FINGERUP, pygame.WINDOWLEAVE):
                    inputs.leave()
                elif ev.type == pygame.VIDEORESIZE:
                    screen = pygame.display.set_mode(ev.size, pygame.RESIZABLE)
                    inputs.resize(*ev.size)

            driver.tick()
            _blit(screen, driver.surface.to_array())
            pygame.display.flip()
            clock.tick(fps)
    finally:
        pygame.quit()

    return driver.frame_index
