# Copyright (C) 2025 Richard Owen
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""Optional pygame view of the goalie scene."""
import threading
from typing import Callable, Optional, Tuple

try:
    import pygame
except Exception:
    pygame = None

from netminder.engine.curves import BezierCurve
from netminder.engine.physics import Vector2D
from netminder.engine.simulation import GoalieSimulation

# World units shown around the zone of relevance.
VIEW_MARGIN = 6.0


def world_to_screen(
    pos: Vector2D,
    half_width: float,
    half_height: float,
    screen_size: Tuple[int, int],
) -> Tuple[int, int]:
    """Map a world position to pixel coordinates with ``+y`` pointing up.

    Parameters
    ----------
    pos : Vector2D
        World position.
    half_width : float
        Half the visible world width.
    half_height : float
        Half the visible world height.
    screen_size : Tuple[int, int]
        Window size in pixels.

    Returns
    -------
    Tuple[int, int]
        Pixel coordinates.
    """
    w, h = screen_size
    sx = int((pos.x + half_width) / (2 * half_width) * w)
    sy = int((half_height - pos.y) / (2 * half_height) * h)
    return sx, sy


def start_visualizer(
    sim: GoalieSimulation,
    screen_size: Tuple[int, int] = (480, 800),
    fps: int = 30,
    start_callback: Optional[Callable[[], Optional[threading.Thread]]] = None,
) -> None:
    """Start a pygame window that draws the zone, agents, targets and lane.

    If ``pygame`` is not installed the function returns immediately.

    Parameters
    ----------
    sim : GoalieSimulation
        Running simulation whose state is drawn; only read.
    screen_size : Tuple[int, int]
        Initial window size in pixels.
    fps : int
        Frame rate cap.
    start_callback : Callable[[], threading.Thread | None] | None
        Called when Start is clicked; may return the thread running the loop.
    """
    if pygame is None:
        return

    pygame.init()
    screen = pygame.display.set_mode(screen_size, pygame.RESIZABLE)
    pygame.display.set_caption("Netminder")
    clock = pygame.time.Clock()

    PITCH = (38, 160, 72)
    LINE = (245, 245, 245)
    BALL = (245, 245, 245)
    FORECAST = (250, 250, 100)
    GOALIE = (30, 90, 200)
    OPPONENT = (200, 30, 30)
    TEAMMATE = (120, 170, 255)
    GOAL = (250, 250, 100)
    LANE = (255, 215, 0)
    TEXT = (20, 20, 20)

    font = pygame.font.SysFont(None, 18)
    zone = sim.config.zone
    half_w = zone.half_width + VIEW_MARGIN
    half_h = zone.half_height + VIEW_MARGIN

    button_w, button_h = 120, 32
    start_text = font.render("Start", True, (255, 255, 255))
    stop_text = font.render("Stop", True, (255, 255, 255))
    engine_thread: Optional[threading.Thread] = None
    running = True

    while running:
        button_rect = pygame.Rect(screen_size[0] - button_w - 10, 10, button_w, button_h)
        for event in pygame.event.get():
            if event.type == pygame.QUIT or (event.type == pygame.KEYDOWN and event.key == pygame.K_q):
                sim.is_running = False
                running = False
            elif event.type == pygame.VIDEORESIZE:
                screen_size = (event.w, event.h)
                screen = pygame.display.set_mode(screen_size, pygame.RESIZABLE)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and button_rect.collidepoint(event.pos):
                if sim.is_running:
                    sim.is_running = False
                elif start_callback:
                    started = start_callback()
                    if isinstance(started, threading.Thread):
                        engine_thread = started
                else:
                    engine_thread = threading.Thread(target=sim.start)
                    engine_thread.start()

        def w2s(pos: Vector2D) -> Tuple[int, int]:
            """World -> screen mapper bound to the current window size."""
            return world_to_screen(pos, half_w, half_h, screen_size)

        screen.fill(PITCH)

        zone_tl = w2s(Vector2D(-zone.half_width, zone.half_height))
        zone_br = w2s(Vector2D(zone.half_width, -zone.half_height))
        pygame.draw.rect(screen, LINE, (*zone_tl, zone_br[0] - zone_tl[0], zone_br[1] - zone_tl[1]), 2)

        state = sim.state
        decision = sim.engine.last_decision

        pygame.draw.circle(screen, GOAL, w2s(state.shoot_target), 8, 2)
        pygame.draw.circle(screen, TEAMMATE, w2s(state.pass_target), 9)

        if decision is not None and decision.is_intercepting and decision.path_origin is not None:
            lane = BezierCurve.cubic(decision.path_origin, decision.target)
            points = [w2s(p) for p in lane.sample(sim.config.clearance.sample_count)]
            pygame.draw.lines(screen, LANE, False, points, 2)

        if decision is not None and decision.forecast is not None and decision.forecast.is_finite():
            pygame.draw.circle(screen, FORECAST, w2s(decision.forecast), 5, 1)

        pygame.draw.circle(screen, OPPONENT, w2s(state.opponent.position), 10)
        pygame.draw.circle(screen, GOALIE, w2s(sim.engine.position), 10)
        pygame.draw.circle(screen, BALL, w2s(state.ball.position), 6)

        status = decision.state if decision is not None else "waiting"
        screen.blit(font.render(f"Tick {state.ticks} | {status}", True, TEXT), (10, 10))
        screen.blit(font.render(f"Time: {state.sim_time:.1f}s", True, TEXT), (10, 30))

        pygame.draw.rect(screen, (180, 50, 50) if sim.is_running else (70, 160, 70), button_rect, border_radius=6)
        label = stop_text if sim.is_running else start_text
        screen.blit(
            label,
            (
                button_rect.x + (button_rect.w - label.get_width()) // 2,
                button_rect.y + (button_rect.h - label.get_height()) // 2,
            ),
        )

        pygame.display.flip()
        clock.tick(fps)

    if engine_thread is not None and engine_thread.is_alive():
        engine_thread.join(timeout=3.0)
    pygame.quit()
