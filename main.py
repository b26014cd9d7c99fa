import argparse
import dataclasses
import logging
import math

import pygame
import numpy as np

import config
from physlab.demos import available_demos, get_demo
from physlab.demos.pendulum import bob_position
from physlab.demos.projectile import preview_path
from physlab.loop import RunStatus, SimulationLoop
from physlab.scheduler import FrameScheduler
from physlab.units import m_to_px

logger = logging.getLogger(__name__)


class Camera:
    """월드(m) <-> 화면(px) 변환. zoom 은 고정 px/m 배율"""
    def __init__(self, center=(0.0, 0.0), zoom=config.PIXELS_PER_METER):
        self.center = np.array(center, dtype=float)
        self.zoom = float(zoom)

    def world_to_screen(self, p_xy, screen_wh):
        W, H = screen_wh
        x, y = float(p_xy[0]), float(p_xy[1])
        sx = W / 2 + m_to_px(x - self.center[0], self.zoom)
        sy = H / 2 - m_to_px(y - self.center[1], self.zoom)
        return int(sx), int(sy)

    def length(self, meters):
        return max(1, int(m_to_px(meters, self.zoom)))


def draw_text(screen, font, x, y, s, color=(220, 220, 220)):
    surf = font.render(s, True, color)
    screen.blit(surf, (x, y))
    return y + surf.get_height() + 2


def draw_ground(screen, cam, wh, y=0.0, color=(120, 190, 120)):
    W, _ = wh
    _, sy = cam.world_to_screen((0.0, y), wh)
    pygame.draw.line(screen, color, (0, sy), (W, sy), 2)


def draw_path(screen, cam, wh, points, color=(80, 200, 255)):
    if len(points) < 2:
        return
    pts = [cam.world_to_screen(p, wh) for p in points]
    pygame.draw.lines(screen, color, False, pts, 1)


# -------- per-demo draw --------
def draw_drop(screen, cam, loop, wh):
    p = loop.params
    draw_ground(screen, cam, wh)
    c = cam.world_to_screen((0.0, loop.state.x), wh)
    pygame.draw.circle(screen, (235, 235, 235), c, cam.length(p.radius), width=2)


def draw_spring(screen, cam, loop, wh):
    x = loop.state.x
    wall_x, box_w = -3.0, 0.4
    top = cam.world_to_screen((wall_x, 0.6), wh)
    bottom = cam.world_to_screen((wall_x, -0.6), wh)
    pygame.draw.line(screen, (120, 190, 120), top, bottom, 3)
    # 코일
    n = 12
    xs = np.linspace(wall_x, x - box_w / 2, n * 2 + 1)
    pts = [cam.world_to_screen((xi, 0.15 * (1 if i % 2 else -1) if 0 < i < len(xs) - 1 else 0.0), wh) for i, xi in enumerate(xs)]
    pygame.draw.lines(screen, (200, 200, 80), False, pts, 2)
    tl = cam.world_to_screen((x - box_w / 2, box_w / 2), wh)
    pygame.draw.rect(screen, (200, 200, 200), (tl[0], tl[1], cam.length(box_w), cam.length(box_w)), width=2)
    c = cam.world_to_screen((0.0, -0.5), wh)
    pygame.draw.line(screen, (110, 110, 130), (c[0], c[1] - 5), (c[0], c[1] + 5), 1)
    if loop.trajectory is not None and len(loop.trajectory) > 1:
        # 변위-시간 그래프 (아래쪽)
        window = loop.trajectory.recent(config.Display.GRAPH_WINDOW)
        t0 = window[0][0]
        pts = [(wall_x + (t - t0), -1.5 + 0.5 * float(p[0])) for t, p in window]
        draw_path(screen, cam, wh, pts)


def draw_gravity_pair(screen, cam, loop, wh):
    p, s = loop.params, loop.state
    if loop.trajectory is not None and len(loop.trajectory) > 1:
        pos = loop.trajectory.positions()
        draw_path(screen, cam, wh, pos[:, 0, :], (255, 180, 80))
        draw_path(screen, cam, wh, pos[:, 1, :], (80, 200, 255))
    pygame.draw.circle(screen, (255, 200, 120), cam.world_to_screen(s.r1, wh), cam.length(p.radius1), width=2)
    pygame.draw.circle(screen, (140, 210, 255), cam.world_to_screen(s.r2, wh), cam.length(p.radius2), width=2)


def draw_pendulum(screen, cam, loop, wh):
    pivot = cam.world_to_screen((0.0, 1.0), wh)
    bx, by = bob_position(loop.state, loop.params)
    bob = cam.world_to_screen((bx, 1.0 + by), wh)
    pygame.draw.line(screen, (200, 200, 80), pivot, bob, 2)
    pygame.draw.circle(screen, (110, 110, 130), pivot, 4)
    pygame.draw.circle(screen, (235, 235, 235), bob, 12, width=2)


def draw_friction_slide(screen, cam, loop, wh):
    p = loop.params
    draw_ground(screen, cam, wh)
    for wx in (0.0, p.track_length):
        pygame.draw.line(screen, (120, 190, 120), cam.world_to_screen((wx, 0.0), wh), cam.world_to_screen((wx, 1.5), wh), 3)
    tl = cam.world_to_screen((loop.state.x - p.box.half_width(), p.box.h), wh)
    pygame.draw.rect(screen, (200, 200, 200), (tl[0], tl[1], cam.length(p.box.w), cam.length(p.box.h)), width=2)


def draw_projectile(screen, cam, loop, wh):
    draw_ground(screen, cam, wh)
    if loop.status is RunStatus.IDLE:
        draw_path(screen, cam, wh, preview_path(loop.params), (110, 110, 130))
        start = loop.state.position
        tip = start + 0.1 * loop.state.velocity
        pygame.draw.line(screen, (255, 80, 80), cam.world_to_screen(start, wh), cam.world_to_screen(tip, wh), 2)
    if loop.trajectory is not None and len(loop.trajectory) > 1:
        draw_path(screen, cam, wh, loop.trajectory.positions())
    pygame.draw.circle(screen, (235, 235, 235), cam.world_to_screen(loop.state.position, wh), 6, width=2)


DRAW = {
    "drop": draw_drop,
    "spring": draw_spring,
    "gravity_pair": draw_gravity_pair,
    "pendulum": draw_pendulum,
    "friction_slide": draw_friction_slide,
    "projectile": draw_projectile,
}

# 카메라 중심 [m]
CENTER = {
    "drop": (0.0, 2.5),
    "spring": (0.0, -0.5),
    "gravity_pair": (0.0, 0.0),
    "pendulum": (0.0, 0.0),
    "friction_slide": (10.0, 1.0),
    "projectile": (20.0, 8.0),
}

# 위/아래 화살표로 조절하는 대표 파라미터 (필드, 증감량)
KNOB = {
    "drop": ("height", 0.25),
    "spring": ("displacement", 0.1),
    "gravity_pair": ("separation", 0.25),
    "pendulum": ("angle", 5.0),
    "friction_slide": ("velocity", 0.5),
    "projectile": ("angle", 5.0),
}


def format_metric(value):
    if isinstance(value, (float, np.floating)):
        return "inf" if math.isinf(value) else f"{value:.3f}"
    if isinstance(value, (tuple, list, np.ndarray)):
        return "(" + ", ".join(f"{float(v):.3f}" for v in value) + ")"
    return str(value)


def nudge(loop, field, delta):
    value = getattr(loop.params, field) + delta
    loop.update_parameters(dataclasses.replace(loop.params, **{field: value}))


def parse_args():
    parser = argparse.ArgumentParser(description="Educational physics demos")
    parser.add_argument("--demo", "-d", choices=available_demos(), default="drop")
    parser.add_argument("--scale", type=float, default=None, help="pixels per meter")
    parser.add_argument("--width", type=int, default=1280)
    parser.add_argument("--height", type=int, default=720)
    parser.add_argument("--fps", type=int, default=60)
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser.parse_args()


def main():
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s")

    demo = get_demo(args.demo)
    scheduler = FrameScheduler()
    loop = SimulationLoop(demo, scheduler=scheduler)

    zoom = args.scale
    if zoom is None:
        zoom = {"projectile": 10.0, "friction_slide": 50.0}.get(args.demo, config.PIXELS_PER_METER)
    cam = Camera(center=CENTER[args.demo], zoom=zoom)
    logger.info(f"running {demo!r} at {zoom:.1f} px/m")

    pygame.init()
    W, H = args.width, args.height
    screen = pygame.display.set_mode((W, H))
    pygame.display.set_caption(f"physlab - {demo.name}")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("consolas", 18)

    running = True
    while running:
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                running = False
            elif ev.type == pygame.KEYDOWN:
                if ev.key == pygame.K_ESCAPE:
                    running = False
                elif ev.key == pygame.K_SPACE:
                    if loop.running:
                        loop.stop()
                    else:
                        loop.start()
                elif ev.key == pygame.K_r:
                    loop.reset()
                elif ev.key in (pygame.K_UP, pygame.K_DOWN):
                    field, step = KNOB[demo.name]
                    nudge(loop, field, step if ev.key == pygame.K_UP else -step)

        # -------- simulate --------
        scheduler.run_frame()

        # -------- render --------
        screen.fill((18, 18, 22))
        DRAW[demo.name](screen, cam, loop, (W, H))

        # -------- HUD --------
        y = 8
        field, _ = KNOB[demo.name]
        y = draw_text(screen, font, 10, y, f"{demo.name}: {loop.status.value}  Start/Stop[SPACE] Reset[R] {field}[UP/DOWN]={getattr(loop.params, field):.2f}")
        if loop.last_event is not None:
            y = draw_text(screen, font, 10, y, f"last event: {loop.last_event.kind.value} {loop.last_event.detail}")
        for name, value in loop.metrics().items():
            y = draw_text(screen, font, 10, y, f"{name:>18}: {format_metric(value)}")

        pygame.display.flip()
        clock.tick(args.fps)

    pygame.quit()


if __name__ == "__main__":
    main()
