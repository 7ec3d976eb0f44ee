# stickrun/game/game.py
import sys, argparse
import pygame
from pygame import K_SPACE, K_UP, K_ESCAPE, K_RETURN, K_KP_ENTER
from .config import (
    WIDTH, HEIGHT, FPS, GROUND_Y, PLAYER_X,
    COLOR_FG, COLOR_ACCENT, COLOR_DANGER, COLOR_HP, COLOR_ENERGY, COLOR_GOLD,
    MAX_ENERGY,
)
from .highscore import HighScoreStore
from .progression import sky_at
from .simulation import Metrics, Simulation
from .stages import STAGES, DEFAULT_STAGE_ID, StageConfig
from .state import GameState, StageStatus


def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--stage", type=str, default=DEFAULT_STAGE_ID,
                   choices=[s.id for s in STAGES], help="Stage to run.")
    p.add_argument("--seed", type=int, default=None,
                   help="RNG seed for a reproducible run. Omit for a random one.")
    p.add_argument("--debug", action="store_true", help="Print simulation events.")
    p.add_argument("--highscore-file", type=str, default=None,
                   help="Where to keep the best score (default ~/.stickrun/highscore.json).")
    return p.parse_args()


def _blend(a, b, t):
    return tuple(int(x + (y - x) * t) for x, y in zip(a, b))


def draw_sky(screen: pygame.Surface, stage: StageConfig, distance: float):
    """Gradient, sun, moon and skyline lights from the stage timeline."""
    sky = sky_at(stage, distance)
    top, mid, bottom = sky.gradient
    half = GROUND_Y // 2
    for y in range(GROUND_Y):
        color = _blend(top, mid, y / half) if y < half else _blend(mid, bottom, (y - half) / half)
        pygame.draw.line(screen, color, (0, y), (WIDTH, y))

    if sky.sun_y is not None:
        pygame.draw.circle(screen, stage.theme.sun, (WIDTH - 150, int(sky.sun_y)), 30)

    overlay = pygame.Surface((WIDTH, GROUND_Y), pygame.SRCALPHA)
    if sky.moon_y is not None:
        pygame.draw.circle(overlay, (*stage.theme.moon, int(255 * sky.moon_opacity)),
                           (120, int(sky.moon_y)), 22)
    if sky.lights_opacity > 0:
        alpha = int(255 * sky.lights_opacity)
        for i, x in enumerate(range(10, WIDTH, 37)):
            pygame.draw.rect(overlay, (255, 230, 140, alpha), (x, GROUND_Y - 20 - (i * 13) % 40, 4, 6))
    screen.blit(overlay, (0, 0))


def draw_scene(screen: pygame.Surface, state: GameState, stage: StageConfig):
    """World only: sky, ground, finish line, hazards, player, particles."""
    draw_sky(screen, stage, state.distance)
    pygame.draw.rect(screen, stage.theme.ground, (0, GROUND_Y, WIDTH, HEIGHT - GROUND_Y))

    finish_x = int(stage.course_length - state.distance + PLAYER_X)
    if -50 < finish_x < WIDTH + 50:
        pygame.draw.line(screen, COLOR_GOLD, (finish_x, GROUND_Y), (finish_x, GROUND_Y - 100), 4)

    for hz in state.hazards:
        r = hz.rect
        if hz.spec.heals or hz.spec.oscillates:
            pygame.draw.circle(screen, hz.spec.color, r.center, r.width // 2)
        else:
            pygame.draw.rect(screen, hz.spec.color, r)

    color_player = COLOR_DANGER if state.over else COLOR_ACCENT
    pygame.draw.rect(screen, color_player, state.player.rect, width=3)

    for p in state.particles:
        pygame.draw.circle(screen, p.color, (int(p.x), int(p.y)), max(1, int(p.size * p.life)))


def _draw_bar(screen, x, y, w, h, frac, color):
    pygame.draw.rect(screen, (40, 40, 60), (x, y, w, h), border_radius=4)
    pygame.draw.rect(screen, color, (x, y, int(w * max(0.0, min(1.0, frac))), h), border_radius=4)


def draw_hud(screen: pygame.Surface, font, m: Metrics, stage: StageConfig):
    _draw_bar(screen, 12, 12, 140, 12, m.health / max(1, m.max_health), COLOR_HP)
    _draw_bar(screen, 12, 30, 140, 8, m.energy / MAX_ENERGY, COLOR_ENERGY)
    score = font.render(f"{m.score}", True, COLOR_GOLD if m.new_best else COLOR_FG)
    screen.blit(score, (WIDTH - score.get_width() - 12, 10))
    hud = f"{stage.name}   Best: {m.best_score}   {int(m.stage_progress * 100)}%   {m.time_of_day:05.2f}h"
    screen.blit(font.render(hud, True, (160, 180, 210)), (12, 44))


def can_restart(m: Metrics) -> bool:
    """ENTER restarts once the run has ended, by death or by clearing the stage."""
    return m.game_over or m.stage_status is not StageStatus.PLAYING


def run():
    args = parse_args()
    store = HighScoreStore(args.highscore_file) if args.highscore_file else HighScoreStore()

    sim = Simulation(stage_id=args.stage, seed=args.seed,
                     best_score=store.load(), on_new_best=store.save, debug=args.debug)

    pygame.init()
    pygame.display.set_caption("Stickman Runner")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("jetbrainsmono", 16)

    while True:
        dt = clock.tick(FPS) / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if event.key in (K_SPACE, K_UP):
                    sim.request_jump()
                if event.key in (K_RETURN, K_KP_ENTER) and can_restart(sim.metrics):
                    sim.reset(seed=args.seed)
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                sim.request_jump()

        sim.advance_frame(dt)

        # --- Render ---
        state = sim.snapshot()
        m = sim.metrics
        draw_scene(screen, state, sim.stage)
        draw_hud(screen, font, m, sim.stage)

        banner = None
        if not state.started:
            banner = "SPACE to start"
        elif m.game_over:
            banner = f"GAME OVER  score {m.score}  (ENTER to restart)"
        elif m.stage_status is StageStatus.EXHAUSTED:
            banner = "STAGE CLEAR  (ENTER to restart)"
        elif m.stage_status is StageStatus.VICTORY:
            banner = "VICTORY!  (ENTER to restart)"
        if banner:
            txt = font.render(banner, True, COLOR_FG)
            screen.blit(txt, ((WIDTH - txt.get_width()) // 2, HEIGHT // 3))

        pygame.display.flip()


if __name__ == "__main__":
    run()
