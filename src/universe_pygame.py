# src/universe_pygame.py
"""Universe - interactive planets and satellites.

Click empty space to spawn planets (hold to keep spawning), drag planets to
move them, and watch each planet grow or shrink with the satellites it steals.
"""
from __future__ import annotations

import argparse
import dataclasses
import logging
import random
import sys

import pygame

from universe_sim.core.config import RENDER_CFG, SIM_CFG, RenderCfg, SimCfg
from universe_sim.core.errors import ConfigError
from universe_sim.core.logging_utils import RunLogger, event_row, sample_row
from universe_sim.core.scene import build_drawables
from universe_sim.core.simulation import SimState, TickReport, advance, seed_state
from universe_sim.core.timekeeping import FrameTimer, TickAccumulator
from universe_sim.data.scenarios import DEFAULT_SCENARIO_KEY, SCENARIOS, Scenario
from universe_sim.render import GlowLibrary, build_text_panel, draw_scene, hud_lines, load_font

logger = logging.getLogger("universe")

CODE_VERSION = "universe v1.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Interactive planets and satellites.")
    parser.add_argument(
        "--scenario",
        choices=sorted(SCENARIOS),
        default=DEFAULT_SCENARIO_KEY,
        help="Seeding preset (default: %(default)s)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible runs")
    parser.add_argument("--width", type=int, default=RENDER_CFG.width)
    parser.add_argument("--height", type=int, default=RENDER_CFG.height)
    parser.add_argument("--tick-ms", type=float, default=SIM_CFG.tick_ms, help="Tick period in milliseconds")
    parser.add_argument(
        "--attraction",
        default=SIM_CFG.attraction_policy,
        help="Reassignment policy: sequential, last_closer or nearest (same as sequential)",
    )
    parser.add_argument(
        "--phase-seed",
        default=SIM_CFG.phase_seed,
        help="Orbit phase seed: stable (per satellite) or index (sequence position)",
    )
    parser.add_argument("--runs-dir", default="data/runs", help="Where run logs are written")
    parser.add_argument("--no-log", action="store_true", help="Disable CSV run logging")
    parser.add_argument("--headless", action="store_true", help="Run without a window")
    parser.add_argument("--ticks", type=int, default=1000, help="Ticks to run in headless mode")
    parser.add_argument("--check", action="store_true", help="Verify entity invariants every tick")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug level diagnostics")
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def config_from_args(args: argparse.Namespace) -> tuple[SimCfg, RenderCfg]:
    sim_cfg = dataclasses.replace(
        SIM_CFG,
        tick_ms=args.tick_ms,
        attraction_policy=args.attraction,
        phase_seed=args.phase_seed,
    ).validate()
    if args.width <= 0 or args.height <= 0:
        raise ConfigError(f"window size must be positive, got {args.width}x{args.height}")
    render_cfg = dataclasses.replace(
        RENDER_CFG,
        width=args.width,
        height=args.height,
        windowed_default_size=(args.width, args.height),
    )
    return sim_cfg, render_cfg


class Session:
    """One seeded simulation plus its run log, shared by windowed and headless runs."""

    def __init__(
        self,
        scenario: Scenario,
        size: tuple[int, int],
        *,
        sim_cfg: SimCfg,
        seed: int | None,
        runs_dir: str | None,
        check: bool = False,
    ) -> None:
        self.scenario = scenario
        self.sim_cfg = sim_cfg
        self.seed = seed
        self.run_seed = seed
        self._seed_source = random.Random(seed)
        self.runs_dir = runs_dir
        self.check = check
        self.run_logger: RunLogger | None = None
        self.state: SimState = self._seed(size)
        self._reassigned_since_sample = 0

    def _seed(self, size: tuple[int, int]) -> SimState:
        self.close_log()
        rng = random.Random(self.run_seed)
        state = seed_state(
            size,
            planets=self.scenario.planets,
            satellites=self.scenario.satellites,
            cfg=self.sim_cfg,
            rng=rng,
        )
        if self.runs_dir is not None:
            self.run_logger = RunLogger(self.runs_dir)
            self.run_logger.write_meta(
                {
                    "scenario_key": self.scenario.key,
                    "scenario_name": self.scenario.name,
                    "planets": self.scenario.planets,
                    "satellites": self.scenario.satellites,
                    "seed": self.run_seed,
                    "base_seed": self.seed,
                    "width": size[0],
                    "height": size[1],
                    "tick_ms": self.sim_cfg.tick_ms,
                    "attraction_policy": self.sim_cfg.attraction_policy,
                    "phase_seed": self.sim_cfg.phase_seed,
                    "log_every_ticks": self.sim_cfg.log_every_ticks,
                    "code_version": CODE_VERSION,
                }
            )
            self.run_logger.log_ts(sample_row(state, 0, self.sim_cfg.tick_seconds))
            logger.info("Logging run %s", self.run_logger.run_dir)
        self._reassigned_since_sample = 0
        return state

    def reseed(self) -> None:
        """Start a new universe from the next seed drawn off the base seed."""

        self.run_seed = self._seed_source.randrange(2**32)
        logger.info("Reseeding with seed %d", self.run_seed)
        self.state = self._seed(self.state.bounds)

    def step(self) -> TickReport:
        report = advance(self.state, self.sim_cfg)
        if self.check:
            self.state.store.check_invariants()
        self._reassigned_since_sample += report.reassigned
        if self.run_logger is not None:
            for event in report.events:
                self.run_logger.log_event(event_row(report.tick, event))
            if report.tick % self.sim_cfg.log_every_ticks == 0:
                self.run_logger.log_ts(
                    sample_row(self.state, self._reassigned_since_sample, self.sim_cfg.tick_seconds)
                )
                self._reassigned_since_sample = 0
        return report

    def close_log(self) -> None:
        if self.run_logger is not None:
            self.run_logger.close()
            self.run_logger = None


def run_headless(session: Session, ticks: int) -> None:
    for _ in range(ticks):
        session.step()
    store = session.state.store
    logger.info(
        "Finished %d ticks: %d planets, %d satellites",
        ticks,
        len(store.planets()),
        len(store.satellites()),
    )


def _set_display_mode_with_vsync(size: tuple[int, int], flags: int = 0) -> pygame.Surface:
    """Create the display surface with double buffering and vsync when available."""

    flags |= pygame.DOUBLEBUF
    try:
        return pygame.display.set_mode(size, flags, vsync=1)
    except pygame.error:
        # some platforms reject the vsync request
        return pygame.display.set_mode(size, flags)


def handle_event(session: Session, event: pygame.event.Event) -> bool:
    """Route one pygame event to the controller. Returns ``False`` to quit."""

    controller = session.state.controller
    if event.type == pygame.QUIT:
        return False
    if event.type == pygame.MOUSEMOTION:
        controller.on_pointer_move(*event.pos)
    elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        controller.on_pointer_down(*event.pos)
    elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
        controller.on_pointer_up()
    elif event.type == pygame.VIDEORESIZE:
        controller.on_resize(*event.size)
    elif event.type == pygame.WINDOWSIZECHANGED:
        controller.on_resize(event.x, event.y)
    elif event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            return False
        if event.key == pygame.K_r:
            session.reseed()
    return True


def run_window(session: Session, render_cfg: RenderCfg) -> None:
    pygame.init()
    pygame.display.set_caption("Universe")
    screen = _set_display_mode_with_vsync(render_cfg.windowed_default_size, pygame.RESIZABLE)
    clock = pygame.time.Clock()
    font = load_font(["consolas", "dejavusansmono", "couriernew"], 14)
    glows = GlowLibrary(
        outer_alpha=render_cfg.glow_outer_alpha,
        inner_alpha=render_cfg.glow_inner_alpha,
    )
    show_hud = True

    stepper = TickAccumulator(
        period=session.sim_cfg.tick_seconds,
        max_catchup=session.sim_cfg.max_catchup_ticks,
    )
    frame_timer = FrameTimer()

    running = True
    try:
        while running:
            for event in pygame.event.get():
                if event.type == pygame.KEYDOWN and event.key == pygame.K_h:
                    show_hud = not show_hud
                    continue
                if event.type == pygame.VIDEORESIZE:
                    screen = _set_display_mode_with_vsync(event.size, pygame.RESIZABLE)
                elif event.type == pygame.WINDOWSIZECHANGED:
                    screen = pygame.display.get_surface()
                if not handle_event(session, event):
                    running = False
                    break

            stepper.accrue(frame_timer.tick())
            for _ in range(stepper.consume()):
                session.step()

            draw_scene(
                screen,
                build_drawables(session.state, render_cfg),
                render_cfg=render_cfg,
                glows=glows,
            )
            if show_hud:
                store = session.state.store
                lines = hud_lines(
                    planets=len(store.planets()),
                    satellites=len(store.satellites()),
                    tick=session.state.tick,
                    fps=clock.get_fps(),
                    scenario_name=session.scenario.name,
                )
                panel = build_text_panel(
                    font,
                    [(line, render_cfg.hud_text_color) for line in lines],
                    background_color=render_cfg.hud_background_color,
                )
                screen.blit(panel, (render_cfg.hud_margin, render_cfg.hud_margin))
            pygame.display.flip()
            clock.tick(render_cfg.fps_cap)
    finally:
        if stepper.dropped:
            logger.info("Dropped %d ticks the window could not keep up with", stepper.dropped)
        pygame.quit()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    try:
        sim_cfg, render_cfg = config_from_args(args)
    except ConfigError as err:
        parser.error(str(err))

    session = Session(
        SCENARIOS[args.scenario],
        (render_cfg.width, render_cfg.height),
        sim_cfg=sim_cfg,
        seed=args.seed,
        runs_dir=None if args.no_log else args.runs_dir,
        check=args.check,
    )
    try:
        if args.headless:
            run_headless(session, args.ticks)
        else:
            run_window(session, render_cfg)
    finally:
        session.close_log()
    return 0


if __name__ == "__main__":
    sys.exit(main())
