"""Configuration dataclasses for the universe simulation."""
from __future__ import annotations

from dataclasses import dataclass

from .errors import ConfigError

ATTRACTION_POLICIES = ("sequential", "last_closer", "nearest")
# "nearest" is accepted for the global-nearest reading; it is the sequential scan
POLICY_ALIASES = {"nearest": "sequential"}
PHASE_SEED_MODES = ("stable", "index")


@dataclass(frozen=True)
class SimCfg:
    tick_ms: float = 20.0
    base_orbit_radius: float = 70.0
    orbit_min_factor: float = 0.7
    orbit_max_factor: float = 1.2
    speed_min: float = 0.01
    speed_max: float = 0.06
    initial_planets: int = 3
    initial_satellites: int = 10
    satellites_per_spawn: int = 5
    initial_planet_radius: float = 10.0
    min_planet_radius: float = 2.0
    radius_easing: float = 0.025
    hit_margin: float = 10.0
    attraction_policy: str = "sequential"
    phase_seed: str = "stable"
    max_catchup_ticks: int = 5
    log_every_ticks: int = 10

    @property
    def tick_seconds(self) -> float:
        return self.tick_ms / 1000.0

    @property
    def orbit_radius_range(self) -> tuple[float, float]:
        return (
            self.base_orbit_radius * self.orbit_min_factor,
            self.base_orbit_radius * self.orbit_max_factor,
        )

    def validate(self) -> "SimCfg":
        """Return ``self`` or raise :class:`ConfigError` describing the first problem."""

        if self.tick_ms <= 0.0:
            raise ConfigError(f"tick_ms must be positive, got {self.tick_ms}")
        if not 0.0 < self.speed_min <= self.speed_max:
            raise ConfigError(
                f"speed range must satisfy 0 < min <= max, got [{self.speed_min}, {self.speed_max}]"
            )
        if self.orbit_min_factor > self.orbit_max_factor:
            raise ConfigError("orbit_min_factor must not exceed orbit_max_factor")
        if self.initial_planets < 1:
            raise ConfigError("at least one planet must be seeded")
        if self.initial_satellites < 0 or self.satellites_per_spawn < 0:
            raise ConfigError("satellite counts must not be negative")
        if self.min_planet_radius <= 0.0:
            raise ConfigError("min_planet_radius must be positive")
        if not 0.0 < self.radius_easing <= 1.0:
            raise ConfigError("radius_easing must lie in (0, 1]")
        if self.attraction_policy not in ATTRACTION_POLICIES:
            raise ConfigError(
                f"unknown attraction policy {self.attraction_policy!r}; "
                f"expected one of {', '.join(ATTRACTION_POLICIES)}"
            )
        if self.phase_seed not in PHASE_SEED_MODES:
            raise ConfigError(
                f"unknown phase seed mode {self.phase_seed!r}; "
                f"expected one of {', '.join(PHASE_SEED_MODES)}"
            )
        if self.max_catchup_ticks < 1:
            raise ConfigError("max_catchup_ticks must be at least 1")
        if self.log_every_ticks < 1:
            raise ConfigError("log_every_ticks must be at least 1")
        return self


@dataclass(frozen=True)
class GlowStyle:
    color: tuple[int, int, int]
    blur: int


@dataclass(frozen=True)
class RenderCfg:
    width: int = 1000
    height: int = 800
    windowed_default_size: tuple[int, int] = (1000, 800)
    background_color: tuple[int, int, int] = (18, 18, 18)
    planet_color: tuple[int, int, int] = (100, 120, 230)
    planet_glow: GlowStyle = GlowStyle(color=(100, 120, 230), blur=20)
    seeded_satellite_color: tuple[int, int, int] = (255, 255, 255)
    spawned_satellite_color: tuple[int, int, int] = (234, 234, 234)
    satellite_glow: GlowStyle = GlowStyle(color=(255, 255, 255), blur=10)
    glow_outer_alpha: int = 60
    glow_inner_alpha: int = 120
    hud_text_color: tuple[int, int, int] = (234, 241, 255)
    hud_background_color: tuple[int, int, int, int] = (12, 18, 30, int(255 * 0.45))
    hud_margin: int = 12
    fps_cap: int = 60


SIM_CFG = SimCfg()
RENDER_CFG = RenderCfg()


__all__ = [
    "ATTRACTION_POLICIES",
    "GlowStyle",
    "PHASE_SEED_MODES",
    "POLICY_ALIASES",
    "RENDER_CFG",
    "RenderCfg",
    "SIM_CFG",
    "SimCfg",
]
