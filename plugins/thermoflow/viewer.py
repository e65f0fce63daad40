"""
Interactive Pygame Viewer for Heat Diffusion

Draws the simulated field scaled to the canvas, forwards pointer
strokes to the heat brush, and hosts the control panel (physics and
brush sliders, palette selector, run/pause/reset, stats chart).

Controls:
  SPACE       Pause / Resume
  R           Reset field and stats history
  TAB         Toggle control panel
  S           Save screenshot
  H           Toggle HUD overlay
  1-4         Select palette
  Q / ESC     Quit
  Mouse L     Inject heat (click or drag on the canvas)
"""

import os
import time
import numpy as np
import pygame

from .simulator import HeatSimulator, StatsHistory
from .colormaps import PALETTE_ORDER, DEFAULT_PALETTE
from .presets import DEFAULT_CONFIG, SLIDER_DEFS, clamp_config
from .controls import ControlPanel, THEME


PANEL_WIDTH = 300
INT_PARAMS = ("iterations_per_frame",)


def display_to_grid(px, py, display_w, display_h, resolution):
    """Convert canvas pixel coordinates to fractional grid (x, y)."""
    return px * resolution / display_w, py * resolution / display_h


class Viewer:
    def __init__(self, width=600, height=600, config=DEFAULT_CONFIG,
                 palette=DEFAULT_PALETTE):
        self.canvas_w = width
        self.canvas_h = height
        self.panel_visible = True
        self.show_hud = True
        self.running = True
        self.fps_history = []

        self.config = clamp_config(config)
        self.history = StatsHistory()
        self.sim = HeatSimulator(self.config, palette,
                                 on_stats=self.history.append,
                                 on_reset=self.history.clear)

        # Built after pygame.init in run()
        self.panel = None
        self.sliders = {}
        self.run_button = None
        self.palette_selector = None

    @property
    def total_w(self):
        return self.canvas_w + (PANEL_WIDTH if self.panel_visible else 0)

    @property
    def paused(self):
        return not self.sim.running

    # -----------------------------------------------------------------------
    # Panel and callbacks
    # -----------------------------------------------------------------------

    def _build_panel(self):
        panel = ControlPanel(self.canvas_w, 0, PANEL_WIDTH, self.canvas_h)
        self.sliders = {}

        self.run_button, _ = panel.add_buttons([
            ("Pause", self._on_toggle_run, THEME["pause"]),
            ("Reset", self._on_reset, None),
        ])
        self._sync_run_button()

        section = None
        for sdef in SLIDER_DEFS:
            if sdef["section"] != section:
                section = sdef["section"]
                panel.add_section(section)
            self.sliders[sdef["key"]] = panel.add_slider(
                sdef["label"], sdef["min"], sdef["max"],
                getattr(self.config, sdef["key"]),
                fmt=sdef["fmt"], step=sdef["step"],
                on_change=self._make_param_callback(sdef["key"]),
            )

        panel.add_section("VISUALIZATION")
        self.palette_selector = panel.add_palette_selector(
            PALETTE_ORDER, selected=PALETTE_ORDER.index(self.sim.palette),
            on_select=self._on_palette_select,
        )

        panel.add_section("STATS")
        panel.add_chart(self.history)
        self.panel = panel

    def _make_param_callback(self, key):
        def callback(val):
            if key in INT_PARAMS:
                val = int(val)
            self.config = clamp_config(self.config.replace(**{key: val}))
        return callback

    def _sync_run_button(self):
        if self.run_button is None:
            return
        if self.sim.running:
            self.run_button.label, self.run_button.color = "Pause", THEME["pause"]
        else:
            self.run_button.label, self.run_button.color = "Run", THEME["run"]

    def _on_toggle_run(self):
        self.sim.running = not self.sim.running
        self._sync_run_button()

    def _on_reset(self):
        self.sim.reset()
        print("[Heat] Field reset")

    def _on_palette_select(self, name):
        self.sim.set_palette(name)

    def _select_palette_index(self, idx):
        if idx < len(PALETTE_ORDER):
            self.sim.set_palette(PALETTE_ORDER[idx])
            if self.palette_selector:
                self.palette_selector.select(idx)

    # -----------------------------------------------------------------------
    # Input
    # -----------------------------------------------------------------------

    def _on_canvas(self, pos):
        return 0 <= pos[0] < self.canvas_w and 0 <= pos[1] < self.canvas_h

    def _handle_pointer(self, event):
        """One brush injection per press or held-drag event on the canvas."""
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            pressed = True
        elif event.type == pygame.MOUSEMOTION:
            pressed = bool(event.buttons[0])
        else:
            pressed = False
        if pressed and self._on_canvas(event.pos):
            x, y = display_to_grid(event.pos[0], event.pos[1],
                                   self.canvas_w, self.canvas_h,
                                   self.sim.field.resolution)
            self.sim.inject(x, y)
            return True
        return False

    def _handle_keydown(self, event):
        key = event.key
        if key in (pygame.K_q, pygame.K_ESCAPE):
            self.running = False
        elif key == pygame.K_SPACE:
            self._on_toggle_run()
        elif key == pygame.K_r:
            self._on_reset()
        elif key == pygame.K_h:
            self.show_hud = not self.show_hud
        elif key == pygame.K_TAB:
            self.panel_visible = not self.panel_visible
            pygame.display.set_mode((self.total_w, self.canvas_h))
        elif key == pygame.K_s:
            self._save_screenshot()
        elif pygame.K_1 <= key <= pygame.K_9:
            self._select_palette_index(key - pygame.K_1)

    # -----------------------------------------------------------------------
    # Drawing
    # -----------------------------------------------------------------------

    def _render_surface(self, pixels):
        # pygame surfaces are indexed (x, y); the field is (row, col)
        rgb = np.ascontiguousarray(pixels[:, :, :3].swapaxes(0, 1))
        return pygame.surfarray.make_surface(rgb)

    def _draw_hud(self, screen, fps):
        if not self.show_hud:
            return
        stats = self.sim.last_stats
        res = self.sim.field.resolution
        line = (f"{self.sim.palette}  |  It: {stats.iteration:,}  |  "
                f"Max: {stats.max_temp:.3f}  Avg: {stats.avg_temp:.4f}  "
                f"Total: {stats.total_energy:.1f}  |  {res}x{res}  |  FPS: {fps:.0f}")
        if self.paused:
            line = "[PAUSED]  " + line

        bg = pygame.Surface((self.canvas_w, 24), pygame.SRCALPHA)
        bg.fill((0, 0, 0, 140))
        screen.blit(bg, (0, 0))
        screen.blit(self.hud_font.render(line, True, THEME["text_bright"]), (10, 6))

    def _save_screenshot(self):
        screenshots_dir = os.path.join(
            os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))),
            "screenshots"
        )
        os.makedirs(screenshots_dir, exist_ok=True)
        timestamp = time.strftime("%Y%m%d_%H%M%S")
        path = os.path.join(screenshots_dir, f"heat_{self.sim.palette.lower()}_{timestamp}.png")
        surface = self._render_surface(self.sim.pixels)
        pygame.image.save(surface, path)
        print(f"[Heat] Screenshot saved: {path}")

    # -----------------------------------------------------------------------
    # Main loop
    # -----------------------------------------------------------------------

    def run(self):
        pygame.init()
        screen = pygame.display.set_mode((self.total_w, self.canvas_h))
        pygame.display.set_caption("ThermoFlow - Interactive Heat Equation")
        clock = pygame.time.Clock()

        self.hud_font = pygame.font.SysFont("menlo", 13)
        self.panel_font = pygame.font.SysFont("menlo", 12)
        self._build_panel()

        while self.running:
            frame_start = time.time()

            # Interaction applies to the current buffer before this tick's steps
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.KEYDOWN:
                    self._handle_keydown(event)
                elif self.panel_visible and self.panel and self.panel.handle_event(event):
                    continue
                elif hasattr(event, "pos"):
                    self._handle_pointer(event)

            pixels = self.sim.tick(self.config)

            screen.fill(THEME["bg"])
            sim_surface = self._render_surface(pixels)
            screen.blit(pygame.transform.scale(sim_surface, (self.canvas_w, self.canvas_h)), (0, 0))

            self.fps_history.append(time.time() - frame_start)
            if len(self.fps_history) > 30:
                self.fps_history.pop(0)
            avg_fps = 1.0 / max(np.mean(self.fps_history), 0.001)
            self._draw_hud(screen, avg_fps)

            if self.panel_visible and self.panel:
                self.panel.draw(screen, self.panel_font)

            pygame.display.flip()
            clock.tick(60)

        pygame.quit()
