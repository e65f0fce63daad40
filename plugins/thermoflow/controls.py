"""
Control Widgets for the Heat Diffusion Viewer

Slate-themed sliders, buttons, palette selector and a stats chart,
drawn directly with pygame onto a side panel surface.
"""

import pygame


THEME = {
    "bg": (15, 23, 42),
    "panel": (30, 41, 59),
    "track": (51, 65, 85),
    "track_fill": (99, 102, 241),
    "handle": (203, 213, 225),
    "handle_active": (255, 255, 255),
    "text": (203, 213, 225),
    "text_bright": (241, 245, 249),
    "text_dim": (100, 116, 139),
    "value": (129, 140, 248),
    "button": (51, 65, 85),
    "button_hover": (71, 85, 105),
    "button_active": (79, 70, 229),
    "run": (52, 211, 153),
    "pause": (251, 191, 36),
    "divider": (51, 65, 85),
    "chart_bg": (15, 23, 42),
    "series_max": (248, 113, 113),
    "series_energy": (96, 165, 250),
}


class Slider:
    """Labelled horizontal slider snapping to `step` when given."""

    height = 36

    def __init__(self, x, y, width, label, min_val, max_val, value,
                 fmt=".2f", step=None, on_change=None):
        self.x = x
        self.y = y
        self.width = width
        self.label = label
        self.min_val = min_val
        self.max_val = max_val
        self.fmt = fmt
        self.step = step
        self.on_change = on_change
        self.dragging = False
        self.value = self._quantize(value)

        self.track_x = x + 8
        self.track_w = width - 16
        self.track_y = y + 24

    def _quantize(self, val):
        val = max(self.min_val, min(self.max_val, val))
        if self.step:
            val = self.min_val + round((val - self.min_val) / self.step) * self.step
            val = round(min(self.max_val, val), 6)
        return val

    def _x_to_val(self, px):
        frac = max(0.0, min(1.0, (px - self.track_x) / self.track_w))
        return self._quantize(self.min_val + frac * (self.max_val - self.min_val))

    def _val_to_x(self, val):
        frac = (val - self.min_val) / (self.max_val - self.min_val)
        return self.track_x + frac * self.track_w

    def _hit(self, pos):
        mx, my = pos
        return (self.track_x - 6 <= mx <= self.track_x + self.track_w + 6 and
                abs(my - self.track_y) <= 12)

    def _drag_to(self, px):
        val = self._x_to_val(px)
        if val != self.value:
            self.value = val
            if self.on_change:
                self.on_change(val)

    def handle_event(self, event):
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and self._hit(event.pos):
            self.dragging = True
            self._drag_to(event.pos[0])
            return True
        if event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.dragging = False
        elif event.type == pygame.MOUSEMOTION and self.dragging:
            self._drag_to(event.pos[0])
            return True
        return False

    def set_value(self, val):
        self.value = self._quantize(val)

    def draw(self, surface, font):
        surface.blit(font.render(self.label, True, THEME["text"]), (self.x + 8, self.y + 2))
        val_surf = font.render(f"{self.value:{self.fmt}}", True, THEME["value"])
        surface.blit(val_surf, (self.x + self.width - val_surf.get_width() - 8, self.y + 2))

        hx = self._val_to_x(self.value)
        pygame.draw.rect(surface, THEME["track"],
                         pygame.Rect(self.track_x, self.track_y - 2, self.track_w, 4),
                         border_radius=2)
        pygame.draw.rect(surface, THEME["track_fill"],
                         pygame.Rect(self.track_x, self.track_y - 2, hx - self.track_x, 4),
                         border_radius=2)
        color = THEME["handle_active"] if self.dragging else THEME["handle"]
        pygame.draw.circle(surface, color, (int(hx), self.track_y), 7)


class Button:
    """Clickable button. `color` overrides the idle fill."""

    def __init__(self, x, y, width, height, label, on_click=None, color=None):
        self.rect = pygame.Rect(x, y, width, height)
        self.label = label
        self.on_click = on_click
        self.color = color
        self.active = False
        self.hovered = False

    def handle_event(self, event):
        if event.type == pygame.MOUSEMOTION:
            self.hovered = self.rect.collidepoint(event.pos)
        elif (event.type == pygame.MOUSEBUTTONDOWN and event.button == 1
                and self.rect.collidepoint(event.pos)):
            if self.on_click:
                self.on_click()
            return True
        return False

    def draw(self, surface, font):
        if self.active:
            fill = THEME["button_active"]
        elif self.hovered:
            fill = THEME["button_hover"]
        else:
            fill = THEME["button"]
        pygame.draw.rect(surface, fill, self.rect, border_radius=6)
        if self.color:
            pygame.draw.rect(surface, self.color, self.rect, width=1, border_radius=6)

        text = font.render(self.label, True, self.color or THEME["text_bright"])
        surface.blit(text, (self.rect.centerx - text.get_width() // 2,
                            self.rect.centery - text.get_height() // 2))


class PaletteSelector:
    """Two-column grid of exclusive buttons, one per palette."""

    def __init__(self, x, y, width, names, selected=0, on_select=None, btn_height=26):
        self.names = list(names)
        self.on_select = on_select
        self.buttons = []
        gap = 6
        bw = (width - gap) // 2
        for i, name in enumerate(self.names):
            bx = x + (i % 2) * (bw + gap)
            by = y + (i // 2) * (btn_height + gap)
            self.buttons.append(Button(bx, by, bw, btn_height, name))
        rows = (len(self.names) + 1) // 2
        self.height = rows * (btn_height + gap)
        self.select(selected)

    def select(self, idx):
        self.selected = idx
        for i, btn in enumerate(self.buttons):
            btn.active = (i == idx)

    def handle_event(self, event):
        for i, btn in enumerate(self.buttons):
            if btn.handle_event(event):
                self.select(i)
                if self.on_select:
                    self.on_select(self.names[i])
                return True
        return False

    def draw(self, surface, font):
        for btn in self.buttons:
            btn.draw(surface, font)


class SectionHeader:
    height = 26

    def __init__(self, x, y, width, title):
        self.x = x
        self.y = y
        self.width = width
        self.title = title

    def draw(self, surface, font):
        pygame.draw.line(surface, THEME["divider"],
                         (self.x + 8, self.y + 6), (self.x + self.width - 8, self.y + 6))
        surface.blit(font.render(self.title, True, THEME["text_dim"]), (self.x + 8, self.y + 10))


def chart_points(values, rect, lo, hi):
    """Map a series onto pixel coordinates inside rect (y grows downward)."""
    n = len(values)
    if n == 0:
        return []
    span = (hi - lo) or 1.0
    step = rect.width / max(n - 1, 1)
    points = []
    for i, v in enumerate(values):
        frac = max(0.0, min(1.0, (v - lo) / span))
        points.append((rect.x + i * step, rect.bottom - frac * rect.height))
    return points


class StatsChart:
    """Line chart of max temperature (fixed 0..1) and total energy (auto-scaled)."""

    def __init__(self, x, y, width, height, history):
        self.rect = pygame.Rect(x, y, width, height)
        self.history = history

    def draw(self, surface, font):
        pygame.draw.rect(surface, THEME["chart_bg"], self.rect, border_radius=4)
        plot = self.rect.inflate(-12, -28)
        plot.y = self.rect.y + 20

        surface.blit(font.render("max", True, THEME["series_max"]), (self.rect.x + 6, self.rect.y + 4))
        surface.blit(font.render("energy", True, THEME["series_energy"]), (self.rect.x + 48, self.rect.y + 4))

        if len(self.history) < 2:
            return

        max_pts = chart_points(self.history.max_temps, plot, 0.0, 1.0)
        energies = self.history.total_energies
        energy_pts = chart_points(energies, plot, min(energies), max(energies))
        pygame.draw.lines(surface, THEME["series_max"], False, max_pts, 2)
        pygame.draw.lines(surface, THEME["series_energy"], False, energy_pts, 2)

        last = self.history.latest
        label = f"it {last.iteration:,}"
        text = font.render(label, True, THEME["text_dim"])
        surface.blit(text, (self.rect.right - text.get_width() - 6, self.rect.y + 4))


class ControlPanel:
    """
    Side panel stacking widgets top to bottom.
    Events are translated into panel-local coordinates before dispatch.
    """

    def __init__(self, x, y, width, height):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.widgets = []
        self.surface = pygame.Surface((width, height))
        self._cursor_y = 8

    def add_section(self, title):
        header = SectionHeader(0, self._cursor_y, self.width, title)
        self.widgets.append(header)
        self._cursor_y += header.height + 2

    def add_slider(self, label, min_val, max_val, value, fmt=".2f", step=None, on_change=None):
        slider = Slider(0, self._cursor_y, self.width, label, min_val, max_val, value,
                        fmt, step, on_change)
        self.widgets.append(slider)
        self._cursor_y += slider.height + 6
        return slider

    def add_buttons(self, specs):
        """Add a row of equal-width buttons from (label, on_click, color) tuples."""
        gap = 8
        bw = (self.width - 16 - gap * (len(specs) - 1)) // len(specs)
        buttons = []
        for i, (label, on_click, color) in enumerate(specs):
            btn = Button(8 + i * (bw + gap), self._cursor_y, bw, 30, label, on_click, color)
            self.widgets.append(btn)
            buttons.append(btn)
        self._cursor_y += 38
        return buttons

    def add_palette_selector(self, names, selected=0, on_select=None):
        selector = PaletteSelector(8, self._cursor_y, self.width - 16, names, selected, on_select)
        self.widgets.append(selector)
        self._cursor_y += selector.height + 4
        return selector

    def add_chart(self, history, height=120):
        chart = StatsChart(8, self._cursor_y, self.width - 16, height, history)
        self.widgets.append(chart)
        self._cursor_y += height + 8
        return chart

    def contains(self, pos):
        return (self.x <= pos[0] < self.x + self.width and
                self.y <= pos[1] < self.y + self.height)

    def handle_event(self, event):
        """Dispatch a pygame event; returns True when a widget consumed it."""
        if hasattr(event, "pos"):
            local = (event.pos[0] - self.x, event.pos[1] - self.y)
            if not self.contains(event.pos):
                # Release drags that end outside the panel
                if event.type == pygame.MOUSEBUTTONUP:
                    for widget in self.widgets:
                        if isinstance(widget, Slider):
                            widget.dragging = False
                return False
            attrs = {k: v for k, v in event.__dict__.items() if k != "pos"}
            attrs["pos"] = local
            event = pygame.event.Event(event.type, attrs)

        for widget in self.widgets:
            if hasattr(widget, "handle_event") and widget.handle_event(event):
                return True
        return False

    def draw(self, target, font):
        self.surface.fill(THEME["panel"])
        pygame.draw.line(self.surface, THEME["divider"], (0, 0), (0, self.height))
        for widget in self.widgets:
            widget.draw(self.surface, font)
        target.blit(self.surface, (self.x, self.y))
