"""
ufo_radar.gui
=============

PyGame front-end for the sighting radar.

Key features
------------
• Radar face, rotating sweep line, dots fading with the beam
• PLAY / PAUSE and RESET buttons
• Reveal-budget text box + SET button (bad input is simply ignored)
• Hover panel with city / state / shape / date / duration / comments
• Hot-keys: SPACE play/pause, R reset, Q / ESC quit

The GUI never mutates sightings itself; it calls the session and draws
`session.snapshot()`.
"""

from __future__ import annotations
import logging, math, pygame
from typing import List

from ufo_radar import constants as C
from ufo_radar.session import Frame, RadarSession

log = logging.getLogger(__name__)


class RadarGUI:
    # ────────────────────────────────────────────────── INIT
    def __init__(self, cfg: dict) -> None:
        self.cfg = cfg

        # ―― Pygame window (fixed size: positions are projected once)
        self.screen = pygame.display.set_mode(tuple(cfg["window"]))
        pygame.display.set_caption("UFO Radar")
        self.clock = pygame.time.Clock()
        self.fps = int(cfg["fps"])

        # ―― Fonts
        self.font       = pygame.font.SysFont("monospace", 18)
        self.small_font = pygame.font.SysFont("monospace", 12)

        # ―― Session
        self.session = RadarSession.from_config(
            cfg, self.screen.get_size(), C.BOTTOM_PAD)
        log.info("one rotation ≈ %.1f s at %d fps",
                 self.session.sweep.rotation_seconds(self.fps), self.fps)

        # ―― Hover
        self.hover_radius = float(cfg["hover_radius"])

        # ―― Overlay for alpha drawing
        self.layer = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)

        # ―― HUD rects
        w, h = self.screen.get_size()
        y = h - C.BOTTOM_PAD + 15
        self.btn_play   = pygame.Rect(20, y, 100, 30)
        self.btn_reset  = pygame.Rect(self.btn_play.right + 15, y, 100, 30)
        self.entry_rect = pygame.Rect(self.btn_reset.right + 30, y, 90, 30)
        self.btn_set    = pygame.Rect(self.entry_rect.right + 10, y, 60, 30)
        self.entry_text   = str(self.session.budget)
        self.entry_active = False

    # ───────────────────────────────────────── controls
    def _apply_budget(self):
        if self.session.on_set_reveal_budget(self.entry_text):
            self.cfg["max_reveal"] = self.session.budget
        self.entry_text = str(self.session.budget)
        self.entry_active = False

    def _on_click(self, pos):
        if self.btn_play.collidepoint(pos):
            self.session.on_play_toggle()
        elif self.btn_reset.collidepoint(pos):
            self.session.on_reset()
        elif self.btn_set.collidepoint(pos):
            self._apply_budget()
        self.entry_active = self.entry_rect.collidepoint(pos)

    def _on_key(self, e) -> bool:
        """Returns False when the user asked to quit."""
        if self.entry_active:
            if e.key == pygame.K_RETURN:
                self._apply_budget()
            elif e.key == pygame.K_ESCAPE:
                self.entry_text = str(self.session.budget)
                self.entry_active = False
            elif e.key == pygame.K_BACKSPACE:
                self.entry_text = self.entry_text[:-1]
            elif e.unicode and 32 <= ord(e.unicode) < 127 and len(self.entry_text) < 7:
                self.entry_text += e.unicode
            return True

        if e.key in (pygame.K_q, pygame.K_ESCAPE):
            return False
        if e.key == pygame.K_SPACE:
            self.session.on_play_toggle()
        elif e.key == pygame.K_r:
            self.session.on_reset()
        return True

    # ───────────────────────────────────────── drawing helpers
    def _draw_radar(self, fr: Frame):
        cx, cy = fr.center
        r = fr.radius
        pygame.draw.circle(self.layer, C.RING, (int(cx), int(cy)), int(r), 1)
        ex = cx + math.cos(fr.sweep_angle) * r
        ey = cy + math.sin(fr.sweep_angle) * r
        pygame.draw.line(self.layer, C.BEAM, (cx, cy), (ex, ey), 2)

    def _draw_points(self, fr: Frame):
        rad = C.DOT_SIZE // 2
        for pv in fr.points:
            if not pv.visible:
                continue
            x, y = pv.position
            pygame.draw.circle(self.layer, C.DOT + (int(pv.fade),),
                               (int(x), int(y)), rad)

    def _wrap(self, text: str, width: int) -> List[str]:
        out, cur = [], ""
        for word in text.split():
            cand = f"{cur} {word}" if cur else word
            if self.small_font.size(cand)[0] <= width or not cur:
                cur = cand
            else:
                out.append(cur); cur = word
        if cur:
            out.append(cur)
        return out or [""]

    def _draw_hover(self, mouse):
        hits = self.session.hover(mouse, self.hover_radius)
        if not hits:
            return
        mx, my = mouse
        inner = C.PANEL_W - 2 * C.PANEL_PAD
        lines: List[str] = []
        for ln in hits[0].detail_lines():
            lines.extend(self._wrap(ln, inner))

        h = len(lines) * C.PANEL_LINE_H + 2 * C.PANEL_PAD
        box = pygame.Rect(mx + 10, my - 25, C.PANEL_W, h)
        box.clamp_ip(self.screen.get_rect())
        panel = pygame.Surface(box.size, pygame.SRCALPHA)
        panel.fill(C.PANEL)
        for i, ln in enumerate(lines):
            panel.blit(self.small_font.render(ln, True, C.BLACK),
                       (C.PANEL_PAD, C.PANEL_PAD + i * C.PANEL_LINE_H))
        self.screen.blit(panel, box)

    def _draw_hud(self, fr: Frame):
        for rect, lbl in ((self.btn_play,  "Pause" if fr.playing else "Play"),
                          (self.btn_reset, "Reset"),
                          (self.btn_set,   "SET")):
            pygame.draw.rect(self.screen, C.GREEN, rect, 2)
            t = self.font.render(lbl, True, C.GREEN)
            self.screen.blit(t, t.get_rect(center=rect.center))

        # budget entry
        pygame.draw.rect(self.screen, C.GREEN if self.entry_active else C.DIM,
                         self.entry_rect, 2)
        txt = self.font.render(self.entry_text + ("▌" if self.entry_active else ""),
                               True, C.GREEN)
        self.screen.blit(txt, (self.entry_rect.x + 6, self.entry_rect.y + 5))

        status = (f"{math.degrees(fr.sweep_angle):5.1f}°  "
                  f"revealed {fr.revealed}/{fr.budget}  "
                  f"on screen {fr.on_screen}/{len(fr.points)}  "
                  f"rotation {fr.rotations}")
        st = self.small_font.render(status, True, C.GREEN)
        self.screen.blit(st, (self.btn_set.right + 20, self.btn_set.centery - 6))

        title = self.small_font.render(C.TITLE, True, C.GREY)
        self.screen.blit(title, title.get_rect(
            midbottom=(self.screen.get_width() // 2, self.btn_play.top - 8)))

    # ───────────────────────────────────────── MAIN LOOP
    def run(self):
        running = True
        while running:
            self.clock.tick(self.fps)

            # ――― EVENTS ―――――――――――――――――――――――――――――――――――――――――――
            for e in pygame.event.get():
                if e.type == pygame.QUIT:
                    running = False
                elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                    self._on_click(e.pos)
                elif e.type == pygame.KEYDOWN:
                    running = self._on_key(e) and running

            # ――― SIMULATION ―――――――――――――――――――――――――――――――――――――
            self.session.tick()
            fr = self.session.snapshot()

            # ――― DRAWING ――――――――――――――――――――――――――――――――――――――
            self.screen.fill(C.BLACK)
            self.layer.fill((0, 0, 0, 0))
            self._draw_radar(fr)
            self._draw_points(fr)
            self.screen.blit(self.layer, (0, 0))
            self._draw_hover(pygame.mouse.get_pos())
            self._draw_hud(fr)
            pygame.display.flip()

        pygame.quit()
