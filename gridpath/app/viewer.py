# gridpath/app/viewer.py
#!/usr/bin/env python3
"""
Pathfinding Visualizer — board editor + animated Dijkstra / A* runs

- Mouse:
    drag S / E          -> move start / end
    click / drag        -> paint with the brush (click a wall/weight to erase)
- Keyboard:
    [SPACE]      -> visualize
    [D]/[A]      -> select algorithm (Dijkstra / A*)
    [W]/[G]      -> brush: wall / weight
    [C]          -> compare mode (Dijkstra and A* boards side by side)
    [M]          -> generate maze
    [P]          -> clear path
    [R]          -> clear board
    [+]/[-]      -> cells/sec
    [Q]/[ESC]    -> quit

Config:
- ENV: GRIDPATH_ALGO=dijkstra|astar, GRIDPATH_SEED=<int>, GRIDPATH_SPEED=<int>
- CLI: --algo=..., --seed=..., --speed=...
"""

import os
import random
import sys
import time
from typing import Dict, List, Optional, Tuple

import pygame

from gridpath.core.maze import generate_maze
from gridpath.core.search import compare, search
from gridpath.core.types import ASTAR, DIJKSTRA, AlgorithmResult, CellKind, Coord, Grid

# ---------- Config resolution ----------
def resolve_option(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(f"GRIDPATH_{name.upper()}", default)
    for arg in sys.argv[1:]:
        if arg.startswith(f"--{name}="):
            value = arg.split("=", 1)[1]
    return value


def resolve_algo() -> str:
    algo = (resolve_option("algo", DIJKSTRA) or DIJKSTRA).lower()
    return ASTAR if algo in ("astar", "a*", "a") else DIJKSTRA


def resolve_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = resolve_option(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        print(f"Ignoring {name}={raw!r}: not an integer")
        return default


def clamp_speed(cells_per_sec: int) -> int:
    return int(max(MIN_SPEED, min(MAX_SPEED, cells_per_sec)))


def reveal(result: AlgorithmResult, shown: int) -> Tuple[List[Coord], List[Coord], bool]:
    """
    Prefixes of visited_order and path after `shown` animation ticks.

    Visited cells come first, one per tick; path cells follow, one every
    PATH_SLOWDOWN ticks. The flag is True once both are fully on screen.
    """
    n_visited = len(result.visited_order)
    visited = result.visited_order[:max(0, shown)]
    path = result.path[:max(0, (shown - n_visited) // PATH_SLOWDOWN)]
    finished = shown >= n_visited and len(path) == len(result.path)
    return visited, path, finished


ROWS = 25
COLS = 50
DEFAULT_START: Coord = (12, 10)
DEFAULT_END: Coord = (12, 40)

ALGO_LABELS = {DIJKSTRA: "Dijkstra", ASTAR: "A*"}

PANEL_W = 360            # right band: metrics + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 22
FONT_NAME = None  # default pygame font
MAZE_CELLS_PER_FRAME = 12
PATH_SLOWDOWN = 3        # path cells reveal this many times slower than visited cells
MIN_SPEED, MAX_SPEED = 10, 2000

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
RED         = (220, 50, 47)
GREEN       = ( 46,139, 87)
MUD_BROWN   = (150,110, 60)
EMPTY_GRAY  = (200,200,200)
WALL_DARK   = ( 40, 44, 52)
NEON_MAG_A  = (255,0,120,90)
NEON_MINT   = (0,255,200)

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)

KIND_COLORS = {
    CellKind.EMPTY:  EMPTY_GRAY,
    CellKind.WALL:   WALL_DARK,
    CellKind.WEIGHT: MUD_BROWN,
    CellKind.START:  EMPTY_GRAY,
    CellKind.END:    EMPTY_GRAY,
}

# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False  # highlight state

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        bg_idle   = (36, 40, 48, 220)
        bg_hover  = (46, 50, 60, 230)
        bg_active = (58, 86, 160, 235)
        border_active = (120, 170, 255, 255)

        if self.active and self.togglable:
            bg = bg_active
        elif self.hover:
            bg = bg_hover
        else:
            bg = bg_idle

        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        hi = pygame.Surface((self.rect.width, 18), pygame.SRCALPHA)
        pygame.draw.rect(hi, (255,255,255,20), hi.get_rect(), border_radius=10)
        base.blit(hi, (0,0))
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, border_active, self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, (235,238,242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()
                return True
        return False

# ---------- Viewer ----------
class Viewer:
    def __init__(self, grid: Grid, *, algo: str = DIJKSTRA, seed: Optional[int] = None,
                 cells_per_sec: int = 120):
        pygame.init()

        self.grid = grid
        self.cell_size = CELL_SIZE_DEFAULT
        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        grid_px_w = GRID_MARGIN*2 + grid.cols * self.cell_size
        grid_px_h = GRID_MARGIN*2 + grid.rows * self.cell_size
        win_w = grid_px_w + PANEL_W
        win_h = max(grid_px_h, 640)

        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Pathfinding — Dijkstra / A*")

        self.selected_algo = algo
        self.brush = CellKind.WALL
        self.compare_mode = False
        self.rng = random.Random(seed)
        self.cells_per_sec = clamp_speed(cells_per_sec)

        self.results: Dict[str, AlgorithmResult] = {}
        # per algorithm: (visited shown, path shown)
        self.revealed: Dict[str, Tuple[List[Coord], List[Coord]]] = {}
        self._anim_t0 = 0.0
        self._maze_queue: List[Coord] = []
        self.state = "Idle"

        self._dragging: Optional[str] = None   # "start" | "end" | "draw"
        self._last_painted: Optional[Coord] = None

        self._buttons: List[UIButton] = []
        self._layout(win_w, win_h)

        self.clock = pygame.time.Clock()

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits every board and center them side by side."""
        n_boards = len(self._board_modes())
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN * n_boards)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)

        cs_by_w = avail_w // (self.grid.cols * n_boards)
        cs_by_h = avail_h // self.grid.rows
        self.cell_size = int(max(4, min(cs_by_w, cs_by_h)))

        grid_plate_w = self.grid.cols * self.cell_size + 2 * GRID_MARGIN
        grid_plate_h = self.grid.rows * self.cell_size + 2 * GRID_MARGIN

        left_x = max(0, (win_w - (grid_plate_w * n_boards + PANEL_W)) // 2)
        top_y  = max(0, (win_h - grid_plate_h) // 2)

        self.canvas_rect = pygame.Rect(left_x, top_y, grid_plate_w * n_boards, grid_plate_h)
        # the first board is the editable one
        self._board_origins = [(left_x + i * grid_plate_w + GRID_MARGIN, top_y + GRID_MARGIN)
                               for i in range(n_boards)]
        self._grid_origin = self._board_origins[0]
        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(PANEL_W, win_w - self.canvas_rect.right),
                                       win_h)
        self._build_buttons()

    def run(self):
        while True:
            self._handle_events()
            self._tick_maze()
            self._draw()
            self.clock.tick(60)

    # ---------- board ↔ screen ----------
    def _board_modes(self) -> List[str]:
        return [DIJKSTRA, ASTAR] if self.compare_mode else [self.selected_algo]

    def _cell_at(self, pos: Tuple[int, int]) -> Optional[Coord]:
        ox, oy = self._grid_origin
        cs = self.cell_size
        col = (pos[0] - ox) // cs
        row = (pos[1] - oy) // cs
        cell = (row, col)
        return cell if self.grid.in_bounds(cell) else None

    @property
    def busy(self) -> bool:
        return self.state in ("Running", "Maze")

    # ---------- events ----------
    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                self._handle_key(e.key)
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((max(640, e.w), max(480, e.h)), pygame.RESIZABLE)
                self._layout(*self.screen.get_size())
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                if any(b.handle_mouse(e) for b in self._buttons):
                    continue
                if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                    self._mouse_down(e.pos)
                elif e.type == pygame.MOUSEMOTION and self._dragging:
                    self._mouse_drag(e.pos)
            elif e.type == pygame.MOUSEBUTTONUP and e.button == 1:
                self._dragging = None
                self._last_painted = None

    def _handle_key(self, key: int):
        if key in (pygame.K_ESCAPE, pygame.K_q):
            pygame.quit(); sys.exit(0)
        elif key == pygame.K_SPACE:
            self._visualize()
        elif key == pygame.K_d:
            self._switch_algo(DIJKSTRA)
        elif key == pygame.K_a:
            self._switch_algo(ASTAR)
        elif key == pygame.K_w:
            self._set_brush(CellKind.WALL)
        elif key == pygame.K_g:
            self._set_brush(CellKind.WEIGHT)
        elif key == pygame.K_c:
            self._toggle_compare()
        elif key == pygame.K_m:
            self._generate_maze()
        elif key == pygame.K_p:
            self._clear_path()
        elif key == pygame.K_r:
            self._clear_board()
        elif key in (pygame.K_PLUS, pygame.K_EQUALS):
            self._bump_speed(+20)
        elif key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
            self._bump_speed(-20)

    def _mouse_down(self, pos):
        if self.busy:
            return
        cell = self._cell_at(pos)
        if cell is None:
            return
        if cell == self.grid.start:
            self._dragging = "start"
        elif cell == self.grid.end:
            self._dragging = "end"
        else:
            self._dragging = "draw"
            self._clear_path()
            self.grid.paint(cell, self.brush)
            self._last_painted = cell

    def _mouse_drag(self, pos):
        if self.busy:
            return
        cell = self._cell_at(pos)
        if cell is None or cell == self._last_painted:
            return
        if self._dragging == "start":
            if self.grid.move_start(cell):
                self._clear_path()
        elif self._dragging == "end":
            if self.grid.move_end(cell):
                self._clear_path()
        elif self._dragging == "draw" and cell not in (self.grid.start, self.grid.end):
            self.grid.paint(cell, self.brush)
        self._last_painted = cell

    # ---------- actions ----------
    def _visualize(self):
        if self.busy:
            return
        self._clear_path()
        try:
            if self.compare_mode:
                self.results = compare(self.grid)
            else:
                self.results = {self.selected_algo: search(self.grid, mode=self.selected_algo)}
        except ValueError as ex:
            print(f"Search refused: {ex}")
            return
        for label, r in self.results.items():
            cost = r.path_cost if r.found else "unreachable"
            print(f"{ALGO_LABELS[label]}: visited={r.total_nodes_visited} cost={cost} time={r.execution_time_ms}ms")
        self._anim_t0 = time.time()
        self.state = "Running"

    def _generate_maze(self):
        if self.busy:
            return
        self._clear_path()
        walls = generate_maze(self.grid.rows, self.grid.cols, self.grid.start, self.grid.end, rng=self.rng)
        self.grid.apply_walls([])
        self._maze_queue = list(walls)
        self.state = "Maze"

    def _tick_maze(self):
        if self.state != "Maze":
            return
        batch, self._maze_queue = self._maze_queue[:MAZE_CELLS_PER_FRAME], self._maze_queue[MAZE_CELLS_PER_FRAME:]
        for r, c in batch:
            if self.grid.cells[r][c] is CellKind.EMPTY:
                self.grid.cells[r][c] = CellKind.WALL
        if not self._maze_queue:
            self.state = "Idle"

    def _clear_path(self):
        self.results = {}
        self.revealed = {}
        if self.state == "Running":
            self.state = "Idle"

    def _clear_board(self):
        self._maze_queue = []
        self.state = "Idle"
        self._clear_path()
        self.grid = Grid.blank(self.grid.rows, self.grid.cols, DEFAULT_START, DEFAULT_END)

    def _switch_algo(self, algo: str):
        if self.busy:
            return
        self.selected_algo = algo
        self._clear_path()
        self._refresh_active_states()

    def _set_brush(self, brush: CellKind):
        self.brush = brush
        self._refresh_active_states()

    def _toggle_compare(self):
        if self.busy:
            return
        self.compare_mode = not self.compare_mode
        self._clear_path()
        self._layout(*self.screen.get_size())
        self._refresh_active_states()

    def _bump_speed(self, dv: int):
        self.cells_per_sec = clamp_speed(self.cells_per_sec + dv)

    def _advance_animation(self):
        """Reveal visited cells, then path cells, on every board at the current pace."""
        if not self.results:
            return
        shown = int((time.time() - self._anim_t0) * self.cells_per_sec)
        all_finished = True
        for mode, res in self.results.items():
            visited, path, finished = reveal(res, shown)
            self.revealed[mode] = (visited, path)
            all_finished = all_finished and finished
        if self.state == "Running" and all_finished:
            found = all(res.found for res in self.results.values())
            self.state = "Done" if found else "No path"

    # ---------- drawing ----------
    def _draw(self):
        self._advance_animation()
        self._draw_backdrop()
        for origin, mode in zip(self._board_origins, self._board_modes()):
            self._draw_grid(origin, mode)
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_backdrop(self):
        w, h = self.screen.get_size()
        top = (24, 26, 32); bot = (36, 40, 48)
        for y in range(h):
            t = y / max(1, h-1)
            c = (
                int(top[0] + (bot[0]-top[0]) * t),
                int(top[1] + (bot[1]-top[1]) * t),
                int(top[2] + (bot[2]-top[2]) * t),
            )
            pygame.draw.line(self.screen, c, (0, y), (w, y))

    def _draw_grid(self, origin: Tuple[int, int], mode: str):
        cs = self.cell_size
        ox, oy = origin

        if self.compare_mode:
            title = self.font_small.render(ALGO_LABELS[mode], True, ACCENT_GOLD)
            self.screen.blit(title, (ox, oy - title.get_height() - 2))

        for row in range(self.grid.rows):
            for col in range(self.grid.cols):
                rect = pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)
                pygame.draw.rect(self.screen, KIND_COLORS[self.grid.cells[row][col]], rect)
                pygame.draw.rect(self.screen, BLACK, rect, 1)

        # overlays
        visited, path = self.revealed.get(mode, ([], []))
        overlay = pygame.Surface((cs, cs), pygame.SRCALPHA); overlay.fill(NEON_MAG_A)
        for (row, col) in visited:
            self.screen.blit(overlay, (ox + col*cs, oy + row*cs))

        if path:
            pts = [self.grid.start] + path
            if len(path) == len(self.results[mode].path):
                pts.append(self.grid.end)
            centers = [(ox + c*cs + cs//2, oy + r*cs + cs//2) for (r, c) in pts]
            pygame.draw.lines(self.screen, NEON_MINT, False, centers, max(2, cs // 4))

        self._draw_badge(origin, self.grid.start, GREEN, "S")
        self._draw_badge(origin, self.grid.end, RED, "E")

    def _draw_badge(self, origin: Tuple[int, int], cell: Coord, color: Tuple[int,int,int], label: str):
        cs = self.cell_size
        ox, oy = origin
        row, col = cell
        cx = ox + col*cs + cs//2
        cy = oy + row*cs + cs//2
        pygame.draw.circle(self.screen, color, (cx, cy), max(4, cs//2 - 2))
        txt = self.font_small.render(label, True, WHITE)
        self.screen.blit(txt, txt.get_rect(center=(cx, cy)))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 250  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 34
        gap = 8
        half = (w - 8) // 2

        def add(label, cb, rect, *, togglable=False, store_as: Optional[str] = None):
            btn = UIButton(label, rect, cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Visualize", self._visualize, pygame.Rect(x, y, w, h)); y += h + gap
        add("Algo: Dijkstra", lambda: self._switch_algo(DIJKSTRA), pygame.Rect(x, y, half, h),
            togglable=True, store_as="btn_algo_d")
        add("Algo: A*", lambda: self._switch_algo(ASTAR), pygame.Rect(x + half + 8, y, half, h),
            togglable=True, store_as="btn_algo_a"); y += h + gap
        add("Brush: Wall", lambda: self._set_brush(CellKind.WALL), pygame.Rect(x, y, half, h),
            togglable=True, store_as="btn_brush_wall")
        add("Brush: Weight", lambda: self._set_brush(CellKind.WEIGHT), pygame.Rect(x + half + 8, y, half, h),
            togglable=True, store_as="btn_brush_weight"); y += h + gap
        add("Compare", self._toggle_compare, pygame.Rect(x, y, w, h),
            togglable=True, store_as="btn_compare"); y += h + gap
        add("Generate Maze", self._generate_maze, pygame.Rect(x, y, w, h)); y += h + gap
        add("Clear Path", self._clear_path, pygame.Rect(x, y, half, h))
        add("Clear Board", self._clear_board, pygame.Rect(x + half + 8, y, half, h)); y += h + gap
        add("Speed −", lambda: self._bump_speed(-20), pygame.Rect(x, y, half, h))
        add("Speed +", lambda: self._bump_speed(+20), pygame.Rect(x + half + 8, y, half, h))

        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_algo_d"):
            self.btn_algo_d.set_active(self.selected_algo == DIJKSTRA)
        if hasattr(self, "btn_algo_a"):
            self.btn_algo_a.set_active(self.selected_algo == ASTAR)
        if hasattr(self, "btn_brush_wall"):
            self.btn_brush_wall.set_active(self.brush is CellKind.WALL)
        if hasattr(self, "btn_brush_weight"):
            self.btn_brush_weight.set_active(self.brush is CellKind.WEIGHT)
        if hasattr(self, "btn_compare"):
            self.btn_compare.set_active(self.compare_mode)

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card_h = 230
        card = pygame.Surface((rb.width - 20, card_h), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        line("Metrics", big=True, color=ACCENT_GOLD)
        if not self.results:
            line("Nodes visited: -")
            line("Path cost: -")
        for label, res in self.results.items():
            m = res.metrics()
            cost = m["total_cost"] if m["total_cost"] is not None else "unreachable"
            line(f"{ALGO_LABELS[label]}: {m['visited']} visited, cost {cost}")
            line(f"  path {m['path_len']} cells, {m['time_ms']} ms")

        line("-" * 26)
        brush = "Wall" if self.brush is CellKind.WALL else "Weight"
        line(f"Algo: {ALGO_LABELS[self.selected_algo]}{'  (compare)' if self.compare_mode else ''}")
        line(f"Brush: {brush}   State: {self.state}")
        line(f"Speed: {self.cells_per_sec} cells/s")

        for b in self._buttons:
            b.draw(self.screen, self.font)

# ---------- main ----------
def main():
    grid = Grid.blank(ROWS, COLS, DEFAULT_START, DEFAULT_END)
    Viewer(
        grid,
        algo=resolve_algo(),
        seed=resolve_int("seed", None),
        cells_per_sec=resolve_int("speed", 120),
    ).run()

if __name__ == "__main__":
    main()
