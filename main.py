import asyncio
import logging
import sys

import pygame

from joystick import JOYSTICK_SIZE, Joystick
from logging_config import setup_logging
from maze_engine import GRID_HEIGHT, GRID_WIDTH, GameSession, min_cell_size

IS_WEB = sys.platform == "emscripten"

logger = logging.getLogger(__name__)

# ----- layout -----
MARGIN = 14
SIDE_W = JOYSTICK_SIZE + 2 * MARGIN
AREA_W = 800  # Initial play-area width; cell size follows from it
WIN_W = MARGIN + AREA_W + SIDE_W
WIN_H = max(GRID_HEIGHT * (AREA_W // GRID_WIDTH), JOYSTICK_SIZE) + 2 * MARGIN
MIN_AREA_W = GRID_WIDTH * min_cell_size()
FPS = 60
RESIZE_DEBOUNCE_MS = 200
KNOB_RADIUS = 22

# ----- colors -----
BG = (255, 228, 236)
PANEL = (255, 245, 248)
BORDER = (230, 170, 190)
TEXT = (90, 20, 45)
WALL = (214, 51, 108)
PLAYER = (255, 105, 150)
GOAL = (220, 20, 60)
KNOB = (214, 51, 108)
BTN = (214, 51, 108)
OVERLAY = (255, 240, 245, 235)


# ----- helpers -----
def pick_font(cands, size):
    avail = set(pygame.font.get_fonts())
    for n in cands:
        if n and n.lower() in avail:
            return pygame.font.SysFont(n, size)
    return pygame.font.Font(None, size)


def wrap_text(text, font, width):
    """Greedy word wrap; blank lines between paragraphs are kept."""
    lines = []
    for para in text.split("\n"):
        words = para.split()
        if not words:
            lines.append("")
            continue
        line = words[0]
        for w in words[1:]:
            if font.size(line + " " + w)[0] <= width:
                line += " " + w
            else:
                lines.append(line)
                line = w
        lines.append(line)
    return lines


# ----- buttons -----
class Button:
    def __init__(self, rect, label):
        self.rect = pygame.Rect(rect)
        self.label = label
        self.visible = False

    def draw(self, surf, font):
        if not self.visible:
            return
        pygame.draw.rect(surf, BTN, self.rect, border_radius=6)
        text = font.render(self.label, True, PANEL)
        surf.blit(text, text.get_rect(center=self.rect.center))

    def hit(self, pos):
        return self.visible and self.rect.collidepoint(pos)


# ----- app -----
class App:
    def __init__(self):
        pygame.init()
        pygame.display.set_caption("Find your way to my heart")
        # the browser canvas is sized by the page
        flags = 0 if IS_WEB else pygame.RESIZABLE
        self.screen = pygame.display.set_mode((WIN_W, WIN_H), flags)
        self.clock = pygame.time.Clock()
        self.font = pick_font(["georgia", "dejavuserif", "liberationserif"], 20)
        self.small = pick_font(["georgia", "dejavuserif", "liberationserif"], 16)

        self.maze_surf = None
        self.player_pos = (0, 0)
        self.goal_pos = (0, 0)
        self.message = None
        self.btn_restart = Button((0, 0, 140, 40), "Play again")
        self.resize_due = None
        self.applied_size = None

        self.layout(WIN_W)
        self.joystick = Joystick()
        self.session = GameSession(
            self.area_w,
            joystick=self.joystick,
            draw_maze_fn=self.draw_maze,
            draw_player_fn=self.draw_player,
            draw_goal_fn=self.draw_goal,
            win_fn=self.show_win,
        )

    def layout(self, win_w):
        self.area_w = max(MIN_AREA_W, win_w - MARGIN - SIDE_W)
        self.joy_rect = pygame.Rect(
            MARGIN + self.area_w + MARGIN, MARGIN, JOYSTICK_SIZE, JOYSTICK_SIZE
        )

    # ------------------------- render sink -------------------------

    def draw_maze(self, walls):
        w = max(wall.x + wall.width for wall in walls)
        h = max(wall.y + wall.height for wall in walls)
        self.maze_surf = pygame.Surface((w, h))
        self.maze_surf.fill(PANEL)
        for wall in walls:
            pygame.draw.rect(self.maze_surf, WALL, pygame.Rect(*wall))
        # new maze, new game: hide the previous win
        self.message = None
        self.btn_restart.visible = False

    def draw_player(self, x, y):
        self.player_pos = (x, y)

    def draw_goal(self, x, y):
        self.goal_pos = (x, y)

    def show_win(self, message):
        self.message = message
        self.btn_restart.visible = True

    # --------------------------- input ---------------------------

    def handle(self, e):
        if e.type == pygame.VIDEORESIZE:
            # apply_resize's own set_mode echoes back as a resize event
            if tuple(e.size) == self.applied_size:
                self.applied_size = None
                return
            self.resize_due = pygame.time.get_ticks() + RESIZE_DEBOUNCE_MS
        elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
            if self.btn_restart.hit(e.pos):
                self.session.restart()
            elif self.joy_rect.collidepoint(e.pos):
                self.joystick.pointer_down(
                    e.pos[0] - self.joy_rect.x, e.pos[1] - self.joy_rect.y
                )
        elif e.type == pygame.MOUSEMOTION:
            if self.joy_rect.collidepoint(e.pos):
                self.joystick.pointer_move(
                    e.pos[0] - self.joy_rect.x, e.pos[1] - self.joy_rect.y
                )
            else:
                self.joystick.pointer_leave()
        elif e.type == pygame.MOUSEBUTTONUP and e.button == 1:
            self.joystick.pointer_up()
        elif e.type == pygame.WINDOWLEAVE:
            self.joystick.pointer_leave()

    def apply_resize(self):
        # regenerate only once the window has stopped changing size
        if self.resize_due is None or pygame.time.get_ticks() < self.resize_due:
            return
        self.resize_due = None
        self.layout(self.screen.get_width())
        logger.info("Resized play area to %d px.", self.area_w)
        self.session.resize(self.area_w)
        if not IS_WEB:
            # the window follows the maze height, like the page container
            win_h = max(self.session.height, JOYSTICK_SIZE) + 2 * MARGIN
            win_w = max(self.screen.get_width(), MARGIN + self.area_w + SIDE_W)
            if (win_w, win_h) != self.screen.get_size():
                self.applied_size = (win_w, win_h)
                self.screen = pygame.display.set_mode(
                    self.applied_size, pygame.RESIZABLE
                )

    # --------------------------- drawing ---------------------------

    def draw(self):
        s = self.session
        self.screen.fill(BG)

        area = pygame.Rect(MARGIN, MARGIN, s.width, s.height)
        self.screen.blit(self.maze_surf, area.topleft)
        gx, gy = self.goal_pos
        pygame.draw.circle(
            self.screen, GOAL, (area.x + gx, area.y + gy), s.goal.radius
        )
        px, py = self.player_pos
        pygame.draw.circle(
            self.screen, PLAYER, (area.x + px, area.y + py), s.player.radius
        )

        # joystick
        pygame.draw.rect(self.screen, PANEL, self.joy_rect, border_radius=60)
        pygame.draw.rect(self.screen, BORDER, self.joy_rect, 2, border_radius=60)
        hx, hy = self.joystick.handle
        pygame.draw.circle(
            self.screen, KNOB, (self.joy_rect.x + hx, self.joy_rect.y + hy), KNOB_RADIUS
        )

        if self.message:
            self.draw_message(area)

        pygame.display.flip()

    def draw_message(self, area):
        box = area.inflate(-area.w // 5, -area.h // 5)
        overlay = pygame.Surface(box.size, pygame.SRCALPHA)
        overlay.fill(OVERLAY)
        self.screen.blit(overlay, box.topleft)

        lh = self.font.get_linesize()
        lines = wrap_text(self.message, self.font, box.w - 40)
        y = box.y + 20
        for line in lines:
            text = self.font.render(line, True, TEXT)
            self.screen.blit(text, text.get_rect(midtop=(box.centerx, y)))
            y += lh

        self.btn_restart.rect.midtop = (box.centerx, y + 12)
        self.btn_restart.draw(self.screen, self.small)

    async def run(self):
        while True:
            self.clock.tick(FPS)
            for e in pygame.event.get():
                if e.type == pygame.QUIT:
                    return
                self.handle(e)
            self.apply_resize()
            self.session.tick()
            self.draw()
            await asyncio.sleep(0)


# ----- entry -----
async def main():
    setup_logging(logging.DEBUG if "--debug" in sys.argv else logging.INFO)
    app = App()
    await app.run()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    finally:
        pygame.quit()
