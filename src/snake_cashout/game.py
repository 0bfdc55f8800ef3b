"""pygame front-end: drives the session clock, maps keys, and draws the board."""

from __future__ import annotations

import pygame

from .audio import AudioEngine
from .config import BonusPolicy, GameConfig, load_config
from .session import (
    BalanceReset,
    BonusTriggered,
    CashedOut,
    Crashed,
    CrashCause,
    FoodEaten,
    GameEvent,
    RoundStarted,
    RoundState,
    Session,
    Snapshot,
)
from .theme import (
    BET_DOWN_KEYS,
    BET_STEP,
    BET_UP_KEYS,
    CELL,
    DEFAULT_BET,
    FONT_NAME,
    FONT_SIZE,
    FPS,
    HUD_HEIGHT,
    KEY_TO_DIRECTION,
    TITLE_FONT_SIZE,
    palette_for,
)

CRASH_LABELS = {
    CrashCause.RISK: "CRASHED",
    CrashCause.WALL: "HIT THE WALL",
    CrashCause.SELF: "BIT ITSELF",
}


class CashoutApp:
    """Owns the window and a :class:`Session`; renders snapshots after each frame."""

    def __init__(self, config: GameConfig | None = None) -> None:
        pygame.init()
        self.config = config or load_config()
        self.session = Session(self.config)
        self.palette = palette_for(self.config.skin)

        self.board_width = self.config.grid_columns * CELL
        self.board_height = self.config.grid_rows * CELL
        self.window = pygame.display.set_mode(
            (self.board_width, self.board_height + HUD_HEIGHT),
            pygame.DOUBLEBUF | pygame.SCALED,
        )
        pygame.display.set_caption(f"Snake Cashout [{self.config.name}]")
        self.board = pygame.Surface((self.board_width, self.board_height))
        self.background = self._build_background()
        self.font = pygame.font.SysFont(FONT_NAME, FONT_SIZE)
        self.title_font = pygame.font.SysFont(FONT_NAME, TITLE_FONT_SIZE, bold=True)
        self.audio = AudioEngine()
        self.clock = pygame.time.Clock()

        self.bet_input = max(self.config.min_bet, min(self.config.max_bet, DEFAULT_BET))
        self.message = "Place your bet and press SPACE"
        self.message_color = self.palette["text"]
        self.session.subscribe(self.on_event)

    # --- Session events ------------------------------------------------

    def on_event(self, event: GameEvent) -> None:
        """Translate core events into sound cues and the status line."""
        if isinstance(event, RoundStarted):
            self.message = "Game on! Cash out before the crash!"
            self.message_color = self.palette["text"]
        elif isinstance(event, FoodEaten):
            self.audio.play("eat")
        elif isinstance(event, BonusTriggered):
            self.audio.play(event.kind.value)
            self.message = f"{event.kind.value.upper()}! +{event.amount:.2f}x"
            self.message_color = self.palette["accent"]
        elif isinstance(event, Crashed):
            self.audio.play("crash")
            label = CRASH_LABELS[event.cause]
            self.message = f"{label} at {event.multiplier:.2f}x  -{event.bet}"
            self.message_color = self.palette["danger"]
        elif isinstance(event, CashedOut):
            self.audio.play("cashout")
            self.message = f"Cashed out {event.payout}  (+{event.profit})"
            self.message_color = self.palette["win"]
        elif isinstance(event, BalanceReset):
            self.message = f"Balance reset to {event.balance}"
            self.message_color = self.palette["text"]

    # --- Input ---------------------------------------------------------

    def _start_round(self) -> None:
        result = self.session.start(self.bet_input)
        if not result:
            self.message = f"Can't start: {result.reason.value}"
            self.message_color = self.palette["danger"]
            return
        # Fresh time base so the first tick doesn't carry idle time.
        self.clock.tick()

    def _adjust_bet(self, delta: int) -> None:
        if self.session.state is RoundState.RUNNING:
            return
        cfg = self.config
        self.bet_input = max(cfg.min_bet, min(cfg.max_bet, self.bet_input + delta))

    def handle_events(self) -> bool:
        """Handle window/keyboard events and translate them into commands."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type != pygame.KEYDOWN:
                continue

            if event.key in (pygame.K_ESCAPE, pygame.K_q):
                return False
            if event.key == pygame.K_m:
                self.audio.toggle_mute()
                continue

            if self.session.state is RoundState.RUNNING:
                if event.key == pygame.K_SPACE:
                    self.session.cash_out()
                    continue
                direction = KEY_TO_DIRECTION.get(event.key)
                if direction:
                    self.session.set_direction(*direction)
                continue

            if event.key in (pygame.K_SPACE, pygame.K_RETURN):
                self._start_round()
            elif event.key in BET_UP_KEYS:
                self._adjust_bet(BET_STEP)
            elif event.key in BET_DOWN_KEYS:
                self._adjust_bet(-BET_STEP)
            elif event.key == pygame.K_r:
                self.session.reset_balance()
        return True

    # --- Drawing -------------------------------------------------------

    def _build_background(self) -> pygame.Surface:
        """Checkerboard plus grid lines, built once."""
        surface = pygame.Surface((self.board_width, self.board_height))
        surface.fill(self.palette["bg"])
        for x, y in self.session.grid.cells():
            if (x + y) % 2 == 0:
                rect = pygame.Rect(x * CELL, y * CELL, CELL, CELL)
                surface.fill(self.palette["checker"], rect)
        for x in range(0, self.board_width + 1, CELL):
            pygame.draw.line(surface, self.palette["grid"], (x, 0), (x, self.board_height))
        for y in range(0, self.board_height + 1, CELL):
            pygame.draw.line(surface, self.palette["grid"], (0, y), (self.board_width, y))
        return surface

    def _draw_food(self, snap: Snapshot) -> None:
        radius = CELL * 0.33
        for item in snap.food:
            cx = item.cell[0] * CELL + CELL / 2
            cy = item.cell[1] * CELL + CELL / 2
            gem = [
                (cx, cy - radius),
                (cx + radius * 0.65, cy - radius * 0.35),
                (cx + radius * 0.65, cy + radius * 0.35),
                (cx, cy + radius),
                (cx - radius * 0.65, cy + radius * 0.35),
                (cx - radius * 0.65, cy - radius * 0.35),
            ]
            pygame.draw.polygon(self.board, pygame.Color(item.color), gem)

    def _draw_snake(self, snap: Snapshot) -> None:
        length = len(snap.snake)
        head, body, tail = self.palette["head"], self.palette["body"], self.palette["tail"]
        pad = max(1, CELL // 14)
        for idx in range(length - 1, -1, -1):
            x, y = snap.snake[idx]
            rect = pygame.Rect(x * CELL + pad, y * CELL + pad, CELL - 2 * pad, CELL - 2 * pad)
            if idx == 0:
                color = head
            else:
                color = body.lerp(tail, idx / max(1, length - 1))
            pygame.draw.rect(self.board, color, rect, border_radius=CELL // 3)

    def _draw_overlay(self, snap: Snapshot) -> None:
        if snap.state is RoundState.RUNNING:
            return
        overlay = pygame.Surface((self.board_width, self.board_height), pygame.SRCALPHA)
        overlay.fill((5, 5, 15, 150))
        if snap.state is RoundState.CRASHED:
            title, color = CRASH_LABELS[snap.crash_cause], self.palette["danger"]
        elif snap.state is RoundState.CASHED_OUT:
            title, color = "CASHED OUT!", self.palette["win"]
        else:
            title, color = "SNAKE CASHOUT", self.palette["head"]
        lines = [
            self.title_font.render(title, True, color),
            self.font.render(
                f"Bet {self.bet_input}  [-/+]   SPACE start   R reset", True, self.palette["text"]
            ),
        ]
        top = self.board_height // 2 - TITLE_FONT_SIZE
        for idx, surf in enumerate(lines):
            rect = surf.get_rect(center=(self.board_width // 2, top + idx * (TITLE_FONT_SIZE + 8)))
            overlay.blit(surf, rect)
        self.board.blit(overlay, (0, 0))

    def _draw_hud(self, snap: Snapshot) -> None:
        hud = pygame.Rect(0, self.board_height, self.board_width, HUD_HEIGHT)
        self.window.fill(self.palette["hud"], hud)

        danger = snap.state is RoundState.CRASHED or snap.multiplier >= 6
        mult_color = self.palette["danger"] if danger else self.palette["accent"]
        mult = self.title_font.render(f"{snap.multiplier:.2f}x", True, mult_color)
        self.window.blit(mult, (12, self.board_height + 8))

        if self.config.bonus_policy is BonusPolicy.COMBO:
            bonus = f"STREAK {snap.streak}/{self.config.combo_threshold}  COMBOS {snap.bonus_count}"
        else:
            bonus = f"SPIKES {snap.bonus_count}"
        bet = snap.bet if snap.state is RoundState.RUNNING else self.bet_input
        stats = (
            f"BAL {snap.balance}  BET {bet}  SCORE {snap.score}  BEST {snap.best_score}  {bonus}"
        )
        text = self.font.render(stats, True, self.palette["text"])
        self.window.blit(text, (12, self.board_height + 8 + TITLE_FONT_SIZE))

        status = self.font.render(self.message, True, self.message_color)
        self.window.blit(status, (self.board_width - status.get_width() - 12, self.board_height + 14))

    def draw(self) -> None:
        """Render the current snapshot: board, food, snake, overlay and HUD."""
        snap = self.session.snapshot()
        self.board.blit(self.background, (0, 0))
        if snap.state is not RoundState.IDLE:
            self._draw_food(snap)
            self._draw_snake(snap)
        self._draw_overlay(snap)
        self.window.blit(self.board, (0, 0))
        self._draw_hud(snap)

    # --- Main loop -----------------------------------------------------

    def start(self) -> None:
        """Run the main loop: handle input, tick the session while running, render."""
        running = True
        while running:
            running = self.handle_events()
            elapsed_ms = self.clock.tick(FPS)
            if self.session.is_ticking:
                self.session.tick(float(elapsed_ms))
            self.draw()
            pygame.display.update()
        pygame.quit()

