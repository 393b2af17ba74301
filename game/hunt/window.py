"""
Arcade front end: plays a HuntSession in a window.

The window doubles as the loop's tick source: the driver's pending frame
callback is invoked from ``on_update`` with the window's running clock.

Controls:
    WASD / arrows   move reticle        mouse drag   joystick
    Space           fire                Shift        cheat (clear round)
    Esc             pause / resume      Enter        start / continue / retry
    G               give up             Q            quit (from pause, confirm with Q)
    N               cancel quit         H            return home (summary)

Run:
    python -m game.hunt.window
"""

from __future__ import annotations

import argparse
from typing import Dict, Optional, Set, Tuple

import arcade

from .constants import GAME_HEIGHT, GAME_WIDTH, HORIZON_Y, ROUNDS_PER_LEVEL
from .entities import FrameInput, GameState
from .loop import FrameCallback, GameLoopDriver
from .reports import hud, level_report, lose_report, round_report, session_summary
from .session import HuntSession
from .utils import joystick_vector, seed_everything

JOYSTICK_RADIUS = 40.0  # pixels of drag for full deflection

UP_KEYS = (arcade.key.W, arcade.key.UP)
DOWN_KEYS = (arcade.key.S, arcade.key.DOWN)
LEFT_KEYS = (arcade.key.A, arcade.key.LEFT)
RIGHT_KEYS = (arcade.key.D, arcade.key.RIGHT)


class HuntWindow(arcade.Window):
    """Arcade window rendering (and, when interactive, driving) a HuntSession"""

    def __init__(
        self,
        session: HuntSession,
        width: int = 1050,
        height: int = 450,
        interactive: bool = True,
    ):
        super().__init__(width, height, "Duck Hunt")
        self.session = session
        self.interactive = interactive

        # Colors
        self.SKY = (236, 160, 80)
        self.GROUND = (110, 75, 45)
        self.BIRD_C = (60, 40, 25)
        self.FAST_C = (190, 60, 40)
        self.DEAD_C = (120, 120, 120)
        self.RETICLE_C = (230, 40, 40)
        self.HIT_C = (255, 255, 255)
        self.HUD_C = (250, 240, 220)

        self._clock = 0.0
        self._pending: Dict[int, FrameCallback] = {}
        self._next_handle = 1
        self._held: Set[int] = set()
        self._drag_origin: Optional[Tuple[float, float]] = None
        self._joystick = (0.0, 0.0)

        self.driver: Optional[GameLoopDriver] = None
        if interactive:
            self.driver = GameLoopDriver(session, self, input_provider=self.sample_input)
            self.driver.start()

    def attach(self, session: HuntSession) -> None:
        """Point a non-interactive window at a new session (env reset)"""
        self.session = session

    # ----------------------------
    # Tick source
    # ----------------------------

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def on_update(self, delta_time: float):
        self._clock += delta_time
        if self.interactive and self.driver is not None and not self.driver.running:
            self.session.decay_timers(delta_time)
        callbacks = list(self._pending.values())
        self._pending.clear()
        for cb in callbacks:
            cb(self._clock)

    # ----------------------------
    # Input
    # ----------------------------

    def sample_input(self) -> FrameInput:
        held = self._held
        return FrameInput(
            up=any(k in held for k in UP_KEYS),
            down=any(k in held for k in DOWN_KEYS),
            left=any(k in held for k in LEFT_KEYS),
            right=any(k in held for k in RIGHT_KEYS),
            joystick=self._joystick,
        )

    def on_key_press(self, key: int, modifiers: int):
        if not self.interactive:
            return
        self._held.add(key)
        s = self.session
        state = s.game_state

        if key == arcade.key.SPACE:
            s.fire()
        elif key in (arcade.key.LSHIFT, arcade.key.RSHIFT):
            s.cheat()
        elif key == arcade.key.ESCAPE:
            s.toggle_pause()
        elif key in (arcade.key.ENTER, arcade.key.RETURN):
            if state == GameState.HOME:
                s.start()
            elif state == GameState.PAUSED:
                s.resume()
            elif state == GameState.LEVEL_WIN:
                s.acknowledge_level()
            elif state == GameState.ROUND_LOSE:
                s.retry()
            elif state == GameState.SESSION_SUMMARY:
                s.return_home()
        elif key == arcade.key.G:
            s.give_up()
        elif key == arcade.key.Q:
            if s.state.pause_confirm_quit:
                s.quit_to_home()
            else:
                s.request_quit()
        elif key == arcade.key.N:
            s.cancel_quit()
        elif key == arcade.key.H:
            s.return_home()

    def on_key_release(self, key: int, modifiers: int):
        self._held.discard(key)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self._drag_origin = (x, y)

    def on_mouse_drag(self, x: float, y: float, dx: float, dy: float, buttons: int, modifiers: int):
        if self._drag_origin is None:
            return
        ox, oy = self._drag_origin
        # Window y grows upward, playfield y grows downward
        self._joystick = joystick_vector(x - ox, -(y - oy), JOYSTICK_RADIUS)

    def on_mouse_release(self, x: float, y: float, button: int, modifiers: int):
        self._drag_origin = None
        self._joystick = (0.0, 0.0)

    def on_close(self):
        if self.driver is not None:
            self.driver.close()
        super().on_close()

    # ----------------------------
    # Drawing
    # ----------------------------

    def _to_screen(self, x: float, y: float) -> Tuple[float, float]:
        return x / 100.0 * self.width, self.height - y / 100.0 * self.height

    def on_draw(self):
        self.clear()
        s = self.session.state
        info = hud(s)

        horizon = self.height - HORIZON_Y / 100.0 * self.height
        arcade.draw_lrbt_rectangle_filled(0, self.width, horizon, self.height, self.SKY)
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, horizon, self.GROUND)

        radius = 0.025 * self.width
        for b in s.birds:
            bx, by = self._to_screen(b.x, b.y)
            color = self.DEAD_C if b.is_dead else (self.FAST_C if b.kind.value == "fast" else self.BIRD_C)
            arcade.draw_circle_filled(bx, by, radius, color)
            if not b.is_dead:
                beak = bx + b.facing * radius
                arcade.draw_line(bx, by, beak + b.facing * 6, by, color, 3)

        rx, ry = self._to_screen(*s.reticle)
        rc = self.HIT_C if s.show_hit_marker else self.RETICLE_C
        arcade.draw_circle_outline(rx, ry, 14, rc, 2)
        arcade.draw_line(rx - 20, ry, rx + 20, ry, rc, 1)
        arcade.draw_line(rx, ry - 20, rx, ry + 20, rc, 1)

        txt = (f"Level {info['level']}  Round {info['round']}/{ROUNDS_PER_LEVEL}  "
               f"Birds {info['birds_killed']}/{info['total_birds']}  "
               f"Ammo {info['ammo_left']}/{info['total_ammo']}  "
               f"Bounty ${s.bounty}")
        arcade.draw_text(txt, 12, 12, self.HUD_C, 14)

        if s.toast:
            arcade.draw_text(s.toast, self.width / 2, self.height - 40, self.HUD_C, 18,
                             anchor_x="center")

        self._draw_overlay(s)

    def _draw_overlay(self, s):
        lines = []
        if s.state == GameState.SPLASH:
            lines = ["DUCK HUNT", "WESTERN"]
        elif s.state == GameState.HOME:
            lines = ["WANTED: DEAD OR ALIVE", "Press ENTER to start the hunt"]
        elif s.state == GameState.PAUSED:
            lines = ["PAUSED", "ESC resume / Q quit"]
            if s.pause_confirm_quit:
                lines.append("Quit to camp? Q again to confirm, N to stay")
        elif s.state == GameState.ROUND_WIN:
            r = round_report(s)
            lines = [f"ROUND {r['round']} CLEAR!", f"Accuracy {r['accuracy']}%  Bonus ${r['bonus']}",
                     f"Next round in {r['countdown']}" if r["countdown"] > 0 else "GET READY!"]
        elif s.state == GameState.LEVEL_WIN:
            r = level_report(s)
            lines = [f"LEVEL {r['level']} DONE",
                     f"Kills {r['total_killed']}/{r['total_birds']}  Accuracy {r['accuracy']}%",
                     f"Bounty ${r['bounty']}  Rank {r['rank']}",
                     "Press ENTER to ride on"]
        elif s.state == GameState.ROUND_LOSE:
            r = lose_report(s)
            lines = ["ROUND FAILED", "Prey escaped" if r["reason"] == "escaped" else "Out of ammo",
                     f"You bagged {r['birds_killed']} of {r['total_birds']} required",
                     "ENTER retry / G give up"]
        elif s.state == GameState.SESSION_SUMMARY:
            r = session_summary(s)
            lines = ["HUNT REPORT", f"Level reached {r['level_reached']}",
                     f"Rounds cleared {r['rounds_cleared']}", f"Total bounty ${r['bounty']}",
                     "Press ENTER to return to camp"]

        y = self.height * 0.7
        for line in lines:
            arcade.draw_text(line, self.width / 2, y, self.HUD_C, 22, anchor_x="center")
            y -= 34


def play(seed: Optional[int] = None, verbose: int = 1):
    """Open a window and play"""
    seed_everything(seed)
    session = HuntSession(seed=seed, verbose=verbose)
    width = 1050
    HuntWindow(session, width=width, height=int(width * GAME_HEIGHT / GAME_WIDTH))
    arcade.run()


def main():
    parser = argparse.ArgumentParser(description="Play Duck Hunt")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: none)")
    parser.add_argument("--quiet", action="store_true", help="Do not print state transitions")
    args = parser.parse_args()
    play(seed=args.seed, verbose=0 if args.quiet else 1)


if __name__ == "__main__":
    main()
