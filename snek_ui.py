# snek_ui.py
import argparse
import random

import arcade
from arcade.types import XYWH

from snek_logic import (SnekGame, cell_to_screen, GRID_WIDTH_LOGIC, GRID_HEIGHT_LOGIC,
                        MAX_TIME_TO_MOVE, MIN_TIME_TO_MOVE, TIME_TO_REACH_MAX_SPEED,
                        SQUARE_SIZE_LOGIC, APPLE_SIZE_LOGIC, UP, DOWN, LEFT, RIGHT)

# --- Constantes Visuales ---
UI_SCREEN_TITLE_DEFAULT = "Snek"

# --- Colores ---
BACKGROUND_COLOR_UI = (255, 255, 255)
SNAKE_COLOR_UI = (91, 206, 250)
APPLE_COLOR_UI = (245, 169, 184)
GAMEOVER_COLOR_UI = arcade.color.BLACK_OLIVE

KEY_TO_DIRECTION = {
    arcade.key.UP: UP,
    arcade.key.DOWN: DOWN,
    arcade.key.LEFT: LEFT,
    arcade.key.RIGHT: RIGHT,
}


class SnekGameUI(arcade.Window):
    def __init__(self, snek_game_instance: SnekGame, square_size: int = SQUARE_SIZE_LOGIC,
                 apple_size: int = APPLE_SIZE_LOGIC):
        self.game_logic = snek_game_instance
        self.square_size = square_size
        self.apple_size = apple_size
        screen_width = self.game_logic.width * square_size
        screen_height = self.game_logic.height * square_size

        super().__init__(screen_width, screen_height,
                         UI_SCREEN_TITLE_DEFAULT, update_rate=1/60)
        self.background_color = BACKGROUND_COLOR_UI

        # El origen de la lógica está en el centro del tablero
        self.offset_x = screen_width / 2
        self.offset_y = screen_height / 2

        self.pressed_directions = set()
        self.elapsed_time = 0.0  # Tiempo de partida, sin contar pausas
        self.paused = False
        self.game_over_reported = False

    def setup_human_play(self):
        """Configura o resetea la partida."""
        self.game_logic.reset()
        self.pressed_directions.clear()
        self.elapsed_time = 0.0
        self.paused = False
        self.game_over_reported = False
        print("Nueva partida de Snek.")

    def _to_window(self, coordinate):
        x, y = cell_to_screen(coordinate, self.game_logic.width,
                              self.game_logic.height, self.square_size)
        return x + self.offset_x, y + self.offset_y

    def on_draw(self):
        self.clear()
        state = self.game_logic.get_render_state()

        if state['apple'] is not None:
            apple_x, apple_y = self._to_window(state['apple'])
            arcade.draw_rect_filled(
                XYWH(apple_x, apple_y, self.apple_size, self.apple_size), APPLE_COLOR_UI)

        # De la cola a la cabeza para que la cabeza quede encima
        for coordinate, size in reversed(state['segments']):
            center_x, center_y = self._to_window(coordinate)
            side = size * self.square_size
            arcade.draw_rect_filled(XYWH(center_x, center_y, side, side), SNAKE_COLOR_UI)

        if state['game_over']:
            arcade.draw_text("GAME OVER", self.width / 2, (self.height / 2) + 30,
                             GAMEOVER_COLOR_UI, font_size=26, anchor_x="center", anchor_y="center")
            arcade.draw_text("ESPACIO = Reset   ESC = Salir", self.width / 2, self.height / 2 - 20,
                             GAMEOVER_COLOR_UI, font_size=16, anchor_x="center", anchor_y="center")
        elif self.paused:
            arcade.draw_text("PAUSA", self.width / 2, self.height / 2,
                             GAMEOVER_COLOR_UI, font_size=26, anchor_x="center", anchor_y="center")

    def on_update(self, delta_time: float):
        if self.game_logic.game_over or self.paused:
            return

        self.elapsed_time += delta_time
        info = self.game_logic.update(delta_time, self.elapsed_time, self.pressed_directions)

        if info['game_over'] and not self.game_over_reported:
            self.game_over_reported = True
            print(f"Game over. Longitud final: {self.game_logic.snake.length}. "
                  f"Tiempo: {self.elapsed_time:.1f}s")

    def on_key_press(self, key, modifiers):
        if key == arcade.key.ESCAPE:
            arcade.exit()
            return

        if self.game_logic.game_over:
            if key == arcade.key.SPACE:
                self.setup_human_play()
            return

        if key == arcade.key.P:
            self.paused = not self.paused
            return

        if key in KEY_TO_DIRECTION:
            self.pressed_directions.add(KEY_TO_DIRECTION[key])

    def on_key_release(self, key, modifiers):
        self.pressed_directions.discard(KEY_TO_DIRECTION.get(key))

    def on_close(self):  # Se llama cuando se cierra la ventana de Arcade
        print("Ventana UI cerrada por el usuario.")
        super().on_close()
        arcade.exit()


def main():
    parser = argparse.ArgumentParser(description="Snek (ventana arcade)")
    parser.add_argument("--width", type=int, default=GRID_WIDTH_LOGIC,
                        help="Ancho del tablero en casillas (default: %(default)s).")
    parser.add_argument("--height", type=int, default=GRID_HEIGHT_LOGIC,
                        help="Alto del tablero en casillas (default: %(default)s).")
    parser.add_argument("--square-size", type=int, default=SQUARE_SIZE_LOGIC,
                        help="Tamaño de cada casilla en píxeles (default: %(default)s).")
    parser.add_argument("--seed", type=int, default=None,
                        help="Semilla para la posición de las manzanas.")
    parser.add_argument("--max-time", type=float, default=MAX_TIME_TO_MOVE,
                        help="Segundos entre pasos al empezar (default: %(default)s).")
    parser.add_argument("--min-time", type=float, default=MIN_TIME_TO_MOVE,
                        help="Segundos entre pasos a máxima velocidad (default: %(default)s).")
    parser.add_argument("--ramp-time", type=float, default=TIME_TO_REACH_MAX_SPEED,
                        help="Segundos de juego hasta la máxima velocidad (default: %(default)s).")
    args = parser.parse_args()

    rng = random.Random(args.seed)
    game_logic = SnekGame(args.width, args.height, rng=rng,
                          max_time=args.max_time, min_time=args.min_time,
                          ramp_time=args.ramp_time)
    apple_size = args.square_size * APPLE_SIZE_LOGIC // SQUARE_SIZE_LOGIC
    SnekGameUI(game_logic, square_size=args.square_size, apple_size=apple_size)
    print("Nueva partida de Snek.")
    arcade.run()


if __name__ == "__main__":
    main()
