# snek_shell.py
import curses
import argparse
import random
import time

from snek_logic import (SnekGame, GRID_WIDTH_LOGIC, GRID_HEIGHT_LOGIC, MAX_TIME_TO_MOVE,
                        MIN_TIME_TO_MOVE, TIME_TO_REACH_MAX_SPEED, UP, DOWN, LEFT, RIGHT)

# Mapeo de teclas de curses a direcciones de la lógica.
# En la lógica Y crece hacia arriba; al dibujar se invierte la fila.
DIRECTION_MAP_HUMAN_CURSES = {
    curses.KEY_UP: UP,
    curses.KEY_DOWN: DOWN,
    curses.KEY_LEFT: LEFT,
    curses.KEY_RIGHT: RIGHT,
}

FRAME_TIMEOUT_MS = 16  # ~60 frames por segundo

# Por debajo de este tamaño relativo el segmento se dibuja como cola
TAIL_SIZE_THRESHOLD = 0.65


def draw_game_shell(stdscr, game, terminal_rows, terminal_cols, paused=False):
    stdscr.erase()
    board_rows = game.height
    board_cols = game.width

    # Cada casilla lógica son dos caracteres; +2 por los bordes
    for r_idx in range(board_rows + 2):
        for c_logic_idx in range(board_cols + 2):
            is_border = r_idx in (0, board_rows + 1) or c_logic_idx in (0, board_cols + 1)
            c_char_start_idx = c_logic_idx * 2
            if is_border and r_idx < terminal_rows and c_char_start_idx + 1 < terminal_cols:
                try:
                    stdscr.addstr(r_idx, c_char_start_idx, "##")
                except curses.error:
                    pass

    state = game.get_render_state()

    if state['apple'] is not None:
        _draw_cell(stdscr, game, state['apple'], "()", terminal_rows, terminal_cols)

    for index, (coordinate, size) in reversed(list(enumerate(state['segments']))):
        if index == 0:
            chars = "@@"
        elif size >= TAIL_SIZE_THRESHOLD:
            chars = "OO"
        else:
            chars = "oo"
        _draw_cell(stdscr, game, coordinate, chars, terminal_rows, terminal_cols)

    length_text = f"Longitud: {state['length']}"
    if board_rows + 2 < terminal_rows and 2 + len(length_text) < terminal_cols:
        try:
            stdscr.addstr(board_rows + 2, 2, length_text)
        except curses.error:
            pass

    message = None
    if state['game_over']:
        message = "GAME OVER! 'q' to quit, 'r' to restart."
    elif paused:
        message = "PAUSED - Press 'p' to continue"
    if message:
        msg_r = board_rows // 2 + 1
        msg_c = max(0, ((board_cols + 2) * 2 - len(message)) // 2)
        if msg_r < terminal_rows and msg_c + len(message) < terminal_cols:
            try:
                stdscr.addstr(msg_r, msg_c, message)
            except curses.error:
                pass
    stdscr.refresh()


def _draw_cell(stdscr, game, coordinate, chars, terminal_rows, terminal_cols):
    x, y = coordinate
    row = game.height - y   # La fila 0 es el borde superior
    col = (x + 1) * 2
    if row < terminal_rows and col + 1 < terminal_cols:
        try:
            stdscr.addstr(row, col, chars)
        except curses.error:
            pass


def game_loop_shell_curses(stdscr, game):
    curses.curs_set(0)
    stdscr.nodelay(1)
    stdscr.timeout(FRAME_TIMEOUT_MS)

    term_rows, term_cols = stdscr.getmaxyx()
    min_req_rows = game.height + 3  # +2 bordes, +1 longitud
    min_req_cols = (game.width + 2) * 2

    if term_rows < min_req_rows or term_cols < min_req_cols:
        stdscr.clear()
        stdscr.addstr(0, 0, "Terminal is too small.")
        stdscr.addstr(1, 0, f"Required: {min_req_rows} rows, {min_req_cols} cols.")
        stdscr.addstr(2, 0, f"Available: {term_rows} rows, {term_cols} cols.")
        stdscr.addstr(4, 0, "Press any key to exit.")
        stdscr.nodelay(0)
        stdscr.getch()
        return None

    paused = False
    elapsed_time = 0.0
    last_frame = time.monotonic()

    while True:
        user_key = stdscr.getch()
        now = time.monotonic()
        delta_time = now - last_frame
        last_frame = now
        term_rows, term_cols = stdscr.getmaxyx()

        if user_key == ord('q'):
            break

        if game.game_over:
            if user_key == ord('r'):
                game.reset()
                elapsed_time = 0.0
                paused = False
        else:
            if user_key == ord('p'):
                paused = not paused

            if not paused:
                # curses solo entrega una tecla por frame
                pressed = set()
                if user_key in DIRECTION_MAP_HUMAN_CURSES:
                    pressed.add(DIRECTION_MAP_HUMAN_CURSES[user_key])
                elapsed_time += delta_time
                game.update(delta_time, elapsed_time, pressed)

        draw_game_shell(stdscr, game, term_rows, term_cols, paused)

    return game.snake.length


def parse_shell_args(argv=None):
    parser = argparse.ArgumentParser(description="Snek Shell Version")
    parser.add_argument("--width", type=int, default=GRID_WIDTH_LOGIC,
                        help="Ancho del tablero en casillas (default: %(default)s).")
    parser.add_argument("--height", type=int, default=GRID_HEIGHT_LOGIC,
                        help="Alto del tablero en casillas (default: %(default)s).")
    parser.add_argument("--seed", type=int, default=None,
                        help="Semilla para la posición de las manzanas.")
    parser.add_argument("--max-time", type=float, default=MAX_TIME_TO_MOVE,
                        help="Segundos entre pasos al empezar (default: %(default)s).")
    parser.add_argument("--min-time", type=float, default=MIN_TIME_TO_MOVE,
                        help="Segundos entre pasos a máxima velocidad (default: %(default)s).")
    parser.add_argument("--ramp-time", type=float, default=TIME_TO_REACH_MAX_SPEED,
                        help="Segundos de juego hasta la máxima velocidad (default: %(default)s).")
    return parser.parse_args(argv)


def build_game(args):
    return SnekGame(args.width, args.height, rng=random.Random(args.seed),
                    max_time=args.max_time, min_time=args.min_time,
                    ramp_time=args.ramp_time)


def main_shell():
    game = build_game(parse_shell_args())

    try:
        final_length = curses.wrapper(game_loop_shell_curses, game)
    except curses.error as e:
        print(f"Error de Curses: {e}")
        print("Asegúrate de que la terminal es compatible y tiene el tamaño adecuado.")
        return

    if final_length is not None:
        print(f"Partida terminada. Longitud final: {final_length}")


if __name__ == "__main__":
    main_shell()
