# snek_logic.py

"""
Lógica de Snek
==============
* Núcleo de simulación independiente de la UI (arcade) y de la shell (curses).
* Tablero toroidal: la serpiente sale por un borde y entra por el opuesto.
* La velocidad aumenta con el tiempo de juego hasta un mínimo de intervalo.
* La serpiente guarda TODO el historial de casillas de la cabeza; el cuerpo
  visible son las últimas `length` entradas.
"""
import numbers
import random
from collections import namedtuple

import numpy as np

# --- Constantes del Tablero ---
GRID_WIDTH_LOGIC = 14   # Ancho en casillas
GRID_HEIGHT_LOGIC = 10  # Alto en casillas
SQUARE_SIZE_LOGIC = 60  # Tamaño en píxeles de cada casilla
APPLE_SIZE_LOGIC = 40   # Tamaño en píxeles de la manzana

# --- Constantes de Velocidad ---
MAX_TIME_TO_MOVE = 0.3          # Segundos entre pasos al empezar
MIN_TIME_TO_MOVE = 0.15         # Segundos entre pasos a máxima velocidad
TIME_TO_REACH_MAX_SPEED = 60.0  # Segundos de juego hasta llegar al mínimo

# --- Constantes del Cuerpo ---
BODY_PART_SIZE_MIN = 0.4
BODY_PART_SIZE_MAX = 0.9
MIN_SNAKE_LENGTH_SIZE_DIFF = 5  # Evita que las serpientes cortas se afilen demasiado

# --- Manzana ---
MAX_APPLE_SPAWN_ATTEMPTS = 100  # Muestreos aleatorios antes de recorrer las casillas libres

# --- Direcciones (mismo orden de índices que las acciones de la IA) ---
UP = 0
DOWN = 1
LEFT = 2
RIGHT = 3

DIRECTION_NAMES = {UP: "UP", DOWN: "DOWN", LEFT: "LEFT", RIGHT: "RIGHT"}

DIRECTION_VECTORS = {
    UP: (0, 1),     # Y aumenta hacia arriba
    DOWN: (0, -1),
    LEFT: (-1, 0),
    RIGHT: (1, 0)
}

OPPOSITE_DIRECTION = {UP: DOWN, DOWN: UP, LEFT: RIGHT, RIGHT: LEFT}

# Orden en el que se leen las teclas pulsadas en cada frame
INPUT_PRIORITY = (LEFT, RIGHT, UP, DOWN)


Coordinate = namedtuple("Coordinate", ["x", "y"])


def add(coordinate, vector):
    return Coordinate(coordinate[0] + vector[0], coordinate[1] + vector[1])


def wrap(coordinate, width, height):
    """Lleva una casilla al rango [0, width) x [0, height).

    Se suma el módulo antes de aplicar `%` para que un paso a -1 vuelva al
    último índice del tablero.
    """
    return Coordinate((coordinate[0] + width) % width,
                      (coordinate[1] + height) % height)


def cell_to_screen(coordinate, width, height, square_size=SQUARE_SIZE_LOGIC):
    """Centro en píxeles de una casilla, con el origen en el centro del tablero."""
    return ((coordinate[0] - width / 2 + 0.5) * square_size,
            (coordinate[1] - height / 2 + 0.5) * square_size)


def body_part_size(index, length,
                   size_min=BODY_PART_SIZE_MIN,
                   size_max=BODY_PART_SIZE_MAX,
                   min_length=MIN_SNAKE_LENGTH_SIZE_DIFF):
    """Tamaño relativo (0..1) del segmento `index` (0 = cabeza)."""
    pos_in_snake = index / max(length, min_length)
    return size_max - pos_in_snake * (size_max - size_min)


def move_interval(elapsed_time,
                  max_time=MAX_TIME_TO_MOVE,
                  min_time=MIN_TIME_TO_MOVE,
                  ramp_time=TIME_TO_REACH_MAX_SPEED):
    """Segundos entre pasos tras `elapsed_time` segundos de partida.

    Interpola linealmente de `max_time` a `min_time` durante `ramp_time`
    segundos y se queda en `min_time` a partir de ahí.
    """
    t = min(1.0, elapsed_time / ramp_time)
    return max_time - t * (max_time - min_time)


class MovementClock:
    """Convierte el tiempo real en pasos discretos de la cuadrícula."""

    def __init__(self, max_time=MAX_TIME_TO_MOVE, min_time=MIN_TIME_TO_MOVE,
                 ramp_time=TIME_TO_REACH_MAX_SPEED):
        if min_time <= 0 or max_time <= 0:
            raise ValueError("Move intervals must be positive.")
        if min_time > max_time:
            raise ValueError("min_time cannot be greater than max_time.")
        if ramp_time <= 0:
            raise ValueError("ramp_time must be positive.")
        self.max_time = max_time
        self.min_time = min_time
        self.ramp_time = ramp_time

    def interval(self, elapsed_time):
        return move_interval(elapsed_time, self.max_time, self.min_time, self.ramp_time)

    def tick(self, snake, delta_time, elapsed_time):
        """Acumula `delta_time` en la serpiente y dice si toca dar un paso.

        Como mucho un paso por frame: si toca, el acumulador vuelve a 0 y el
        sobrante se descarta (no se guarda para el siguiente paso).
        """
        snake.time_since_last_step += delta_time
        if snake.time_since_last_step > self.interval(elapsed_time):
            snake.time_since_last_step = 0.0
            return True
        return False


class Snake:
    """
    Estado de la serpiente.

    Attributes:
        head: casilla actual de la cabeza
        length: número de segmentos visibles (empieza en 1)
        history: todas las casillas que ha ocupado la cabeza, la más antigua primero
        time_since_last_step: segundos acumulados desde el último paso
        direction: dirección actual (UP, DOWN, LEFT o RIGHT)
    """

    def __init__(self, start, width, height, direction=RIGHT):
        self.width = width
        self.height = height
        self.head = Coordinate(*start)
        self.length = 1
        self.history = [self.head]
        self.time_since_last_step = 0.0
        self.direction = direction
        # Dirección con la que se dio el último paso; el cuello está detrás de ella
        self.last_step_direction = direction

    def can_turn(self, requested):
        if requested not in DIRECTION_VECTORS:
            raise ValueError(f"Unknown direction: {requested!r}")
        opposite = OPPOSITE_DIRECTION[requested]
        return opposite != self.direction and opposite != self.last_step_direction

    def set_direction(self, requested):
        """Cambia de dirección salvo que sea la contraria (se ignora sin error)."""
        if self.can_turn(requested):
            self.direction = requested
            return True
        return False

    def step(self):
        """Avanza la cabeza una casilla. No comprueba colisiones."""
        new_head = wrap(add(self.head, DIRECTION_VECTORS[self.direction]),
                        self.width, self.height)
        self.history.append(new_head)
        self.head = new_head
        self.last_step_direction = self.direction
        return new_head

    def grow(self):
        # El historial no se toca: el siguiente paso ya alarga el cuerpo visible
        self.length += 1

    def body_part_coordinate(self, index):
        return self.history[len(self.history) - 1 - index]

    def visible_segments(self):
        """Las últimas `length` casillas del historial, empezando por la cabeza."""
        count = min(self.length, len(self.history))
        return [self.body_part_coordinate(i) for i in range(count)]

    def detect_self_collision(self):
        # Solo la cabeza se mueve en cada paso, así que basta con compararla
        # con el resto de segmentos (nunca consigo misma, índice 0)
        segments = self.visible_segments()
        return self.head in segments[1:]

    def body_part_sizes(self, size_min=BODY_PART_SIZE_MIN, size_max=BODY_PART_SIZE_MAX,
                        min_length=MIN_SNAKE_LENGTH_SIZE_DIFF):
        return [body_part_size(i, self.length, size_min, size_max, min_length)
                for i in range(min(self.length, len(self.history)))]

    def __repr__(self):
        return (f"<Snake head={tuple(self.head)}, length={self.length}, "
                f"direction={DIRECTION_NAMES[self.direction]}>")


class AppleSpawner:
    """Elige casillas libres para la manzana."""

    def __init__(self, width, height, rng=None, max_attempts=MAX_APPLE_SPAWN_ATTEMPTS):
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else random.Random()
        self.max_attempts = max_attempts

    def spawn(self, snake):
        """Casilla aleatoria fuera del cuerpo visible de la serpiente.

        Primero se prueba con muestreo por rechazo; si se agotan los intentos
        se recorren las casillas libres. Devuelve None si el tablero está lleno.
        """
        occupied = set(snake.visible_segments())
        for _ in range(self.max_attempts):
            coordinate = Coordinate(self.rng.randrange(self.width),
                                    self.rng.randrange(self.height))
            if coordinate not in occupied:
                return coordinate
        return self._spawn_from_free_cells(occupied)

    def _spawn_from_free_cells(self, occupied):
        free = np.ones((self.width, self.height), dtype=bool)
        for x, y in occupied:
            free[x, y] = False
        free_cells = np.argwhere(free)
        if len(free_cells) == 0:
            return None
        x, y = free_cells[self.rng.randrange(len(free_cells))]
        return Coordinate(int(x), int(y))


class SnekGame:
    """
    Sesión de juego: serpiente + reloj + manzana.

    Los front-ends llaman a `update()` una vez por frame y dibujan lo que
    devuelve `get_render_state()`.
    """

    def __init__(self, width=GRID_WIDTH_LOGIC, height=GRID_HEIGHT_LOGIC, rng=None,
                 max_time=MAX_TIME_TO_MOVE, min_time=MIN_TIME_TO_MOVE,
                 ramp_time=TIME_TO_REACH_MAX_SPEED,
                 size_min=BODY_PART_SIZE_MIN, size_max=BODY_PART_SIZE_MAX,
                 min_length_size_diff=MIN_SNAKE_LENGTH_SIZE_DIFF,
                 max_spawn_attempts=MAX_APPLE_SPAWN_ATTEMPTS):
        for value in (width, height):
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ValueError("Grid width and height must be integers.")
        if width <= 0 or height <= 0:
            raise ValueError("Grid width and height must be positive.")
        if min_length_size_diff <= 0:
            raise ValueError("min_length_size_diff must be positive.")
        self.width = int(width)
        self.height = int(height)
        self.rng = rng if rng is not None else random.Random()
        self.clock = MovementClock(max_time, min_time, ramp_time)
        self.spawner = AppleSpawner(self.width, self.height, self.rng, max_spawn_attempts)
        self.size_min = size_min
        self.size_max = size_max
        self.min_length_size_diff = min_length_size_diff

        self.snake = None
        self.apple = None
        self.game_over = False
        self.setup()

    def setup(self):
        """Configura una partida nueva; la primera manzana se coloca aquí."""
        start = Coordinate(self.width // 2, self.height // 2)
        self.snake = Snake(start, self.width, self.height)
        self.game_over = False
        self.apple = self.spawner.spawn(self.snake)
        return self.get_render_state()

    def reset(self):
        return self.setup()

    def handle_input(self, pressed):
        """Aplica como mucho un cambio de dirección de las teclas pulsadas."""
        for direction in INPUT_PRIORITY:
            if direction in pressed and direction != self.snake.direction:
                if self.snake.set_direction(direction):
                    return True
        return False

    def update(self, delta_time, elapsed_time, pressed=()):
        """Un frame: entrada, paso (si toca) + colisión, y comprobar la manzana."""
        info = {'stepped': False, 'ate_apple': False, 'game_over': self.game_over}
        if self.game_over:
            return info

        self.handle_input(pressed)

        if self.clock.tick(self.snake, delta_time, elapsed_time):
            self.snake.step()
            info['stepped'] = True
            if self.snake.detect_self_collision():
                self.game_over = True
                info['game_over'] = True
                return info

        if self.apple is not None and self.snake.head == self.apple:
            self.eat_apple()
            info['ate_apple'] = True
            # Al crecer reaparece la casilla de la cola, que puede ser la de la cabeza
            if self.snake.detect_self_collision():
                self.game_over = True
                info['game_over'] = True

        return info

    def eat_apple(self):
        self.snake.grow()
        self.apple = None
        self.apple = self.spawner.spawn(self.snake)

    def get_render_state(self):
        segments = self.snake.visible_segments()
        sizes = self.snake.body_part_sizes(self.size_min, self.size_max,
                                           self.min_length_size_diff)
        return {
            'segments': [(tuple(c), size) for c, size in zip(segments, sizes)],
            'apple': tuple(self.apple) if self.apple is not None else None,
            'game_over': self.game_over,
            'length': self.snake.length
        }
