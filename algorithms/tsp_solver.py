import logging

from algorithms.distance import stop_distance
from algorithms.exceptions import MIN_STOPS, InsufficientStopsError
from models import Route, RouteComparison

logger = logging.getLogger(__name__)


def find_nearest_stop(current_stop, candidates):
    """
    Находит ближайшую остановку к текущей из списка кандидатов

    При равных расстояниях остается первая найденная остановка.
    Возвращает (остановка, индекс) или (None, None) для пустого списка.
    """
    min_distance = float('inf')
    nearest_stop = None
    nearest_index = None

    for idx, stop in enumerate(candidates):
        distance = stop_distance(current_stop, stop)

        if distance < min_distance:
            min_distance = distance
            nearest_stop = stop
            nearest_index = idx

    return nearest_stop, nearest_index


def solve_tsp(stops):
    """
    Решение задачи коммивояжёра методом ближайшего соседа

    Аргументы:
        stops: последовательность остановок (объекты с latitude/longitude)

    Возвращает:
        замкнутый список остановок: начинается с первой остановки из исходного
        списка и заканчивается ею же
    """
    if len(stops) < MIN_STOPS:
        raise InsufficientStopsError(len(stops))

    remaining = list(stops)

    # Начинаем с первой остановки
    start = remaining.pop(0)
    ordered = [start]
    current = start

    # Пока есть непосещенные остановки
    while remaining:
        nearest, idx = find_nearest_stop(current, remaining)

        ordered.append(nearest)
        current = nearest

        remaining.pop(idx)

    # Возврат в начальную точку
    ordered.append(start)

    return ordered


def route_distance(path):
    """Сумма расстояний между соседними точками пути (без замыкания), км"""
    total = 0.0
    for i in range(len(path) - 1):
        total += stop_distance(path[i], path[i + 1])
    return total


def score_tour(stops):
    """
    Длина замкнутого обхода в исходном порядке, км

    Первая остановка неявно добавляется в конец. Для 0 или 1 остановки
    возвращает 0.
    """
    if len(stops) < MIN_STOPS:
        return 0.0

    path = list(stops)
    path.append(path[0])
    return route_distance(path)


def optimize(stops):
    """Строит маршрут методом ближайшего соседа и считает его длину"""
    path = solve_tsp(stops)
    total = route_distance(path)

    logger.debug(f"Маршрут построен: {len(stops)} остановок, {total:.3f} км")

    return Route(stops=tuple(path), total_distance=total)


def compare_routes(stops):
    """
    Сравнение оптимизированного маршрута с маршрутом в порядке добавления

    Возвращает RouteComparison с обоими маршрутами.
    """
    optimized = optimize(stops)

    original_path = list(stops)
    original_path.append(original_path[0])
    original = Route(stops=tuple(original_path), total_distance=score_tour(stops))

    logger.debug(
        f"Сравнение маршрутов: исходный {original.total_distance:.3f} км, "
        f"оптимизированный {optimized.total_distance:.3f} км"
    )

    return RouteComparison(optimized=optimized, original=original)
