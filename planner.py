import itertools
import logging
import random

from algorithms.tsp_solver import compare_routes
from models import Stop

logger = logging.getLogger(__name__)

# Центр по умолчанию — Мумбаи
DEFAULT_CENTER = (19.07, 72.87)
# ~5 км в каждую сторону
DEFAULT_OFFSET = 0.05


def validate_stop(name, latitude, longitude):
    """Проверка названия и координат остановки, возвращает очищенные значения"""
    name = str(name or '').strip()
    if not name:
        raise ValueError('Stop name must not be empty')

    latitude = float(latitude)
    longitude = float(longitude)

    if not (-90 <= latitude <= 90):
        raise ValueError(f'Invalid latitude: {latitude}')
    if not (-180 <= longitude <= 180):
        raise ValueError(f'Invalid longitude: {longitude}')

    return name, latitude, longitude


class StopSet:
    """
    Набор остановок пользователя и последний рассчитанный маршрут

    Единственный владелец остановок. Движок маршрутизации получает
    только снимок набора и ничего не хранит между вызовами.
    """

    def __init__(self, center=DEFAULT_CENTER, offset=DEFAULT_OFFSET, rng=None):
        self.center = center
        self.offset = offset
        self._rng = rng or random.Random()
        self._ids = itertools.count(1)
        self._stops = []
        self._comparison = None

    def __len__(self):
        return len(self._stops)

    def __iter__(self):
        return iter(self._stops)

    def random_coordinates(self):
        """Случайные координаты в квадрате вокруг центра"""
        base_lat, base_lng = self.center
        return (
            base_lat + (self._rng.random() - 0.5) * self.offset,
            base_lng + (self._rng.random() - 0.5) * self.offset,
        )

    def add(self, name, latitude=None, longitude=None):
        """Добавление остановки; без координат они генерируются случайно"""
        missing_lat = latitude in (None, '')
        missing_lng = longitude in (None, '')

        if missing_lat and missing_lng:
            latitude, longitude = self.random_coordinates()
        elif missing_lat or missing_lng:
            raise ValueError('Both latitude and longitude must be given, or neither')

        name, latitude, longitude = validate_stop(name, latitude, longitude)

        stop = Stop(id=next(self._ids), name=name, latitude=latitude, longitude=longitude)
        self._stops.append(stop)
        self._comparison = None

        logger.info(f"Добавлена остановка {stop.id}: {stop.name} ({latitude:.4f}, {longitude:.4f})")
        return stop

    def extend(self, records):
        """Добавление остановок из списка словарей {'name', 'latitude', 'longitude'}"""
        return [self.add(r['name'], r.get('latitude'), r.get('longitude')) for r in records]

    def get(self, stop_id):
        for stop in self._stops:
            if stop.id == stop_id:
                return stop
        raise KeyError(stop_id)

    def remove(self, stop_id):
        """Удаление остановки, рассчитанный маршрут сбрасывается"""
        stop = self.get(stop_id)
        self._stops.remove(stop)
        self._comparison = None

        logger.info(f"Удалена остановка {stop.id}: {stop.name}")
        return stop

    def clear(self):
        self._stops.clear()
        self._comparison = None

    def snapshot(self):
        return tuple(self._stops)

    def optimize(self):
        """Расчет маршрута для текущего набора остановок"""
        self._comparison = compare_routes(self.snapshot())

        logger.info(
            f"Маршрут рассчитан: {self._comparison.optimized.stop_count} остановок, "
            f"{self._comparison.optimized.total_distance:.2f} км"
        )
        return self._comparison

    @property
    def comparison(self):
        return self._comparison

    @property
    def route(self):
        return self._comparison.optimized if self._comparison else None

    def position_of(self, stop):
        """Позиция остановки в текущем маршруте или -1"""
        route = self.route
        if route is None:
            return -1
        return route.position_of(stop)
