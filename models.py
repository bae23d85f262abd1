from dataclasses import dataclass
from typing import Optional, Tuple

from algorithms.exceptions import DegenerateComparisonError


@dataclass(frozen=True)
class Stop:
    """Остановка (точка маршрута с координатами)"""
    id: int
    name: str
    latitude: float
    longitude: float

    # Остановки сравниваются только по идентификатору
    def __eq__(self, other):
        if not isinstance(other, Stop):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'latitude': self.latitude,
            'longitude': self.longitude,
        }

    def __repr__(self):
        return f'<Stop {self.id}: {self.name}>'


@dataclass(frozen=True)
class Route:
    """Замкнутый маршрут: первая и последняя остановки совпадают"""
    stops: Tuple[Stop, ...]
    total_distance: float  # Общее расстояние в км

    @property
    def stop_count(self):
        """Количество различных остановок (без замыкающей)"""
        return max(len(self.stops) - 1, 0)

    @property
    def start(self) -> Optional[Stop]:
        return self.stops[0] if self.stops else None

    @property
    def end(self) -> Optional[Stop]:
        """Последняя остановка перед возвратом в начало"""
        if len(self.stops) < 2:
            return None
        return self.stops[-2]

    def position_of(self, stop):
        """Индекс остановки в маршруте или -1"""
        for idx, route_stop in enumerate(self.stops):
            if route_stop.id == stop.id:
                return idx
        return -1

    def to_dict(self):
        return {
            'stops': [stop.to_dict() for stop in self.stops],
            'stop_count': self.stop_count,
            'total_distance_km': round(self.total_distance, 2),
        }

    def __repr__(self):
        return f'<Route {self.stop_count} stops, {self.total_distance:.2f} km>'


def improvement_percent(original_distance, optimized_distance):
    """Процент сокращения пути относительно исходного порядка"""
    if original_distance == 0:
        raise DegenerateComparisonError()
    return (original_distance - optimized_distance) / original_distance * 100


@dataclass(frozen=True)
class RouteComparison:
    """Оптимизированный маршрут против маршрута в порядке добавления"""
    optimized: Route
    original: Route

    @property
    def savings_km(self):
        return self.original.total_distance - self.optimized.total_distance

    @property
    def improvement_percent(self) -> Optional[float]:
        """Процент сокращения пути; None, если исходный маршрут нулевой длины"""
        try:
            return improvement_percent(self.original.total_distance, self.optimized.total_distance)
        except DegenerateComparisonError:
            return None

    def to_dict(self):
        percent = self.improvement_percent
        return {
            'original_distance_km': round(self.original.total_distance, 2),
            'optimized_distance_km': round(self.optimized.total_distance, 2),
            'savings_km': round(self.savings_km, 2),
            'improvement_percent': round(percent, 1) if percent is not None else None,
            'original_route': [stop.id for stop in self.original.stops],
            'optimized_route': [stop.id for stop in self.optimized.stops],
        }
