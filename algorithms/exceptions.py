MIN_STOPS = 2


class RoutePlannerError(Exception):
    """Базовая ошибка планировщика маршрутов"""


class InsufficientStopsError(RoutePlannerError):
    """Слишком мало остановок для построения маршрута"""

    def __init__(self, count, required=MIN_STOPS):
        self.count = count
        self.required = required
        super().__init__(f'Please add at least {required} stops to find a route')


class DegenerateComparisonError(RoutePlannerError):
    """Сравнение с исходным маршрутом нулевой длины не определено"""

    def __init__(self):
        super().__init__('Original route has zero length, improvement is undefined')
