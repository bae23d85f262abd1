import math

# Средний радиус Земли в км
EARTH_RADIUS_KM = 6371.0


def haversine_distance(lat1, lon1, lat2, lon2):
    """
    Расчет расстояния между двумя точками по формуле Haversine
    Возвращает расстояние в километрах
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)

    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2) ** 2
    # Ошибка округления около антиподов может дать a > 1
    a = min(a, 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def stop_distance(a, b):
    """Расстояние между двумя остановками (объекты с latitude/longitude)"""
    return haversine_distance(a.latitude, a.longitude, b.latitude, b.longitude)
