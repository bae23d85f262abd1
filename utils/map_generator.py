import folium
from folium.plugins import AntPath
from typing import Optional, Sequence
import html
import logging

from models import Route, Stop
from planner import DEFAULT_CENTER

logger = logging.getLogger(__name__)


def _escape(text):
    """Экранирование пользовательского текста для HTML внутри JS-шаблонов folium"""
    return html.escape(str(text)).replace("\\", "&#92;").replace("`", "&#96;").replace("$", "&#36;")


def create_route_map(stops: Sequence[Stop], route: Optional[Route] = None,
                     original_route: Optional[Route] = None, title: str = 'Bus Route Planner',
                     center=DEFAULT_CENTER):
    """Создание интерактивной карты остановок и маршрута

    Args:
        stops: остановки в порядке добавления
        route: оптимизированный замкнутый маршрут (если рассчитан)
        original_route: маршрут в порядке добавления для сравнения
        title: заголовок карты
        center: центр карты, если остановок нет

    Returns:
        Объект карты folium
    """
    if stops:
        location = [stops[0].latitude, stops[0].longitude]
    else:
        location = list(center)

    m = folium.Map(
        location=location,
        zoom_start=12,
        tiles='OpenStreetMap'
    )

    has_route = route is not None and len(route.stops) > 1

    # === Исходный порядок (серый пунктир) ===
    if original_route is not None and len(original_route.stops) > 1:
        logger.debug(f"Отрисовка исходного маршрута, {len(original_route.stops)} точек")

        folium.PolyLine(
            locations=[[s.latitude, s.longitude] for s in original_route.stops],
            color='gray',
            weight=3,
            opacity=0.6,
            dash_array='10, 10',
            tooltip=f'Original order: {original_route.total_distance:.2f} km'
        ).add_to(m)

    # === Оптимизированный маршрут ===
    if has_route:
        route_coords = [[s.latitude, s.longitude] for s in route.stops]

        folium.PolyLine(
            locations=route_coords,
            color='blue',
            weight=5,
            opacity=0.8,
            tooltip=f'Optimized route: {route.total_distance:.2f} km'
        ).add_to(m)

        # Стрелки направления
        for i in range(len(route_coords) - 1):
            AntPath(
                locations=[route_coords[i], route_coords[i + 1]],
                dash_array=[10, 20],
                delay=1000,
                color='blue',
                weight=0,
                pulse_color='darkblue'
            ).add_to(m)

    # === Остановки ===
    for idx, stop in enumerate(stops):
        position = route.position_of(stop) if has_route else -1
        coords = f'{stop.latitude:.4f}, {stop.longitude:.4f}'

        if position == -1:
            label = f'Stop {idx + 1}'
            icon = folium.Icon()
        elif position == 0:
            label = 'Start'
            icon = folium.Icon(color='green', icon='play', prefix='glyphicon')
        elif position == len(route.stops) - 2:
            label = 'End'
            icon = folium.Icon(color='red', icon='flag', prefix='glyphicon')
        else:
            label = f'Stop {position}'
            icon = folium.Icon(color='blue', icon='info-sign', prefix='glyphicon')

        name = _escape(stop.name)
        popup_text = f'<b>{name}</b><br>{label}<br>{coords}'
        if position != -1:
            popup_text += f'<br>Route position: {position + 1} of {route.stop_count}'

        folium.Marker(
            location=[stop.latitude, stop.longitude],
            popup=folium.Popup(popup_text, max_width=300),
            tooltip=f'{label}: {name}',
            icon=icon
        ).add_to(m)

    title_html = f'''
        <h3 align="center" style="font-size:20px">
            <b>{_escape(title)}</b>
            {f' {route.total_distance:.2f} km' if has_route else ''}
        </h3>
    '''
    m.get_root().html.add_child(folium.Element(title_html))

    if has_route:
        legend_html = '''
        <div style="position: fixed;
                    bottom: 50px; right: 50px;
                    background-color: white;
                    border:2px solid grey;
                    z-index:9999;
                    font-size:14px;
                    padding: 10px;">
        <p><i class="fa fa-circle" style="color:green"></i> Start</p>
        <p><i class="fa fa-circle" style="color:blue"></i> Route stop</p>
        <p><i class="fa fa-circle" style="color:red"></i> End</p>
        <p><span style="color:blue">━━━━</span> Optimized route</p>
        '''
        if original_route is not None:
            legend_html += '<p><span style="color:gray">- - -</span> Original order</p>\n'
        legend_html += '</div>'
        m.get_root().html.add_child(folium.Element(legend_html))

    return m
