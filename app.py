from flask import Flask, request, jsonify, url_for, current_app
import csv
import os
import random
from werkzeug.utils import secure_filename
from algorithms.exceptions import InsufficientStopsError
from planner import StopSet
from utils.csv_parser import parse_csv_file
from utils.map_generator import create_route_map
from dotenv import load_dotenv

import logging

logger = logging.getLogger(__name__)

# Загрузка переменных окружения
load_dotenv()


def create_app(overrides=None):
    """Создание приложения"""
    app = Flask(__name__)

    # Конфигурация
    app.config['SECRET_KEY'] = os.getenv('SECRET_KEY', 'default-secret-key')
    app.config['UPLOAD_FOLDER'] = os.getenv('UPLOAD_FOLDER', 'uploads')
    app.config['MAX_CONTENT_LENGTH'] = 16 * 1024 * 1024
    app.config['PLANNER_CENTER_LAT'] = float(os.getenv('PLANNER_CENTER_LAT', '19.07'))
    app.config['PLANNER_CENTER_LNG'] = float(os.getenv('PLANNER_CENTER_LNG', '72.87'))
    app.config['PLANNER_COORDINATE_OFFSET'] = float(os.getenv('PLANNER_COORDINATE_OFFSET', '0.05'))
    app.config['PLANNER_RANDOM_SEED'] = os.getenv('PLANNER_RANDOM_SEED')

    if overrides:
        app.config.update(overrides)

    os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)

    seed = app.config['PLANNER_RANDOM_SEED']
    app.extensions['stop_set'] = StopSet(
        center=(app.config['PLANNER_CENTER_LAT'], app.config['PLANNER_CENTER_LNG']),
        offset=app.config['PLANNER_COORDINATE_OFFSET'],
        rng=random.Random(seed) if seed is not None else None,
    )

    register_routes(app)
    return app


def get_stop_set() -> StopSet:
    return current_app.extensions['stop_set']


def error_response(message, status):
    logger.warning(f"Запрос отклонен ({status}): {message}")
    return jsonify({'error': message}), status


def register_routes(app):

    @app.route('/stops', methods=['GET'])
    def list_stops():
        """Список остановок в порядке добавления"""
        return jsonify({'stops': [stop.to_dict() for stop in get_stop_set()]})

    @app.route('/stops', methods=['POST'])
    def add_stop():
        """Добавление остановки; координаты необязательны"""
        data = request.get_json(silent=True)
        if data is None:
            data = request.form
        elif not isinstance(data, dict):
            return error_response('Request body must be a JSON object', 400)

        try:
            stop = get_stop_set().add(
                data.get('name'),
                data.get('latitude'),
                data.get('longitude'),
            )
        except (TypeError, ValueError) as e:
            return error_response(f'Validation error: {str(e)}', 400)

        return jsonify(stop.to_dict()), 201

    @app.route('/stops', methods=['DELETE'])
    def clear_stops():
        get_stop_set().clear()
        return jsonify({'stops': []})

    @app.route('/stops/<int:stop_id>', methods=['DELETE'])
    def remove_stop(stop_id):
        """Удаление остановки, маршрут сбрасывается"""
        try:
            stop = get_stop_set().remove(stop_id)
        except KeyError:
            return error_response(f'Stop {stop_id} not found', 404)

        return jsonify(stop.to_dict())

    @app.route('/stops/upload', methods=['POST'])
    def upload_stops():
        """Обработка загрузки CSV файла с остановками"""
        if 'file' not in request.files:
            return error_response('No file selected', 400)

        file = request.files['file']

        if file.filename == '':
            return error_response('No file selected', 400)

        if not file.filename.endswith('.csv'):
            return error_response('Invalid file format. CSV required.', 400)

        filename = secure_filename(file.filename)
        filepath = os.path.join(current_app.config['UPLOAD_FOLDER'], filename)
        file.save(filepath)

        try:
            records = parse_csv_file(filepath)
            stops = get_stop_set().extend(records)
        except (ValueError, csv.Error) as e:
            return error_response(f'File processing error: {str(e)}', 400)
        finally:
            if os.path.exists(filepath):
                os.remove(filepath)

        logger.info(f"Загружено остановок из {filename}: {len(stops)}")
        return jsonify({'stops': [stop.to_dict() for stop in stops]}), 201

    @app.route('/route', methods=['POST'])
    def optimize_route():
        """Расчет маршрута методом ближайшего соседа"""
        try:
            comparison = get_stop_set().optimize()
        except InsufficientStopsError as e:
            return error_response(str(e), 400)

        return jsonify(comparison.optimized.to_dict())

    @app.route('/route', methods=['GET'])
    def get_route():
        route = get_stop_set().route
        if route is None:
            return error_response('Route has not been calculated', 404)
        return jsonify(route.to_dict())

    @app.route('/route/comparison', methods=['GET'])
    def get_comparison():
        """Сравнение с маршрутом в порядке добавления"""
        comparison = get_stop_set().comparison
        if comparison is None:
            return error_response('Route has not been calculated', 404)
        return jsonify(comparison.to_dict())

    @app.route('/route/map', methods=['GET'])
    def route_map():
        """Страница с картой остановок и маршрута"""
        stop_set = get_stop_set()
        comparison = stop_set.comparison
        show_comparison = request.args.get('comparison', '0') == '1'

        map_obj = create_route_map(
            stop_set.snapshot(),
            route=comparison.optimized if comparison else None,
            original_route=comparison.original if comparison and show_comparison else None,
            center=stop_set.center,
        )

        return map_obj.get_root().render(), 200, {'Content-Type': 'text/html; charset=utf-8'}

    @app.route('/')
    def index():
        return jsonify({
            'stops': url_for('list_stops'),
            'route': url_for('get_route'),
            'comparison': url_for('get_comparison'),
            'map': url_for('route_map'),
        })


if __name__ == '__main__':
    logging.basicConfig(level=logging.DEBUG)
    create_app().run(debug=True, host='127.0.0.1', port=8000)
