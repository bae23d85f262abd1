import csv
import os

from planner import validate_stop


def parse_csv_file(filepath):
    """
    Парсинг CSV файла с остановками

    Ожидаемый формат CSV:
    name,latitude,longitude
    Dadar,19.0178,72.8478
    "Bandra West",19.0596,72.8295

    Вместо колонки name допускается address.

    Возвращает:
        список словарей {'name': str, 'latitude': float, 'longitude': float}
    """
    stops = []

    if not os.path.exists(filepath):
        raise FileNotFoundError(f'File not found: {filepath}')

    with open(filepath, 'r', encoding='utf-8') as file:
        reader = csv.DictReader(file)
        fieldnames = set(reader.fieldnames or [])

        name_column = 'name' if 'name' in fieldnames else 'address'

        # Проверка наличия необходимых колонок
        required_columns = {name_column, 'latitude', 'longitude'}
        if not required_columns.issubset(fieldnames):
            raise ValueError(
                f'CSV file must contain columns: name, latitude, longitude. '
                f'Found: {", ".join(sorted(fieldnames))}'
            )

        for row_num, row in enumerate(reader, start=2):  # start=2 т.к. 1 строка — заголовок
            try:
                name, latitude, longitude = validate_stop(
                    row[name_column],
                    (row['latitude'] or '').strip(),
                    (row['longitude'] or '').strip(),
                )
            except (ValueError, KeyError) as e:
                raise ValueError(f'Error in row {row_num}: {str(e)}')

            stops.append({
                'name': name,
                'latitude': latitude,
                'longitude': longitude
            })

    if not stops:
        raise ValueError('CSV file contains no stops')

    return stops
