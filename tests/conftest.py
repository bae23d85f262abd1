import pytest

from app import create_app


@pytest.fixture
def app(tmp_path):
    return create_app({
        'TESTING': True,
        'UPLOAD_FOLDER': str(tmp_path / 'uploads'),
        'PLANNER_RANDOM_SEED': 42,
    })


@pytest.fixture
def client(app):
    return app.test_client()
