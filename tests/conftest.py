import pytest
from fastapi.testclient import TestClient
from article_maker.app import create_app
from article_maker.config import Settings


@pytest.fixture
def settings(tmp_path):
    return Settings(articles_dir=tmp_path / "articles", template_path=None)


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c
