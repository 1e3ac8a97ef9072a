import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from config import Settings

BACKEND_URL = "http://testserver.local"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        backend_url=BACKEND_URL,
        images_dir=str(tmp_path / "images"),
        public_dir=str(tmp_path / "public"),
        rental_total_mode="lenient",
        driver_fee_per_day=0.0,
        admin_token=None,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(app):
    session = app.state.SessionLocal()
    yield session
    session.close()


@pytest.fixture
def make_car(client):
    def _make(name="Civic", descrp="Compact sedan", priceday=40, discount=0, filename="civic.jpg"):
        resp = client.post(
            "/cars",
            data={"name": name, "descrp": descrp, "priceday": str(priceday), "discount": str(discount)},
            files={"image": (filename, b"\xff\xd8\xff fake jpeg", "image/jpeg")},
        )
        assert resp.status_code == 200, resp.text
        return resp.json()["insertId"]
    return _make
