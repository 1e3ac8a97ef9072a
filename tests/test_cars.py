import json
import os

from models.car import Car

BACKEND_URL = "http://testserver.local"


def test_create_then_get_car(client, make_car, settings):
    car_id = make_car(name="Civic", descrp="Compact sedan", priceday=40, discount=5)

    resp = client.get(f"/cars/{car_id}")
    assert resp.status_code == 200
    car = resp.json()
    assert car["name"] == "Civic"
    assert car["descrp"] == "Compact sedan"
    assert car["priceday"] == 40
    assert car["discount"] == 5
    assert car["img"].startswith(f"{BACKEND_URL}/images/civic.jpg_")
    assert car["img"].endswith(".jpg")

    filename = car["img"].rsplit("/", 1)[1]
    assert os.path.exists(os.path.join(settings.images_dir, filename))


def test_create_car_returns_insert_result(client):
    resp = client.post(
        "/cars",
        data={"name": "Golf", "descrp": "", "priceday": "35", "discount": "0"},
        files={"image": ("golf.png", b"png", "image/png")},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["affectedRows"] == 1
    assert isinstance(body["insertId"], int)
    assert body["img"].startswith("golf.png_")


def test_create_car_without_image_is_rejected(client, db):
    resp = client.post("/cars", data={"name": "Civic", "descrp": "x", "priceday": "40", "discount": "0"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Image file is required"}
    assert db.query(Car).count() == 0


def test_create_car_missing_fields(client):
    resp = client.post("/cars", data={"descrp": "x"}, files={"image": ("a.jpg", b"1", "image/jpeg")})
    assert resp.status_code == 422
    assert resp.json()["error"] == "Invalid request"


def test_list_cars_rewrites_images(client, make_car):
    make_car(name="Civic")
    make_car(name="Golf", filename="golf.jpg")

    resp = client.get("/cars")
    assert resp.status_code == 200
    cars = resp.json()
    assert [c["name"] for c in cars] == ["Civic", "Golf"]
    assert all(c["img"].startswith(f"{BACKEND_URL}/images/") for c in cars)


def test_uploaded_image_is_served(client, make_car):
    car_id = make_car()
    url = client.get(f"/cars/{car_id}").json()["img"]
    path = url[len(BACKEND_URL):]

    resp = client.get(path)
    assert resp.status_code == 200
    assert resp.content == b"\xff\xd8\xff fake jpeg"


def test_missing_image_is_404(client):
    assert client.get("/images/nothing.jpg").status_code == 404


def test_get_unknown_car(client):
    resp = client.get("/cars/999")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Car not found"}


def test_update_overwrites_every_field(client, make_car):
    car_id = make_car(name="Civic", descrp="old", priceday=40, discount=5)
    payload = {"name": "Accord", "descrp": "new", "priceday": 55.5, "discount": 0, "img": "accord.jpg"}

    resp = client.put(f"/cars/{car_id}", json=payload)
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Car updated successfully"}

    car = client.get(f"/cars/{car_id}").json()
    assert car["name"] == "Accord"
    assert car["descrp"] == "new"
    assert car["priceday"] == 55.5
    assert car["discount"] == 0
    assert car["img"] == f"{BACKEND_URL}/images/accord.jpg"


def test_update_accepts_served_image_url(client, make_car, db):
    car_id = make_car()
    car = client.get(f"/cars/{car_id}").json()

    resp = client.put(f"/cars/{car_id}", json={**car, "name": "Civic Type R"})
    assert resp.status_code == 200

    stored = db.query(Car).filter(Car.id == car_id).first()
    assert stored.img == car["img"].rsplit("/", 1)[1]


def test_update_unknown_car(client):
    payload = {"name": "A", "descrp": "", "priceday": 1, "discount": 0, "img": "a.jpg"}
    assert client.put("/cars/42", json=payload).status_code == 404


def test_update_requires_full_record(client, make_car):
    car_id = make_car()
    assert client.put(f"/cars/{car_id}", json={"name": "Only name"}).status_code == 422


def test_delete_car(client, make_car):
    car_id = make_car()

    resp = client.delete(f"/cars/{car_id}")
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Car deleted successfully"}
    assert client.get(f"/cars/{car_id}").status_code == 404


def test_delete_unknown_car(client):
    assert client.delete("/cars/7").status_code == 404


def test_non_finite_price_rejected_on_update(client, make_car, db):
    car_id = make_car(priceday=40)
    payload = {"name": "Civic", "descrp": "", "priceday": float("inf"), "discount": float("nan"), "img": "a.jpg"}

    resp = client.put(f"/cars/{car_id}", content=json.dumps(payload), headers={"Content-Type": "application/json"})
    assert resp.status_code == 422
    assert resp.json()["error"] == "Invalid request"
    assert db.query(Car).one().priceday == 40
    assert client.get("/cars").status_code == 200


def test_non_finite_price_rejected_on_create(client, db):
    resp = client.post(
        "/cars",
        data={"name": "Civic", "descrp": "", "priceday": "inf", "discount": "0"},
        files={"image": ("civic.jpg", b"1", "image/jpeg")},
    )
    assert resp.status_code == 422
    assert db.query(Car).count() == 0


def test_out_of_range_car_path_id(client):
    huge = 10 ** 20
    assert client.get(f"/cars/{huge}").status_code == 422
    assert client.delete(f"/cars/{huge}").status_code == 422
    payload = {"name": "A", "descrp": "", "priceday": 1, "discount": 0, "img": "a.jpg"}
    resp = client.put(f"/cars/{huge}", json=payload)
    assert resp.status_code == 422
    assert resp.json()["error"] == "Invalid request"


def test_upload_without_file_name_rejected(client, db, settings):
    resp = client.post(
        "/cars",
        data={"name": "Civic", "descrp": "", "priceday": "40", "discount": "0"},
        files={"image": ("uploads/", b"1", "image/jpeg")},
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Image file name is invalid"}
    assert db.query(Car).count() == 0
    assert os.listdir(settings.images_dir) == []
