"""Integration tests for the location and store CRUD routes."""

import unittest

from fastapi.testclient import TestClient

from app.core.config import settings
from app.core.database import engine
from app.core.security import create_access_token
from app.main import app
from app.models import Base

PREFIX = settings.API_PREFIX


class CrudTestCase(unittest.TestCase):
    def setUp(self) -> None:
        Base.metadata.drop_all(bind=engine)
        Base.metadata.create_all(bind=engine)
        self.client = TestClient(app)
        self.headers = {"Authorization": f"Bearer {create_access_token(sub=1, role='user')}"}

    def _create_location(self, name: str = "Downtown", description: str = "City centre") -> dict:
        resp = self.client.post(
            f"{PREFIX}/location",
            json={"name": name, "description": description},
            headers=self.headers,
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def _create_store(self, **body: object) -> dict:
        resp = self.client.post(
            f"{PREFIX}/store", json={"name": "Corner Shop", **body}, headers=self.headers
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()


class TestRequireAuth(CrudTestCase):
    def test_all_routes_reject_anonymous(self) -> None:
        calls = [
            ("get", "/location"),
            ("post", "/location"),
            ("get", "/location/1"),
            ("put", "/location/1"),
            ("delete", "/location/1"),
            ("get", "/store"),
            ("post", "/store"),
            ("get", "/store/1"),
            ("put", "/store/1"),
            ("delete", "/store/1"),
        ]
        for method, path in calls:
            with self.subTest(method=method, path=path):
                resp = self.client.request(method.upper(), f"{PREFIX}{path}")
                self.assertEqual(resp.status_code, 401)


class TestLocationCrud(CrudTestCase):
    def test_create_and_get(self) -> None:
        created = self._create_location()
        self.assertEqual(created["name"], "Downtown")
        resp = self.client.get(f"{PREFIX}/location/{created['id']}", headers=self.headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["description"], "City centre")

    def test_list(self) -> None:
        self._create_location("A")
        self._create_location("B")
        resp = self.client.get(f"{PREFIX}/location", headers=self.headers)
        self.assertEqual([loc["name"] for loc in resp.json()], ["A", "B"])

    def test_create_requires_name_and_description(self) -> None:
        for body in ({"description": "x"}, {"name": "", "description": "x"}, {"name": "A"}):
            with self.subTest(body=body):
                resp = self.client.post(f"{PREFIX}/location", json=body, headers=self.headers)
                self.assertEqual(resp.status_code, 422)

    def test_partial_update(self) -> None:
        created = self._create_location()
        resp = self.client.put(
            f"{PREFIX}/location/{created['id']}", json={"name": "Uptown"}, headers=self.headers
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["name"], "Uptown")
        self.assertEqual(resp.json()["description"], "City centre")

    def test_update_rejects_null_name(self) -> None:
        created = self._create_location()
        resp = self.client.put(
            f"{PREFIX}/location/{created['id']}", json={"name": None}, headers=self.headers
        )
        self.assertEqual(resp.status_code, 422)

    def test_missing_location_404(self) -> None:
        for method, kwargs in (("GET", {}), ("PUT", {"json": {"name": "x"}}), ("DELETE", {})):
            with self.subTest(method=method):
                resp = self.client.request(
                    method, f"{PREFIX}/location/999", headers=self.headers, **kwargs
                )
                self.assertEqual(resp.status_code, 404)
                self.assertEqual(resp.json()["detail"], "Location not found")

    def test_delete_detaches_stores(self) -> None:
        location = self._create_location()
        store = self._create_store(location_id=location["id"])
        resp = self.client.delete(f"{PREFIX}/location/{location['id']}", headers=self.headers)
        self.assertEqual(resp.json(), {"message": "Location deleted"})
        resp = self.client.get(f"{PREFIX}/store/{store['id']}", headers=self.headers)
        self.assertEqual(resp.status_code, 200)
        self.assertIsNone(resp.json()["location_id"])
        self.assertIsNone(resp.json()["location"])


class TestStoreCrud(CrudTestCase):
    def test_create_with_location_embeds_it(self) -> None:
        location = self._create_location()
        store = self._create_store(description="Open late", location_id=location["id"])
        self.assertEqual(store["location_id"], location["id"])
        self.assertEqual(store["location"]["name"], "Downtown")

    def test_create_without_location(self) -> None:
        store = self._create_store()
        self.assertIsNone(store["location"])
        self.assertIsNone(store["description"])

    def test_create_with_unknown_location(self) -> None:
        resp = self.client.post(
            f"{PREFIX}/store", json={"name": "X", "location_id": 42}, headers=self.headers
        )
        self.assertEqual(resp.status_code, 422)

    def test_create_requires_name(self) -> None:
        resp = self.client.post(f"{PREFIX}/store", json={"description": "x"}, headers=self.headers)
        self.assertEqual(resp.status_code, 422)

    def test_list_includes_locations(self) -> None:
        location = self._create_location()
        self._create_store(location_id=location["id"])
        self._create_store(name="Kiosk")
        stores = self.client.get(f"{PREFIX}/store", headers=self.headers).json()
        self.assertEqual(len(stores), 2)
        self.assertEqual(stores[0]["location"]["id"], location["id"])
        self.assertIsNone(stores[1]["location"])

    def test_update_moves_and_detaches(self) -> None:
        first = self._create_location("First")
        second = self._create_location("Second")
        store = self._create_store(location_id=first["id"])
        url = f"{PREFIX}/store/{store['id']}"

        resp = self.client.put(url, json={"location_id": second["id"]}, headers=self.headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["location"]["name"], "Second")
        self.assertEqual(resp.json()["name"], "Corner Shop")

        resp = self.client.put(url, json={"location_id": None}, headers=self.headers)
        self.assertEqual(resp.status_code, 200)
        self.assertIsNone(resp.json()["location"])

    def test_update_with_unknown_location(self) -> None:
        store = self._create_store()
        resp = self.client.put(
            f"{PREFIX}/store/{store['id']}", json={"location_id": 42}, headers=self.headers
        )
        self.assertEqual(resp.status_code, 422)

    def test_delete(self) -> None:
        store = self._create_store()
        url = f"{PREFIX}/store/{store['id']}"
        resp = self.client.delete(url, headers=self.headers)
        self.assertEqual(resp.json(), {"message": "Store deleted"})
        self.assertEqual(self.client.get(url, headers=self.headers).status_code, 404)
        self.assertEqual(self.client.delete(url, headers=self.headers).status_code, 404)


if __name__ == "__main__":
    unittest.main()
