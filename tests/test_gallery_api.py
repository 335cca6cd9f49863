"""Tests for the session-scoped preferences and gallery endpoints."""

import pytest
from sqlalchemy import delete, select
from sqlalchemy.exc import OperationalError

from app.dependencies.services import get_gallery_service
from app.models import Preferences, SavedImage, User
from app.services.gallery_service import GalleryService
from tests.helpers import register

PROTECTED_CALLS = [
    ("get", "/api/user/preferences", None),
    ("post", "/api/user/preferences", {"default_style": "royal-king", "auto_save": True}),
    ("get", "/api/images", None),
    ("post", "/api/images/save", {"url": "data:image/png;base64,AA==", "style_id": "royal-king"}),
    ("delete", "/api/images/1", None),
]


@pytest.mark.parametrize("method,path,body", PROTECTED_CALLS)
def test_protected_routes_require_session(client, method, path, body):
    kwargs = {"json": body} if body is not None else {}

    response = getattr(client, method)(path, **kwargs)

    assert response.status_code == 401


def test_new_user_gets_default_preferences(client):
    register(client, "ava")

    response = client.get("/api/user/preferences")

    assert response.status_code == 200
    assert response.json() == {"default_style": "cinematic-hero", "auto_save": False}


def test_preferences_round_trip(client):
    register(client, "ava")

    response = client.post(
        "/api/user/preferences",
        json={"default_style": "mafia-boss", "auto_save": True},
    )

    assert response.json() == {"success": True}
    assert client.get("/api/user/preferences").json() == {
        "default_style": "mafia-boss",
        "auto_save": True,
    }


def test_preferences_update_is_full_replace_only(client):
    register(client, "ava")

    partial = client.post("/api/user/preferences", json={"auto_save": True})
    unknown_style = client.post(
        "/api/user/preferences", json={"default_style": "watercolor", "auto_save": True}
    )

    assert partial.status_code == 422
    assert unknown_style.status_code == 422
    assert client.get("/api/user/preferences").json()["auto_save"] is False


def test_images_are_listed_newest_first(client):
    register(client, "ava")
    for style_id in ("royal-king", "bike-rider", "royal-king"):
        response = client.post(
            "/api/images/save",
            json={"url": f"data:image/png;base64,{style_id}", "style_id": style_id},
        )
        assert response.json() == {"success": True}

    images = client.get("/api/images").json()

    assert [image["style_id"] for image in images] == [
        "royal-king",
        "bike-rider",
        "royal-king",
    ]
    assert images[0]["id"] > images[1]["id"] > images[2]["id"]
    assert set(images[0]) == {"id", "url", "style_id", "created_at"}


def test_save_image_rejects_unknown_style(client):
    register(client, "ava")

    response = client.post(
        "/api/images/save", json={"url": "data:image/png;base64,AA==", "style_id": "nope"}
    )

    assert response.status_code == 422


def test_delete_own_image(client):
    register(client, "ava")
    client.post("/api/images/save", json={"url": "u1", "style_id": "royal-king"})
    image_id = client.get("/api/images").json()[0]["id"]

    response = client.delete(f"/api/images/{image_id}")

    assert response.json() == {"success": True}
    assert client.get("/api/images").json() == []


def test_delete_missing_image_is_a_successful_no_op(client):
    register(client, "ava")

    response = client.delete("/api/images/9999")

    assert response.status_code == 200
    assert response.json() == {"success": True}


def test_users_cannot_touch_each_others_rows(client_factory, sync_engine):
    alice = client_factory()
    bob = client_factory()
    register(alice, "alice")
    register(bob, "bob")

    alice.post("/api/images/save", json={"url": "alice-image", "style_id": "royal-king"})
    alice_image_id = alice.get("/api/images").json()[0]["id"]

    # Bob guesses Alice's image id
    response = bob.delete(f"/api/images/{alice_image_id}")
    assert response.json() == {"success": True}

    bob.post(
        "/api/user/preferences", json={"default_style": "gamer-setup", "auto_save": True}
    )

    assert bob.get("/api/images").json() == []
    assert [image["id"] for image in alice.get("/api/images").json()] == [alice_image_id]
    assert alice.get("/api/user/preferences").json() == {
        "default_style": "cinematic-hero",
        "auto_save": False,
    }
    with sync_engine.connect() as conn:
        owners = conn.execute(select(SavedImage.user_id)).scalars().all()
    assert len(owners) == 1


def test_session_of_deleted_user_is_rejected_for_user_bound_writes(client, sync_engine):
    user = register(client, "ava")
    with sync_engine.begin() as conn:
        conn.execute(delete(Preferences).where(Preferences.user_id == user["id"]))
        conn.execute(delete(User).where(User.id == user["id"]))

    assert client.get("/api/user/preferences").status_code == 401
    assert (
        client.post(
            "/api/user/preferences",
            json={"default_style": "royal-king", "auto_save": True},
        ).status_code
        == 401
    )
    assert (
        client.post(
            "/api/images/save", json={"url": "u1", "style_id": "royal-king"}
        ).status_code
        == 401
    )
    with sync_engine.connect() as conn:
        assert conn.execute(select(SavedImage)).all() == []


def test_styles_catalog_is_public_and_ordered(client):
    response = client.get("/api/styles")

    assert response.status_code == 200
    styles = response.json()
    assert len(styles) == 10
    assert styles[0]["id"] == "cinematic-hero"
    assert styles[-1]["id"] == "studio-portrait"
    assert set(styles[0]) == {"id", "name", "description", "prompt"}


def test_health_reports_database(client):
    response = client.get("/health")

    assert response.json() == {"status": "ok", "database": True}


class BrokenStoreGalleryService(GalleryService):
    async def list_images(self, identity):
        raise OperationalError("SELECT", {}, Exception("disk I/O error"))


def test_storage_failure_is_a_generic_500(app, client):
    register(client, "ava")
    app.dependency_overrides[get_gallery_service] = lambda: BrokenStoreGalleryService()
    try:
        response = client.get("/api/images")
    finally:
        app.dependency_overrides.pop(get_gallery_service)

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
