import pytest
from fastapi.testclient import TestClient
from PIL import Image

import main
from modules.exporter import Exporter
from modules.palette import PaletteResolver
from modules.renderer import Renderer

from conftest import open_rgba


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(main, "exporter", Exporter(tmp_path))
    return TestClient(main.app)


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"


def test_colors(client):
    colors = client.get("/colors").json()
    assert colors["navy"] == "#1E2A45"
    assert colors["aqua"] == "#00FFDC"


def test_image_types(client):
    types = {t["name"]: t for t in client.get("/image-types").json()}
    assert types["post"]["recommended_size"] == [1200, 627]
    assert types["logo"]["default_format"] == "png"


def test_avatar_roundtrip(client, portrait_png):
    response = client.post(
        "/avatar",
        files={"portrait": ("jane.png", portrait_png, "image/png")},
        data={"color": "navy", "size": "128"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["filename"] == "avatar-jane-navy-128.png"
    assert body["metadata"]["shadow"] is True

    image = client.get(f"/images/{body['filename']}")
    assert image.status_code == 200
    assert image.headers["content-type"] == "image/png"
    assert open_rgba(image.content).size == (128, 128)

    assert client.get("/images").json() == ["avatar-jane-navy-128.png"]


def test_avatar_unknown_color(client, portrait_png):
    response = client.post(
        "/avatar",
        files={"portrait": ("jane.png", portrait_png, "image/png")},
        data={"color": "orange"},
    )
    assert response.status_code == 400


def test_avatar_not_an_image(client):
    response = client.post(
        "/avatar",
        files={"portrait": ("jane.png", b"garbage", "image/png")},
        data={"color": "navy"},
    )
    assert response.status_code == 415


def test_avatar_size_out_of_range(client, portrait_png):
    response = client.post(
        "/avatar",
        files={"portrait": ("jane.png", portrait_png, "image/png")},
        data={"color": "navy", "size": "10"},
    )
    assert response.status_code == 422


def test_social_image(client):
    response = client.post("/social-image", data={"image_type": "post", "text": "Hello"})
    assert response.status_code == 200
    body = response.json()
    assert body["format"] == "jpeg"
    assert body["filename"] == "linkedin-post-navy-1200x627.jpg"


def test_social_image_unknown_type(client):
    response = client.post("/social-image", data={"image_type": "banner"})
    assert response.status_code == 400


def test_missing_image(client):
    assert client.get("/images/nope.png").status_code == 404


def test_shadow_color_outside_palette_is_server_error(client, portrait_png, monkeypatch):
    monkeypatch.setattr(main, "renderer", Renderer(palette=PaletteResolver({"navy": "#1E2A45"})))
    response = client.post(
        "/avatar",
        files={"portrait": ("jane.png", portrait_png, "image/png")},
        data={"color": "navy", "size": "128"},
    )
    assert response.status_code == 500


def test_image_over_pixel_limit_is_unsupported_media(client, portrait_png, monkeypatch):
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
    response = client.post(
        "/avatar",
        files={"portrait": ("jane.png", portrait_png, "image/png")},
        data={"color": "navy"},
    )
    assert response.status_code == 415
