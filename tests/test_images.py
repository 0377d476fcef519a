import pytest

from app.images.service import ImageService, calculate_seed
from tests.conftest import make_settings


@pytest.fixture
def image_service() -> ImageService:
    return ImageService(make_settings())


def test_seed_is_sum_of_character_codes():
    assert calculate_seed("abc") == 97 + 98 + 99
    assert calculate_seed("Push-ups") == sum(ord(c) for c in "Push-ups")


def test_picsum_url_is_deterministic(image_service):
    first = image_service.generate_picsum_url("Push-ups")
    second = image_service.generate_picsum_url("Push-ups")

    assert first == second == f"https://picsum.photos/seed/{calculate_seed('Push-ups')}/800/800"


def test_generate_image_trims_prompt(image_service):
    result = image_service.generate_image("  Oatmeal  ", "food")

    assert not result.degraded
    assert result.value == image_service.generate_picsum_url("Oatmeal")


def test_placeholder_encodes_prompt(image_service):
    url = image_service.generate_placeholder_url("Greek yogurt & honey")

    assert url == (
        "https://via.placeholder.com/1024x1024/4F46E5/FFFFFF?text=Greek%20yogurt%20%26%20honey"
    )
    assert image_service.generate_placeholder_url("").endswith("?text=Image")


def test_endpoint_returns_image_url(client):
    response = client.post("/api/generate-image", json={"prompt": "Squats", "type": "exercise"})

    assert response.status_code == 200
    assert response.json() == {
        "imageUrl": f"https://picsum.photos/seed/{calculate_seed('Squats')}/800/800"
    }


@pytest.mark.parametrize("body", [{"prompt": ""}, {"prompt": "   "}, {}])
def test_endpoint_rejects_empty_prompt(client, body):
    response = client.post("/api/generate-image", json=body)

    assert response.status_code == 400
    assert response.json() == {
        "error": "Please provide a description of the image you want to generate"
    }


def test_endpoint_returns_placeholder_with_error_status(app, client, monkeypatch):
    def broken(prompt):
        raise RuntimeError("seed service unavailable")

    monkeypatch.setattr(app.state.image_service, "generate_picsum_url", broken)

    response = client.post("/api/generate-image", json={"prompt": "Lentil soup", "type": "food"})

    assert response.status_code == 500
    assert response.json() == {
        "imageUrl": "https://via.placeholder.com/1024x1024/4F46E5/FFFFFF?text=Lentil%20soup"
    }
