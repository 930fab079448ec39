import pytest
from fastapi.testclient import TestClient
from PIL import Image

from main import create_app
from settings import Settings

# Small templates keep rendering fast; layouts scale with the image size
TEMPLATE_SIZE = (1200, 850)


def make_template(path, color=(240, 235, 220), mode="RGB"):
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new(mode, TEMPLATE_SIZE, color).save(path, format="PNG")
    return path


@pytest.fixture
def settings(tmp_path):
    certificates = tmp_path / "certificates"
    for name in ("1.png", "2.png", "3.png", "4.png"):
        make_template(certificates / name, color=(20, 30, 60) if name == "4.png" else (240, 235, 220))
    return Settings(
        uploads_dir=tmp_path / "uploads",
        certificates_dir=certificates,
        testing_uploads_dir=tmp_path / "testingUploads",
        fonts_dir=tmp_path / "fonts",
    )


@pytest.fixture
def client(settings):
    return TestClient(create_app(settings))


@pytest.fixture
def certificate_data():
    return {
        "name": "Jane Doe",
        "course": "Intro",
        "instructor": "A. Smith",
        "date": "2024-01-01",
    }
