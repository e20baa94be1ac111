import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from spacewatch.main import app


@pytest.fixture
def no_credentials(monkeypatch):
    monkeypatch.delenv("SPACETRACK_USERNAME", raising=False)
    monkeypatch.delenv("SPACETRACK_PASSWORD", raising=False)
    monkeypatch.setattr("spacewatch.services.SPACETRACK_USERNAME", "")
    monkeypatch.setattr("spacewatch.services.SPACETRACK_PASSWORD", "")


@pytest.fixture
def credentials(monkeypatch):
    monkeypatch.setenv("SPACETRACK_USERNAME", "user@example.com")
    monkeypatch.setenv("SPACETRACK_PASSWORD", "hunter2")


@pytest.fixture
def satcat_record():
    return {
        "NORAD_CAT_ID": "25544",
        "OBJECT_NAME": "ISS (ZARYA)",
        "OBJECT_ID": "1998-067A",
        "OBJECT_TYPE": "PAYLOAD",
        "COUNTRY": "ISS",
        "LAUNCH_DATE": "1998-11-20",
        "DECAY_DATE": None,
        "INCLINATION": "51.64",
        "PERIOD": "92.9",
        "APOGEE": "420",
        "PERIGEE": "415",
        "RCS_SIZE": "LARGE",
    }


def make_neo(neo_id, name="Test", hazardous=False, approaches=None, diameter=(0.1, 0.3)):
    return {
        "id": neo_id,
        "neo_reference_id": neo_id,
        "name": name,
        "estimated_diameter": {
            "kilometers": {
                "estimated_diameter_min": diameter[0],
                "estimated_diameter_max": diameter[1],
            }
        },
        "is_potentially_hazardous_asteroid": hazardous,
        "close_approach_data": approaches or [],
    }


def make_approach(day, miss_km, km_s="10", body="Earth", epoch=None):
    return {
        "close_approach_date": day,
        "epoch_date_close_approach": epoch,
        "relative_velocity": {"kilometers_per_second": km_s},
        "miss_distance": {"kilometers": miss_km},
        "orbiting_body": body,
    }


@pytest_asyncio.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
