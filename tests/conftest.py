import pytest

from starthub_steps.services.http_service_client import DigitalOceanClient

BASE_URL = "https://api.do.test"
FIREWALLS_URL = BASE_URL + "/v2/firewalls"


@pytest.fixture
def do_client():
    return DigitalOceanClient(base_url=BASE_URL, connect_timeout_s=1.0, read_timeout_s=1.0)


@pytest.fixture
def environ():
    return {"DIGITALOCEAN_TOKEN": "env-token"}
