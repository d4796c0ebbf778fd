import json
from pathlib import Path

import pytest
from baas_client.core.client import BaaSClient

BASE_URL = "https://api.example.com"
PROJECT_ID = "proj-1"


def load_fixture(name: str) -> dict:
    p = Path(__file__).parent / "fixtures" / name
    with open(p, encoding="utf-8") as f:
        return json.load(f)


def success(data):
    return {"result": "SUCCESS", "data": data}


def failure(error_code: str, message: str = "failed", **extra):
    return {"result": "FAIL", "errorCode": error_code, "message": message, **extra}


@pytest.fixture
def client():
    return BaaSClient(base_url=BASE_URL, project_id=PROJECT_ID)
