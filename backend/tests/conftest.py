import os
import shutil
import tempfile

# Point every store at a throwaway directory before the app (and its settings) import.
_TMP = tempfile.mkdtemp(prefix="articles-api-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP, 'test.db')}"
os.environ["DATA_DIR"] = os.path.join(_TMP, "data")
os.environ["UPLOAD_DIR"] = os.path.join(_TMP, "data", "uploads")
os.environ["JWT_SECRET"] = "test-secret-for-the-articles-api-suite"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENVIRONMENT"] = "test"
os.environ["RESET_DB"] = "1"

import pytest
from fastapi.testclient import TestClient

from app.api.deps import CART_FILE, PRODUCTS_FILE, DOCUMENTS_FILE, get_chat_relay, get_token_service
from app.config import settings
from app.main import app
from app.repositories.json_store import JsonFileStore

SEED_PRODUCTS = [
    {"id": 1, "name": "Test Product", "price": 10.50},
    {"id": 2, "name": "Another Product", "price": 25.99},
]


def data_path(name: str) -> str:
    return os.path.join(settings.DATA_DIR, name)


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as c:
        yield c
    shutil.rmtree(_TMP, ignore_errors=True)


@pytest.fixture(autouse=True)
def clean_stores():
    for name in (PRODUCTS_FILE, CART_FILE, DOCUMENTS_FILE):
        if os.path.exists(data_path(name)):
            os.remove(data_path(name))
    get_chat_relay().history.clear()
    yield


@pytest.fixture
def products():
    JsonFileStore(data_path(PRODUCTS_FILE)).save(SEED_PRODUCTS)
    return SEED_PRODUCTS


def make_token(roles, user_id=1, email="user@example.com"):
    return get_token_service().issue(user_id, email, roles)


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for():
    """Factory: ``headers_for(["user"], user_id=3)`` -> Authorization header dict."""

    def _headers(roles, user_id=1, email="user@example.com"):
        return bearer(make_token(roles, user_id=user_id, email=email))

    return _headers


@pytest.fixture
def chat_token():
    def _token(email, user_id, roles=("user",)):
        return make_token(list(roles), user_id=user_id, email=email)

    return _token


@pytest.fixture
def user_headers():
    return bearer(make_token(["user"], user_id=1, email="user@example.com"))


@pytest.fixture
def other_user_headers():
    return bearer(make_token(["user"], user_id=2, email="other@example.com"))


@pytest.fixture
def admin_headers():
    return bearer(make_token(["user", "admin"], user_id=99, email="admin@example.com"))
