import pytest
from fastapi.testclient import TestClient

from payonerupee.config import Settings
from payonerupee.counter import FileCounterStore, SqlCounterStore
from payonerupee.main import create_app
from payonerupee.razorpay_service import OrderGateway

KEY_SECRET = "s3cr3t"
JWT_SECRET = "test-jwt-secret-that-is-long-enough-32"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        razorpay_key_id="rzp_test_key",
        razorpay_key_secret=KEY_SECRET,
        jwt_secret=JWT_SECRET,
        counter_backend="sql",
        database_url=f"sqlite:///{tmp_path}/counter.db",
        counter_file=str(tmp_path / "data.json"),
    )


@pytest.fixture
async def sql_store(tmp_path):
    store = SqlCounterStore(database_url=f"sqlite:///{tmp_path}/store.db")
    await store.init()
    yield store
    await store.close()


@pytest.fixture
async def file_store(tmp_path):
    store = FileCounterStore(path=str(tmp_path / "data.json"))
    await store.init()
    yield store


@pytest.fixture
def razorpay_client(mocker):
    client = mocker.Mock()
    client.order.create.return_value = {
        "id": "order_1",
        "entity": "order",
        "amount": 100,
        "currency": "INR",
        "status": "created",
    }
    return client


@pytest.fixture
def gateway(settings, razorpay_client):
    return OrderGateway(settings, client=razorpay_client)


@pytest.fixture
def app(settings, gateway):
    return create_app(settings, gateway=gateway)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
