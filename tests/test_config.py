import pytest

from payonerupee.config import Settings

ENV_VARS = [
    "RAZORPAY_KEY_ID", "RAZORPAY_KEY_SECRET", "JWT_SECRET", "COUNTER_BACKEND",
    "DATABASE_URL", "DATABASE_SSL", "DB_POOL_SIZE", "DB_MAX_OVERFLOW",
    "DB_POOL_TIMEOUT", "COUNTER_FILE", "ORDER_AMOUNT",
    "ORDER_CURRENCY", "GATEWAY_TIMEOUT", "STORAGE_TIMEOUT", "CORS_ORIGINS",
    "PORT", "LOG_LEVEL",
]


@pytest.fixture
def env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("RAZORPAY_KEY_ID", "rzp_test_key")
    monkeypatch.setenv("RAZORPAY_KEY_SECRET", "s3cr3t")
    monkeypatch.setenv("JWT_SECRET", "x" * 40)
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./counter.db")
    return monkeypatch


def test_defaults(env, tmp_path):
    settings = Settings.from_env(env_path=tmp_path / ".env")

    assert settings.counter_backend == "sql"
    assert settings.order_amount == 100
    assert settings.order_currency == "INR"
    assert settings.port == 4000
    assert settings.cors_origins == ["*"]
    assert settings.database_ssl is False
    assert (settings.db_pool_size, settings.db_max_overflow,
            settings.db_pool_timeout) == (5, 5, 30)


def test_overrides(env, tmp_path):
    env.setenv("COUNTER_BACKEND", "FILE")
    env.setenv("COUNTER_FILE", "/var/lib/counter.json")
    env.setenv("PORT", "8080")
    env.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
    env.setenv("DATABASE_SSL", "true")
    env.setenv("STORAGE_TIMEOUT", "2.5")

    settings = Settings.from_env(env_path=tmp_path / ".env")

    assert settings.counter_backend == "file"
    assert settings.counter_file == "/var/lib/counter.json"
    assert settings.port == 8080
    assert settings.cors_origins == ["https://a.example", "https://b.example"]
    assert settings.database_ssl is True
    assert settings.storage_timeout == 2.5


def test_dotenv_file_is_loaded(env, tmp_path):
    env.delenv("JWT_SECRET")
    dotenv = tmp_path / ".env"
    dotenv.write_text("JWT_SECRET=from-dotenv-file-and-long-enough-000\n")

    settings = Settings.from_env(env_path=dotenv)

    assert settings.jwt_secret == "from-dotenv-file-and-long-enough-000"


@pytest.mark.parametrize("missing", [
    "RAZORPAY_KEY_ID", "RAZORPAY_KEY_SECRET", "JWT_SECRET", "DATABASE_URL"
])
def test_required_values(env, tmp_path, missing):
    env.delenv(missing)

    with pytest.raises(RuntimeError):
        Settings.from_env(env_path=tmp_path / ".env")


def test_file_backend_needs_no_database(env, tmp_path):
    env.delenv("DATABASE_URL")
    env.setenv("COUNTER_BACKEND", "file")

    assert Settings.from_env(env_path=tmp_path / ".env").database_url is None


def test_unknown_backend_rejected(env, tmp_path):
    env.setenv("COUNTER_BACKEND", "redis")

    with pytest.raises(RuntimeError):
        Settings.from_env(env_path=tmp_path / ".env")


def test_short_jwt_secret_warns(caplog):
    Settings(razorpay_key_id="k", razorpay_key_secret="s",
             jwt_secret="short", counter_backend="file")

    assert "JWT_SECRET is shorter" in caplog.text


def test_pool_settings(env, tmp_path):
    env.setenv("DB_POOL_SIZE", "20")
    env.setenv("DB_MAX_OVERFLOW", "10")
    env.setenv("DB_POOL_TIMEOUT", "15")

    settings = Settings.from_env(env_path=tmp_path / ".env")

    assert settings.db_pool_size == 20
    assert settings.db_max_overflow == 10
    assert settings.db_pool_timeout == 15
