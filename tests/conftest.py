import os
import tempfile

# ustawienia czytane przy imporcie freshbite.utils.settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="freshbite-uploads-"))
os.environ.pop("RAZORPAY_KEY_ID", None)
os.environ.pop("RAZORPAY_KEY_SECRET", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import freshbite.data.models  # noqa: F401
from freshbite.api.deps import get_routing_client
from freshbite.data.database import Base, get_db
from freshbite.services.payment_service import MockPaymentProvider
from tests.utils.helpers import FakeRoutingClient, make_user


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def user(db):
    return make_user(db)


@pytest.fixture()
def other_user(db):
    return make_user(db, username="bob")


@pytest.fixture()
def routing_client():
    return FakeRoutingClient()


@pytest.fixture()
def app(session_factory, routing_client):
    from freshbite.main import create_app

    app = create_app()
    app.state.payment_provider = MockPaymentProvider()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_routing_client] = lambda: routing_client
    return app


@pytest.fixture()
def client(app):
    return TestClient(app)
