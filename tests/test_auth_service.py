import pytest

from freshbite.data.models.user import UserModel
from freshbite.domain.exceptions import AuthenticationError, Conflict
from freshbite.repos.user_repo import UserRepo
from freshbite.services.auth_service import AuthService


def test_duplicate_rejected_up_front(db, user):
    with pytest.raises(Conflict):
        AuthService(db).register(username="alice", email="new@example.com", password="pw")


def test_duplicate_caught_by_unique_constraint(db, user, monkeypatch):
    # druga rejestracja, ktora wyprzedzila zapis pierwszej w exists()
    monkeypatch.setattr(UserRepo, "exists", lambda repo, username, email: False)

    with pytest.raises(Conflict) as err:
        AuthService(db).register(username="alice", email="alice@example.com", password="pw")

    assert err.value.message == "Username or email already registered"
    assert db.query(UserModel).count() == 1


def test_login_checks_password(db, user):
    svc = AuthService(db)

    assert svc.login("alice@example.com", "secret123")["user"]["username"] == "alice"
    with pytest.raises(AuthenticationError):
        svc.login("alice@example.com", "wrong")
