"""
AccountService unit tests against an in-memory repository (no DB, no bcrypt).
"""

import pytest

from app.core.errors import AuthError, ConflictError, UserNotFoundError, ValidationFailedError
from app.db.models import File, User
from app.services.account_service import AccountService


def fake_hash(password: str) -> str:
    return f"hashed:{password}"


def fake_verify(plain: str, hashed: str) -> bool:
    return hashed == fake_hash(plain)


class FakeUserRepository:
    """Same surface as UserRepository, backed by a dict."""

    def __init__(self):
        self.users: dict[int, User] = {}
        self.saved = 0
        self._next_id = 1

    async def get_by_id(self, id):
        return self.users.get(id)

    async def get_by_id_with_avatar(self, id):
        return self.users.get(id)

    async def get_by_email(self, email):
        return next((u for u in self.users.values() if u.email == email), None)

    async def get_by_phone(self, phone):
        return next((u for u in self.users.values() if u.phone == phone), None)

    async def add(self, user):
        user.id = self._next_id
        self._next_id += 1
        self.users[user.id] = user
        return user

    async def save(self, user):
        self.saved += 1
        return user


class FakeFileRepository:
    def __init__(self, *files):
        self.files = {f.id: f for f in files}

    async def get_by_id(self, id):
        return self.files.get(id)


@pytest.fixture
def user_repo():
    repo = FakeUserRepository()
    for name, email, phone in [
        ("Ann", "ann@example.com", "11900000001"),
        ("Bob", "bob@example.com", "11900000002"),
    ]:
        user = User(name=name, email=email, phone=phone, password_hash=fake_hash("password123"))
        user.id = repo._next_id
        repo._next_id += 1
        repo.users[user.id] = user
    return repo


@pytest.fixture
def avatar():
    return File(id=7, name="face.jpg", path="abc.jpg")


@pytest.fixture
def service(user_repo, avatar):
    return AccountService(user_repo, FakeFileRepository(avatar), hasher=fake_hash, verifier=fake_verify)


def registration(**overrides) -> dict:
    body = {
        "name": "Carol",
        "email": "carol@example.com",
        "phone": "11900000003",
        "password": "12345678",
        "confirmPassword": "12345678",
    }
    body.update(overrides)
    return body


@pytest.mark.asyncio
async def test_register_hashes_and_hides_password(service, user_repo):
    result = await service.register(registration())
    assert result.model_dump() == {
        "id": 3,
        "name": "Carol",
        "email": "carol@example.com",
        "phone": "11900000003",
    }
    assert user_repo.users[3].password_hash == "hashed:12345678"


@pytest.mark.asyncio
async def test_register_duplicate_email_whatever_else(service, user_repo):
    with pytest.raises(ConflictError) as exc:
        await service.register(registration(email="ann@example.com", name="Zed", phone="11977777777"))
    assert exc.value.code == "email_already_exists"
    assert len(user_repo.users) == 2


@pytest.mark.asyncio
async def test_register_reports_email_before_phone(service):
    with pytest.raises(ConflictError) as exc:
        await service.register(registration(email="ann@example.com", phone="11900000002"))
    assert exc.value.field == "email"


@pytest.mark.asyncio
async def test_register_duplicate_phone(service):
    with pytest.raises(ConflictError) as exc:
        await service.register(registration(phone="11900000001"))
    assert exc.value.code == "phone_already_exists"


@pytest.mark.asyncio
async def test_register_invalid_input(service):
    with pytest.raises(ValidationFailedError) as exc:
        await service.register(registration(phone="5551234"))
    assert exc.value.code == "validation_failed"
    assert "phone:string_too_short" in exc.value.reasons


@pytest.mark.asyncio
async def test_profile_missing_user_is_none(service):
    assert await service.get_profile(42) is None


@pytest.mark.asyncio
async def test_profile_includes_avatar(service, user_repo, avatar):
    user_repo.users[1].avatar = avatar
    profile = await service.get_profile(1)
    assert profile.avatar.id == 7
    assert profile.avatar.url.endswith("/files/abc.jpg")
    assert "password_hash" not in profile.model_dump()


@pytest.mark.asyncio
async def test_update_missing_user(service):
    with pytest.raises(UserNotFoundError):
        await service.update(42, {"name": "Ghost"})


@pytest.mark.asyncio
async def test_update_wrong_old_password(service, user_repo):
    with pytest.raises(AuthError) as exc:
        await service.update(
            1, {"oldPassword": "not-my-password", "password": "abcdefgh", "confirmPassword": "abcdefgh"}
        )
    assert exc.value.code == "password_not_match"
    assert user_repo.users[1].password_hash == fake_hash("password123")
    assert user_repo.saved == 0


@pytest.mark.asyncio
async def test_update_changes_password(service, user_repo):
    await service.update(
        1, {"oldPassword": "password123", "password": "abcdefgh", "confirmPassword": "abcdefgh"}
    )
    stored = user_repo.users[1].password_hash
    assert fake_verify("abcdefgh", stored)
    assert not fake_verify("password123", stored)


@pytest.mark.asyncio
async def test_update_conflicts_leave_fields_alone(service, user_repo):
    with pytest.raises(ConflictError) as exc:
        await service.update(
            1, {"name": "Changed", "email": "bob@example.com", "phone": "11900000002"}
        )
    assert exc.value.code == "email_already_exists"
    ann = user_repo.users[1]
    assert (ann.name, ann.email, ann.phone) == ("Ann", "ann@example.com", "11900000001")
    assert user_repo.saved == 0


@pytest.mark.asyncio
async def test_update_merges_supplied_fields_only(service, user_repo):
    result = await service.update(1, {"phone": "11955555555", "id": 99, "password_hash": "x"})
    assert result.model_dump() == {
        "id": 1,
        "name": "Ann",
        "email": "ann@example.com",
        "phone": "11955555555",
    }
    assert user_repo.users[1].password_hash == fake_hash("password123")
    assert user_repo.saved == 1


@pytest.mark.asyncio
async def test_update_sets_avatar(service, user_repo):
    await service.update(1, {"avatarId": 7})
    assert user_repo.users[1].avatar_id == 7


@pytest.mark.asyncio
async def test_update_unknown_avatar(service):
    with pytest.raises(ValidationFailedError) as exc:
        await service.update(1, {"avatarId": 8})
    assert exc.value.reasons == ("avatar_not_found",)
