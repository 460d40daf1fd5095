import pytest

from portfolio_api.app.core.errors import ConflictError, NotFoundError, UnauthorizedError, ValidationError
from portfolio_api.app.core.security import decode_access_token
from portfolio_api.app.schemas.user import UserCreate, UserLogin
from portfolio_api.app.services.user_service import INVALID_CREDENTIALS, UserRepository, UserService


@pytest.fixture
async def service(store) -> UserService:
    await UserRepository(store).ensure_indexes()
    return UserService(store)


@pytest.fixture
def users(store):
    return store.collection("users")


async def register(service, email="ada@example.com", password="s3cret", name="Ada"):
    return await service.register(UserCreate(name=name, email=email, password=password))


class TestRegister:
    async def test_stores_hash_not_plaintext(self, service, users):
        account = await register(service)

        assert account["email"] == "ada@example.com"
        assert account["name"] == "Ada"
        assert "password" not in account
        stored = users.docs[0]
        assert stored["password"] != "s3cret"
        assert stored["password"].startswith("$2b$10$")

    async def test_duplicate_email_conflicts_and_keeps_one_account(self, service, users):
        await register(service)

        with pytest.raises(ConflictError) as exc:
            await register(service, password="other", name="Impostor")

        assert exc.value.message == "User already exists"
        assert await users.count_documents({"email": "ada@example.com"}) == 1

    async def test_unique_index_violation_is_a_conflict(self, service, users):
        # Simulate a concurrent registration that slipped past the lookup.
        await register(service)

        async def no_match(email):
            return None

        service.repository.find_by_email = no_match

        with pytest.raises(ConflictError):
            await register(service)
        assert len(users.docs) == 1


class TestLogin:
    async def test_returns_token_for_account_email(self, service):
        await register(service)

        token, account = await service.login(UserLogin(email="ada@example.com", password="s3cret"))

        assert decode_access_token(token)["email"] == "ada@example.com"
        assert account["email"] == "ada@example.com"
        assert "password" not in account

    async def test_wrong_password_and_unknown_email_look_identical(self, service):
        await register(service)

        with pytest.raises(UnauthorizedError) as wrong_password:
            await service.login(UserLogin(email="ada@example.com", password="nope"))
        with pytest.raises(UnauthorizedError) as unknown_email:
            await service.login(UserLogin(email="bob@example.com", password="s3cret"))

        assert wrong_password.value.message == unknown_email.value.message == INVALID_CREDENTIALS

    @pytest.mark.parametrize("password", ["", "x" * 80, "pässwörd", "密码🔒" * 20, "s3cret"])
    async def test_register_then_login_with_same_password(self, service, password):
        await register(service, password=password)

        token, account = await service.login(UserLogin(email="ada@example.com", password=password))

        assert decode_access_token(token)["email"] == "ada@example.com"
        assert account["email"] == "ada@example.com"

    async def test_empty_password_account_rejects_other_passwords(self, service):
        await register(service, password="")

        with pytest.raises(UnauthorizedError):
            await service.login(UserLogin(email="ada@example.com", password="s3cret"))

    async def test_account_without_hash_cannot_log_in(self, service, users):
        await users.insert_one({"name": "Legacy", "email": "legacy@example.com"})

        with pytest.raises(UnauthorizedError):
            await service.login(UserLogin(email="legacy@example.com", password=""))

    async def test_hash_is_returned_when_compatibility_switch_is_on(self, service, test_settings, monkeypatch):
        monkeypatch.setattr(test_settings, "expose_password_hash", True)
        await register(service)

        _, account = await service.login(UserLogin(email="ada@example.com", password="s3cret"))

        assert account["password"].startswith("$2b$")


class TestAccountLookup:
    async def test_list_accounts(self, service):
        assert await service.list_accounts() == []

        await register(service)
        await register(service, email="grace@example.com", name="Grace")

        emails = [account["email"] for account in await service.list_accounts()]
        assert sorted(emails) == ["ada@example.com", "grace@example.com"]

    async def test_get_account_by_id(self, service):
        account = await register(service)

        assert await service.get_account(account["id"]) == account

    async def test_missing_account_is_not_found(self, service):
        with pytest.raises(NotFoundError):
            await service.get_account("0123456789abcdef01234567")

    @pytest.mark.parametrize("bad_id", ["", "123", "zzzzzzzzzzzzzzzzzzzzzzzz", "0123456789abcdef012345678"])
    async def test_malformed_id_never_reaches_the_store(self, service, users, bad_id):
        calls = users.calls

        with pytest.raises(ValidationError):
            await service.get_account(bad_id)

        assert users.calls == calls
