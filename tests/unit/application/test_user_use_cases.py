"""
Name: User Use Case Tests

Responsibilities:
  - Registration/login flow (real Argon2 + JWT)
  - Self-service update/delete rules (403 for other accounts)
  - Delete blocked while the user owns processes
"""

from __future__ import annotations

from uuid import uuid4

import pytest

from notaria.application.usecases.processes import (
    CreateProcessInput,
    CreateProcessUseCase,
)
from notaria.application.usecases.users import (
    AuthenticateUserUseCase,
    ChangePasswordUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUserProcessesUseCase,
    ListUsersUseCase,
    RegisterUserUseCase,
    UpdateUserInput,
    UpdateUserUseCase,
    UserErrorCode,
)
from notaria.domain.ownership_policy import Actor
from notaria.identity.auth_users import verify_password

pytestmark = pytest.mark.unit


def _fake_hash(password: str) -> str:
    return f"hashed:{password}"


def _fake_verify(password: str, password_hash: str) -> bool:
    return password_hash == _fake_hash(password)


def _register(user_repo, token_service, email="alice@example.com", password="secret1"):
    result = RegisterUserUseCase(
        user_repo, token_service, password_hasher=_fake_hash
    ).execute(email, password)
    assert result.error is None
    return result.user


def _actor_for(user) -> Actor:
    return Actor(user_id=user.id, email=user.email)


def test_register_then_login_yields_same_user_id(user_repo, token_service):
    registered = RegisterUserUseCase(user_repo, token_service).execute(
        "Alice@Example.com ", "secret1", name="Alice"
    )
    login = AuthenticateUserUseCase(user_repo, token_service).execute(
        "alice@example.com", "secret1"
    )

    assert registered.error is None
    assert login.error is None
    assert registered.user.email == "alice@example.com"
    assert registered.user.name == "Alice"
    verification = token_service.verify(login.token)
    assert verification.ok
    assert verification.identity.user_id == registered.user.id
    assert login.expires_in == token_service.ttl_seconds


def test_register_stores_argon2_hash_not_plaintext(user_repo, token_service):
    result = RegisterUserUseCase(user_repo, token_service).execute(
        "carol@example.com", "secret1"
    )

    stored = user_repo.get_user_by_email("carol@example.com")
    assert stored.password_hash != "secret1"
    assert stored.password_hash.startswith("$argon2")
    assert verify_password("secret1", stored.password_hash)
    assert result.user.id == stored.id


@pytest.mark.parametrize("email", ["", "no-at-sign", "a@b", "a b@c.com"])
def test_register_rejects_invalid_email(user_repo, token_service, email):
    result = RegisterUserUseCase(
        user_repo, token_service, password_hasher=_fake_hash
    ).execute(email, "secret1")

    assert result.error.code == UserErrorCode.VALIDATION_ERROR


def test_register_rejects_short_password(user_repo, token_service):
    result = RegisterUserUseCase(
        user_repo, token_service, password_hasher=_fake_hash
    ).execute("alice@example.com", "12345")

    assert result.error.code == UserErrorCode.VALIDATION_ERROR
    assert user_repo.list_users() == []


def test_register_duplicate_email_is_conflict(user_repo, token_service):
    _register(user_repo, token_service)

    result = RegisterUserUseCase(
        user_repo, token_service, password_hasher=_fake_hash
    ).execute("ALICE@example.com", "another1")

    assert result.error.code == UserErrorCode.CONFLICT


def test_login_unknown_email_and_wrong_password_look_the_same(user_repo, token_service):
    RegisterUserUseCase(user_repo, token_service).execute("alice@example.com", "secret1")
    use_case = AuthenticateUserUseCase(user_repo, token_service)

    unknown = use_case.execute("nobody@example.com", "secret1")
    wrong = use_case.execute("alice@example.com", "wrong-password")

    assert unknown.error.code == UserErrorCode.UNAUTHORIZED
    assert wrong.error.code == UserErrorCode.UNAUTHORIZED
    assert unknown.error.message == wrong.error.message
    assert unknown.token is None


def test_get_and_list_users(user_repo, token_service):
    alice = _register(user_repo, token_service)
    bob = _register(user_repo, token_service, email="bob@example.com")

    assert GetUserUseCase(user_repo).execute(alice.id).user == alice
    assert GetUserUseCase(user_repo).execute(uuid4()).error.code == (
        UserErrorCode.NOT_FOUND
    )
    assert {u.id for u in ListUsersUseCase(user_repo).execute().users} == {
        alice.id,
        bob.id,
    }


def test_update_own_account(user_repo, token_service):
    alice = _register(user_repo, token_service)
    use_case = UpdateUserUseCase(
        user_repo, password_hasher=_fake_hash, password_verifier=_fake_verify
    )

    result = use_case.execute(
        UpdateUserInput(
            user_id=alice.id,
            actor=_actor_for(alice),
            email="Alice.New@Example.com",
            name="  Alice  ",
            password="newsecret",
            current_password="secret1",
        )
    )

    assert result.error is None
    assert result.user.email == "alice.new@example.com"
    assert result.user.name == "Alice"
    assert result.user.password_hash == "hashed:newsecret"


def test_update_other_account_is_forbidden(user_repo, token_service):
    alice = _register(user_repo, token_service)
    bob = _register(user_repo, token_service, email="bob@example.com")

    result = UpdateUserUseCase(user_repo, password_hasher=_fake_hash).execute(
        UpdateUserInput(user_id=bob.id, actor=_actor_for(alice), name="hacked")
    )

    assert result.error.code == UserErrorCode.FORBIDDEN
    assert user_repo.get_user_by_id(bob.id).name is None


def test_update_requires_at_least_one_field(user_repo, token_service):
    alice = _register(user_repo, token_service)

    result = UpdateUserUseCase(user_repo).execute(
        UpdateUserInput(user_id=alice.id, actor=_actor_for(alice))
    )

    assert result.error.code == UserErrorCode.VALIDATION_ERROR


def test_update_to_taken_email_is_conflict(user_repo, token_service):
    alice = _register(user_repo, token_service)
    _register(user_repo, token_service, email="bob@example.com")

    result = UpdateUserUseCase(user_repo).execute(
        UpdateUserInput(
            user_id=alice.id, actor=_actor_for(alice), email="bob@example.com"
        )
    )

    assert result.error.code == UserErrorCode.CONFLICT


def test_update_rejects_short_password(user_repo, token_service):
    alice = _register(user_repo, token_service)

    result = UpdateUserUseCase(user_repo).execute(
        UpdateUserInput(user_id=alice.id, actor=_actor_for(alice), password="123")
    )

    assert result.error.code == UserErrorCode.VALIDATION_ERROR


@pytest.mark.parametrize("current_password", [None, "", "wrong-one"])
def test_update_password_requires_current_password(
    user_repo, token_service, current_password
):
    alice = _register(user_repo, token_service)

    result = UpdateUserUseCase(
        user_repo, password_hasher=_fake_hash, password_verifier=_fake_verify
    ).execute(
        UpdateUserInput(
            user_id=alice.id,
            actor=_actor_for(alice),
            password="newsecret",
            current_password=current_password,
        )
    )

    assert result.error.code == UserErrorCode.UNAUTHORIZED
    assert user_repo.get_user_by_id(alice.id).password_hash == "hashed:secret1"


@pytest.mark.parametrize("name", ["", "   "])
def test_update_blank_name_is_stored_as_none(user_repo, token_service, name):
    alice = _register(user_repo, token_service)

    result = UpdateUserUseCase(user_repo).execute(
        UpdateUserInput(
            user_id=alice.id,
            actor=_actor_for(alice),
            email="alice2@example.com",
            name=name,
        )
    )

    assert result.error is None
    assert result.user.email == "alice2@example.com"
    assert result.user.name is None


def _change_password(user_repo):
    return ChangePasswordUseCase(
        user_repo, password_hasher=_fake_hash, password_verifier=_fake_verify
    )


def test_change_password_with_current_password(user_repo, token_service):
    alice = _register(user_repo, token_service)

    result = _change_password(user_repo).execute(alice.id, "secret1", "newsecret")

    assert result.error is None
    assert user_repo.get_user_by_id(alice.id).password_hash == "hashed:newsecret"


def test_change_password_with_wrong_current_is_unauthorized(user_repo, token_service):
    alice = _register(user_repo, token_service)

    result = _change_password(user_repo).execute(alice.id, "wrong-one", "newsecret")

    assert result.error.code == UserErrorCode.UNAUTHORIZED
    assert user_repo.get_user_by_id(alice.id).password_hash == "hashed:secret1"


@pytest.mark.parametrize("current,new", [("", "newsecret"), ("secret1", "123")])
def test_change_password_validation(user_repo, token_service, current, new):
    alice = _register(user_repo, token_service)

    result = _change_password(user_repo).execute(alice.id, current, new)

    assert result.error.code == UserErrorCode.VALIDATION_ERROR


def test_change_password_for_deleted_account_is_not_found(user_repo):
    result = _change_password(user_repo).execute(uuid4(), "secret1", "newsecret")

    assert result.error.code == UserErrorCode.NOT_FOUND


def test_delete_user_blocked_while_owning_processes(
    user_repo, process_repo, token_service
):
    alice = _register(user_repo, token_service)
    actor = _actor_for(alice)
    CreateProcessUseCase(process_repo).execute(
        CreateProcessInput(repertorio="REP-001", actor=actor)
    )

    result = DeleteUserUseCase(user_repo, process_repo).execute(alice.id, actor)

    assert result.error.code == UserErrorCode.CONFLICT
    assert user_repo.get_user_by_id(alice.id) is not None


def test_delete_own_account_without_processes(user_repo, process_repo, token_service):
    alice = _register(user_repo, token_service)

    result = DeleteUserUseCase(user_repo, process_repo).execute(
        alice.id, _actor_for(alice)
    )

    assert result.deleted is True
    assert user_repo.get_user_by_id(alice.id) is None


def test_delete_other_account_is_forbidden(user_repo, process_repo, token_service):
    alice = _register(user_repo, token_service)
    bob = _register(user_repo, token_service, email="bob@example.com")

    result = DeleteUserUseCase(user_repo, process_repo).execute(
        bob.id, _actor_for(alice)
    )

    assert result.error.code == UserErrorCode.FORBIDDEN


def test_list_user_processes_is_self_only(user_repo, process_repo, token_service):
    alice = _register(user_repo, token_service)
    bob = _register(user_repo, token_service, email="bob@example.com")
    CreateProcessUseCase(process_repo).execute(
        CreateProcessInput(repertorio="REP-001", actor=_actor_for(alice))
    )
    use_case = ListUserProcessesUseCase(process_repo)

    own = use_case.execute(alice.id, _actor_for(alice))
    foreign = use_case.execute(alice.id, _actor_for(bob))

    assert [p.repertorio for p in own.processes] == ["REP-001"]
    assert foreign.error.code == UserErrorCode.FORBIDDEN
