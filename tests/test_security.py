import pytest

from app.core.security import check_password_policy, hash_password, verify_and_maybe_upgrade, verify_password


@pytest.mark.parametrize("password", ["User123", "aB3", "Passw0rd!"])
def test_password_policy_accepts(password):
    assert check_password_policy(password) == password


@pytest.mark.parametrize(
    "password, message",
    [
        ("", "required"),
        ("USER123", "lowercase"),
        ("user123", "uppercase"),
        ("UserUser", "number"),
    ],
)
def test_password_policy_rejects(password, message):
    with pytest.raises(ValueError, match=message):
        check_password_policy(password)


def test_hash_and_verify():
    hashed = hash_password("User123")
    assert hashed != "User123"
    assert verify_password("User123", hashed)
    assert not verify_password("User124", hashed)


def test_verify_without_stored_hash_fails():
    assert verify_password("User123", None) is False


def test_verify_and_maybe_upgrade_on_current_hash():
    ok, new_hash = verify_and_maybe_upgrade("User123", hash_password("User123"))
    assert ok is True
    assert new_hash is None
