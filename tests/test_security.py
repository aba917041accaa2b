from datetime import datetime, timedelta, timezone

from app.core.security import (
    create_access_token,
    get_password_hash,
    verify_password,
    verify_token,
)


def test_password_hash_round_trip():
    hashed = get_password_hash("s3cret!")

    assert hashed != "s3cret!"
    assert verify_password("s3cret!", hashed)
    assert not verify_password("wrong", hashed)


def test_passwords_longer_than_bcrypt_limit_are_accepted():
    long_password = "é" * 80
    hashed = get_password_hash(long_password)

    assert verify_password(long_password, hashed)


def test_token_carries_user_id_and_username():
    token = create_access_token(user_id=12, username="john")
    data = verify_token(token)

    assert data is not None
    assert data.user_id == 12
    assert data.username == "john"


def test_token_accepted_59_minutes_after_issue():
    issued_at = datetime.now(timezone.utc) - timedelta(minutes=59)
    token = create_access_token(user_id=1, username="john", issued_at=issued_at)

    assert verify_token(token) is not None


def test_token_rejected_61_minutes_after_issue():
    issued_at = datetime.now(timezone.utc) - timedelta(minutes=61)
    token = create_access_token(user_id=1, username="john", issued_at=issued_at)

    assert verify_token(token) is None


def test_tampered_token_is_rejected():
    token = create_access_token(user_id=1, username="john")
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload, signature[::-1]])

    assert verify_token(tampered) is None
    assert verify_token("not-a-token") is None
