"""
Tests for the OTP password reset flow.
"""

from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from eventz.core.clock import utcnow
from eventz.core.exceptions import InvalidTokenError
from eventz.models import PasswordOtp
from eventz.services import otp_service


async def _expire(db: AsyncSession, identifier: str) -> None:
    await db.execute(
        update(PasswordOtp)
        .where(PasswordOtp.user_input == identifier)
        .values(expires_at=utcnow() - timedelta(minutes=1))
    )
    await db.commit()


@pytest.mark.asyncio
async def test_request_otp_unknown_user(client: AsyncClient):
    response = await client.post("/api/v1/auth/otp", json={"identifier": "ghost"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_request_otp_returns_code_outside_production(client: AsyncClient, test_user):
    response = await client.post("/api/v1/auth/otp", json={"identifier": "testuser"})
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["expires_in"] == 300
    assert len(data["otp"]) == 6
    assert data["otp"].isdigit()


@pytest.mark.asyncio
async def test_request_otp_by_email(client: AsyncClient, test_user):
    response = await client.post("/api/v1/auth/otp", json={"identifier": "test@example.com"})
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_reset_password(client: AsyncClient, test_user):
    otp = (await client.post("/api/v1/auth/otp", json={"identifier": "testuser"})).json()["otp"]

    response = await client.post(
        "/api/v1/auth/reset-password",
        json={"identifier": "testuser", "otp": otp, "new_password": "brandnewpass1"},
    )
    assert response.status_code == 200
    assert response.json()["success"] is True

    old_login = await client.post("/api/v1/auth/login", json={"username": "testuser", "password": "testpassword123"})
    assert old_login.status_code == 401

    new_login = await client.post("/api/v1/auth/login", json={"username": "testuser", "password": "brandnewpass1"})
    assert new_login.status_code == 200


@pytest.mark.asyncio
async def test_otp_is_single_use(client: AsyncClient, test_user):
    otp = (await client.post("/api/v1/auth/otp", json={"identifier": "testuser"})).json()["otp"]
    payload = {"identifier": "testuser", "otp": otp, "new_password": "brandnewpass1"}

    assert (await client.post("/api/v1/auth/reset-password", json=payload)).status_code == 200

    again = await client.post("/api/v1/auth/reset-password", json=payload)
    assert again.status_code == 400
    assert again.json()["error"] == "invalid_token"


@pytest.mark.asyncio
async def test_wrong_code_keeps_token(client: AsyncClient, db_session: AsyncSession, test_user, monkeypatch):
    monkeypatch.setattr(otp_service, "generate_otp_code", lambda length=6: "123456")
    await client.post("/api/v1/auth/otp", json={"identifier": "testuser"})

    wrong = await client.post(
        "/api/v1/auth/reset-password",
        json={"identifier": "testuser", "otp": "654321", "new_password": "brandnewpass1"},
    )
    assert wrong.status_code == 400
    assert wrong.json()["error"] == "invalid_token"

    token = await otp_service.validate_otp(db_session, "testuser", "123456")
    assert token.otp == "123456"


@pytest.mark.asyncio
async def test_latest_code_wins(db_session: AsyncSession, test_user, monkeypatch):
    codes = iter(["111111", "222222"])
    monkeypatch.setattr(otp_service, "generate_otp_code", lambda length=6: next(codes))

    await otp_service.issue_otp(db_session, "testuser")
    await otp_service.issue_otp(db_session, "testuser")

    with pytest.raises(InvalidTokenError):
        await otp_service.validate_otp(db_session, "testuser", "111111")
    await otp_service.validate_otp(db_session, "testuser", "222222")

    rows = (await db_session.execute(select(PasswordOtp))).scalars().all()
    assert len(rows) == 1


@pytest.mark.asyncio
async def test_code_comparison_ignores_case_and_whitespace(db_session: AsyncSession, test_user, monkeypatch):
    monkeypatch.setattr(otp_service, "generate_otp_code", lambda length=6: "ab12cd")
    await otp_service.issue_otp(db_session, "testuser")

    token = await otp_service.validate_otp(db_session, "testuser", "  AB12CD ")
    assert token.user_input == "testuser"


@pytest.mark.asyncio
async def test_expired_otp_is_removed(client: AsyncClient, db_session: AsyncSession, test_user):
    otp = (await client.post("/api/v1/auth/otp", json={"identifier": "testuser"})).json()["otp"]
    await _expire(db_session, "testuser")

    response = await client.post(
        "/api/v1/auth/reset-password",
        json={"identifier": "testuser", "otp": otp, "new_password": "brandnewpass1"},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "token_expired"

    remaining = (await db_session.execute(select(PasswordOtp))).scalars().all()
    assert remaining == []

    # Expired state is recoverable by asking for a new code
    fresh = await client.post("/api/v1/auth/otp", json={"identifier": "testuser"})
    assert fresh.status_code == 200


@pytest.mark.asyncio
async def test_otp_hidden_in_production(client: AsyncClient, test_user, monkeypatch):
    from eventz.core.config import get_settings

    monkeypatch.setattr(get_settings(), "EXPOSE_OTP", False)

    response = await client.post("/api/v1/auth/otp", json={"identifier": "testuser"})
    assert response.status_code == 200
    assert response.json()["otp"] is None


def test_generate_otp_code_shape():
    for _ in range(50):
        code = otp_service.generate_otp_code(6)
        assert len(code) == 6
        assert code.isdigit()
        assert code[0] != "0"


@pytest.mark.asyncio
async def test_failed_reissue_keeps_previous_token(db_session: AsyncSession, test_user, monkeypatch):
    codes = iter(["111111", None])
    monkeypatch.setattr(otp_service, "generate_otp_code", lambda length=6: next(codes))
    await otp_service.issue_otp(db_session, "testuser")

    # A NULL code violates the column constraint, so the second insert fails
    with pytest.raises(IntegrityError):
        await otp_service.issue_otp(db_session, "testuser")
    await db_session.rollback()

    token = await otp_service.validate_otp(db_session, "testuser", "111111")
    assert token.otp == "111111"
