"""Tests for auth data models."""

import time

from storelink.auth.models import REDACTED, Session, TokenRecord, TokenResponse


class TestTokenResponse:
    """Test TokenResponse parsing."""

    def test_all_fields_optional(self):
        """Empty payload parses with every field None."""
        response = TokenResponse.model_validate({})
        assert response.access_token is None
        assert response.refresh_token is None
        assert response.expires_in is None

    def test_ignores_unknown_fields(self):
        """Unknown fields in the payload are dropped."""
        response = TokenResponse.model_validate({"access_token": "a", "scope": "shops_r"})
        assert response.access_token == "a"
        assert "scope" not in response.model_dump()


class TestTokenRecord:
    """Test TokenRecord helpers."""

    def test_expires_at(self):
        """expires_at is obtained_at plus expires_in."""
        record = TokenRecord(access_token="a", expires_in=3600, obtained_at=1000)
        assert record.expires_at == 4600

    def test_expires_at_unknown_without_expires_in(self):
        """Without expires_in there is no expiry."""
        record = TokenRecord(access_token="a")
        assert record.expires_at is None
        assert not record.is_expired()

    def test_is_expired(self):
        """Record past its lifetime is expired."""
        record = TokenRecord(access_token="a", expires_in=60, obtained_at=int(time.time()) - 120)
        assert record.is_expired()

    def test_not_expired(self):
        """Fresh record is not expired."""
        record = TokenRecord(access_token="a", expires_in=3600)
        assert not record.is_expired()

    def test_redacted_hides_tokens(self):
        """redacted() never contains the live token values."""
        record = TokenRecord(access_token="123.secret", refresh_token="r-secret", expires_in=3600)
        data = record.redacted()
        assert data["access_token"] == REDACTED
        assert data["refresh_token"] == REDACTED
        assert "123.secret" not in str(data)
        assert "r-secret" not in str(data)
        assert data["expires_in"] == 3600


class TestSession:
    """Test Session model."""

    def test_new_session_is_empty(self):
        """New session has an id and no authorization state."""
        session = Session()
        assert len(session.session_id) >= 32
        assert session.pending_authorization is None
        assert session.token_record is None
        assert not session.persisted

    def test_session_ids_unique(self):
        """Each new session gets its own id."""
        assert Session().session_id != Session().session_id

    def test_mark_persisted(self):
        """mark_persisted flips the persisted flag."""
        session = Session()
        session.mark_persisted()
        assert session.persisted

    def test_mark_discarded(self):
        """mark_discarded clears persisted; a later save clears discarded."""
        session = Session()
        session.mark_persisted()
        session.mark_discarded()
        assert session.discarded
        assert not session.persisted

        session.mark_persisted()
        assert not session.discarded

    def test_persisted_flag_not_serialized(self):
        """The persisted flag is not part of the stored payload."""
        session = Session()
        session.mark_persisted()
        assert "persisted" not in session.model_dump_json()
