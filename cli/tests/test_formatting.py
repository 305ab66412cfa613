from datetime import datetime, timezone

from lembaas_cli.formatting import format_expires_in, format_timestamp, to_jsonable
from lembaas_client.models import AppUser, TOTPEnable


def test_format_timestamp_drops_fraction() -> None:
    assert format_timestamp("2026-01-04T23:04:51.290171Z") == "2026-01-04T23:04:51Z"


def test_format_timestamp_none() -> None:
    assert format_timestamp(None) == "-"


def test_format_expires_in() -> None:
    assert format_expires_in(3600) == "1h00m"
    assert format_expires_in(90) == "1m30s"
    assert format_expires_in(0) == "-"


def test_to_jsonable_converts_payloads() -> None:
    user = AppUser(id=1, email="a@b.c", created_at=datetime(2026, 1, 4, tzinfo=timezone.utc))

    data = to_jsonable(user)

    assert data["created_at"] == "2026-01-04T00:00:00Z"
    assert data["updated_at"] is None
    assert to_jsonable(TOTPEnable(qr_code=b"hi")) == {"qr_code": "aGk="}
