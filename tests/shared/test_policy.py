from datetime import UTC, date, datetime

import pytest

from petshop.shared.dates import as_utc
from petshop.shared.errors import PermissionDenied
from petshop.shared.policy import Principal, ensure_owner, ensure_owner_or_admin, require_admin

shopper = Principal(user_id="user-001", roles=("User",))
admin = Principal(user_id="admin-001", roles=("Admin",))


class TestPolicy:
    def test_require_admin(self):
        assert require_admin(admin) is admin
        with pytest.raises(PermissionDenied):
            require_admin(shopper)

    def test_owner(self):
        assert ensure_owner(shopper, "user-001") is shopper
        with pytest.raises(PermissionDenied, match="own reviews"):
            ensure_owner(shopper, "user-002", "You can only edit your own reviews")

    def test_admin_is_not_owner(self):
        with pytest.raises(PermissionDenied):
            ensure_owner(admin, "user-001")

    def test_owner_or_admin(self):
        ensure_owner_or_admin(shopper, "user-001")
        ensure_owner_or_admin(admin, "user-001")
        with pytest.raises(PermissionDenied):
            ensure_owner_or_admin(shopper, "user-002")


class TestAsUtc:
    def test_bare_date_bounds(self):
        assert as_utc(date(2025, 5, 1)) == datetime(2025, 5, 1, tzinfo=UTC)
        assert as_utc(date(2025, 5, 1), end_of_day=True).hour == 23

    def test_naive_datetime_becomes_utc(self):
        assert as_utc(datetime(2025, 5, 1, 8)).tzinfo is UTC
