import pytest
from datetime import date, datetime, timedelta, timezone
from unittest import mock
from apps.shares.exceptions import ShareValidationError
from apps.shares.periods import as_utc, month_bucket, month_key


class TestMonthBucket:
    """Tests for month_bucket()"""

    def test_zero_padded(self):
        assert month_bucket(datetime(2025, 3, 15, tzinfo=timezone.utc)) == '2025-03'

    def test_plain_date(self):
        assert month_bucket(date(2024, 11, 30)) == '2024-11'

    def test_naive_datetime_is_utc(self):
        assert month_bucket(datetime(2025, 1, 31, 23, 59)) == '2025-01'

    def test_offset_converted_to_utc(self):
        """Late evening west of UTC already belongs to the next UTC month."""
        eastern = timezone(timedelta(hours=-5))
        value = datetime(2025, 3, 31, 22, 30, tzinfo=eastern)

        assert month_bucket(value) == '2025-04'

    def test_offset_east_of_utc(self):
        plus_three = timezone(timedelta(hours=3))
        value = datetime(2025, 4, 1, 1, 0, tzinfo=plus_three)

        assert month_bucket(value) == '2025-03'

    def test_rejects_other_types(self):
        with pytest.raises(TypeError):
            month_bucket('2025-03-15')


class TestAsUtc:

    def test_date_is_midnight_utc(self):
        value = as_utc(date(2025, 3, 15))

        assert value == datetime(2025, 3, 15, tzinfo=timezone.utc)

    def test_aware_value_keeps_instant(self):
        plus_two = timezone(timedelta(hours=2))
        value = datetime(2025, 3, 15, 2, 0, tzinfo=plus_two)

        assert as_utc(value) == value
        assert as_utc(value).utcoffset() == timedelta(0)


class TestMonthKey:
    """Tests for month_key()"""

    def test_builds_padded_key(self):
        assert month_key(3, 2025) == '2025-03'

    def test_accepts_numeric_strings(self):
        assert month_key('12', '2024') == '2024-12'

    def test_matches_bucket(self):
        assert month_key(7, 2025) == month_bucket(date(2025, 7, 9))

    @pytest.mark.parametrize('month', [0, 13, -1])
    def test_month_out_of_range(self, month):
        with pytest.raises(ShareValidationError) as exc_info:
            month_key(month, 2025)

        assert exc_info.value.messages == ['Month must be between 1 and 12']

    def test_year_before_2000(self):
        with pytest.raises(ShareValidationError):
            month_key(1, 1999)

    def test_year_upper_bound_follows_clock(self):
        fake_now = datetime(2030, 6, 1, tzinfo=timezone.utc)
        with mock.patch('apps.shares.periods.timezone.now', return_value=fake_now):
            assert month_key(1, 2031) == '2031-01'
            with pytest.raises(ShareValidationError):
                month_key(1, 2032)

    def test_collects_both_errors(self):
        with pytest.raises(ShareValidationError) as exc_info:
            month_key('x', 1500)

        assert len(exc_info.value.messages) == 2

    def test_validation_error_is_http_400(self):
        with pytest.raises(ShareValidationError) as exc_info:
            month_key(13, 2025)

        assert exc_info.value.status_code == 400
