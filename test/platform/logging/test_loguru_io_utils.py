import pytest

from src.platform.logging.loguru_io_utils import (
    MASK,
    mask_sensitive,
    normalize_args_kwargs,
    should_mask_keyword,
    truncate_content,
)


@pytest.mark.unit
class TestMasking:
    def test_sensitive_assignment_is_masked(self) -> None:
        rendered = "Principal(subject='clerk', token='abc.def.ghi')"

        masked = mask_sensitive(rendered)

        assert 'abc.def.ghi' not in masked
        assert f"token='{MASK}'" in masked
        assert "subject='clerk'" in masked

    def test_value_without_secrets_is_returned_untouched(self) -> None:
        data = {'showtime_id': 1, 'seat_id': 5}

        assert mask_sensitive(data) is data

    def test_keyword_masking(self) -> None:
        assert should_mask_keyword('Authorization', 'Bearer x') == MASK
        assert should_mask_keyword('phone', '+971501234567') == '+971501234567'


@pytest.mark.unit
class TestArgumentHandling:
    def test_truncate_long_content(self) -> None:
        result = truncate_content('x' * 510, max_length=500)

        assert result.endswith('...(+10 chars)')
        assert truncate_content('short') == 'short'

    def test_unknown_kwargs_are_dropped(self) -> None:
        def create_hall(*, name: str, capacity: int) -> None:
            pass

        args, kwargs = normalize_args_kwargs(create_hall, name='A', capacity=5, extra=1)

        assert args == ()
        assert kwargs == {'name': 'A', 'capacity': 5}
