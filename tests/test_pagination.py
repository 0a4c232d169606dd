"""Tests for browse pagination."""

import pytest

from app.services.pagination import paginate, parse_page


class TestParsePage:

    @pytest.mark.parametrize("raw", [None, "", "abc", "2.5", "0", "-4", 0, -1])
    def test_invalid_values_become_first_page(self, raw):
        assert parse_page(raw) == 1

    def test_valid_values(self):
        assert parse_page("3") == 3
        assert parse_page(7) == 7


class TestPaginate:

    def test_sixty_five_rows_make_three_pages(self):
        window = paginate(65, 1, 30)
        assert window.total_pages == 3
        assert window.offset == 0

    def test_last_page_holds_the_remainder(self):
        window = paginate(65, 3, 30)
        assert window.offset == 60
        assert not window.is_past_end
        assert min(window.page_size, window.total - window.offset) == 5

    def test_page_past_the_end_is_empty_not_an_error(self):
        window = paginate(65, 4, 30)
        assert window.is_past_end
        assert window.total == 65
        assert window.total_pages == 3

    def test_zero_rows(self):
        window = paginate(0, 1, 30)
        assert window.total_pages == 0
        assert window.is_past_end

    def test_exact_multiple(self):
        assert paginate(60, 1, 30).total_pages == 2

    def test_junk_page_is_first_page(self):
        window = paginate(65, "banana", 30)
        assert window.page == 1
        assert window.offset == 0
