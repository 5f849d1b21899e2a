"""Unit tests for helper utilities"""
from datetime import datetime

import pytest

from uiharness.utils.helpers import deep_merge, mask, parse_bool, parse_int, sanitize_filename, timestamp_slug


def test_sanitize_filename():
    assert sanitize_filename('Login with "wrong" password') == 'Login_with__wrong__password'
    assert sanitize_filename('a/b\\c:d*e?f|g<h>i') == 'a_b_c_d_e_f_g_h_i'


def test_timestamp_slug_has_no_separators():
    slug = timestamp_slug(datetime(2024, 5, 1, 9, 30, 15, 123000))

    assert slug == '2024-05-01T09-30-15-123'


@pytest.mark.parametrize('value, default, expected', [
    ('TRUE', False, True),
    (' on ', False, True),
    ('0', True, False),
    ('nope', True, True),
    (None, False, False),
])
def test_parse_bool(value, default, expected):
    assert parse_bool(value, default) is expected


@pytest.mark.parametrize('value, expected', [('250', 250), (' 7 ', 7), ('1e3', 5), ('', 5), (None, 5)])
def test_parse_int(value, expected):
    assert parse_int(value, 5) == expected


def test_deep_merge_keeps_untouched_keys():
    base = {'browser': {'type': 'chromium', 'headless': True}, 'timeout': 1}
    merged = deep_merge(base, {'browser': {'headless': False}})

    assert merged == {'browser': {'type': 'chromium', 'headless': False}, 'timeout': 1}
    assert base['browser']['headless'] is True


def test_mask():
    assert mask('secret') == '******'
    assert mask(None) == ''
