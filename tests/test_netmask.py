import ipaddress

import pytest

from fusioncompute.errors import InputError
from fusioncompute.netmask import normalize_netmask, prefix_to_netmask


@pytest.mark.parametrize(
    "prefix_length, expected",
    [
        (0, "0.0.0.0"),
        (1, "128.0.0.0"),
        (8, "255.0.0.0"),
        (12, "255.240.0.0"),
        (16, "255.255.0.0"),
        (23, "255.255.254.0"),
        (24, "255.255.255.0"),
        (30, "255.255.255.252"),
        (32, "255.255.255.255"),
    ],
)
def test_prefix_to_netmask_known_values(prefix_length, expected):
    assert prefix_to_netmask(prefix_length) == expected


def test_prefix_to_netmask_matches_ipaddress_for_every_prefix():
    for prefix_length in range(0, 33):
        expected = str(ipaddress.IPv4Network(f"0.0.0.0/{prefix_length}").netmask)
        assert prefix_to_netmask(prefix_length) == expected


def test_prefix_to_netmask_is_repeatable():
    assert prefix_to_netmask(20) == prefix_to_netmask(20) == "255.255.240.0"


@pytest.mark.parametrize("prefix_length", [-1, 33, 64, 1000])
def test_prefix_to_netmask_rejects_out_of_range(prefix_length):
    with pytest.raises(InputError):
        prefix_to_netmask(prefix_length)


@pytest.mark.parametrize("value", ["24", True, 24.0, None])
def test_prefix_to_netmask_rejects_non_integers(value):
    with pytest.raises(InputError):
        prefix_to_netmask(value)


def test_input_error_is_a_value_error():
    with pytest.raises(ValueError):
        prefix_to_netmask(40)


class TestNormalizeNetmask:
    def test_dotted_value_is_returned_unchanged(self):
        assert normalize_netmask("255.255.0.0") == "255.255.0.0"

    def test_dotted_value_is_not_validated(self):
        assert normalize_netmask("255.255.0.1") == "255.255.0.1"

    def test_prefix_string(self):
        assert normalize_netmask("24") == "255.255.255.0"

    def test_prefix_string_with_whitespace(self):
        assert normalize_netmask(" 16 ") == "255.255.0.0"

    def test_prefix_string_with_plus_sign(self):
        assert normalize_netmask("+24") == "255.255.255.0"

    def test_prefix_integer(self):
        assert normalize_netmask(8) == "255.0.0.0"

    @pytest.mark.parametrize("value", ["", "abc", "24/", None, "0x18", "2_4", "\u0662\u0664", "\uff12\uff14", "2 4", True])
    def test_unparseable_values_raise(self, value):
        with pytest.raises(InputError):
            normalize_netmask(value)

    @pytest.mark.parametrize("value", ["33", "-1", 99])
    def test_out_of_range_prefix_raises(self, value):
        with pytest.raises(InputError):
            normalize_netmask(value)
