import pytest

from knop.errors import VersionError, VersionTooLow, VersionUnparsable
from knop.serving.version import VersionInfo, check_minimum_version, parse_version

MIN = "1.20.0"


@pytest.mark.parametrize("actual", [
    "v1.20.0",
    "1.20.0",
    "1.20.2-kpn-065dce",
    "1.20.0-1095+9689d22dc3121e-dirty",
    "v1.21.0",
    "v1.20.0+k3s.1",
    "v1.20.0-k3s.1",
    "v2.0.0",
])
def test_version_at_or_above_minimum_passes(actual):
    check_minimum_version(actual, MIN)


def test_smaller_version_is_too_low():
    with pytest.raises(VersionTooLow) as exc:
        check_minimum_version("v1.19.3", MIN)
    assert "1.20.0" in str(exc.value)
    assert "1.19.3" in str(exc.value)


@pytest.mark.parametrize("actual", [
    "v1.19.foo", "", "1.20", "1.20.0.1", "latest", "v-1.20.0",
    "1.2.3\n-rc",
    "١.٢٠.٠",
])
def test_unparsable_actual_version(actual):
    with pytest.raises(VersionUnparsable):
        check_minimum_version(actual, MIN)


def test_unparsable_minimum_version():
    with pytest.raises(VersionUnparsable):
        check_minimum_version("1.20.0", "one.two.three")


def test_version_errors_share_a_base():
    assert issubclass(VersionTooLow, VersionError)
    assert issubclass(VersionUnparsable, VersionError)


def test_parse_strips_prefix_and_suffixes():
    assert parse_version("v1.22.3-rc.1+build.7") == VersionInfo(1, 22, 3)
    assert str(parse_version(" 1.2.3 ")) == "1.2.3"


def test_ordering_is_numeric_not_lexical():
    assert parse_version("1.10.0") > parse_version("1.9.9")
    check_minimum_version("1.100.0", "1.20.0")
