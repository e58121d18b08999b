import pytest

from knop.config.settings import image_overrides, load_operator_settings, parse_toggle
from knop.errors import SettingsError


def test_defaults():
    s = load_operator_settings({})
    assert s.required_namespace == "knative-serving"
    assert s.min_kubernetes_version == "1.20.0"
    assert s.monitoring_toggle is None
    assert s.images == {}


def test_from_environment(monkeypatch):
    monkeypatch.setenv("REQUIRED_SERVING_NAMESPACE", "serving")
    monkeypatch.setenv("ENABLE_SERVING_MONITORING", "false")
    monkeypatch.setenv("IMAGE_queue-proxy", "baz")
    s = load_operator_settings()
    assert s.required_namespace == "serving"
    assert s.monitoring_toggle is False
    assert s.images["queue-proxy"] == "baz"


@pytest.mark.parametrize("raw,expected", [
    (None, None), ("", None), ("  ", None),
    ("true", True), ("TRUE", True), ("True", True), ("t", True), ("T", True), ("1", True),
    ("false", False), ("FALSE", False), ("False", False), ("f", False), ("F", False), ("0", False),
])
def test_parse_toggle(raw, expected):
    assert parse_toggle(raw) is expected


@pytest.mark.parametrize("raw", ["maybe", "yes", "on", "no", "off", "tRUE", "2"])
def test_parse_toggle_rejects_other_spellings(raw):
    with pytest.raises(SettingsError):
        parse_toggle(raw)


def test_image_overrides_only_prefixed():
    env = {"IMAGE_foo": "bar", "IMAGE_default": "bar2", "IMAGE_": "x", "PATH": "/bin"}
    assert image_overrides(env) == {"default": "bar2", "foo": "bar"}
