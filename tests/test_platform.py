from dataclasses import fields

import pytest

from flyby.platform import PlatformApi


def _noop(*args):
    return True


def _complete_api():
    return PlatformApi(**{f.name: _noop for f in fields(PlatformApi)})


def test_complete_api_validates_to_itself():
    api = _complete_api()
    assert api.validate() is api


def test_missing_callable_is_named():
    api = _complete_api()
    api.memory_commit = None
    with pytest.raises(ValueError, match="memory_commit"):
        api.validate()


def test_empty_api_lists_every_field():
    with pytest.raises(ValueError) as info:
        PlatformApi().validate()
    message = str(info.value)
    for f in fields(PlatformApi):
        assert f.name in message


def test_non_callable_counts_as_missing():
    api = _complete_api()
    api.system_page_size = 4096
    with pytest.raises(ValueError, match="system_page_size"):
        api.validate()


def test_only_missing_fields_are_named():
    api = _complete_api()
    api.window_show = None
    with pytest.raises(ValueError) as info:
        api.validate()
    assert "window_show" in str(info.value)
    assert "window_create" not in str(info.value)