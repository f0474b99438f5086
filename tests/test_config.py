import pytest

from flyby.config import EngineConfig, EngineState


def test_defaults_match_engine_constants():
    config = EngineConfig()
    assert config.memory_minimum_gb == 2
    assert config.memory_commit_count_max == 128
    assert config.tag_count_max == 1024
    assert config.window_title == "It Flies By"


def test_reservation_size_scales_with_gigabytes():
    one = EngineConfig(memory_minimum_gb=1)
    two = EngineConfig(memory_minimum_gb=2)
    assert two.memory_reservation_size == 2 * one.memory_reservation_size
    assert one.memory_reservation_size == 1 << 30


def test_global_stack_size_in_bytes():
    config = EngineConfig(global_stack_kb=1)
    assert config.global_stack_size == 1024


@pytest.mark.parametrize("name", ["arena_count_max", "tag_count_max", "global_stack_kb"])
def test_field_outside_u16_is_rejected(name):
    with pytest.raises(ValueError):
        EngineConfig(**{name: 0x10000})


def test_negative_field_is_rejected():
    with pytest.raises(ValueError):
        EngineConfig(tag_c_str_length=-1)


def test_non_integer_field_is_rejected():
    with pytest.raises(TypeError):
        EngineConfig(arena_minimum_kb="4")


def test_config_is_frozen():
    config = EngineConfig(tag_count_max=7)
    with pytest.raises(AttributeError):
        config.tag_count_max = 3
    assert config.tag_count_max == 7


def test_engine_state_values():
    assert EngineState(0) is EngineState.NOT_RUNNING
    assert EngineState(5) is EngineState.FRAME_EXECUTE
    assert EngineState.IDLE > EngineState.SHUTDOWN