import pytest

from cavecrawl.cave.config import GenerationParameters, SEED_MODE_FIXED
from cavecrawl.config import parameters_from_env, parameters_from_mapping
from cavecrawl.errors import ConfigurationInvalid, ConfigurationMissing


def test_mapping_overrides_defaults():
    params = parameters_from_mapping({"width": 40, "seed_mode": "fixed", "noise_scale": 1, "unused": "x"})
    assert params.width == 40
    assert params.height == 50
    assert params.seed_mode == SEED_MODE_FIXED
    assert params.noise_scale == 1.0 and isinstance(params.noise_scale, float)


@pytest.mark.parametrize("data", [None, {}, {"colour": "blue"}])
def test_mapping_without_parameters_is_missing(data):
    with pytest.raises(ConfigurationMissing):
        parameters_from_mapping(data)


@pytest.mark.parametrize(
    "data,field,code",
    [
        ({"width": 4}, "width", "min"),
        ({"width": "40"}, "width", "type"),
        ({"seed_mode": "sometimes"}, "seed_mode", "choice"),
        ({"ca_birth": 9}, "ca_birth", "max"),
        ({"treasure_count": True}, "treasure_count", "type"),
        ({"wall_break_threshold": 0}, "wall_break_threshold", "min"),
    ],
)
def test_mapping_invalid_fields(data, field, code):
    with pytest.raises(ConfigurationInvalid) as exc:
        parameters_from_mapping(data)
    assert exc.value.field == field
    assert exc.value.code == code


def test_parameter_validation_runs_after_schema():
    # the schema allows 0.0, the dataclass requires a positive scale
    with pytest.raises(ConfigurationInvalid):
        parameters_from_mapping({"noise_scale": 0.0})


def test_mapping_overlays_base():
    base = GenerationParameters(width=30, treasure_count=2)
    params = parameters_from_mapping({"height": 20}, base=base)
    assert (params.width, params.height, params.treasure_count) == (30, 20, 2)


def test_env_variables_are_coerced():
    env = {
        "CAVE_WIDTH": "64",
        "CAVE_SEED_MODE": "fixed",
        "CAVE_WALL_SEED_JITTER": "0.2",
        "CAVE_REQUIRE_GOAL_REACHABLE": "yes",
        "CAVE_NOT_A_FIELD": "1",
        "HOME": "/tmp",
    }
    params = parameters_from_env(env, load_env_file=False)
    assert params.width == 64
    assert params.seed_mode == SEED_MODE_FIXED
    assert params.wall_seed_jitter == pytest.approx(0.2)
    assert params.require_goal_reachable is True


def test_env_without_cave_variables_is_missing():
    with pytest.raises(ConfigurationMissing):
        parameters_from_env({"PATH": "/usr/bin"}, load_env_file=False)


def test_env_bad_number():
    with pytest.raises(ConfigurationInvalid) as exc:
        parameters_from_env({"CAVE_HEIGHT": "tall"}, load_env_file=False)
    assert exc.value.field == "height"
    assert exc.value.code == "type"


def test_env_file_is_loaded(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("CAVE_HEIGHT=33\nCAVE_ENEMY_COUNT=0\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    # register both names so monkeypatch removes whatever load_dotenv sets
    for name in ("CAVE_HEIGHT", "CAVE_ENEMY_COUNT"):
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    params = parameters_from_env()
    assert params.height == 33
    assert params.enemy_count == 0


def test_generation_parameters_validate_directly():
    with pytest.raises(ConfigurationInvalid) as exc:
        GenerationParameters(width=5).validate()
    assert exc.value.field == "width"
    assert GenerationParameters().validate().width == 50
