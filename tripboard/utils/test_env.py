import tripboard.utils.i18n  # noqa:F401

from easydict import EasyDict as edict

from .env import load_cfg_from_env


def test_load_cfg_from_env():
    input_dict = {"TRIPBOARD_a": 2, "TRIPBOARD_eoq__trabson": 3, "OTHER": 1}
    loaded = load_cfg_from_env(edict(), input_dict)
    assert loaded.a == 2
    assert loaded.eoq.trabson == 3
    assert "other" not in loaded


def test_load_cfg_from_env_coerces_to_default_type():
    cfg = edict({"location": {"hit_radius": 20, "drag_threshold": 3.0}})
    cfg.flags = edict({"enabled": False})
    env = {
        "TRIPBOARD_LOCATION__HIT_RADIUS": "25",
        "TRIPBOARD_LOCATION__DRAG_THRESHOLD": "4.5",
        "TRIPBOARD_FLAGS__ENABLED": "yes",
    }
    loaded = load_cfg_from_env(cfg, env)
    assert loaded.location.hit_radius == 25
    assert loaded.location.drag_threshold == 4.5
    assert loaded.flags.enabled is True
