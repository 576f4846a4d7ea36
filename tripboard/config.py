"""
Runtime configuration for the annotation surface.

Defaults live here; any entry can be overridden from the environment with
``TRIPBOARD_<SECTION>__<KEY>=value``.
"""

import copy
import os
from typing import Dict, Optional

from easydict import EasyDict as edict

from .utils.env import load_cfg_from_env

DEFAULTS = {
    "surface": {
        "background": "#ffffff",
        "scale": 1.0,
    },
    "history": {
        # 0 keeps every snapshot
        "max_size": 0,
    },
    "scheduler": {
        "fps": 60,
    },
    "doodle": {
        "color": "#000000",
        "size": 2,
        "min_size": 1,
        "max_size": 50,
    },
    "eraser": {
        "size": 20,
        "min_size": 5,
        "max_size": 100,
    },
    "location": {
        "color": "#FF0000",
        "default_label": "Location",
        "hit_radius": 20,
        "drag_threshold": 3,
        "pin_size": 30,
        "max_suggestions": 5,
    },
    "transit": {
        "color": "#000000",
        "width": 3,
        "min_width": 1,
        "max_width": 10,
        "snap_radius": 30,
        "km_per_pixel": 0.5,
        "loader_delay": 0.5,
    },
    "group": {
        "color": "#FFD700",
        "hit_radius": 20,
        "glow_size": 40,
    },
}


def default_config() -> edict:
    return edict(copy.deepcopy(DEFAULTS))


def load_config(env: Optional[Dict[str, str]] = None) -> edict:
    """Build the configuration tree, applying environment overrides."""
    if env is None:
        env = dict(os.environ)
    return load_cfg_from_env(default_config(), env)
