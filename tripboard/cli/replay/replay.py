"""
Replay of pointer scripts.

A script is a JSON list of single-key actions, for example::

    [
        {"tool": "LOCATION_PIN"},
        {"down": [100, 100]}, {"up": [100, 100]},
        {"tick": 0.6},
        {"option": {"name": "label", "value": "Paris, France"}},
        {"undo": true}
    ]
"""

import json
import logging
from gettext import gettext as _
from typing import Any, Dict, List

import cv2

from tripboard.config import load_config
from tripboard.core.session import CanvasSession
from tripboard.core.tools.base import find_control
from tripboard.interfaces import GUICanvasAdapter

logger = logging.getLogger(__name__)

POINTER_ACTIONS = {
    "down": "pointer_down",
    "move": "pointer_move",
    "up": "pointer_up",
    "leave": "pointer_leave",
}


def run_action(session: CanvasSession, action: Dict[str, Any]):
    if not isinstance(action, dict) or len(action) != 1:
        raise ValueError(_("Each action must be an object with one key: {a}").format(a=action))
    (kind, value), = action.items()

    if kind in POINTER_ACTIONS:
        x, y = value
        getattr(session, POINTER_ACTIONS[kind])(float(x), float(y))
    elif kind == "tool":
        session.set_tool(value)
    elif kind == "tick":
        session.tick(float(value))
    elif kind == "undo":
        session.undo()
    elif kind == "redo":
        session.redo()
    elif kind == "clear":
        session.clear()
    elif kind == "option":
        control = find_control(session.toolbar, value["name"], value.get("key"))
        control.trigger(value["value"])
    elif kind == "press":
        if isinstance(value, dict):
            control = find_control(session.toolbar, value["name"], value.get("key"))
        else:
            control = find_control(session.toolbar, value)
        control.trigger()
    else:
        raise ValueError(_("Unknown action: {kind}").format(kind=kind))


def run_script(session: CanvasSession, actions: List[Dict[str, Any]]):
    if not isinstance(actions, list):
        raise ValueError(_("A replay script must be a JSON list"))
    for index, action in enumerate(actions):
        logger.debug("Action %d: %s", index, action)
        run_action(session, action)


def handle(args):
    actions = json.loads(args.script.read_text())

    session = CanvasSession(load_config())
    session.mount(args.width, args.height, scale=args.scale)
    run_script(session, actions)

    image = GUICanvasAdapter(session).get_visualization()
    args.output.parent.mkdir(parents=True, exist_ok=True)
    cv2.imwrite(str(args.output), cv2.cvtColor(image, cv2.COLOR_RGB2BGR))
    logger.info(_("Saved {output}").format(output=args.output))

    print(json.dumps(session.store.to_dict(), indent=2))
