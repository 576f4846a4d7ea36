"""
Example: sketch a small trip without a GUI.

Drops three pins, connects two of them, groups them and saves the result.

Usage:
    python examples/trip_example.py trip.png
"""

import json
import sys

import cv2

from tripboard.core import CanvasSession
from tripboard.core.tools import ToolName, find_control
from tripboard.interfaces import GUICanvasAdapter


def main(output: str):
    session = CanvasSession()
    session.mount(640, 360)
    adapter = GUICanvasAdapter(session)

    session.set_tool(ToolName.LOCATION_PIN)
    for label, (x, y) in [
        ("Paris, France", (120, 200)),
        ("Rome, Italy", (420, 260)),
        ("Vienna, Austria", (460, 110)),
    ]:
        find_control(session.toolbar, "label").trigger(label)
        session.pointer_down(x, y)
        session.pointer_up(x, y)

    session.set_tool(ToolName.TRANSIT)
    session.pointer_down(120, 200)
    session.pointer_move(420, 260)
    # let the loader finish so the options are computed
    session.tick(0.5)
    session.pointer_up(420, 260)

    session.set_tool(ToolName.GROUP)
    session.pointer_down(420, 260)
    session.pointer_down(460, 110)
    find_control(session.toolbar, "label").trigger("Italy and Austria")
    find_control(session.toolbar, "create_group").trigger()

    vis = adapter.get_visualization()
    cv2.imwrite(output, cv2.cvtColor(vis, cv2.COLOR_RGB2BGR))
    print(json.dumps(session.store.to_dict(), indent=2))


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else "trip.png")
