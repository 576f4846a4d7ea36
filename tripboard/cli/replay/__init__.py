from gettext import gettext as _
from pathlib import Path

COMMAND_DESCRIPTION = _("Replay a recorded pointer script and save the result")


def command(subparser):
    subparser.add_argument("script", type=Path, help=_("JSON list of actions"))
    subparser.add_argument("output", type=Path, help=_("Where to write the PNG"))
    subparser.add_argument("--width", type=int, default=800)
    subparser.add_argument("--height", type=int, default=600)
    subparser.add_argument("--scale", type=float, default=1.0)

    def handle(args):
        from .replay import handle as replay_handle

        replay_handle(args)

    return handle
