from gettext import gettext as _

COMMAND_DESCRIPTION = _("Show ranked travel options for distances in km")


def command(subparser):
    subparser.add_argument("distances", type=float, nargs="+")
    subparser.add_argument(
        "--json", dest="as_json", action="store_true", help=_("Print JSON")
    )

    def handle(args):
        import json

        from tripboard.core.tools.transit_options import (
            MODE_LABELS,
            format_duration,
            generate_transit_options,
        )

        result = {}
        for distance in args.distances:
            options = generate_transit_options(distance)
            if args.as_json:
                result[str(distance)] = [o.to_dict() for o in options]
                continue
            print(_("{distance} km:").format(distance=distance))
            if not options:
                print("  " + _("no options"))
            for option in options:
                print(
                    "  {mode:<15} {duration:>8}  {cost:>9.2f}".format(
                        mode=MODE_LABELS[option.mode],
                        duration=format_duration(option.duration),
                        cost=option.cost,
                    )
                )
        if args.as_json:
            print(json.dumps(result, indent=2))

    return handle
