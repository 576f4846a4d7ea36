"""
Transit-option generation.

A deterministic function of the line distance (km): which travel modes are
plausible, how long they take and what they cost, cheapest first.
"""

from typing import List

from ..canvas.state import TransitOption

DRIVE = "drive"
BUS = "bus"
TRANSIT = "transit"
FLIGHT = "flight"

MODE_LABELS = {
    DRIVE: "Drive",
    BUS: "Bus",
    TRANSIT: "Public transit",
    FLIGHT: "Flight",
}

# speeds in km/h, costs per km
DRIVE_SPEED = 60.0
DRIVE_COST_PER_KM = 0.15
BUS_SPEED = 40.0
BUS_COST_PER_KM = 0.05
BUS_MIN_COST = 2.0
TRANSIT_SPEED = 80.0
TRANSIT_COST_PER_KM = 0.08
TRANSIT_MIN_COST = 3.0
FLIGHT_OVERHEAD_HOURS = 2.0
FLIGHT_SPEED = 800.0
FLIGHT_BASE_COST = 50.0
FLIGHT_COST_PER_KM = 0.20


def generate_transit_options(distance: float) -> List[TransitOption]:
    """
    Build the ranked list of travel options for a distance.

    Args:
        distance: Line length in km

    Returns:
        Options sorted by ascending cost; ties keep generation order
    """
    options = []
    if distance < 1000:
        options.append(
            TransitOption(
                DRIVE,
                distance / DRIVE_SPEED,
                round(distance * DRIVE_COST_PER_KM, 2),
            )
        )
    if distance < 500:
        options.append(
            TransitOption(
                BUS,
                distance / BUS_SPEED,
                round(max(BUS_MIN_COST, distance * BUS_COST_PER_KM), 2),
            )
        )
    if 20 <= distance < 800:
        options.append(
            TransitOption(
                TRANSIT,
                distance / TRANSIT_SPEED,
                round(max(TRANSIT_MIN_COST, distance * TRANSIT_COST_PER_KM), 2),
            )
        )
    if distance >= 300:
        options.append(
            TransitOption(
                FLIGHT,
                FLIGHT_OVERHEAD_HOURS + distance / FLIGHT_SPEED,
                round(FLIGHT_BASE_COST + distance * FLIGHT_COST_PER_KM, 2),
            )
        )
    # sorted() is stable, so equal costs keep generation order
    return sorted(options, key=lambda option: option.cost)


def format_duration(hours: float) -> str:
    total_minutes = int(round(hours * 60))
    h, m = divmod(total_minutes, 60)
    if h == 0:
        return f"{m}m"
    return f"{h}h {m}m"


def describe_option(option: TransitOption) -> str:
    return "{mode}  {duration}  ${cost:.2f}".format(
        mode=MODE_LABELS.get(option.mode, option.mode),
        duration=format_duration(option.duration),
        cost=option.cost,
    )
