from harness.scenarios import booking, manage, shift, tracking
from harness.services.scenario_runner import Scenario

# Run order matters across groups: tracking consumes the booking group's handoff.
SCENARIO_GROUPS: dict[str, list[Scenario]] = {
    booking.GROUP: booking.SCENARIOS,
    tracking.GROUP: tracking.SCENARIOS,
    shift.GROUP: shift.SCENARIOS,
    manage.GROUP: manage.SCENARIOS,
}


def list_groups() -> list[str]:
    return list(SCENARIO_GROUPS)


def resolve(selectors: list[str]) -> list[Scenario]:
    """
    Turn group names or group/scenario names into scenarios, keeping the order given.

    Raises:
        ValueError: A selector names no known group or scenario.
    """
    resolved: list[Scenario] = []
    for selector in selectors:
        group, _, name = selector.partition("/")
        if group not in SCENARIO_GROUPS:
            raise ValueError(f"Unknown scenario group {group!r}; choose from {', '.join(SCENARIO_GROUPS)}")
        scenarios = SCENARIO_GROUPS[group]
        if name:
            scenarios = [s for s in scenarios if s.name == name]
            if not scenarios:
                available = ", ".join(s.name for s in SCENARIO_GROUPS[group])
                raise ValueError(f"Unknown scenario {selector!r}; {group} has: {available}")
        resolved.extend(s for s in scenarios if s not in resolved)
    return resolved
