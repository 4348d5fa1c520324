from dataclasses import dataclass

from copilot_cost_monitor.models import SeverityTier


@dataclass(frozen=True, slots=True)
class ConfigMissing:
    reason: "str"
    # "credential" or "identity", whichever must be fixed first
    missing: "str"


@dataclass(frozen=True, slots=True)
class Loading:
    pass


@dataclass(frozen=True, slots=True)
class Presented:
    total: "float"
    tier: "SeverityTier"


@dataclass(frozen=True, slots=True)
class Failed:
    message: "str"


View = ConfigMissing | Loading | Presented | Failed


def format_cost(total: "float") -> "str":
    """
    renders a total as US dollars, e.g. 1234.5 -> "$1,234.50".
    """
    sign = "-" if total < 0 else ""
    return f"{sign}${abs(total):,.2f}"
