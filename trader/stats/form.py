"""Rolling points-per-game from a results list (most recent match first)."""

from dataclasses import dataclass
from typing import Optional

from trader.parsing.results import team_matches

FORM_WINDOWS = (4, 8, 12)


@dataclass(frozen=True)
class RollingForm:
    ppg_l4: float = 0.0
    ppg_l8: float = 0.0
    ppg_l12: float = 0.0
    games_found: int = 0


def _ppg(points: list[int]) -> float:
    return sum(points) / len(points) if points else 0.0


def rolling_form(
    results_block: Optional[str],
    team: Optional[str],
    venue: Optional[str] = None,
) -> RollingForm:
    """
    PPG over the last 4, 8 and 12 matches of `team`.

    A window longer than the matches available averages what there is;
    no matches -> all zeros.
    """
    points = [m.points for m in team_matches(results_block, team, venue)]
    l4, l8, l12 = (_ppg(points[:size]) for size in FORM_WINDOWS)
    return RollingForm(ppg_l4=l4, ppg_l8=l8, ppg_l12=l12, games_found=len(points))
