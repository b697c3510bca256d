"""Week-by-week navigation over a schedule that has gaps."""

from __future__ import annotations

from kbbco_games import WeeklySchedule

FIRST_WEEK = 1
LAST_WEEK = 52


class WeekNavigator:
    """Tracks which week the widget shows.

    ``current_week`` is fixed when the widget loads. ``display_week`` moves with
    next/prev, wrapping between 52 and 1, and jumps over weeks without games.
    A week-53 bucket is reached by skipping forward from 52.
    """

    def __init__(self, current_week: int, schedule: WeeklySchedule | None = None) -> None:
        self.current_week = current_week
        self.display_week = current_week
        self.schedule: WeeklySchedule = schedule or {}

    def has_games(self, week: int) -> bool:
        return bool(self.schedule.get(week))

    def weeks_with_games(self) -> list[int]:
        return sorted(week for week, games in self.schedule.items() if games)

    def next(self) -> int:
        self.display_week += 1
        if self.display_week > LAST_WEEK:
            self.display_week = FIRST_WEEK
        if not self.has_games(self.display_week):
            self._skip_forward()
        return self.display_week

    def prev(self) -> int:
        self.display_week -= 1
        if self.display_week < FIRST_WEEK:
            self.display_week = LAST_WEEK
        if not self.has_games(self.display_week):
            self._skip_backward()
        return self.display_week

    def show(self, week: int) -> int:
        """Jump straight to ``week``.

        A week outside 1-52 is kept when it holds games (ISO years with a
        week 53); otherwise it wraps into the navigable range.
        """
        if not self.has_games(week):
            if week > LAST_WEEK:
                week = FIRST_WEEK
            elif week < FIRST_WEEK:
                week = LAST_WEEK
        self.display_week = week
        return week

    def resolve_initial(self) -> int:
        """On first render an empty week moves forward only, never back."""
        if not self.has_games(self.display_week):
            self._skip_forward()
        return self.display_week

    def _skip_forward(self) -> None:
        weeks = self.weeks_with_games()
        later = [w for w in weeks if w > self.display_week]
        if later:
            self.display_week = later[0]
        elif weeks:
            self.display_week = weeks[0]

    def _skip_backward(self) -> None:
        weeks = self.weeks_with_games()
        earlier = [w for w in weeks if w < self.display_week]
        if earlier:
            self.display_week = earlier[-1]
        elif weeks:
            self.display_week = weeks[-1]
