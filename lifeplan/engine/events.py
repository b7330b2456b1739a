"""
Annual events: dates that recur every year.
"""

import calendar
import logging
from datetime import date, datetime
from typing import List, Optional, Tuple

from pydantic import ValidationError

from ..models import AnnualEvent, AnnualEventType
from .base import EngineBase, serialized


def next_occurrence(event: AnnualEvent, today: date) -> date:
    """
    Next date (today included) on which an annual event falls.

    February 29th falls on February 28th in non-leap years.
    """
    def on(year: int) -> date:
        day = min(event.day, calendar.monthrange(year, event.month)[1])
        return date(year, event.month, day)

    candidate = on(today.year)
    if candidate < today:
        candidate = on(today.year + 1)
    return candidate


class EventActions(EngineBase):

    @serialized
    def add_annual_event(
        self,
        title: str,
        month: int,
        day: int,
        type: AnnualEventType = AnnualEventType.OTHER,
        **details,
    ) -> Optional[AnnualEvent]:
        """Add a yearly event; returns None when the date or a field is invalid."""
        try:
            event = AnnualEvent(
                id=self._new_id(),
                title=title,
                month=month,
                day=day,
                type=type,
                created_at=datetime.now(),
                **details,
            )
        except ValidationError as e:
            logging.warning(f"add_annual_event: invalid event '{title}': {e}")
            return None
        self._commit("add_annual_event", annual_events=self.state.annual_events + [event])
        return event

    @serialized
    def update_annual_event(self, event_id: str, **updates) -> Optional[AnnualEvent]:
        """
        Update fields of an event; ``id`` and ``created_at`` cannot change.

        Returns:
            The updated event, or None when the id is unknown or the update
            is invalid
        """
        updates.pop("id", None)
        updates.pop("created_at", None)

        updated = None
        events = []
        for event in self.state.annual_events:
            if event.id == event_id:
                # validate through the model so month/day bounds still hold
                try:
                    event = AnnualEvent(**{**event.model_dump(), **updates})
                except ValidationError as e:
                    logging.warning(f"update_annual_event: invalid update of {event_id}: {e}")
                    return None
                updated = event
            events.append(event)

        if updated is not None:
            self._commit("update_annual_event", annual_events=events)
        return updated

    @serialized
    def delete_annual_event(self, event_id: str) -> bool:
        events = [event for event in self.state.annual_events if event.id != event_id]
        if len(events) == len(self.state.annual_events):
            return False
        self._commit("delete_annual_event", annual_events=events)
        return True

    def get_upcoming_events(
        self, days: int = 30, today: Optional[date] = None
    ) -> List[Tuple[AnnualEvent, date, int]]:
        """
        Events occurring within the next ``days`` days.

        Returns:
            (event, next date, days until) tuples, soonest first
        """
        today = today or date.today()
        upcoming = []
        for event in self.state.annual_events:
            next_date = next_occurrence(event, today)
            days_until = (next_date - today).days
            if days_until <= days:
                upcoming.append((event, next_date, days_until))
        return sorted(upcoming, key=lambda entry: entry[2])
