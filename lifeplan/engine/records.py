"""
Journal records attached to periods.
"""

from datetime import datetime
from typing import List, Optional

from ..models import DailyRecord, Mood
from .base import EngineBase, coerce_enum, serialized


class RecordActions(EngineBase):

    def get_record(self, period_id: str) -> Optional[DailyRecord]:
        return self.state.records.get(period_id)

    def _write_record(self, operation: str, period_id: str, **changes) -> DailyRecord:
        now = datetime.now()
        existing = self.state.records.get(period_id)
        if existing is None:
            record = DailyRecord(id=self._new_id(), period_id=period_id, created_at=now, updated_at=now)
        else:
            record = existing
        record = record.model_copy(update={**changes, "updated_at": now})
        self._commit(operation, records={**self.state.records, period_id: record})
        return record

    @serialized
    def update_record_content(self, period_id: str, content: str) -> DailyRecord:
        return self._write_record("update_record_content", period_id, content=content)

    @serialized
    def update_record_mood(self, period_id: str, mood: Optional[Mood]) -> Optional[DailyRecord]:
        """Set or clear the mood; an unknown mood leaves the record untouched and returns None."""
        if mood:
            mood = coerce_enum(Mood, mood, "update_record_mood")
            if mood is None:
                return None
        return self._write_record("update_record_mood", period_id, mood=mood or None)

    @serialized
    def add_highlight(self, period_id: str, text: str) -> DailyRecord:
        highlights = self._current_list(period_id, "highlights")
        return self._write_record("add_highlight", period_id, highlights=highlights + [text])

    @serialized
    def add_gratitude(self, period_id: str, text: str) -> DailyRecord:
        gratitude = self._current_list(period_id, "gratitude")
        return self._write_record("add_gratitude", period_id, gratitude=gratitude + [text])

    @serialized
    def remove_highlight(self, period_id: str, index: int) -> bool:
        return self._remove_entry("remove_highlight", period_id, "highlights", index)

    @serialized
    def remove_gratitude(self, period_id: str, index: int) -> bool:
        return self._remove_entry("remove_gratitude", period_id, "gratitude", index)

    def _current_list(self, period_id: str, field: str) -> List[str]:
        record = self.state.records.get(period_id)
        return list(getattr(record, field)) if record is not None else []

    def _remove_entry(self, operation: str, period_id: str, field: str, index: int) -> bool:
        record = self.state.records.get(period_id)
        if record is None:
            return False
        entries = list(getattr(record, field))
        if not 0 <= index < len(entries):
            return False
        del entries[index]
        self._write_record(operation, period_id, **{field: entries})
        return True
