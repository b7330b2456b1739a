"""
Period header text and memos.
"""

from typing import List, Optional

from ..models import LEVEL_DEPTH, Memo
from ..periods import parent_of
from .base import EngineBase, serialized


HEADER_FIELDS = ("goal", "motto", "memo")


class HeaderActions(EngineBase):

    @serialized
    def update_period_header(self, field: str, value: str, period_id: Optional[str] = None) -> None:
        """
        Set the goal, motto or memo text of a period.

        Raises:
            ValueError: If ``field`` is not a header field
        """
        if field not in HEADER_FIELDS:
            raise ValueError(f"Unknown header field '{field}', expected one of {HEADER_FIELDS}")

        pid = self._resolve_period_id(period_id)
        period = self.state.ensure_period(pid)
        self._commit(
            "update_period_header",
            periods={**self.state.periods, pid: period.model_copy(update={field: value})},
        )

    @serialized
    def add_memo(self, text: str, period_id: Optional[str] = None) -> Memo:
        """Append a memo tagged with the period it was written at."""
        pid = self._resolve_period_id(period_id)
        period = self.state.ensure_period(pid)
        memo = Memo(id=self._new_id(), content=text, source_level=period.level, source_period_id=pid)
        self._commit(
            "add_memo",
            periods={
                **self.state.periods,
                pid: period.model_copy(update={"structured_memos": period.structured_memos + [memo]}),
            },
        )
        return memo

    @serialized
    def remove_memo(self, index: int, period_id: Optional[str] = None) -> bool:
        pid = self._resolve_period_id(period_id)
        period = self.state.ensure_period(pid)
        if not 0 <= index < len(period.structured_memos):
            return False

        memos = period.structured_memos[:index] + period.structured_memos[index + 1:]
        self._commit(
            "remove_memo",
            periods={**self.state.periods, pid: period.model_copy(update={"structured_memos": memos})},
        )
        return True

    def get_inherited_memos(self, period_id: Optional[str] = None) -> List[Memo]:
        """
        Collect the memos of a period and of all its ancestors.

        Legacy plain-text memos are converted unless a structured memo with the
        same text exists in that period. Coarser levels come first.

        Returns:
            Memos ordered from the 30-year horizon down
        """
        collected: List[Memo] = []
        current_id = self._resolve_period_id(period_id)
        visited = set()

        while current_id and current_id not in visited:
            visited.add(current_id)
            period = self.state.find_period(current_id)
            if period is not None:
                collected.extend(period.structured_memos)
                known = {memo.content for memo in period.structured_memos}
                for index, content in enumerate(period.memos):
                    if content in known:
                        continue
                    collected.append(Memo(
                        id=f"legacy-{current_id}-{index}",
                        content=content,
                        source_level=period.level,
                        source_period_id=current_id,
                    ))
            current_id = parent_of(current_id, self.state.base_year)

        # stable sort keeps the per-period order
        return sorted(collected, key=lambda memo: LEVEL_DEPTH[memo.source_level])
