from __future__ import annotations

import logging
from typing import List, MutableSequence, Optional, Sequence, Set

from ..common.datetime_utils import Clock
from ..common.manila_time import manila_now_minutes, manila_today
from ..core.constants import AUTO_ABSENT_NOTE, BACKFILL_CUTOFF_MINUTES
from ..core.enums import TRACKED_ROLES, Role
from ..core.exceptions import StoreError
from ..exemptions.index import ExemptionIndex
from ..exemptions.repository import ExemptionRepository
from ..holidays.index import HolidayIndex
from ..holidays.repository import HolidayRepository
from ..users.repository import UserRepository
from .model import AttendanceRecord, NewAbsenceRow, SyntheticKey
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class BackfillJob:
    """Insert one full-day Absent row for tracked users with no taps today.

    Safe to run on every dashboard refresh: a user that already has any
    record for today is skipped, and every inserted row is appended to the
    caller's collection so a second pass over the same collection is a no-op.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        holidays: HolidayRepository,
        exemptions: ExemptionRepository,
        clock: Clock,
        *,
        roles: Sequence[Role] = TRACKED_ROLES,
        cutoff_minutes: int = BACKFILL_CUTOFF_MINUTES,
    ):
        self._attendance = attendance
        self._users = users
        self._holidays = holidays
        self._exemptions = exemptions
        self._clock = clock
        self._roles = tuple(roles)
        self._cutoff_minutes = int(cutoff_minutes)

    def run(
        self,
        existing_records: MutableSequence[AttendanceRecord],
        exempted_user_ids: Optional[Set[int]] = None,
        *,
        holidays: Optional[HolidayIndex] = None,
    ) -> List[AttendanceRecord]:
        """Backfill today's absences.

        ``holidays`` may be an index the caller already built, as long as it
        covers today; otherwise today's holiday is looked up here.
        """

        today = manila_today(self._clock)
        now_minutes = manila_now_minutes(self._clock)

        if holidays is None:
            holidays = HolidayIndex.build(self._holidays, [today])
        if holidays.contains(today):
            logger.info("Today (%s) is a holiday: %r. Skipping automatic absences.", today, holidays.title(today))
            return []

        if now_minutes < self._cutoff_minutes:
            logger.debug("Manila time %02d:%02d is before the cutoff; nothing to insert", *divmod(now_minutes, 60))
            return []

        try:
            roster = self._users.list_by_roles([r.value for r in self._roles])
        except StoreError:
            logger.exception("Cannot load the roster for the absence check")
            return []

        logger.info("Checking %d user(s) for %s", len(roster), today)

        if exempted_user_ids is None:
            exempted_user_ids = ExemptionIndex.build(
                self._exemptions, [u.user_id for u in roster], [today]
            ).exempted_user_ids(today)

        with_records = {r.user_id for r in existing_records if r.att_date == today}
        inserted: List[AttendanceRecord] = []

        for user in roster:
            if user.user_id in exempted_user_ids:
                logger.info("Skipping %s (%s): exempted today", user.name, user.user_id)
                continue
            if user.user_id in with_records:
                continue

            try:
                self._attendance.insert_absence(NewAbsenceRow(user_id=user.user_id, att_date=today))
            except StoreError:
                logger.exception("Failed to create full-day absence for user %s", user.user_id)
                continue

            logger.info("Created full-day absence for %s (%s)", user.name, user.user_id)
            record = AttendanceRecord(
                identity=SyntheticKey(user_id=user.user_id, att_date=today),
                user_id=user.user_id,
                att_date=today,
                explicit_present=False,
                notes=AUTO_ABSENT_NOTE,
                user_name=user.name,
                role=user.role,
            )
            existing_records.append(record)
            with_records.add(user.user_id)
            inserted.append(record)

        return inserted
