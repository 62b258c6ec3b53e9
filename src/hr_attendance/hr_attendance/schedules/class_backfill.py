from __future__ import annotations

import logging
from typing import List

from ..common.datetime_utils import Clock
from ..common.manila_time import manila_now, manila_now_minutes
from ..core.constants import WEEKDAY_NAMES
from ..core.exceptions import StoreError
from ..exemptions.index import ExemptionIndex
from ..exemptions.repository import ExemptionRepository
from ..holidays.index import HolidayIndex
from ..holidays.repository import HolidayRepository
from .model import NewClassAbsenceRow
from .repository import ScheduleRepository
from .tap_window import minutes_of

logger = logging.getLogger(__name__)


class ClassBackfillJob:
    """Mark users absent for today's classes that ended without any tap."""

    def __init__(
        self,
        schedules: ScheduleRepository,
        holidays: HolidayRepository,
        exemptions: ExemptionRepository,
        clock: Clock,
    ):
        self._schedules = schedules
        self._holidays = holidays
        self._exemptions = exemptions
        self._clock = clock

    def run(self) -> List[NewClassAbsenceRow]:
        now = manila_now(self._clock)
        today = now.date()
        weekday = WEEKDAY_NAMES[today.weekday()]
        now_minutes = manila_now_minutes(self._clock)

        if HolidayIndex.build(self._holidays, [today]).contains(today):
            logger.info("Today (%s) is a holiday; no class absences", today)
            return []

        try:
            todays = self._schedules.list_with_users(day_of_week=weekday)
            taken = self._schedules.list_class_attendance(att_date=today)
        except StoreError:
            logger.exception("Cannot load %s schedules for the class absence check", weekday)
            return []

        ended = [s for s in todays if now_minutes > minutes_of(s.end_time)]
        logger.info("Found %d completed schedule(s) out of %d for %s", len(ended), len(todays), weekday)
        if not ended:
            return []

        exemptions = ExemptionIndex.build(self._exemptions, [s.user_id for s in ended], [today])
        seen = {(r.user_id, r.schedule_id) for r in taken}
        inserted: List[NewClassAbsenceRow] = []

        for schedule in ended:
            if (schedule.user_id, schedule.schedule_id) in seen:
                continue
            if exemptions.is_exempted(schedule.user_id, today):
                logger.info("Skipping schedule %s for user %s: exempted", schedule.schedule_id, schedule.user_id)
                continue

            row = NewClassAbsenceRow(
                user_id=schedule.user_id,
                schedule_id=schedule.schedule_id,
                att_date=today,
                notes=f"Automatically marked absent - class ended at {schedule.end_time.strftime('%H:%M:%S')} without attendance",
            )
            try:
                self._schedules.insert_class_absence(row)
            except StoreError:
                logger.exception("Failed to create class absence for schedule %s", schedule.schedule_id)
                continue

            seen.add((schedule.user_id, schedule.schedule_id))
            inserted.append(row)
            logger.info(
                "Marked %s absent for %s",
                schedule.user_name or f"User {schedule.user_id}",
                schedule.subject or "class",
            )

        return inserted
