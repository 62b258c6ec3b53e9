from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time

from hr_attendance.core.enums import ExemptionType
from hr_attendance.core.exceptions import StoreError
from hr_attendance.exemptions.index import ExemptionIndex
from hr_attendance.exemptions.model import NOT_EXEMPTED, Exemption

DAY = date(2024, 3, 1)
NEXT_DAY = date(2024, 3, 2)


@dataclass
class InMemoryExemptions:
    exemptions: list[Exemption] = field(default_factory=list)
    fail: bool = False
    calls: list = field(default_factory=list)

    def list_for(self, *, user_ids, dates):
        self.calls.append((set(user_ids), set(dates)))
        if self.fail:
            raise StoreError("timeout")
        return [e for e in self.exemptions if e.user_id in set(user_ids) and e.exemption_date in set(dates)]


EXEMPTIONS = [
    Exemption(exemption_id=1, user_id=1, exemption_date=DAY, request_type="Leave", reason="Sick leave"),
    Exemption(
        exemption_id=2,
        user_id=2,
        exemption_date=DAY,
        request_type="Official Business",
        start_time=time(13, 0),
        end_time=time(15, 30),
        reason="Seminar",
    ),
    Exemption(exemption_id=3, user_id=3, exemption_date=NEXT_DAY, request_type="Official Business"),
]


def test_single_batched_query_for_every_user_and_date():
    repo = InMemoryExemptions(EXEMPTIONS)

    ExemptionIndex.build(repo, [1, 2, 3, 3, None], [DAY, NEXT_DAY])

    assert repo.calls == [({1, 2, 3}, {DAY, NEXT_DAY})]


def test_lookup_per_user_and_date():
    index = ExemptionIndex.build(InMemoryExemptions(EXEMPTIONS), [1, 2, 3], [DAY, NEXT_DAY])

    leave = index.lookup(1, DAY)
    assert leave.is_exempted
    assert leave.type == ExemptionType.FULL_DAY
    assert leave.reason == "Sick leave"

    partial = index.lookup(2, DAY)
    assert partial.type == ExemptionType.TIME_SPECIFIC
    assert partial.start_time == time(13, 0)

    # No explicit window means the whole day.
    assert index.lookup(3, NEXT_DAY).type == ExemptionType.FULL_DAY

    assert index.lookup(1, NEXT_DAY) is NOT_EXEMPTED
    assert not index.is_exempted(3, DAY)
    assert index.exempted_user_ids(DAY) == {1, 2}
    assert len(index) == 3


def test_lookup_to_dict_uses_dashboard_keys():
    index = ExemptionIndex.build(InMemoryExemptions(EXEMPTIONS), [2], [DAY])

    assert index.lookup(2, DAY).to_dict() == {
        "isExempted": True,
        "type": "time_specific",
        "reason": "Seminar",
        "requestType": "Official Business",
        "startTime": "13:00:00",
        "endTime": "15:30:00",
    }
    assert NOT_EXEMPTED.to_dict() == {"isExempted": False}


def test_empty_users_or_dates_skip_the_store():
    repo = InMemoryExemptions(EXEMPTIONS)

    assert len(ExemptionIndex.build(repo, [], [DAY])) == 0
    assert len(ExemptionIndex.build(repo, [1], [])) == 0
    assert repo.calls == []


def test_store_failure_means_nobody_is_exempted(caplog):
    index = ExemptionIndex.build(InMemoryExemptions(EXEMPTIONS, fail=True), [1], [DAY])

    assert not index.is_exempted(1, DAY)
    assert "Exemption lookup failed" in caplog.text
