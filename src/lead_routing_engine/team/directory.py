"""Capacity-aware team directory."""

import copy
import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .members import Availability, TeamMember

logger = logging.getLogger(__name__)

CAPACITY_FIELDS = ("current", "maximum", "availability")
PERFORMANCE_FIELDS = ("conversion_rate", "average_response_time", "customer_satisfaction", "active_leads")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def availability_sort_key(member: TeamMember):
    """Available before busy, then lower utilization, then higher conversion."""
    return (
        0 if member.capacity.availability == Availability.AVAILABLE else 1,
        member.utilization,
        -member.performance.conversion_rate,
    )


class TeamDirectory:
    """Roster of team members with live capacity and performance.

    The directory owns the only mutable state of the routing engine. Every
    read and write goes through a single lock so capacity updates arriving
    from several request threads are never lost, and routing passes work on
    a consistent snapshot.
    """

    def __init__(
        self,
        members: Optional[Iterable[TeamMember]] = None,
        now_provider: Optional[Callable[[], datetime]] = None
    ):
        self._lock = threading.RLock()
        self._members: Dict[str, TeamMember] = {}
        self.now_provider = now_provider or utc_now

        for member in members or []:
            self._members[member.id] = member

    def __len__(self) -> int:
        with self._lock:
            return len(self._members)

    def get_member(self, member_id: str) -> Optional[TeamMember]:
        """Get a copy of a member by ID."""
        with self._lock:
            member = self._members.get(member_id)
            return copy.deepcopy(member) if member else None

    def snapshot(self) -> List[TeamMember]:
        """Point-in-time copy of the roster in insertion order."""
        with self._lock:
            return copy.deepcopy(list(self._members.values()))

    def get_available_members(self, members: Optional[List[TeamMember]] = None) -> List[TeamMember]:
        """Active members not marked unavailable, best candidates first.

        ``members`` lets a routing pass sort its own snapshot; by default a
        fresh snapshot is taken.
        """
        if members is None:
            members = self.snapshot()
        candidates = [
            m for m in members
            if m.is_active and m.capacity.availability != Availability.UNAVAILABLE
        ]
        return sorted(candidates, key=availability_sort_key)

    def is_in_working_hours(self, member: TeamMember, now: Optional[datetime] = None) -> bool:
        """Check if the member's local clock is inside today's working window.

        Times are compared as "HH:MM" strings, so schedules must use
        zero-padded 24-hour times. Windows crossing midnight are not
        supported.
        """
        now = now or self.now_provider()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)

        try:
            local = now.astimezone(ZoneInfo(member.working_hours.timezone))
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(
                f"Unknown timezone {member.working_hours.timezone!r} for {member.id}, "
                f"treating as outside working hours"
            )
            return False

        window = member.working_hours.window_for(local.strftime("%A").lower())
        if not window:
            return False

        current_time = local.strftime("%H:%M")
        return window.start <= current_time <= window.end

    def update_capacity(self, member_id: str, **patch) -> bool:
        """Merge a partial capacity update into a member.

        Does not enforce ``current <= maximum``; callers own that invariant.
        """
        _check_fields(patch, CAPACITY_FIELDS, "capacity")
        with self._lock:
            member = self._members.get(member_id)
            if not member:
                logger.warning(f"Capacity update for unknown member {member_id}")
                return False

            for key, value in patch.items():
                if key == "availability":
                    value = Availability(value)
                setattr(member.capacity, key, value)
            if "current" in patch:
                member.performance.active_leads = member.capacity.current

            logger.debug(f"Capacity of {member_id} updated: {patch}")
            return True

    def update_performance(self, member_id: str, **patch) -> bool:
        """Merge a partial performance update into a member."""
        _check_fields(patch, PERFORMANCE_FIELDS, "performance")
        with self._lock:
            member = self._members.get(member_id)
            if not member:
                logger.warning(f"Performance update for unknown member {member_id}")
                return False

            for key, value in patch.items():
                setattr(member.performance, key, value)

            logger.debug(f"Performance of {member_id} updated: {patch}")
            return True

    def get_workload(self) -> List[Dict]:
        """Utilization snapshot for dashboards."""
        return [
            {
                "memberId": m.id,
                "name": m.name,
                "utilization": m.utilization,
                "availability": m.capacity.availability.value,
            }
            for m in self.snapshot()
        ]


def _check_fields(patch: Dict, allowed: Iterable[str], section: str):
    unknown = sorted(set(patch) - set(allowed))
    if unknown:
        raise ValueError(f"Unknown {section} field(s): {', '.join(unknown)}")
