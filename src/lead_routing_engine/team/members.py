"""Sales team member records."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
from enum import Enum


class Availability(Enum):
    """Member availability for new leads."""
    AVAILABLE = "available"
    BUSY = "busy"
    UNAVAILABLE = "unavailable"


@dataclass
class MemberCapacity:
    """Live lead load of a member."""
    current: int = 0
    maximum: int = 10
    availability: Availability = Availability.AVAILABLE


@dataclass
class MemberPerformance:
    """Historical performance of a member."""
    conversion_rate: float = 0.0  # 0-1
    average_response_time: float = 60  # minutes
    customer_satisfaction: float = 5.0  # 1-5
    active_leads: int = 0


@dataclass
class WorkingWindow:
    """Working window for a single day, "HH:MM" 24-hour strings."""
    start: str
    end: str


@dataclass
class WorkingHours:
    """Weekly working schedule in the member's own timezone."""
    timezone: str = "Asia/Riyadh"
    # weekday name -> window, None (or missing) means day off
    schedule: Dict[str, Optional[WorkingWindow]] = field(default_factory=dict)

    def window_for(self, weekday: str) -> Optional[WorkingWindow]:
        return self.schedule.get(weekday.lower())


@dataclass
class TeamMember:
    """A sales or technical staff member who can receive leads."""
    id: str
    name: str
    email: str
    role: str
    expertise: List[str] = field(default_factory=list)
    industries: List[str] = field(default_factory=list)
    languages: List[str] = field(default_factory=list)
    capacity: MemberCapacity = field(default_factory=MemberCapacity)
    performance: MemberPerformance = field(default_factory=MemberPerformance)
    working_hours: WorkingHours = field(default_factory=WorkingHours)
    is_active: bool = True

    @property
    def utilization(self) -> float:
        """Share of capacity in use; a member without capacity counts as full."""
        if self.capacity.maximum <= 0:
            return 1.0
        return self.capacity.current / self.capacity.maximum

    @property
    def has_capacity(self) -> bool:
        return self.capacity.current < self.capacity.maximum

    @property
    def can_receive_leads(self) -> bool:
        if not self.is_active:
            return False
        if self.capacity.availability == Availability.UNAVAILABLE:
            return False
        return self.has_capacity
