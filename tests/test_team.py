"""Tests for the team directory."""

import pytest
import threading
from datetime import datetime, timezone

from lead_routing_engine.team import (
    Availability,
    MemberCapacity,
    MemberPerformance,
    TeamDirectory,
    WorkingHours,
    WorkingWindow,
    default_team_members,
)
from lead_routing_engine.routing import LeadRoutingEngine

from conftest import IN_HOURS, OFF_HOURS, make_member, score


class TestTeamMember:
    """Tests for derived member properties."""

    def test_utilization(self):
        member = make_member("a", capacity=MemberCapacity(current=3, maximum=12))
        assert member.utilization == 0.25
        assert member.has_capacity

    def test_zero_maximum_counts_as_full(self):
        member = make_member("a", capacity=MemberCapacity(current=0, maximum=0))
        assert member.utilization == 1.0
        assert not member.has_capacity

    def test_can_receive_leads(self):
        assert make_member("a").can_receive_leads
        assert not make_member("b", is_active=False).can_receive_leads
        assert not make_member(
            "c", capacity=MemberCapacity(current=1, maximum=5, availability=Availability.UNAVAILABLE)
        ).can_receive_leads
        assert not make_member("d", capacity=MemberCapacity(current=5, maximum=5)).can_receive_leads


class TestTeamDirectory:
    """Tests for TeamDirectory."""

    def setup_method(self):
        """Set up test fixtures."""
        self.directory = TeamDirectory(default_team_members(), now_provider=lambda: IN_HOURS)

    def test_default_roster(self):
        assert len(self.directory) == 5

    def test_available_members_order(self):
        """Available before busy, then by utilization."""
        ids = [m.id for m in self.directory.get_available_members()]
        assert ids == [
            "project-manager-1",       # 3/8 = 0.375
            "inside-sales-1",          # 6/15 = 0.40
            "technical-specialist-1",  # 5/12 = 0.42
            "senior-sales-1",          # 8/15 = 0.53
            "sales-rep-1",             # busy
        ]

    def test_available_members_sorted_by_utilization(self):
        members = self.directory.get_available_members()
        available = [m for m in members if m.capacity.availability == Availability.AVAILABLE]
        busy = [m for m in members if m.capacity.availability == Availability.BUSY]
        assert members == available + busy
        utilizations = [m.utilization for m in available]
        assert utilizations == sorted(utilizations)
        assert busy[0].id == "sales-rep-1"

    def test_conversion_rate_breaks_ties(self):
        directory = TeamDirectory([
            make_member("low", performance=MemberPerformance(conversion_rate=0.2)),
            make_member("high", performance=MemberPerformance(conversion_rate=0.5)),
        ])
        assert [m.id for m in directory.get_available_members()] == ["high", "low"]

    def test_unavailable_and_inactive_excluded(self):
        directory = TeamDirectory([
            make_member("ok"),
            make_member("off", is_active=False),
            make_member("away", capacity=MemberCapacity(availability=Availability.UNAVAILABLE)),
        ])
        assert [m.id for m in directory.get_available_members()] == ["ok"]

    def test_snapshot_is_a_copy(self):
        snapshot = self.directory.snapshot()
        snapshot[0].capacity.current = 99
        assert self.directory.get_member(snapshot[0].id).capacity.current != 99

    def test_update_capacity(self):
        assert self.directory.update_capacity("project-manager-1", current=7, availability="busy")
        member = self.directory.get_member("project-manager-1")
        assert member.capacity.current == 7
        assert member.capacity.maximum == 8
        assert member.capacity.availability == Availability.BUSY
        assert member.performance.active_leads == 7

    def test_update_capacity_allows_overload(self):
        """Over-capacity values are the caller's responsibility."""
        assert self.directory.update_capacity("project-manager-1", current=12)
        assert not self.directory.get_member("project-manager-1").has_capacity

    def test_update_unknown_member(self):
        assert not self.directory.update_capacity("nobody", current=1)
        assert not self.directory.update_performance("nobody", conversion_rate=0.1)

    def test_update_unknown_field(self):
        with pytest.raises(ValueError):
            self.directory.update_capacity("senior-sales-1", load=3)
        with pytest.raises(ValueError):
            self.directory.update_performance("senior-sales-1", rating=5)

    def test_update_performance(self):
        assert self.directory.update_performance("sales-rep-1", conversion_rate=0.5, average_response_time=20)
        member = self.directory.get_member("sales-rep-1")
        assert member.performance.conversion_rate == 0.5
        assert member.performance.average_response_time == 20
        assert member.performance.customer_satisfaction == 4.5

    def test_workload(self):
        workload = self.directory.get_workload()
        assert len(workload) == 5
        row = next(w for w in workload if w["memberId"] == "project-manager-1")
        assert row["name"] == "Khalid Al-Mansouri"
        assert row["utilization"] == pytest.approx(0.375)
        assert row["availability"] == "available"


class TestWorkingHours:
    """Tests for the working-hours check."""

    def setup_method(self):
        self.directory = TeamDirectory()
        self.member = make_member("riyadh")

    def test_inside_window(self):
        assert self.directory.is_in_working_hours(self.member, IN_HOURS)

    def test_day_off(self):
        assert not self.directory.is_in_working_hours(self.member, OFF_HOURS)

    def test_end_is_inclusive(self):
        # 14:00 UTC = 17:00 Riyadh
        at_end = datetime(2026, 10, 13, 14, 0, tzinfo=timezone.utc)
        after_end = datetime(2026, 10, 13, 14, 1, tzinfo=timezone.utc)
        assert self.directory.is_in_working_hours(self.member, at_end)
        assert not self.directory.is_in_working_hours(self.member, after_end)

    def test_before_start(self):
        # 04:59 UTC = 07:59 Riyadh
        early = datetime(2026, 10, 13, 4, 59, tzinfo=timezone.utc)
        assert not self.directory.is_in_working_hours(self.member, early)

    def test_weekday_taken_from_member_timezone(self):
        """Thursday late evening UTC is already Friday in Riyadh."""
        member = make_member(
            "night-shift",
            working_hours=WorkingHours(
                timezone="Asia/Riyadh",
                schedule={"thursday": WorkingWindow("00:00", "23:59"), "friday": None},
            ),
        )
        thursday_utc = datetime(2026, 10, 15, 22, 30, tzinfo=timezone.utc)
        assert not self.directory.is_in_working_hours(member, thursday_utc)

    def test_other_timezone(self, new_york_member):
        # Monday 14:00 UTC = 10:00 EDT
        monday = datetime(2026, 10, 12, 14, 0, tzinfo=timezone.utc)
        assert self.directory.is_in_working_hours(new_york_member, monday)
        # 22:00 UTC = 18:00 EDT
        evening = datetime(2026, 10, 12, 22, 0, tzinfo=timezone.utc)
        assert not self.directory.is_in_working_hours(new_york_member, evening)

    def test_unknown_timezone(self):
        member = make_member("lost", working_hours=WorkingHours(timezone="Mars/Olympus_Mons"))
        assert not self.directory.is_in_working_hours(member, IN_HOURS)

    def test_naive_datetime_treated_as_utc(self):
        assert self.directory.is_in_working_hours(self.member, datetime(2026, 10, 13, 7, 0))

    def test_uses_clock(self):
        directory = TeamDirectory(now_provider=lambda: OFF_HOURS)
        assert not directory.is_in_working_hours(self.member)


class TestConcurrentUpdates:
    """Capacity updates and routing passes running on several threads."""

    ROUNDS = 200

    def setup_method(self):
        self.engine = LeadRoutingEngine(now_provider=lambda: IN_HOURS)
        self.member_ids = [m.id for m in self.engine.directory.snapshot()]
        for member_id in self.member_ids:
            self.engine.update_team_member_capacity(member_id, current=1, maximum=2)

    def _run(self, targets):
        errors = []

        def guarded(target):
            def run():
                try:
                    target()
                except Exception as e:  # surfaced by the assertion below
                    errors.append(e)
            return run

        threads = [threading.Thread(target=guarded(t)) for t in targets]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        assert not any(thread.is_alive() for thread in threads)
        return errors

    def test_updates_are_not_lost_while_routing(self):
        """Every member ends at its last update; readers never see half an update."""
        seen_utilization = set()

        def updater(member_id):
            def run():
                for k in range(1, self.ROUNDS + 1):
                    # current and maximum move together, utilization stays 0.5
                    self.engine.update_team_member_capacity(member_id, current=k, maximum=2 * k)
            return run

        def router():
            lead = {"industry_sector": "oil_gas", "budget_range": "500k_1m"}
            for _ in range(self.ROUNDS):
                decision = self.engine.route_lead(lead, score(50))
                assert decision.assigned_to in self.member_ids
                for row in self.engine.get_team_member_workload():
                    seen_utilization.add(row["utilization"])

        errors = self._run([updater(m) for m in self.member_ids] + [router, router, router])

        assert errors == []
        assert seen_utilization == {0.5}
        for member_id in self.member_ids:
            member = self.engine.directory.get_member(member_id)
            assert member.capacity.current == self.ROUNDS
            assert member.capacity.maximum == 2 * self.ROUNDS
            assert member.performance.active_leads == self.ROUNDS

    def test_patches_to_one_member_are_all_kept(self):
        member_id = "senior-sales-1"

        def patch(**values):
            def run():
                for _ in range(self.ROUNDS):
                    self.engine.update_team_member_performance(member_id, **values)
            return run

        def mark_busy():
            for _ in range(self.ROUNDS):
                self.engine.update_team_member_capacity(member_id, availability="busy")

        errors = self._run([
            patch(conversion_rate=0.6),
            patch(average_response_time=15),
            patch(customer_satisfaction=4.9),
            mark_busy,
        ])

        assert errors == []
        member = self.engine.directory.get_member(member_id)
        assert member.performance.conversion_rate == 0.6
        assert member.performance.average_response_time == 15
        assert member.performance.customer_satisfaction == 4.9
        assert member.capacity.availability == Availability.BUSY
