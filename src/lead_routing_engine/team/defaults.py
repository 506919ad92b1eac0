"""Built-in sales roster used when no roster is supplied."""

from typing import List

from .members import (
    Availability,
    MemberCapacity,
    MemberPerformance,
    TeamMember,
    WorkingHours,
    WorkingWindow,
)


def riyadh_work_week(start: str = "08:00", end: str = "17:00") -> WorkingHours:
    """Sunday to Thursday schedule, Friday and Saturday off."""
    return WorkingHours(
        timezone="Asia/Riyadh",
        schedule={
            "sunday": WorkingWindow(start, end),
            "monday": WorkingWindow(start, end),
            "tuesday": WorkingWindow(start, end),
            "wednesday": WorkingWindow(start, end),
            "thursday": WorkingWindow(start, end),
            "friday": None,
            "saturday": None,
        },
    )


def default_team_members() -> List[TeamMember]:
    """Fresh copy of the default roster."""
    return [
        TeamMember(
            id="senior-sales-1",
            name="Ahmed Al-Rashid",
            email="ahmed@almazahir.com",
            role="Senior Sales Manager",
            expertise=["industrial_equipment", "safety_systems", "project_management"],
            industries=["oil_gas", "construction", "manufacturing"],
            languages=["arabic", "english"],
            capacity=MemberCapacity(current=8, maximum=15, availability=Availability.AVAILABLE),
            performance=MemberPerformance(
                conversion_rate=0.35, average_response_time=45, customer_satisfaction=4.7, active_leads=8),
            working_hours=riyadh_work_week(),
        ),
        TeamMember(
            id="technical-specialist-1",
            name="Omar Hassan",
            email="omar@almazahir.com",
            role="Technical Specialist",
            expertise=["safety_equipment", "fire_safety", "technical_consulting"],
            industries=["oil_gas", "manufacturing", "utilities"],
            languages=["arabic", "english"],
            capacity=MemberCapacity(current=5, maximum=12, availability=Availability.AVAILABLE),
            performance=MemberPerformance(
                conversion_rate=0.42, average_response_time=30, customer_satisfaction=4.8, active_leads=5),
            working_hours=riyadh_work_week(),
        ),
        TeamMember(
            id="sales-rep-1",
            name="Fatima Al-Zahra",
            email="fatima@almazahir.com",
            role="Sales Representative",
            expertise=["construction_materials", "tools_machinery", "customer_relations"],
            industries=["construction", "government", "transportation"],
            languages=["arabic", "english"],
            capacity=MemberCapacity(current=12, maximum=20, availability=Availability.BUSY),
            performance=MemberPerformance(
                conversion_rate=0.28, average_response_time=60, customer_satisfaction=4.5, active_leads=12),
            working_hours=riyadh_work_week(),
        ),
        TeamMember(
            id="project-manager-1",
            name="Khalid Al-Mansouri",
            email="khalid@almazahir.com",
            role="Project Manager",
            expertise=["project_management", "logistics", "large_scale_projects"],
            industries=["oil_gas", "construction", "mining"],
            languages=["arabic", "english"],
            capacity=MemberCapacity(current=3, maximum=8, availability=Availability.AVAILABLE),
            performance=MemberPerformance(
                conversion_rate=0.55, average_response_time=90, customer_satisfaction=4.9, active_leads=3),
            working_hours=riyadh_work_week(),
        ),
        TeamMember(
            id="inside-sales-1",
            name="Layla Al-Harbi",
            email="layla@almazahir.com",
            role="Inside Sales Representative",
            expertise=["industrial_supplies", "quotations", "customer_relations"],
            industries=["utilities", "government", "other"],
            languages=["arabic", "english", "urdu"],
            capacity=MemberCapacity(current=6, maximum=15, availability=Availability.AVAILABLE),
            performance=MemberPerformance(
                conversion_rate=0.24, average_response_time=25, customer_satisfaction=4.4, active_leads=6),
            working_hours=riyadh_work_week("09:00", "18:00"),
        ),
    ]
