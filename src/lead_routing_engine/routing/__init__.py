"""Lead routing: rule cascade, weighted matching and decisions."""

from .criteria import RoutingCriteria, RoutingRule
from .rules import RuleMatcher, default_routing_rules
from .matcher import BestMatchSelector
from .decision import LeadPriority, RoutingDecision
from .engine import LeadRoutingEngine, get_routing_engine

__all__ = [
    'RoutingCriteria',
    'RoutingRule',
    'RuleMatcher',
    'default_routing_rules',
    'BestMatchSelector',
    'LeadPriority',
    'RoutingDecision',
    'LeadRoutingEngine',
    'get_routing_engine',
]
