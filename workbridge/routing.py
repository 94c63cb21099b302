"""Routing classifier - picks the recruitment channel for an application.

Route and priority come from ``ROUTING_RULES``: every rule whose predicate
matches is applied, in order, and later rules overwrite the fields they set.
Stream and timeline are derived afterwards.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .models import Priority, ProcessingStream, Route, RoutingDecision, Timeline

logger = logging.getLogger(__name__)

EXPERT_CATEGORY = "expert_specialist"
PRIORITY_SECTORS = frozenset({"construction", "agriculture"})
G2G_EXPERIENCE_YEARS = 10
COUNTRY_TAG = "india"


@dataclass(frozen=True)
class RoutingRule:
    """A predicate over (category, experience years) and the fields it sets."""

    rule_id: str
    title: str
    applies: Callable[[str, int], bool]
    route: Route | None = None
    priority: Priority | None = None


ROUTING_RULES: tuple[RoutingRule, ...] = (
    RoutingRule(
        rule_id="DEFAULT",
        title="Employer-sponsored at standard priority",
        applies=lambda category, years: True,
        route="employer_sponsored",
        priority="standard",
    ),
    RoutingRule(
        rule_id="G2G",
        title="Specialists and 10+ years of experience go government-to-government",
        applies=lambda category, years: category == EXPERT_CATEGORY or years >= G2G_EXPERIENCE_YEARS,
        route="g2g_specialist",
        priority="high",
    ),
    RoutingRule(
        rule_id="PRIORITY_SECTOR",
        title="Government priority sectors are fast-tracked",
        applies=lambda category, years: category in PRIORITY_SECTORS,
        priority="high",
    ),
)


def processing_stream(category: str) -> ProcessingStream:
    if category == EXPERT_CATEGORY:
        return "specialist_stream"
    if category in PRIORITY_SECTORS:
        return "priority_stream"
    return "standard_stream"


def estimated_timeline(priority: Priority) -> Timeline:
    return "4-6 weeks" if priority == "high" else "8-12 weeks"


def classify(
    category: str,
    experience_years: int,
    rules: tuple[RoutingRule, ...] = ROUTING_RULES,
) -> RoutingDecision:
    """
    Route an application by job category and years of experience.

    Args:
        category: Normalised job category, e.g. ``"construction"``. Unknown
            values fall through to the defaults.
        experience_years: Whole years of experience.
        rules: Ordered routing rules; every matching rule is applied.

    Returns:
        The routing decision attached to the submitted application.
    """
    category = category or ""
    route: Route = "employer_sponsored"
    priority: Priority = "standard"

    for rule in rules:
        if not rule.applies(category, experience_years):
            continue
        logger.debug("Routing rule %s matched (category=%r, years=%d)", rule.rule_id, category, experience_years)
        if rule.route is not None:
            route = rule.route
        if rule.priority is not None:
            priority = rule.priority

    return RoutingDecision(
        route=route,
        priority=priority,
        country_tag=COUNTRY_TAG,
        processing_stream=processing_stream(category),
        estimated_timeline=estimated_timeline(priority),
    )
