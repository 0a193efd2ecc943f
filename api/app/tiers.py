"""Subscription plans and the features each one unlocks.

The gate is consulted by the HTTP layer only; pricing and the order ledger
never look at the plan.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from fastapi import Depends, HTTPException, Request

logger = logging.getLogger("api")


class Plan(str, Enum):
    """Subscription tiers as stored on the outlet profile."""

    FULL = "tam_paket"
    HALF = "yarim_paket"
    ENTRY = "giris_paket"


class Feature(str, Enum):
    DIGITAL_MENU = "digital_menu"
    POS = "pos"
    PDF_MENU = "pdf_menu"


TIER_ACCESS: dict[Feature, frozenset[Plan]] = {
    Feature.DIGITAL_MENU: frozenset({Plan.FULL, Plan.HALF}),
    Feature.POS: frozenset({Plan.FULL}),
    Feature.PDF_MENU: frozenset({Plan.FULL, Plan.HALF, Plan.ENTRY}),
}


def has_access(plan: Plan | str, feature: Feature) -> bool:
    """Return ``True`` if ``plan`` may use ``feature``.

    Unknown plan values get no access.
    """

    try:
        plan = Plan(plan)
    except ValueError:
        return False
    return plan in TIER_ACCESS.get(feature, frozenset())


def features_for(plan: Plan | str) -> list[Feature]:
    """Return the features unlocked by ``plan`` in declaration order."""

    return [f for f in Feature if has_access(plan, f)]


def require_feature(
    feature: Feature, plan_loader: Callable
) -> Callable:
    """Build a FastAPI dependency rejecting outlets without ``feature``.

    ``plan_loader`` is another dependency returning the outlet's plan; it is
    resolved by FastAPI so routes can share its session.
    """

    async def _guard(request: Request, plan: Plan = Depends(plan_loader)) -> Plan:
        if not has_access(plan, feature):
            logger.info(
                "feature denied",
                extra={"route": request.url.path, "status": 403},
            )
            raise HTTPException(
                status_code=403, detail=f"plan {getattr(plan, 'value', plan)} lacks {feature.value}"
            )
        return plan

    return _guard


__all__ = ["Plan", "Feature", "TIER_ACCESS", "has_access", "features_for", "require_feature"]
