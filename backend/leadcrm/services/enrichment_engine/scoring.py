# backend/leadcrm/services/enrichment_engine/scoring.py
"""Suitability scoring (1-5) for enriched leads."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import List

from leadcrm.services.enrichment_engine.keywords import PROJECT_SERVICES, STABLE_LEGAL_FORMS

logger = logging.getLogger(__name__)

BASE_SCORE = 3.0
MIN_SCORE = 1
MAX_SCORE = 5


def round_half_up(value: float) -> int:
    """2.5 -> 3, 4.5 -> 5 (built-in round() would give 2 and 4)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass
class SuitabilityScore:
    score: int
    raw_score: float
    reasons: List[str] = field(default_factory=list)


class ScoringEngine:
    """
    Fixed rule list, evaluated in order:

    1. Start at 3
    2. Team size band (first match): 10-30 +1.5, 5-50 +1, <5 -1, >50 -0.5
    3. Project-based services: >=2 +1, exactly 1 +0.5
    4. Stable legal form (GmbH, AG) +0.5
    5. Round half-up, clamp to [1, 5]

    Every rule that changes the score appends a reason.
    """

    def score(self, analysis, lead) -> SuitabilityScore:
        score = BASE_SCORE
        reasons: List[str] = []

        team_size = lead.employee_count
        if team_size:
            if 10 <= team_size <= 30:
                score += 1.5
                reasons.append("✅ Sweet Spot Team-Größe (10-30 MA)")
            elif 5 <= team_size <= 50:
                score += 1
                reasons.append("✅ Gute Team-Größe (5-50 MA)")
            elif team_size < 5:
                score -= 1
                reasons.append("❌ Zu klein (< 5 MA)")
            else:
                score -= 0.5
                reasons.append("⚠️ Eher groß (> 50 MA)")

        project_service_count = len([s for s in analysis.services if s in PROJECT_SERVICES])
        if project_service_count >= 2:
            score += 1
            reasons.append("✅ Mehrere projektbasierte Services")
        elif project_service_count == 1:
            score += 0.5
            reasons.append("✅ Projektbasierte Services")

        if lead.legal_form in STABLE_LEGAL_FORMS:
            score += 0.5
            reasons.append("✅ Stabile Rechtsform")

        final = max(MIN_SCORE, min(MAX_SCORE, round_half_up(score)))
        logger.debug(f"Suitability for {lead.name}: raw={score} final={final}")
        return SuitabilityScore(score=final, raw_score=score, reasons=reasons)
