# backend/leadcrm/services/enrichment_engine/content_analyzer.py
"""
Website Content Analyzer

Plain keyword heuristics over the visible page text:
1. Drop <script>/<style> blocks and HTML comments
2. Strip the remaining markup
3. Match category keyword dictionaries against the lower-cased text
4. Derive focus, summary and a few descriptive extras (clients, team size, news)
"""

import re
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from bs4 import BeautifulSoup, Comment

from leadcrm.services.enrichment_engine.keywords import (
    SERVICE_KEYWORDS,
    TECHNOLOGY_KEYWORDS,
    PRODUCT_KEYWORDS,
    EVENT_KEYWORDS,
)

logger = logging.getLogger(__name__)

DEFAULT_FOCUS = "IT-Dienstleistungen"
DEFAULT_INDUSTRY = "IT-Dienstleister"
UNREACHABLE_SUMMARY = "Website nicht erreichbar"

_WHITESPACE = re.compile(r"\s+")

_CLIENT_SECTIONS = [
    re.compile(r"(?:unsere kunden|referenzen|portfolio|projekte|clients|customers).{0,500}", re.I | re.S),
    re.compile(r"(?:wir arbeiten|arbeiten wir|zusammenarbeit).{0,300}(?:mit|für).{0,200}", re.I | re.S),
]
_COMPANY_NAME = re.compile(
    r"\b([A-ZÄÖÜ][A-Za-zäöüß\-]+(?:\s+[A-ZÄÖÜ&][A-Za-zäöüß\-]*){0,4}\s+"
    r"(?:GmbH|AG|SE|KG|e\.V\.|mbH|Inc\.|Ltd\.|Group|Gruppe)(?:\s+&\s+Co\.\s+KG)?)\b"
)
_CLIENT_CONTEXT = re.compile(
    r"(?:projekt|für|mit|bei|kunde|client)\s+"
    r"([A-ZÄÖÜ][A-Za-zäöüß]+(?:\s+[A-ZÄÖÜ][A-Za-zäöüß]+){0,2}\s+(?:GmbH|AG|SE))",
    re.I
)

_TEAM_SIZE = [
    re.compile(r"(\d+)\s*(?:mitarbeiter|employees|team members|kolleg)", re.I),
    re.compile(r"team\s+von\s+(\d+)", re.I),
    re.compile(r"(\d+)er\s+team", re.I),
]

_NEWS_SECTIONS = [
    re.compile(r"(?:news|aktuelles|neuigkeiten|pressemitteilung).{0,400}", re.I | re.S),
    re.compile(r"(?:auszeichnung|award|preis|zertifizierung|zertifikat).{0,300}", re.I | re.S),
]
_SENTENCE_SPLIT = re.compile(r"[.!?]\s+")


@dataclass
class AnalysisResult:
    """What the keyword heuristics found on a website."""
    has_content: bool
    services: List[str] = field(default_factory=list)
    technologies: List[str] = field(default_factory=list)
    products: List[str] = field(default_factory=list)
    clients: List[str] = field(default_factory=list)
    team_info: Optional[str] = None
    recent_events: List[str] = field(default_factory=list)
    focus: str = DEFAULT_FOCUS
    summary: str = UNREACHABLE_SUMMARY


def extract_text(html: Optional[str]) -> Tuple[str, str]:
    """Visible text of a page as (original case, lower case)."""
    if not html:
        return "", ""

    soup = BeautifulSoup(html, "html.parser")

    for tag in soup(["script", "style"]):
        tag.decompose()
    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()

    text = _WHITESPACE.sub(" ", soup.get_text(" ")).strip()
    return text, text.lower()


def match_categories(text_lower: str, dictionary: Dict[str, List[str]]) -> List[str]:
    """Labels whose keywords occur in the text, in dictionary order."""
    return [
        label for label, keywords in dictionary.items()
        if any(keyword in text_lower for keyword in keywords)
    ]


class ContentAnalyzer:
    """Classify website content into services/technologies for one lead."""

    def analyze(self, html: Optional[str], lead) -> AnalysisResult:
        """
        Args:
            html: Raw page content, or None if the site was not available
            lead: Object with ``name``, ``nace_code`` and ``employee_count``

        Never raises on missing content; the fallbacks fill focus and summary.
        """
        if html is None:
            return AnalysisResult(
                has_content=False,
                team_info=self._team_info("", lead),
                focus=self._focus([], lead),
                summary=UNREACHABLE_SUMMARY,
            )

        text, text_lower = extract_text(html)

        services = match_categories(text_lower, SERVICE_KEYWORDS)
        technologies = match_categories(text_lower, TECHNOLOGY_KEYWORDS)
        products = match_categories(text_lower, PRODUCT_KEYWORDS)
        clients = self._clients(text)

        result = AnalysisResult(
            has_content=True,
            services=services,
            technologies=technologies,
            products=products,
            clients=clients,
            team_info=self._team_info(text, lead),
            recent_events=self._recent_events(text),
            focus=self._focus(services, lead),
            summary=self._summary(lead, services, technologies, products, clients),
        )

        logger.debug(
            f"Analyzed {lead.name}: {len(services)} services, "
            f"{len(technologies)} technologies, {len(clients)} clients"
        )
        return result

    @staticmethod
    def _focus(services: List[str], lead) -> str:
        if services:
            return ", ".join(services[:3])
        return lead.nace_code or DEFAULT_FOCUS

    @staticmethod
    def _summary(lead, services, technologies, products, clients) -> str:
        parts = []
        if services:
            parts.append(f"{lead.name} bietet {len(services)} Hauptservices: {', '.join(services[:3])}")
        if products:
            parts.append(f"Eigene Produkte: {', '.join(products)}")
        if clients:
            parts.append(f"Kunden inkl. {', '.join(clients[:2])}")
        if technologies:
            parts.append(f"Tech-Stack: {', '.join(technologies[:5])}")

        if not parts:
            return f"{lead.name} - {lead.nace_code or DEFAULT_INDUSTRY}"
        return ". ".join(parts)

    @staticmethod
    def _clients(text: str) -> List[str]:
        found: Dict[str, None] = {}

        for section_pattern in _CLIENT_SECTIONS:
            for section in section_pattern.finditer(text):
                for match in _COMPANY_NAME.finditer(section.group(0)):
                    name = match.group(1).strip()
                    if (
                        "Impressum" not in name
                        and "Datenschutz" not in name
                        and 5 < len(name) < 60
                    ):
                        found[name] = None

        # Widen the search if the reference sections gave little
        if len(found) < 3:
            for match in _CLIENT_CONTEXT.finditer(text):
                name = match.group(1).strip()
                if "Impressum" not in name and len(name) > 5:
                    found[name] = None

        return list(found)[:5]

    @staticmethod
    def _team_info(text: str, lead) -> Optional[str]:
        for pattern in _TEAM_SIZE:
            match = pattern.search(text)
            if match:
                return f"ca. {match.group(1)} Mitarbeiter (Website)"

        if lead.employee_count:
            return f"{lead.employee_count} Mitarbeiter (Handelsregister)"
        return None

    @staticmethod
    def _recent_events(text: str) -> List[str]:
        year = datetime.now(timezone.utc).year
        recent_years = tuple(str(y) for y in (year - 1, year, year + 1))
        found: Dict[str, None] = {}

        for section_pattern in _NEWS_SECTIONS:
            for section in section_pattern.finditer(text):
                for sentence in _SENTENCE_SPLIT.split(section.group(0)):
                    sentence = _WHITESPACE.sub(" ", sentence).strip()
                    if not 30 < len(sentence) < 200:
                        continue
                    lowered = sentence.lower()
                    if any(y in sentence for y in recent_years) or any(k in lowered for k in EVENT_KEYWORDS):
                        found[sentence] = None

        return list(found)[:3]
