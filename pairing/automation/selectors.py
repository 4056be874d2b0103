"""
Selector-fallback resolution for Playwright pages.

A target element is described by an ordered list of strategies. Each strategy
yields zero or more candidate locators; the resolver walks strategies (tiers)
in order, and patterns within a tier in order, and commits to the first
candidate that is visible and enabled.

Fields use:   ByAccessibleLabel -> ByPlaceholder -> ByStructuralSelector
Controls use: ByRoleAndName -> ByStructuralSelector
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Pattern, Sequence, Union

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page

from pairing.automation.errors import ControlNotFound, FieldNotFound

logger = logging.getLogger(__name__)

TextMatcher = Union[str, Pattern[str]]


@dataclass(frozen=True)
class ByAccessibleLabel:
    """Inputs whose accessible label (label element, aria-label) matches."""
    patterns: Sequence[TextMatcher]
    tier: str = "label"

    def candidates(self, page: Page) -> Iterator[Locator]:
        for pattern in self.patterns:
            yield page.get_by_label(pattern, exact=False)


@dataclass(frozen=True)
class ByPlaceholder:
    """Inputs whose placeholder text matches."""
    patterns: Sequence[TextMatcher]
    tier: str = "placeholder"

    def candidates(self, page: Page) -> Iterator[Locator]:
        for pattern in self.patterns:
            yield page.get_by_placeholder(pattern, exact=False)


@dataclass(frozen=True)
class ByStructuralSelector:
    """Raw CSS / XPath selectors."""
    selectors: Sequence[str]
    tier: str = "css"

    def candidates(self, page: Page) -> Iterator[Locator]:
        for selector in self.selectors:
            yield page.locator(selector)


@dataclass(frozen=True)
class ByRoleAndName:
    """Elements with an ARIA role and a matching accessible name."""
    roles: Sequence[str]
    names: Sequence[TextMatcher]
    tier: str = "role"

    def candidates(self, page: Page) -> Iterator[Locator]:
        for role in self.roles:
            for name in self.names:
                yield page.get_by_role(role, name=name, exact=False)


Strategy = Union[ByAccessibleLabel, ByPlaceholder, ByStructuralSelector, ByRoleAndName]


@dataclass(frozen=True)
class FieldTargets:
    """Lookup hints for a fillable input."""
    labels: List[TextMatcher] = field(default_factory=list)
    placeholders: List[TextMatcher] = field(default_factory=list)
    css: List[str] = field(default_factory=list)

    def strategies(self) -> List[Strategy]:
        return [
            ByAccessibleLabel(tuple(self.labels)),
            ByPlaceholder(tuple(self.placeholders)),
            ByStructuralSelector(tuple(self.css)),
        ]


@dataclass(frozen=True)
class ControlTargets:
    """Lookup hints for a clickable control."""
    names: List[TextMatcher] = field(default_factory=list)
    roles: List[str] = field(default_factory=lambda: ["button"])
    css: List[str] = field(default_factory=list)

    def strategies(self) -> List[Strategy]:
        return [
            ByRoleAndName(tuple(self.roles), tuple(self.names)),
            ByStructuralSelector(tuple(self.css)),
        ]


async def _first_usable(locator: Locator) -> Optional[Locator]:
    """Return the first visible, enabled element of a locator, if any."""
    try:
        count = await locator.count()
    except PlaywrightError as e:
        # Malformed selectors count as no match
        logger.debug(f"Locator evaluation failed: {e}")
        return None

    for index in range(count):
        candidate = locator.nth(index)
        try:
            if await candidate.is_visible() and await candidate.is_enabled():
                return candidate
        except PlaywrightError as e:
            logger.debug(f"Candidate {index} detached while checking: {e}")
    return None


async def resolve(page: Page, strategies: Sequence[Strategy]) -> Optional[Locator]:
    """
    Resolve the first usable element across strategies in priority order.

    Args:
        page: Playwright page to search
        strategies: Ordered tiers; earlier tiers always win over later ones

    Returns:
        The winning locator (already narrowed to one element), or None
    """
    for strategy in strategies:
        for locator in strategy.candidates(page):
            match = await _first_usable(locator)
            if match is not None:
                logger.debug(f"Resolved element via {strategy.tier} strategy")
                return match
    return None


async def fill_field(page: Page, value: str, targets: FieldTargets, field_name: str) -> None:
    """
    Fill a required input located through the field cascade.

    Raises:
        FieldNotFound: If no strategy located a usable input
    """
    element = await resolve(page, targets.strategies())
    if element is None:
        raise FieldNotFound(f"could not find the {field_name} field")
    await element.fill(value)


async def click_control(page: Page, targets: ControlTargets, control_name: str) -> None:
    """
    Click a required control located through the control cascade.

    Raises:
        ControlNotFound: If no strategy located a usable control
    """
    element = await resolve(page, targets.strategies())
    if element is None:
        raise ControlNotFound(f"could not find the {control_name} control")
    await element.click()
