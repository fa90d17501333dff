"""
Extraction Strategies

Markup on product pages changes shape between layouts, so each field is
read by an ordered list of strategies. A strategy is a pure function from
a DocumentParser to an optional string; the first non-empty result wins.

- PRICE_STRATEGIES: price display region, "larger" title style then "03" style
- IMAGE_STRATEGIES: primary (index 0) gallery image
"""

import re
from typing import Callable, Optional, Sequence, Tuple

from .document import DocumentParser, has_classes

Strategy = Callable[[DocumentParser], Optional[str]]

PRICE_REGION_SELECTOR = "div[data-appears-component-name='price']"

# "CA$ 12.50" -> ("CA$", "12.50"); "USD 1,299" -> ("USD", "1,299")
PRICE_PATTERN = re.compile(r'([A-Z]{1,3}\$?)\s*([\d,]+(?:\.\d{2})?)')


def _price_text_with_classes(doc: DocumentParser, classes: str) -> Optional[str]:
    predicate = has_classes("p", classes)
    for region in doc.select_all(PRICE_REGION_SELECTOR):
        node = doc.find_first(predicate, root=region)
        if node is not None:
            text = doc.text(node)
            if text:
                return text
    return None


def price_title_larger(doc: DocumentParser) -> Optional[str]:
    """Price paragraph styled wt-text-title-larger."""
    return _price_text_with_classes(doc, "wt-text-title-larger")


def price_title_03(doc: DocumentParser) -> Optional[str]:
    """Older layout: price paragraph styled wt-text-title-03 wt-mr-xs-2."""
    return _price_text_with_classes(doc, "wt-text-title-03 wt-mr-xs-2")


def primary_image(doc: DocumentParser) -> Optional[str]:
    """src of the first image flagged data-index="0"."""
    for img in doc.select_all('img[data-index="0"]'):
        src = doc.attr(img, "src")
        if src:
            return src.strip()
    return None


PRICE_STRATEGIES: Tuple[Strategy, ...] = (price_title_larger, price_title_03)
IMAGE_STRATEGIES: Tuple[Strategy, ...] = (primary_image,)


def first_match(strategies: Sequence[Strategy], doc: DocumentParser) -> Optional[str]:
    """
    Run strategies in priority order.

    Args:
        strategies: Ordered strategy functions
        doc: Parsed page

    Returns:
        First non-empty value, or None if no strategy matched
    """
    for strategy in strategies:
        value = strategy(doc)
        if value:
            return value
    return None


def parse_price(text: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """
    Split raw price text into currency and amount.

    Args:
        text: Price display text (e.g., "CA$ 12.50")

    Returns:
        (currency, amount) tuple, or (None, None) when the text doesn't match

    Example:
        parse_price("CA$ 12.50") -> ("CA$", "12.50")
        parse_price("Free") -> (None, None)
    """
    if not text:
        return None, None

    match = PRICE_PATTERN.search(text)
    if not match:
        return None, None

    return match.group(1), match.group(2)
