"""
Store domain normalization
"""

import re

from catalog_sync.core.logging import get_logger
from catalog_sync.core.exceptions import InvalidDomainError
from catalog_sync.shared.helpers.validation_utils import is_valid_domain

logger = get_logger(__name__)

_PROTOCOL = re.compile(r"^https?://")
_LEADING_SLASHES = re.compile(r"^/+")
_WWW_PREFIX = re.compile(r"^www\.")


def normalize_domain(value: str) -> str:
    """Reduce user input such as "https://www.Shop.com/foo?x=1" to "shop.com".

    Raises InvalidDomainError when what is left is not a hostname.
    """
    logger.debug("Normalizing domain", input=value)

    normalized = (value or "").strip().lower()
    normalized = _PROTOCOL.sub("", normalized)
    normalized = _LEADING_SLASHES.sub("", normalized)
    normalized = normalized.split("/")[0]
    normalized = normalized.split("?")[0].split("#")[0]
    normalized = normalized.split(":")[0]
    normalized = _WWW_PREFIX.sub("", normalized)
    normalized = normalized.strip()

    if not is_valid_domain(normalized):
        raise InvalidDomainError(normalized)

    logger.debug("Domain normalized", domain=normalized)
    return normalized


def format_store_name(hostname: str) -> str:
    """Display name from the first label: cool-gear-store.com -> Cool Gear Store"""
    label = hostname.split(".")[0]
    return " ".join(word[:1].upper() + word[1:].lower() for word in label.split("-"))


def create_store_handle(hostname: str) -> str:
    """Lower-cased first label: Cool-Gear-Store.com -> cool-gear-store"""
    return hostname.split(".")[0].lower()
