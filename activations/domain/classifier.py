"""
Domain classifier.

Decides whether a site domain is a development environment, which is
exempt from a license's activation cap, or a production site.
"""

from core.domain.value_objects import DomainClassification

_DEV_EXACT = ("localhost", "127.0.0.1")
_DEV_PREFIXES = ("192.168.", "10.", "staging.", "dev.", "test.", "local.")
_DEV_SUFFIXES = (".local", ".test", ".localhost", ".dev")
_DEV_MARKERS = (
    ".staging.",
    ".dev.",
    ".test.",
    # Local WP, Lando and DDEV hostnames
    ".localwp.",
    ".lndo.",
    ".ddev.",
)


def classify(domain: str) -> DomainClassification:
    """
    Classify a domain as production or development.

    Args:
        domain: Domain name, any case

    Returns:
        DomainClassification.DEVELOPMENT for local, private-network and
        staging hosts, DomainClassification.PRODUCTION otherwise
    """
    d = (domain or "").strip().lower()
    if not d:
        return DomainClassification.PRODUCTION
    if (
        d in _DEV_EXACT
        or d.startswith(_DEV_PREFIXES)
        or d.endswith(_DEV_SUFFIXES)
        or any(marker in d for marker in _DEV_MARKERS)
    ):
        return DomainClassification.DEVELOPMENT
    return DomainClassification.PRODUCTION


def is_development(domain: str) -> bool:
    """Shorthand for ``classify(domain).is_development``."""
    return classify(domain).is_development
