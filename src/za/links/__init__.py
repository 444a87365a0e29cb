"""Link classification and resolution for daily notes."""

from za.links.classifier import (
    CROSS_REFERENCE_MARKERS,
    FIXABLE_KINDS,
    ClassifiedLink,
    Classifier,
    LinkKind,
    filter_by_kind,
)
from za.links.resolver import ResolutionError, ResolvedLink, Resolver, filter_needs_update

__all__ = [
    "CROSS_REFERENCE_MARKERS",
    "FIXABLE_KINDS",
    "ClassifiedLink",
    "Classifier",
    "LinkKind",
    "ResolutionError",
    "ResolvedLink",
    "Resolver",
    "filter_by_kind",
    "filter_needs_update",
]
