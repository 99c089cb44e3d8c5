#!/usr/bin/env python3
"""
Failure taxonomy for the aggregation pipeline

"No opinion" and "source absent" are NOT errors: augmenters return None for
both. Everything below is fatal to a pipeline run and propagates to the
caller, which decides whether to skip the import unit or halt.
"""

from typing import Optional


class AggregationError(Exception):
    """Base class for fatal aggregation failures"""


class UnresolvedAttributeError(AggregationError):
    """An attribute produced no candidates and has no default value"""

    def __init__(self, attribute: str):
        self.attribute = attribute
        super().__init__(
            f"Attribute '{attribute}' has no candidates and no default value "
            "(missing augmenter registration?)"
        )


class MalformedBundleError(AggregationError):
    """A source record violates its own documented structure"""

    def __init__(self, source: str, field: str, reason: str,
                 augmenter: Optional[str] = None):
        self.source = source
        self.field = field
        self.reason = reason
        self.augmenter = augmenter
        where = f" (read by {augmenter})" if augmenter else ""
        super().__init__(f"Malformed {source}.{field}{where}: {reason}")


class RegistrationError(AggregationError):
    """Attribute registration is inconsistent or incomplete"""
