#!/usr/bin/env python3
"""
Aggregation pipeline — resolve every registered attribute for one import unit

Pipeline position:
  file scan → parser / media probe / release lookup → EvidenceBundle
            → AggregationPipeline.run() → ResolvedRecord → commit

Attributes are independent: no aggregator reads another attribute's resolved
value. With max_workers > 1 the attributes fan out on a thread pool (one task
per attribute) and fan back in, in registration order.

Failure policy:
  - Missing sources / no opinion: handled inside augmenters and aggregators
  - UnresolvedAttributeError, MalformedBundleError: abort the whole run,
    no partial record is ever returned
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from movie_import.aggregator import AttributeAggregator
from movie_import.candidate import ResolvedAttribute, ResolvedRecord
from movie_import.errors import AggregationError, RegistrationError
from movie_import.evidence import EvidenceBundle

logger = logging.getLogger(__name__)


class AggregationPipeline:
    """Run every attribute aggregator over one evidence bundle"""

    def __init__(self, aggregators: Sequence[AttributeAggregator], max_workers: int = 1):
        if max_workers < 1:
            raise RegistrationError(f"max_workers must be >= 1, got {max_workers}")

        self.aggregators = tuple(aggregators)
        self.max_workers = max_workers

        seen = set()
        for aggregator in self.aggregators:
            if aggregator.attribute in seen:
                raise RegistrationError(
                    f"Attribute '{aggregator.attribute}' registered more than once"
                )
            seen.add(aggregator.attribute)

    @property
    def attributes(self) -> List[str]:
        """Registered attribute names, in registration order"""
        return [aggregator.attribute for aggregator in self.aggregators]

    def run(self, bundle: EvidenceBundle) -> ResolvedRecord:
        """
        Resolve all attributes for one import unit

        Raises:
            AggregationError: on any structural failure; nothing is returned
        """
        if not isinstance(bundle, EvidenceBundle):
            raise AggregationError(
                f"Expected EvidenceBundle, got {type(bundle).__name__}"
            )

        if self.max_workers == 1 or len(self.aggregators) <= 1:
            resolved = [aggregator.resolve(bundle) for aggregator in self.aggregators]
        else:
            resolved = self._run_parallel(bundle)

        return self._assemble(bundle, resolved)

    def _run_parallel(self, bundle: EvidenceBundle) -> List[ResolvedAttribute]:
        workers = min(self.max_workers, len(self.aggregators))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(aggregator.resolve, bundle)
                for aggregator in self.aggregators
            ]
            # result() re-raises the first failure in registration order
            return [future.result() for future in futures]

    def _assemble(self, bundle: EvidenceBundle,
                  resolved: List[ResolvedAttribute]) -> ResolvedRecord:
        produced = [attribute.attribute for attribute in resolved]
        if produced != self.attributes:
            missing = sorted(set(self.attributes) - set(produced))
            raise AggregationError(
                f"Resolved record does not match registration (missing: {missing})"
            )
        return ResolvedRecord(attributes=tuple(resolved), path=bundle.path)

    def run_many(
        self, bundles: Iterable[EvidenceBundle]
    ) -> Iterator[Tuple[EvidenceBundle, Optional[ResolvedRecord], Optional[AggregationError]]]:
        """
        Run a batch of import units, continuing past failed ones

        Yields (bundle, record, error); exactly one of record/error is set.
        """
        resolved_count = 0
        failed_count = 0

        for bundle in bundles:
            try:
                record = self.run(bundle)
            except AggregationError as e:
                failed_count += 1
                logger.warning(f"Skipping {bundle.path or '<unnamed import unit>'}: {e}")
                yield bundle, None, e
                continue

            resolved_count += 1
            yield bundle, record, None

        logger.info(f"Aggregated {resolved_count} import unit(s), {failed_count} failed")
