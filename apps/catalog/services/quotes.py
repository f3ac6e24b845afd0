"""
Quote and expert-build requirement submission.

One upstream call per submission: no idempotency key and no automatic
retry. Failures come back as QuoteSubmissionError for a manual retry.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Optional

from apps.catalog.domain import CustomerDetails, PCRequirements, QuoteReceipt
from apps.catalog.exceptions import QuoteNotAllowedError, QuoteSubmissionError, StorefrontError
from apps.catalog.services.build import BuildSelection

logger = logging.getLogger(__name__)


def _submission_error(exc: StorefrontError, default: str) -> QuoteSubmissionError:
    # Upstream `message` wins over our generic wording
    user_message = exc.user_message if exc.user_message != exc.default_message else default
    return QuoteSubmissionError(str(exc), user_message=user_message)


class QuoteService:

    def __init__(self, client):
        self.client = client

    @staticmethod
    def build_payload(
        build: BuildSelection,
        customer: CustomerDetails,
        notes: Optional[Dict[str, str]] = None
    ) -> Dict:
        return {
            'customer': customer.to_payload(),
            'components': [c.to_payload() for c in build.to_components(notes)],
        }

    def submit(
        self,
        build: BuildSelection,
        customer: CustomerDetails,
        notes: Optional[Dict[str, str]] = None
    ) -> QuoteReceipt:
        """
        Send the build to the sales team.

        Raises:
            QuoteNotAllowedError: nothing is selected
            QuoteSubmissionError: the upstream call failed
        """
        if not build.can_request_quote():
            raise QuoteNotAllowedError('Quote requested with no selected components')

        payload = self.build_payload(build, customer, notes)
        try:
            receipt = self.client.create_pc_quote(payload)
        except StorefrontError as exc:
            logger.warning("Quote submission failed: %s", exc)
            raise _submission_error(exc, QuoteSubmissionError.default_message) from exc

        logger.info(
            "Quote %s submitted with %d components, total %s",
            receipt.quote_id, build.selected_count(), build.total_price()
        )
        return receipt


class RequirementsService:
    """Expert-build lead form; the sales team designs the build."""
    default_message = 'Failed to submit requirements'

    def __init__(self, client):
        self.client = client

    def submit(self, requirements: PCRequirements, user_agent: Optional[str] = None) -> str:
        payload = requirements.to_payload(
            user_agent=user_agent,
            submitted_at=datetime.now(timezone.utc).isoformat(),
        )
        try:
            message = self.client.create_pc_requirements(payload)
        except StorefrontError as exc:
            logger.warning("Requirements submission failed: %s", exc)
            raise _submission_error(exc, self.default_message) from exc

        logger.info("Requirements submitted (purpose=%s, budget=%s)", requirements.purpose, requirements.budget)
        return message
