"""
Outcome validation: model verdict vs stored ground truth
"""
import logging

from fraudcheck.api.models import ValidationOutcome

logger = logging.getLogger(__name__)


def validate_prediction(ground_truth: str, predicted: str) -> bool:
    """Exact, case-sensitive label comparison"""
    if ground_truth == predicted:
        logger.info("🎯 Prediction DOES match the classification")
        return True

    logger.info(
        f"❌ Prediction DOES NOT match the classification "
        f"(truth={ground_truth}, predicted={predicted})"
    )
    # TODO: optional full-record comparison against the seller-keyed write
    return False


def build_outcome(ground_truth: str, predicted: str) -> ValidationOutcome:
    return ValidationOutcome(
        ground_truth=ground_truth,
        predicted=predicted,
        matched=validate_prediction(ground_truth, predicted)
    )
