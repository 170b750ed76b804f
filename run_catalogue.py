"""
Catalogue run script.

Prepares the fixtures of every access category and invokes each method id.
"""
import logging
import sys

from protected_access.config import settings
from protected_access.services.access_service import access_service

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def run_catalogue(categories=None) -> int:
    """Run every method id of the given categories and return the failure count."""
    categories = categories or access_service.categories()
    unknown = [category for category in categories if category not in access_service.categories()]
    if unknown:
        logger.error(f"Unknown access categories: {', '.join(unknown)}")
        raise ValueError(f"Unknown access categories: {unknown}")

    failures = 0
    for category in categories:
        logger.info(f"Running {category}...")
        for method_id in range(1, access_service.amount_of_methods(category) + 1):
            # Each invocation may consume or overwrite its fixture
            access_service.prepare_resources(category)
            result = access_service.invoke(category, method_id)
            if not result.success:
                failures += 1
                logger.warning(f"{category} method {method_id} did not succeed: {result.message}")

    logger.info(f"Catalogue run finished with {failures} failure(s)")
    return failures


if __name__ == "__main__":
    try:
        failures = run_catalogue(sys.argv[1:])
    except ValueError:
        sys.exit(2)
    sys.exit(1 if failures else 0)
