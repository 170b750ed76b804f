"""
Access service for enumerating and invoking the protected resource catalogue.
"""
import importlib
import logging
import os
from typing import Dict, List, Type

from protected_access.config import settings, ACCESS_CATEGORIES, SEED_CONTENT, EXECUTABLE_SCRIPT
from protected_access.models.schemas import AccessCategory, AccessResult, CategoryRun, PreparedResources
from protected_access.services.base import ProtectedResourceAccess

logger = logging.getLogger(__name__)


class AccessService:
    """Service resolving access classes by category key and invoking them by id."""

    def __init__(self):
        """Initialize access service."""
        self._classes: Dict[str, Type[ProtectedResourceAccess]] = {}

    def categories(self) -> List[str]:
        return list(ACCESS_CATEGORIES)

    def access_class(self, category: str) -> Type[ProtectedResourceAccess]:
        """Import the access class configured for a category."""
        if category not in ACCESS_CATEGORIES:
            raise KeyError(f"Unknown access category: {category}")
        if category not in self._classes:
            module_name, _, class_name = ACCESS_CATEGORIES[category]["class_path"].rpartition(".")
            self._classes[category] = getattr(importlib.import_module(module_name), class_name)
        return self._classes[category]

    def instantiate(self, category: str) -> ProtectedResourceAccess:
        return self.access_class(category)()

    def amount_of_methods(self, category: str) -> int:
        return self.access_class(category).amount_of_methods()

    def list_handled_resources(self, category: str) -> List[str]:
        return self.instantiate(category).list_handled_resources()

    def get_category(self, category: str) -> AccessCategory:
        """Describe one access category."""
        config = ACCESS_CATEGORIES.get(category)
        if config is None:
            raise KeyError(f"Unknown access category: {category}")
        access_class = self.access_class(category)
        return AccessCategory(
            key=category,
            class_name=access_class.__name__,
            description=config["description"],
            resource_kind=config["resource_kind"],
            amount_of_methods=access_class.amount_of_methods(),
            handled_resources=access_class().list_handled_resources(),
        )

    def list_categories(self) -> List[AccessCategory]:
        return [self.get_category(category) for category in ACCESS_CATEGORIES]

    def invoke(self, category: str, method_id: int) -> AccessResult:
        """Invoke one method id and capture its message or raised error."""
        access = self.instantiate(category)
        try:
            message = access.access_resource_by_id(method_id)
        except Exception as e:
            logger.error(f"{category} method {method_id} raised {type(e).__name__}: {e}")
            return AccessResult(
                category=category,
                method_id=method_id,
                completed=False,
                success=False,
                message=str(e) or type(e).__name__,
                error_type=type(e).__name__,
            )

        success = message.startswith("Successfully")
        logger.info(f"{category} method {method_id}: {message}")
        return AccessResult(
            category=category,
            method_id=method_id,
            completed=True,
            success=success,
            message=message,
        )

    def invoke_all(self, category: str) -> CategoryRun:
        """Invoke every supported method id of a category in order."""
        results = [
            self.invoke(category, method_id)
            for method_id in range(1, self.amount_of_methods(category) + 1)
        ]
        succeeded = sum(1 for result in results if result.success)
        return CategoryRun(
            category=category,
            results=results,
            succeeded=succeeded,
            failed=len(results) - succeeded,
        )

    def prepare_resources(self, category: str) -> PreparedResources:
        """Put the file fixtures of a category into their expected initial state."""
        resources = self.list_handled_resources(category)
        prepared: List[str] = []
        removed: List[str] = []

        if category == "file-create":
            for path in resources:
                self._ensure_parent(path)
                if os.path.exists(path):
                    os.remove(path)
                    removed.append(path)
        elif category in SEED_CONTENT:
            for path in resources:
                self._ensure_parent(path)
                with open(path, "w", encoding="utf-8") as handle:
                    handle.write(SEED_CONTENT[category])
                prepared.append(path)
        elif category == "file-execute":
            script = resources[1]
            self._ensure_parent(script)
            with open(script, "w", encoding="utf-8", newline="") as handle:
                handle.write(EXECUTABLE_SCRIPT)
            os.chmod(script, 0o755)
            prepared.append(script)

        if prepared or removed:
            logger.info(f"Prepared {category} resources: prepared={prepared} removed={removed}")
        return PreparedResources(category=category, prepared=prepared, removed=removed)

    @staticmethod
    def _ensure_parent(path: str):
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)

    def get_info(self) -> Dict[str, object]:
        """Get access service information."""
        return {
            "categories": self.categories(),
            "resources_dir": os.path.abspath(settings.resources_dir),
            "executables_dir": os.path.abspath(settings.executables_dir),
        }


# Global access service instance
access_service = AccessService()
