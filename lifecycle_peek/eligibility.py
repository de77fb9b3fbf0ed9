# lifecycle_peek/eligibility.py

from __future__ import annotations

import logging
from typing import Any, Callable, Dict

from .conf import LifecyclePeekSettings, get_settings
from .registry import ClassMetadataProvider

logger = logging.getLogger(__name__)


class EligibilityResolver:
    """
    Decides which classes and objects may show the lifecycle widget.

    Pure reads against the class metadata provider and configuration.
    Metadata errors (ImproperlyConfigured) are never swallowed here.
    """

    def __init__(
        self,
        metadata: ClassMetadataProvider,
        settings_provider: Callable[[], LifecyclePeekSettings] = get_settings,
    ):
        self.metadata = metadata
        self.settings_provider = settings_provider

    def is_eligible_class(self, class_name: str) -> bool:
        if self.settings_provider().is_disabled(class_name):
            logger.debug("Lifecycle peek disabled for class %s", class_name)
            return False

        if not self.metadata.state_attribute_code(class_name):
            return False

        return True

    def is_eligible(self, obj: Any) -> bool:
        return self.is_eligible_class(self.metadata.class_name_of(obj))

    def enum_eligible_classes(self) -> Dict[str, str]:
        """
        Map class name -> state attribute code.

        Root classes come first, each followed by its descendants, in
        registry order. Classes without a state attribute are skipped.
        """
        eligible: Dict[str, str] = {}

        for root in self.metadata.root_classes():
            code = self.metadata.state_attribute_code(root)
            if code:
                eligible[root] = code

            for child in self.metadata.child_classes(root):
                code = self.metadata.state_attribute_code(child)
                if code:
                    eligible[child] = code

        return eligible
