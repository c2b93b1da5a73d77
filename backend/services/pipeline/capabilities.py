"""Explicit registry of optional extractor / tailorer collaborators.

Each pipeline owns one registry. Slots are fixed and ranked: a reliable
extractor is preferred over a generic one; the internal fallbacks run when
neither is registered.
"""

import logging

from services.pipeline.base import BaseCapability, BaseExtractor, BaseTailorer

logger = logging.getLogger(__name__)

SLOTS: tuple[str, ...] = ("reliable_extractor", "generic_extractor", "tailorer")


class CapabilityRegistry:
    def __init__(
        self,
        reliable_extractor: BaseExtractor | None = None,
        generic_extractor: BaseExtractor | None = None,
        tailorer: BaseTailorer | None = None,
    ) -> None:
        self.reliable_extractor = reliable_extractor
        self.generic_extractor = generic_extractor
        self.tailorer = tailorer

    def register(self, slot: str, capability: BaseCapability) -> None:
        """Register a collaborator into a named slot, replacing any previous one."""
        if slot not in SLOTS:
            raise ValueError(f"Unknown capability slot: {slot}")
        expected = BaseTailorer if slot == "tailorer" else BaseExtractor
        if not isinstance(capability, expected):
            raise TypeError(f"{slot} must be a {expected.__name__}")
        setattr(self, slot, capability)
        logger.info("Registered %s as %s", capability.name or type(capability).__name__, slot)

    def unregister(self, slot: str) -> None:
        if slot not in SLOTS:
            raise ValueError(f"Unknown capability slot: {slot}")
        setattr(self, slot, None)

    def is_registered(self, slot: str) -> bool:
        if slot not in SLOTS:
            raise ValueError(f"Unknown capability slot: {slot}")
        return getattr(self, slot) is not None

    def get(self, slot: str) -> BaseCapability | None:
        """Return the collaborator in a slot, loading it on first access."""
        if not self.is_registered(slot):
            return None
        capability: BaseCapability = getattr(self, slot)
        capability.ensure_loaded()
        return capability

    def clear(self) -> None:
        """Drop all collaborators. Useful for testing."""
        for slot in SLOTS:
            setattr(self, slot, None)
