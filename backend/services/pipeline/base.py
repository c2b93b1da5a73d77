"""Abstract base classes for pluggable tailoring collaborators."""

from abc import ABC, abstractmethod
from typing import Any
import logging

logger = logging.getLogger(__name__)


class BaseCapability(ABC):
    """Base class for optional collaborators the pipeline can call out to.

    Subclasses may override load() to pull in heavy resources; it runs once,
    on first use, through ensure_loaded().
    """

    name: str = ""
    _loaded: bool = False

    def load(self) -> None:
        """Load artifacts. Default collaborators need nothing."""

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def ensure_loaded(self) -> None:
        """Load capability if not already loaded."""
        if not self._loaded:
            logger.info("Loading capability: %s", self.name)
            self.load()
            self._loaded = True
            logger.info("Capability loaded: %s", self.name)


class BaseExtractor(BaseCapability):
    """Turns job text into a KeywordSet. May be sync or async."""

    @abstractmethod
    def extract(self, text: str, max_keywords: int) -> Any:
        """Return a KeywordSet (or an awaitable resolving to one)."""


class BaseTailorer(BaseCapability):
    """Rewrites résumé text for a KeywordSet. May be sync or async."""

    @abstractmethod
    def tailor(self, cv_text: str, keywords: Any, options: Any) -> Any:
        """Return a TailoringResult (or an awaitable resolving to one)."""
