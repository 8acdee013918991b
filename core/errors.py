from __future__ import annotations

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict

logger = logging.getLogger(__name__)


class StorefrontError(Exception):
    """Base class for errors a storefront action reports back to the shopper."""

    status_code = 400
    default_message = "an unknown error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(StorefrontError):
    status_code = 404
    default_message = "Not found"


class ValidationFailed(StorefrontError):
    """Input rejected by a serializer; ``message`` joins every validation message."""

    def __init__(self, messages: list[str]):
        self.messages = list(messages)
        super().__init__(", ".join(self.messages))


@dataclass(frozen=True)
class ActionResult:
    message: str
    error: bool = False

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def render_error(error: BaseException) -> ActionResult:
    """Log *error* and turn it into a result the page can flash to the shopper."""
    if isinstance(error, StorefrontError):
        logger.warning("Action failed: %s", error.message)
        return ActionResult(message=error.message, error=True)
    logger.exception("Unexpected action failure", exc_info=error)
    return ActionResult(message=StorefrontError.default_message, error=True)
