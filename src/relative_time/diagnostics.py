from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    code: str
    message: str
    context: Dict[str, object] = field(default_factory=dict)


DiagnosticSink = Callable[[Diagnostic], None]


def log_diagnostic(diagnostic: Diagnostic) -> None:
    """Default sink: one warning record per diagnostic."""
    logger.warning(
        "%s: %s",
        diagnostic.code,
        diagnostic.message,
        extra={"diagnostic": diagnostic.context},
    )


def emit(sink: Optional[DiagnosticSink], code: str, message: str, **context: object) -> Diagnostic:
    diagnostic = Diagnostic(code=code, message=message, context=dict(context))
    (sink or log_diagnostic)(diagnostic)
    return diagnostic
