"""Conversion of external call failures into ``UpstreamFailure``."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from macro_lens.domain.errors import AnalysisError, UpstreamFailure

logger = logging.getLogger(__name__)


@contextmanager
def upstream_call(operation: str) -> Iterator[None]:
    """Re-raise any failure inside the block as ``UpstreamFailure``."""
    try:
        yield
    except AnalysisError:
        raise
    except Exception as exc:
        logger.exception("%s failed", operation)
        raise UpstreamFailure(operation, str(exc)) from exc
