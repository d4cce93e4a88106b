"""Translate datastore outages into domain errors."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import DBAPIError, OperationalError

from freightflow.domain.exceptions import UpstreamUnavailableError

logger = logging.getLogger(__name__)


@contextmanager
def datastore_unavailable_as_upstream_error(operation: str) -> Iterator[None]:
    """Re-raise connection level failures as :class:`UpstreamUnavailableError`."""

    try:
        yield
    except OperationalError as exc:
        logger.error("Datastore unavailable while running %s: %s", operation, exc)
        raise UpstreamUnavailableError("database", str(exc.orig or exc)) from exc
    except DBAPIError as exc:
        if not exc.connection_invalidated:
            raise
        logger.error("Datastore connection lost while running %s: %s", operation, exc)
        raise UpstreamUnavailableError("database", str(exc.orig or exc)) from exc


__all__ = ["datastore_unavailable_as_upstream_error"]
