"""
Cascade — Reference Data Loader

Tracks outstanding reference-data fetches for one modal. Every request
gets a ticket stamped with the loader's generation; opening or closing
the modal bumps the generation so late responses from an earlier
lifetime are dropped instead of being applied to a reset controller.

Fetch failures degrade to "no data": an empty list by default, or the
caller's ``on_failure`` hook (occupancy marks its node unknown).

@file cascade/loader.py
"""

import logging
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger('isp_forms')


@dataclass(frozen=True)
class FetchTicket:
    key: str
    generation: int
    serial: int


class ReferenceDataLoader:

    def __init__(self):
        self._generation = 0
        self._serial = 0
        self._pending: dict[str, FetchTicket] = {}

    @property
    def generation(self) -> int:
        return self._generation

    def invalidate(self) -> None:
        """Start a new lifetime; every outstanding ticket becomes stale."""
        self._generation += 1
        self._pending.clear()

    def request(self, key: str) -> FetchTicket:
        """
        Register a fetch for ``key``. A newer request for the same key
        supersedes the older one (e.g. the node selection changed twice).
        """
        self._serial += 1
        ticket = FetchTicket(key=key, generation=self._generation, serial=self._serial)
        self._pending[key] = ticket
        return ticket

    def is_loading(self, key: str) -> bool:
        return key in self._pending

    def is_current(self, ticket: FetchTicket) -> bool:
        return self._pending.get(ticket.key) == ticket

    def resolve(self, ticket: FetchTicket, records, apply: Callable[[list], None]) -> bool:
        """Apply ``records`` if the ticket is still current; return whether applied."""
        if not self.is_current(ticket):
            logger.debug(
                'Discarding stale %s response (generation %s, current %s).',
                ticket.key, ticket.generation, self._generation,
            )
            return False
        del self._pending[ticket.key]
        apply(list(records or []))
        return True

    def discard(self, ticket: FetchTicket) -> None:
        """Forget a ticket whose target is no longer selected."""
        if self.is_current(ticket):
            del self._pending[ticket.key]
        logger.debug('Discarding %s response for a deselected target.', ticket.key)

    def fail(
        self,
        ticket: FetchTicket,
        exc: BaseException,
        apply: Callable[[list], None],
        on_failure: Callable[[], None] | None = None,
    ) -> bool:
        """
        Settle a failed fetch. Without ``on_failure`` the caller gets an
        empty list; with it, the caller decides what "no data" means.
        """
        logger.warning('Reference fetch for %s failed: %s', ticket.key, exc)
        if on_failure is None:
            return self.resolve(ticket, [], apply)
        if not self.is_current(ticket):
            return False
        del self._pending[ticket.key]
        on_failure()
        return True

    def load(
        self,
        key: str,
        fetcher: Callable[[], list],
        apply: Callable[[list], None],
        on_failure: Callable[[], None] | None = None,
    ) -> bool:
        """Synchronous request → fetch → resolve in one call."""
        ticket = self.request(key)
        try:
            records = fetcher()
        except Exception as exc:
            return self.fail(ticket, exc, apply, on_failure)
        return self.resolve(ticket, records, apply)
