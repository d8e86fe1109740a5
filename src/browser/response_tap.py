"""Network response observation for page performance analysis.

This module provides the ResponseTap class which subscribes to a page's
``response`` events and accumulates a log of readable response bodies while a
navigation is in flight.
"""

import asyncio
import logging
import time
from typing import Callable, List, Optional, Set, Tuple

from playwright.async_api import Page, Response

from src.browser.errors import ReadError
from src.models.browser_models import ResponseRecord

logger = logging.getLogger(__name__)


class TapHandle:
    """Subscription state of one tap attachment.

    The record list is append-only. Snapshots copy the prefix that exists at
    call time, so readers never see a record change after it was returned.
    """

    def __init__(self, page: Page):
        self.page = page
        self.records: List[ResponseRecord] = []
        self.dropped = 0
        self.attached = True
        self._pending: Set[asyncio.Task] = set()
        self._listener: Optional[Callable[[Response], None]] = None
        self._close_listener: Optional[Callable[..., None]] = None

    @property
    def pending(self) -> int:
        return len(self._pending)


class ResponseTap:
    """Observe every network response a page receives.

    Each ``response`` event schedules its own body read, so reads progress
    concurrently with the navigation and with each other. A response whose
    body cannot be read is skipped and counted in ``handle.dropped``.

    PATTERN: attach before navigating. Responses observed before attach are
    lost and never attributed to a later analysis.

    Example:
        tap = ResponseTap()
        handle = tap.attach(page)
        await page.goto(url, wait_until="load")
        await tap.settle(handle, timeout_s=5.0)
        log = tap.snapshot(handle)
        tap.detach(handle)
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """Initialize the response tap.

        Args:
            clock: Monotonic clock used to timestamp records
        """
        self._clock = clock

    def attach(self, page: Page) -> TapHandle:
        """Subscribe to the page's response events.

        Args:
            page: Playwright page instance

        Returns:
            Handle used to snapshot, settle and detach
        """
        handle = TapHandle(page)

        def on_response(response: Response) -> None:
            if not handle.attached:
                return
            task = asyncio.ensure_future(self._record(handle, response))
            handle._pending.add(task)
            task.add_done_callback(handle._pending.discard)

        def on_close(*_args) -> None:
            handle.attached = False

        handle._listener = on_response
        handle._close_listener = on_close
        page.on("response", on_response)
        page.on("close", on_close)
        logger.debug(f"Response tap attached to page_{id(page)}")
        return handle

    async def _record(self, handle: TapHandle, response: Response) -> None:
        try:
            size = await self._read_body_length(response)
        except ReadError as e:
            handle.dropped += 1
            logger.debug(f"Dropped unreadable response: {e}")
            return

        if not handle.attached:
            return
        handle.records.append(
            ResponseRecord(
                byte_size=size,
                observed_at=self._clock(),
                url=response.url,
                status=response.status,
            )
        )

    async def _read_body_length(self, response: Response) -> int:
        """Read a response body and return its length.

        Raises:
            ReadError: If the body is unavailable (aborted, blocked,
                redirect without body, page closed)
        """
        try:
            body = await response.body()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            raise ReadError(f"{response.url}: {e}") from e
        return len(body)

    def snapshot(self, handle: TapHandle) -> Tuple[ResponseRecord, ...]:
        """Return the records accumulated so far.

        Safe to call while reads are still completing.

        Args:
            handle: Tap handle

        Returns:
            Immutable copy of the log prefix
        """
        return tuple(handle.records)

    async def settle(self, handle: TapHandle, timeout_s: Optional[float] = None) -> int:
        """Wait for body reads already in flight to finish.

        Only reads scheduled before this call are awaited, for at most
        ``timeout_s`` seconds. A streaming body (SSE, long-poll) never
        completes, so reads still running at the deadline are left to
        ``detach()``, which cancels them. Read failures are recorded as drops
        by the reads themselves.

        Args:
            handle: Tap handle
            timeout_s: Upper bound on the wait, unbounded when None

        Returns:
            Number of reads still unfinished when the wait ended
        """
        pending = set(handle._pending)
        if not pending:
            return 0
        logger.debug(f"Waiting for {len(pending)} in-flight response reads")
        _, unfinished = await asyncio.wait(pending, timeout=timeout_s)
        if unfinished:
            logger.debug(
                f"{len(unfinished)} response reads still open after {timeout_s}s, "
                f"leaving them out of the log"
            )
        return len(unfinished)

    def detach(self, handle: TapHandle) -> None:
        """Unsubscribe from the page and cancel outstanding reads.

        Idempotent.

        Args:
            handle: Tap handle
        """
        if handle._listener is None:
            return

        handle.attached = False
        for event, listener in (
            ("response", handle._listener),
            ("close", handle._close_listener),
        ):
            try:
                handle.page.remove_listener(event, listener)
            except Exception as e:
                logger.warning(f"Error removing {event} listener: {e}")
        handle._listener = None
        handle._close_listener = None

        for task in list(handle._pending):
            task.cancel()

        logger.debug(
            f"Response tap detached: {len(handle.records)} recorded, "
            f"{handle.dropped} dropped"
        )
