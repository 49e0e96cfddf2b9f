import asyncio

import structlog
from tenacity import AsyncRetrying, RetryCallState, retry_if_exception_type, stop_after_attempt, wait_exponential

from docseq import utils
from docseq.core.core import Service
from docseq.core.modules.counter.models import DocumentType, parse_document_type
from docseq.errors import ConflictError, StoreUnavailableError, ValidationError

logger = structlog.get_logger(__name__)


def _log_conflict_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "allocation_conflict_retry",
        attempt=retry_state.attempt_number,
        wait=retry_state.next_action.sleep if retry_state.next_action else None,
        error=str(exc),
    )


class AllocatorService(Service):
    """Hands out unique, strictly increasing numbers per document type and scope."""

    async def allocate(self, document_type: DocumentType | str, scope: str = "", timeout: float | None = None) -> int:
        """Reserve and return the next number in the sequence.

        The number is consumed once this returns, even if the caller later
        fails to save its document. Calling twice always yields two numbers.

        Args:
            document_type: One of the DocumentType values
            scope: Sub-sequence key (period, parent document); empty for the default sequence
            timeout: Seconds to wait for the store; the configured default when None

        Raises:
            InvalidDocumentTypeError: Unknown document type, the store is not touched
            ValidationError: Malformed scope
            ConflictError: Concurrent writers kept colliding until retries ran out
            StoreUnavailableError: The store is unreachable or the timeout elapsed
        """
        doc_type = parse_document_type(document_type)
        if scope and not utils.is_scope(scope):
            raise ValidationError(f"Invalid scope format: '{scope}'")

        limit = self.core.config.allocation_timeout if timeout is None else timeout
        try:
            async with asyncio.timeout(limit):
                number = await self._increment(doc_type, scope)
        except TimeoutError as e:
            logger.warning("allocation_timeout", document_type=doc_type, scope=scope, timeout=limit)
            raise StoreUnavailableError(f"Counter store did not answer within {limit}s") from e

        logger.info("number_allocated", document_type=doc_type, scope=scope, number=number)
        return number

    async def _increment(self, document_type: DocumentType, scope: str) -> int:
        try:
            async for attempt in self._get_retrying():
                with attempt:
                    return await self.store.increment_and_get(document_type, scope)
        except ConflictError:
            logger.error(
                "allocation_conflict_exhausted",
                document_type=document_type,
                scope=scope,
                attempts=self.core.config.conflict_max_attempts,
            )
            raise
        raise RuntimeError("Retry loop finished without a result")  # pragma: no cover

    def _get_retrying(self) -> AsyncRetrying:
        """Retry only ConflictError, with bounded exponential backoff."""
        config = self.core.config
        return AsyncRetrying(
            retry=retry_if_exception_type(ConflictError),
            stop=stop_after_attempt(config.conflict_max_attempts),
            wait=wait_exponential(
                multiplier=config.conflict_min_wait,
                min=config.conflict_min_wait,
                max=config.conflict_max_wait,
            ),
            before_sleep=_log_conflict_retry,
            reraise=True,
        )
