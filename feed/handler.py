from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List

from common.config import yaml_config
from common.logger import get_logger
from feed.creators import Creator
from feed.document_models import Doc, DocStatus, Resource
from feed.errors import (
    CreationError,
    ErrorKind,
    ResourceNotFoundError,
    classify_exception,
)
from feed.repository import Repository
from feed.result import Failure, Result, Success

log = get_logger(__name__)

Recovery = Callable[[Doc, CreationError], Result[Resource]]


@dataclass(frozen=True)
class FeedSummary:
    processed: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.processed + self.failed


class FeedHandler:
    def __init__(self, repository: Repository, important_type: str | None = None):
        """
        Filters a feed down to important documents and creates a resource for
        each, recovering duplicate and special-condition failures.
        """
        self.repository = repository
        self.important_type = important_type or yaml_config.processor.important_type
        # first match on error kind; kinds not listed are not recovered
        self._recoveries: Dict[ErrorKind, Recovery] = {
            ErrorKind.DUPLICATE_RESOURCE: self._handle_duplicate,
            ErrorKind.SPECIAL_CONDITION: self._handle_special,
        }

    def handle(self, documents: Iterable[Doc], creator: Creator) -> List[Doc]:
        """
        Return one terminal Doc per important input document, in input order.
        Non-important documents are dropped. Never raises for a single
        document's failure; it shows up as status "failed" instead.
        """
        return [
            self._process(doc, creator) for doc in documents if self.is_important(doc)
        ]

    def is_important(self, doc: Doc) -> bool:
        return doc.type == self.important_type

    def _process(self, doc: Doc, creator: Creator) -> Doc:
        return (
            self._create(doc, creator)
            .recover(lambda error: self._recover(doc, error))
            .fold(
                lambda resource: self._set_processed(doc, resource),
                lambda error: self._set_failed(doc, error),
            )
        )

    @staticmethod
    def _create(doc: Doc, creator: Creator) -> Result[Resource]:
        try:
            return creator(doc)
        except Exception as e:
            # creator broke its contract; keep the failure local to this doc
            return Failure(classify_exception(e))

    def _recover(self, doc: Doc, error: CreationError) -> Result[Resource]:
        recovery = self._recoveries.get(error.kind)
        if recovery is None:
            return Failure(error)
        log.debug("Recovering %s for api_id=%r", error.kind.value, doc.api_id)
        return recovery(doc, error)

    def _handle_duplicate(self, doc: Doc, error: CreationError) -> Result[Resource]:
        # earlier saved resource for the same api id
        try:
            resource = self.repository.find_by_id(doc.api_id)
        except ResourceNotFoundError as e:
            return self._lookup_failed(error, str(e), e)
        except Exception as e:
            # repository broke its contract; keep the failure local to this doc
            log.debug("Lookup for api_id=%r raised %r", doc.api_id, e)
            return self._lookup_failed(error, f"{type(e).__name__}: {e}", e)
        if not isinstance(resource, Resource):
            return self._lookup_failed(
                error, f"repository returned {resource!r} for api_id={doc.api_id!r}"
            )
        return Success(resource)

    @staticmethod
    def _lookup_failed(
        error: CreationError, reason: str, cause: BaseException | None = None
    ) -> Failure:
        return Failure(
            CreationError(
                ErrorKind.LOOKUP_FAILED,
                f"{error.message}; lookup failed: {reason}",
                cause,
            )
        )

    @staticmethod
    def _handle_special(doc: Doc, error: CreationError) -> Result[Resource]:
        return Success(Resource())

    @staticmethod
    def _set_processed(doc: Doc, resource: Resource) -> Doc:
        return doc.copy_with(DocStatus.PROCESSED, resource)

    @staticmethod
    def _set_failed(doc: Doc, error: CreationError) -> Doc:
        return doc.copy_with(DocStatus.FAILED, error)


def summarize(outcomes: Iterable[Doc]) -> FeedSummary:
    processed = failed = 0
    for doc in outcomes:
        if doc.status is DocStatus.PROCESSED:
            processed += 1
        elif doc.status is DocStatus.FAILED:
            failed += 1
    return FeedSummary(processed=processed, failed=failed)
