"""
Vocabulary-level operations: scheme metadata and the integrity report.
"""

from __future__ import annotations

from dataclasses import asdict

from fitsm.core.errors import DatasetError, DatasetIntegrityError
from fitsm.core.logging import get_logger
from fitsm.ops.context import OperationContext
from fitsm.ops.responses import IntegrityReport, VocabularyInfo
from fitsm.ops.result import INTERNAL, OperationResult, start_timer
from fitsm.vocabulary.integrity import check_integrity

logger = get_logger(__name__)


def get_vocabulary_info(ctx: OperationContext) -> OperationResult[VocabularyInfo]:
    """Scheme metadata plus live counts over the current term set."""
    timer = start_timer()

    try:
        repo = ctx.repository
        meta = repo.metadata()
        info = VocabularyInfo(
            title=meta.title,
            version=meta.version,
            description=meta.description,
            source=meta.source,
            publisher=meta.publisher,
            license=meta.license,
            last_modified=meta.last_modified,
            term_count=len(repo),
            relationship_count=repo.relationship_count(),
            categories=repo.categories(),
            letters=[g.letter for g in repo.letter_index()],
            relationship_types=[rt.model_dump() for rt in repo.relationship_types()],
        )
        return OperationResult.ok(info, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("op_failed", op="get_vocabulary_info", error=str(exc))
        return OperationResult.fail(INTERNAL, f"Failed to read vocabulary info: {exc}", elapsed_ms=timer.elapsed_ms)


def check_vocabulary(ctx: OperationContext) -> OperationResult[IntegrityReport]:
    """Run the integrity rules over the current term set.

    A dataset that fails strict validation at load is reported rather than
    raised, so the report is available even when the service would refuse
    to start.
    """
    timer = start_timer()
    repo = ctx.repository

    try:
        terms = repo.get_all()
        violations = check_integrity(terms)
        term_count = len(terms)
    except DatasetIntegrityError as exc:
        violations = exc.violations
        term_count = exc.context.get("term_count", 0)
    except DatasetError as exc:
        logger.error("dataset_unavailable", error=str(exc))
        return OperationResult.fail(
            INTERNAL,
            str(exc),
            category=exc.category,
            details=exc.context,
            elapsed_ms=timer.elapsed_ms,
        )
    except Exception as exc:
        logger.exception("op_failed", op="check_vocabulary", error=str(exc))
        return OperationResult.fail(INTERNAL, f"Integrity check failed: {exc}", elapsed_ms=timer.elapsed_ms)

    report = IntegrityReport(
        term_count=term_count,
        strict=repo.strict,
        valid=not violations,
        violations=[asdict(v) for v in violations],
    )
    return OperationResult.ok(report, elapsed_ms=timer.elapsed_ms)
