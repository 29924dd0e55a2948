"""Daily cleanup of externally sourced recipes nobody is holding on to."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from yumix.config import get_settings
from yumix.infrastructure.repositories import RecipeRepository

logger = logging.getLogger(__name__)


@dataclass
class RecipeSweepResult:
    """Outcome of a recipe retention sweep."""

    kept: list[int] = field(default_factory=list)
    deleted: list[int] = field(default_factory=list)
    history_detached: int = 0
    failed: list[int] = field(default_factory=list)

    def as_dict(self) -> dict[str, object]:
        return {
            "kept": len(self.kept),
            "deleted": len(self.deleted),
            "history_detached": self.history_detached,
            "failed": len(self.failed),
        }


def compute_keep_set(session: Session, *, top_viewed: int | None = None) -> set[int]:
    """Return the ids of external recipes that survive the sweep.

    The keep-set is the union of the ``top_viewed`` most viewed external
    recipes and every external recipe favorited at least once.
    """

    if top_viewed is None:
        top_viewed = get_settings().recipe_keep_top_viewed
    repository = RecipeRepository(session)
    return set(repository.list_top_external_ids(top_viewed)) | set(
        repository.list_favorited_external_ids()
    )


def sweep_stale_recipes(
    session: Session, *, top_viewed: int | None = None
) -> RecipeSweepResult:
    """Delete external recipes outside the keep-set and detach their history.

    Each recipe is removed in its own transaction together with the nulling
    of the history rows that pointed at it, so history entries keep their
    ``source_id``/``source_type`` and never reference a missing recipe. A
    recipe that fails is rolled back, logged and left for the next run.
    """

    logger.info("Starting recipe cleanup")
    result = RecipeSweepResult()
    repository = RecipeRepository(session)

    try:
        keep_ids = compute_keep_set(session, top_viewed=top_viewed)
        candidates = repository.list_external_ids_excluding(keep_ids)
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Error computing the recipe keep-set; cleanup aborted")
        return result

    result.kept = sorted(keep_ids)
    logger.info(
        "Keeping %d external recipes, %d eligible for cleanup",
        len(result.kept),
        len(candidates),
    )

    for recipe_id in candidates:
        try:
            detached = repository.delete_detaching_history(recipe_id)
        except SQLAlchemyError:
            session.rollback()
            logger.exception("Error deleting recipe %s", recipe_id)
            result.failed.append(recipe_id)
            continue
        if detached is None:
            continue
        result.deleted.append(recipe_id)
        result.history_detached += detached

    logger.info(
        "Recipe cleanup completed: deleted %d recipes, detached %d history entries, %d failures",
        len(result.deleted),
        result.history_detached,
        len(result.failed),
    )
    return result


__all__ = ["RecipeSweepResult", "compute_keep_set", "sweep_stale_recipes"]
