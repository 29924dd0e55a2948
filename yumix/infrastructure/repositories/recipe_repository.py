"""Persistence layer for recipes and the recipe history."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from yumix.domain.entities import EXTERNAL_SOURCE_TYPES, Recipe, RecipeHistoryEntry
from yumix.infrastructure.models import RecipeHistoryModel, RecipeModel
from yumix.utils import ensure_app_naive_datetime, ensure_app_timezone


class RecipeRepository:
    """Provide CRUD helpers for :class:`Recipe` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, recipe_id: int) -> Recipe | None:
        model = self.session.get(RecipeModel, recipe_id)
        return self._to_entity(model) if model else None

    def create(self, recipe: Recipe) -> Recipe:
        model = RecipeModel()
        model.name = recipe.name
        model.source_type = recipe.source_type
        model.source_id = recipe.source_id
        model.image = recipe.image
        model.is_featured = recipe.is_featured
        model.view_count = recipe.view_count
        model.favorite_count = recipe.favorite_count
        model.search_count = recipe.search_count
        model.last_viewed_at = ensure_app_naive_datetime(recipe.last_viewed_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_top_external_ids(self, limit: int) -> list[int]:
        """Return ids of the ``limit`` most viewed external recipes."""

        if limit <= 0:
            return []
        query = (
            self.session.query(RecipeModel.id)
            .filter(RecipeModel.source_type.in_(EXTERNAL_SOURCE_TYPES))
            .order_by(RecipeModel.view_count.desc(), RecipeModel.id)
            .limit(limit)
        )
        return [recipe_id for (recipe_id,) in query.all()]

    def list_favorited_external_ids(self) -> list[int]:
        query = (
            self.session.query(RecipeModel.id)
            .filter(RecipeModel.source_type.in_(EXTERNAL_SOURCE_TYPES))
            .filter(RecipeModel.favorite_count > 0)
            .order_by(RecipeModel.id)
        )
        return [recipe_id for (recipe_id,) in query.all()]

    def list_external_ids_excluding(self, keep_ids: Iterable[int]) -> list[int]:
        keep = list(keep_ids)
        query = self.session.query(RecipeModel.id).filter(
            RecipeModel.source_type.in_(EXTERNAL_SOURCE_TYPES)
        )
        if keep:
            query = query.filter(RecipeModel.id.notin_(keep))
        return [recipe_id for (recipe_id,) in query.order_by(RecipeModel.id).all()]

    def delete_detaching_history(self, recipe_id: int) -> int | None:
        """Delete a recipe after nulling the history rows that reference it.

        Everything commits together. A user holds at most one detached entry
        per source, so an older detached entry for the same source is merged
        into the one being detached, which keeps the latest ``viewed_at``.
        Returns the number of detached history rows, or ``None`` when the
        recipe no longer exists.
        """

        model = self.session.get(RecipeModel, recipe_id)
        if model is None:
            return None
        self._merge_detached_duplicates(recipe_id)
        detached = (
            self.session.query(RecipeHistoryModel)
            .filter(RecipeHistoryModel.recipe_id == recipe_id)
            .update({RecipeHistoryModel.recipe_id: None}, synchronize_session=False)
        )
        self.session.delete(model)
        self.session.commit()
        return detached

    def _merge_detached_duplicates(self, recipe_id: int) -> None:
        referencing = (
            self.session.query(RecipeHistoryModel)
            .filter(RecipeHistoryModel.recipe_id == recipe_id)
            .filter(RecipeHistoryModel.source_id.isnot(None))
            .filter(RecipeHistoryModel.source_id != "")
            .all()
        )
        for entry in referencing:
            duplicates = (
                self.session.query(RecipeHistoryModel)
                .filter(RecipeHistoryModel.user_id == entry.user_id)
                .filter(RecipeHistoryModel.source_id == entry.source_id)
                .filter(RecipeHistoryModel.source_type == entry.source_type)
                .filter(RecipeHistoryModel.recipe_id.is_(None))
                .all()
            )
            for duplicate in duplicates:
                if duplicate.viewed_at and (
                    entry.viewed_at is None or duplicate.viewed_at > entry.viewed_at
                ):
                    entry.viewed_at = duplicate.viewed_at
                self.session.delete(duplicate)
        self.session.flush()

    @staticmethod
    def _to_entity(model: RecipeModel) -> Recipe:
        return Recipe(
            id=model.id,
            name=model.name,
            source_type=model.source_type,
            source_id=model.source_id,
            image=model.image,
            is_featured=model.is_featured,
            view_count=model.view_count,
            favorite_count=model.favorite_count,
            search_count=model.search_count,
            last_viewed_at=ensure_app_timezone(model.last_viewed_at),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


class RecipeHistoryRepository:
    """Provide CRUD helpers for :class:`RecipeHistoryEntry` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, entry_id: int) -> RecipeHistoryEntry | None:
        model = self.session.get(RecipeHistoryModel, entry_id)
        return self._to_entity(model) if model else None

    def create(self, entry: RecipeHistoryEntry) -> RecipeHistoryEntry:
        model = RecipeHistoryModel()
        model.user_id = entry.user_id
        model.recipe_id = entry.recipe_id
        model.source_type = entry.source_type
        model.source_id = entry.source_id
        model.recipe_name = entry.recipe_name
        model.search_query = entry.search_query
        model.from_search = entry.from_search
        if entry.viewed_at is not None:
            model.viewed_at = ensure_app_naive_datetime(entry.viewed_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_for_user(self, user_id: int) -> Sequence[RecipeHistoryEntry]:
        query = (
            self.session.query(RecipeHistoryModel)
            .filter(RecipeHistoryModel.user_id == user_id)
            .order_by(RecipeHistoryModel.viewed_at.desc(), RecipeHistoryModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: RecipeHistoryModel) -> RecipeHistoryEntry:
        return RecipeHistoryEntry(
            id=model.id,
            user_id=model.user_id,
            recipe_id=model.recipe_id,
            source_type=model.source_type,
            source_id=model.source_id,
            recipe_name=model.recipe_name,
            search_query=model.search_query,
            from_search=model.from_search,
            viewed_at=ensure_app_timezone(model.viewed_at),
        )


__all__ = ["RecipeHistoryRepository", "RecipeRepository"]
