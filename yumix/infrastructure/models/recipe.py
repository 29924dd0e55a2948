"""SQLAlchemy models for recipes and the recipe history."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    and_,
    func,
)
from sqlalchemy.sql import expression

from yumix.infrastructure.database import Base
from yumix.utils import now_in_app_naive_datetime


class RecipeModel(Base):
    """Database representation of a local or externally sourced recipe."""

    __tablename__ = "recipe"

    id = Column(Integer, primary_key=True, index=True)
    source_id = Column(String(100), nullable=True)
    source_type = Column(String(20), nullable=False, default="local", index=True)
    name = Column(String(255), nullable=False)
    image = Column(String(500), nullable=True)
    is_featured = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    view_count = Column(Integer, nullable=False, default=0, server_default="0")
    favorite_count = Column(Integer, nullable=False, default=0, server_default="0")
    search_count = Column(Integer, nullable=False, default=0, server_default="0")
    last_viewed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())

    __table_args__ = (
        Index("ix_recipe_view_count", view_count.desc()),
        Index("ix_recipe_favorite_count", favorite_count.desc()),
        Index("ix_recipe_search_count", search_count.desc()),
    )


class RecipeHistoryModel(Base):
    """A recipe viewed or searched by a user."""

    __tablename__ = "recipe_history"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False
    )
    recipe_id = Column(
        Integer, ForeignKey("recipe.id", ondelete="SET NULL"), nullable=True, index=True
    )
    source_type = Column(String(20), nullable=False, default="local")
    source_id = Column(String(100), nullable=True)
    recipe_name = Column(String(255), nullable=True)
    search_query = Column(String(255), nullable=True)
    from_search = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
        index=True,
    )
    viewed_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())

    __table_args__ = (
        # One entry per (user, recipe) while the recipe row exists.
        Index(
            "ux_recipe_history_user_recipe",
            "user_id",
            "recipe_id",
            unique=True,
            sqlite_where=recipe_id.isnot(None),
            postgresql_where=recipe_id.isnot(None),
        ),
        # Detached entries fall back to the denormalized source identity.
        Index(
            "ux_recipe_history_user_source",
            "user_id",
            "source_id",
            "source_type",
            unique=True,
            sqlite_where=and_(
                source_id.isnot(None), source_id != "", recipe_id.is_(None)
            ),
            postgresql_where=and_(
                source_id.isnot(None), source_id != "", recipe_id.is_(None)
            ),
        ),
        Index("ix_recipe_history_user_viewed", "user_id", viewed_at.desc()),
    )


__all__ = ["RecipeHistoryModel", "RecipeModel"]
