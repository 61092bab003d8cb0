"""
FAQ Models.
"""

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from sitekit.backend.models.base import Base, CreatedAtMixin, IdMixin, SortableMixin


class FaqCategory(IdMixin, Base):
    __tablename__ = "faq_categories"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    sort_order: Mapped[int] = mapped_column(default=0, nullable=False)


class FaqItem(IdMixin, SortableMixin, CreatedAtMixin, Base):
    __tablename__ = "faq_items"

    category_id: Mapped[int | None] = mapped_column(
        ForeignKey("faq_categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    question: Mapped[str] = mapped_column(Text, nullable=False)
    answer: Mapped[str] = mapped_column(Text, nullable=False)
