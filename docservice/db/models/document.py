from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from docservice.db.base import Base


class Document(Base):
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(512), nullable=False, default="")
    internal_note = Column(Text, nullable=False, default="")

    # Relationships
    groups = relationship(
        "DocumentGroup",
        back_populates="document",
        cascade="all, delete-orphan",
        order_by="DocumentGroup.position",
        lazy="selectin",
    )


class DocumentGroup(Base):
    __tablename__ = "document_groups"

    id = Column(Integer, primary_key=True, autoincrement=True)
    document_id = Column(Integer, ForeignKey("documents.id", ondelete="CASCADE"), nullable=False, index=True)
    # порядок, в котором группа была сохранена
    position = Column(Integer, nullable=False)
    sort = Column(Integer, nullable=False, default=0)
    name = Column(String(255), nullable=False, default="")
    internal_note = Column(Text, nullable=False, default="")

    # Relationships
    document = relationship("Document", back_populates="groups")
    entries = relationship(
        "GroupEntry",
        back_populates="group",
        cascade="all, delete-orphan",
        order_by="GroupEntry.position",
        lazy="selectin",
    )


class GroupEntry(Base):
    __tablename__ = "group_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    group_id = Column(Integer, ForeignKey("document_groups.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    key = Column(Text, nullable=False, default="")
    value = Column(Text, nullable=False, default="")
    internal_note = Column(Text, nullable=False, default="")

    # Relationships
    group = relationship("DocumentGroup", back_populates="entries")
