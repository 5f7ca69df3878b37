"""
SQLAlchemy row models for evaluations.

Table-per-concrete-class: LIKES and COMMENTAIRES share no table, their
ids come from the same sequence (SEQ_EVAL).
"""

from sqlalchemy import CheckConstraint, Column, Date, ForeignKey, Integer, String, Text, UniqueConstraint

from .base import Base


class BasicEvaluationModel(Base):
    """Row model for LIKES."""

    __tablename__ = "LIKES"

    id = Column("numero", Integer, primary_key=True, autoincrement=False)
    # '1' = like, '0' = dislike (see data.converters)
    appreciation = Column(String(1), nullable=False)
    visit_date = Column("date_eval", Date, nullable=False)
    ip_address = Column("adresse_ip", String(100), nullable=False)
    restaurant_id = Column("fk_rest", Integer, ForeignKey("RESTAURANTS.numero"), nullable=False, index=True)
    version = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<BasicEvaluationModel(numero={self.id}, appreciation={self.appreciation}, fk_rest={self.restaurant_id})>"


class CompleteEvaluationModel(Base):
    """Row model for COMMENTAIRES."""

    __tablename__ = "COMMENTAIRES"

    id = Column("numero", Integer, primary_key=True, autoincrement=False)
    visit_date = Column("date_eval", Date, nullable=False)
    restaurant_id = Column("fk_rest", Integer, ForeignKey("RESTAURANTS.numero"), nullable=False, index=True)
    comment = Column("commentaire", Text, nullable=False)
    username = Column("nom_utilisateur", String(100), nullable=False)
    version = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<CompleteEvaluationModel(numero={self.id}, fk_rest={self.restaurant_id})>"


class GradeModel(Base):
    """Row model for NOTES."""

    __tablename__ = "NOTES"

    id = Column("numero", Integer, primary_key=True, autoincrement=False)
    grade = Column("note", Integer, nullable=False)
    evaluation_id = Column("fk_comm", Integer, ForeignKey("COMMENTAIRES.numero"), nullable=False, index=True)
    criteria_id = Column("fk_crit", Integer, ForeignKey("CRITERES_EVALUATION.numero"), nullable=False, index=True)
    version = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("note BETWEEN 1 AND 5", name="ck_notes_note_range"),
        UniqueConstraint("fk_comm", "fk_crit", name="uq_notes_comm_crit"),
    )

    def __repr__(self):
        return f"<GradeModel(numero={self.id}, note={self.grade}, fk_comm={self.evaluation_id})>"
