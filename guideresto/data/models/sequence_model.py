"""
Identifier sources.

Native sequences are declared on the metadata so ``create_all`` creates
them on dialects that support sequences; SEQUENCES backs the table
strategy everywhere else (SQLite).
"""

from sqlalchemy import Column, Integer, Sequence, String

from .base import Base

SEQ_VILLES = "SEQ_VILLES"
SEQ_TYPES_GASTRONOMIQUES = "SEQ_TYPES_GASTRONOMIQUES"
SEQ_RESTAURANTS = "SEQ_RESTAURANTS"
SEQ_EVAL = "SEQ_EVAL"
SEQ_NOTES = "SEQ_NOTES"
SEQ_CRITERES_EVALUATION = "SEQ_CRITERES_EVALUATION"

SEQUENCE_NAMES = (
    SEQ_VILLES,
    SEQ_TYPES_GASTRONOMIQUES,
    SEQ_RESTAURANTS,
    SEQ_EVAL,
    SEQ_NOTES,
    SEQ_CRITERES_EVALUATION,
)

SEQUENCES = {
    name: Sequence(name, start=1, increment=1, metadata=Base.metadata)
    for name in SEQUENCE_NAMES
}


class SequenceModel(Base):
    """Row model for SEQUENCES: last value handed out per sequence name."""

    __tablename__ = "SEQUENCES"

    name = Column("nom", String(64), primary_key=True)
    value = Column("valeur", Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<SequenceModel(nom={self.name}, valeur={self.value})>"
