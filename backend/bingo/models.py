from bingo import db
from typing import List


class Phrase(db.Model):
    __tablename__ = 'phrase'
    id = db.Column(db.Integer, primary_key=True)
    text = db.Column(db.Text, unique=True, nullable=False)
    enabled = db.Column(db.Boolean, default=True, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'text': self.text,
            'enabled': self.enabled,
        }


def enabled_phrase_texts() -> List[str]:
    """Texts of all enabled phrases in random order."""
    rows = Phrase.query.filter_by(enabled=True).order_by(db.func.random()).all()
    return [row.text for row in rows]


def add_phrases(texts) -> int:
    """Insert phrases that are not stored yet. Returns how many were added."""
    existing = {row.text for row in Phrase.query.with_entities(Phrase.text).all()}
    added = 0
    for text in texts:
        if text in existing:
            continue
        db.session.add(Phrase(text=text, enabled=True))
        existing.add(text)
        added += 1
    db.session.commit()
    return added
