from moleboard import db


class Score(db.Model):
    """Best score of one fid on one UTC day."""
    __tablename__ = 'scores'
    __table_args__ = (
        db.UniqueConstraint('fid', 'date', name='uq_scores_fid_date'),
        db.Index('ix_scores_date_score', 'date', 'score'),
    )

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    fid = db.Column(db.Text, nullable=False)
    username = db.Column(db.String(64), nullable=False, default='anon')
    score = db.Column(db.Integer, nullable=False)
    date = db.Column(db.String(10), nullable=False)  # YYYY-MM-DD (UTC)
    created_at = db.Column(db.BigInteger, nullable=False)  # epoch ms of last accepted improvement

    def to_dict(self):
        return {
            'username': self.username,
            'score': self.score,
        }
