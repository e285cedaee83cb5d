import datetime

from maze_explorer import db


class ExplorationRun(db.Model):
    """One explorer run: the append-only stats record."""

    __tablename__ = "exploration_runs"
    id = db.Column(db.Integer, primary_key=True)
    created_at = db.Column(db.DateTime, default=lambda: datetime.datetime.now(datetime.timezone.utc), nullable=False)
    algorithm = db.Column(db.String(16), nullable=False)
    expansions = db.Column(db.Integer, nullable=False, default=0)
    path_length = db.Column(db.Integer, nullable=False, default=0)
    found = db.Column(db.Boolean, nullable=False, default=False)
    seed = db.Column(db.BigInteger)
    width = db.Column(db.Integer)
    height = db.Column(db.Integer)

    @classmethod
    def from_record(cls, rec):
        return cls(
            created_at=rec.timestamp,
            algorithm=rec.algorithm,
            expansions=rec.expansions,
            path_length=rec.path_length,
            found=rec.found,
            seed=rec.seed,
            width=rec.width,
            height=rec.height,
        )

    def to_dict(self):
        return {
            "id": self.id,
            "timestamp": self.created_at.isoformat() if self.created_at else None,
            "algorithm": self.algorithm,
            "expansions": self.expansions,
            "path_length": self.path_length,
            "found": self.found,
            "seed": self.seed,
            "width": self.width,
            "height": self.height,
        }

    def __repr__(self):
        return f"<ExplorationRun {self.id} {self.algorithm} expansions={self.expansions} path={self.path_length}>"
