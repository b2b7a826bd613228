from sqlalchemy import update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from ..extensions import db

_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class Stat(db.Model):
    __tablename__ = "stats"

    key = db.Column(db.String(64), primary_key=True)
    value = db.Column(db.Integer, nullable=False, default=0)

    @staticmethod
    def increment(key: str) -> None:
        """
        Adds one to the counter inside the database (value = value + 1).
        On Postgres/SQLite this is a single INSERT ... ON CONFLICT DO UPDATE,
        so an unseeded counter can't fail a concurrent first submission.
        Does not commit; the caller owns the transaction.
        """
        insert = _UPSERT_INSERTS.get(db.session.get_bind().dialect.name)
        if insert is not None:
            stmt = insert(Stat).values(key=key, value=1)
            db.session.execute(stmt.on_conflict_do_update(
                index_elements=[Stat.key],
                set_={"value": Stat.value + 1},
            ))
            return

        result = db.session.execute(
            update(Stat).where(Stat.key == key).values(value=Stat.value + 1)
        )
        if result.rowcount == 0:
            db.session.add(Stat(key=key, value=1))

    @staticmethod
    def get_value(key: str) -> int:
        stat = db.session.get(Stat, key)
        return stat.value if stat else 0
