import click
from flask import current_app
from sqlalchemy import func

from .extensions import db
from .models.stat import Stat
from .models.submission import Submission
from .services.flames import compute, leftover_count


def register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Create the tables and seed the submission counter."""
        db.create_all()
        key = current_app.config["STATS_COUNTER_KEY"]
        if db.session.get(Stat, key) is None:
            db.session.add(Stat(key=key, value=0))
            db.session.commit()
            click.echo(f"Seeded counter {key}")
        click.echo("Database ready.")

    @app.cli.command("stats")
    def stats():
        """Print the submission counter and stored row count."""
        key = current_app.config["STATS_COUNTER_KEY"]
        rows = db.session.query(func.count(Submission.id)).scalar() or 0
        click.echo(f"{key}: {Stat.get_value(key)}")
        click.echo(f"rows: {rows}")

    @app.cli.command("flames")
    @click.argument("name")
    @click.argument("crush")
    def flames(name, crush):
        """Compute the FLAMES label for two names."""
        click.echo(f"{compute(name, crush)} (leftover letters: {leftover_count(name, crush)})")
