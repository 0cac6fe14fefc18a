from __future__ import annotations

import click
from flask import Flask, current_app

from blogapi.extensions import db
from blogapi.repositories.blog import get_category_by_name
from blogapi.repositories.user import get_user_by_username
from blogapi.schemas.categories import CategoryCreate
from blogapi.services.auth import create_user
from blogapi.services.categories import create_category
from blogapi.services.maintenance import recount_everything, rewrite_local_image_urls

DEFAULT_CATEGORIES = [
    {
        "name": "Abertura de Empresas",
        "description": "Artigos sobre abertura e formalização de empresas",
        "color": "#3B82F6",
    },
    {
        "name": "Imposto de Renda",
        "description": "Dicas e orientações sobre declaração de IR",
        "color": "#10B981",
    },
    {
        "name": "Consultoria",
        "description": "Serviços de consultoria contábil e empresarial",
        "color": "#F59E0B",
    },
    {
        "name": "Legislação",
        "description": "Atualizações e mudanças na legislação",
        "color": "#EF4444",
    },
    {
        "name": "Dicas",
        "description": "Dicas e orientações para empreendedores",
        "color": "#8B5CF6",
    },
]


def register_commands(app: Flask) -> None:
    @app.cli.command("init-db")
    def init_db() -> None:
        """Create all tables."""
        db.create_all()
        click.echo("Database tables created")

    @app.cli.command("create-admin")
    @click.option("--username", prompt=True)
    @click.option("--email", prompt=True)
    @click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
    def create_admin(username: str, email: str, password: str) -> None:
        if get_user_by_username(username):
            click.echo("User already exists")
            return
        create_user(username, email, password, is_admin=True)
        click.echo("Admin user created")

    @app.cli.command("seed")
    def seed() -> None:
        """Create the default categories, skipping ones that already exist."""
        created = 0
        for data in DEFAULT_CATEGORIES:
            if get_category_by_name(data["name"]):
                click.echo(f"Category '{data['name']}' already exists")
                continue
            cat = create_category(CategoryCreate(**data))
            created += 1
            click.echo(f"Category '{cat.name}' created ({cat.slug})")
        click.echo(f"Seed complete: {created} categories created")

    @app.cli.command("fix-image-urls")
    @click.option("--base-url", default=None, help="Public origin serving /uploads (defaults to PUBLIC_BASE_URL)")
    def fix_image_urls(base_url: str | None) -> None:
        """Rewrite localhost image URLs stored on posts."""
        base_url = base_url or current_app.config["PUBLIC_BASE_URL"]
        changed = rewrite_local_image_urls(base_url)
        click.echo(f"{changed} posts updated")

    @app.cli.command("recount")
    def recount() -> None:
        """Recompute every category and tag posts counter."""
        categories, tags = recount_everything()
        click.echo(f"Recounted {len(categories)} categories and {len(tags)} tags")
