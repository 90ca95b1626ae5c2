import click
from sqlalchemy import select
from buzzinga.extensions import db
from buzzinga.models.collection import Collection
from buzzinga.models.form import Form
from buzzinga.models.menu import Menu
from buzzinga.models.page import Page
from buzzinga.application import auth as auth_service
from buzzinga.application import collections as collection_service
from buzzinga.application import forms as form_service
from buzzinga.application import menus as menu_service
from buzzinga.application.pages.create_page import create_page

SEED_ADMIN_EMAIL = "admin@buzzinga.com"
SEED_ADMIN_PASSWORD = "admin123"


def _exists(model, slug):
    return db.session.execute(select(model.id).where(model.slug == slug)).first() is not None


def seed_database(admin_email=SEED_ADMIN_EMAIL, admin_password=SEED_ADMIN_PASSWORD):
    """
    Idempotently create the sample admin, home page, blog collection,
    main menu and contact form. Returns the admin user.
    """
    admin = auth_service.find_user_by_email(admin_email)
    if admin is None:
        admin = auth_service.register_user(
            email=admin_email,
            password=admin_password,
            name="Admin User",
            role="ADMIN",
        )
        click.echo(f"Created admin user: {admin.email}")

    if not _exists(Page, "home"):
        create_page(
            author_id=admin.id,
            data={
                "title": "Home Page",
                "slug": "home",
                "content": {
                    "blocks": [
                        {"type": "heading", "data": {"text": "Welcome to Buzzinga CMS", "level": 1}},
                        {"type": "paragraph", "data": {"text": "This is a sample home page created during database seeding."}},
                    ]
                },
                "status": "PUBLISHED",
                "description": "Welcome to Buzzinga CMS",
                "keywords": ["home", "welcome"],
                "isHomePage": True,
            },
        )
        click.echo("Created sample page: home")

    if not _exists(Collection, "blog"):
        collection_service.create_collection(
            author_id=admin.id,
            data={
                "name": "Blog Posts",
                "slug": "blog",
                "description": "Blog post collection",
                "fields": {
                    "title": {"type": "text", "required": True},
                    "content": {"type": "richtext", "required": True},
                    "excerpt": {"type": "textarea", "required": False},
                    "featuredImage": {"type": "media", "required": False},
                    "publishedAt": {"type": "date", "required": False},
                },
            },
        )
        click.echo("Created sample collection: Blog Posts")

    if not _exists(Menu, "main-menu"):
        menu_service.create_menu(
            author_id=admin.id,
            data={
                "name": "Main Menu",
                "slug": "main-menu",
                "location": "header",
                "items": [
                    {"id": "1", "label": "Home", "url": "/", "children": []},
                    {"id": "2", "label": "Blog", "url": "/blog", "children": []},
                    {"id": "3", "label": "About", "url": "/about", "children": []},
                    {"id": "4", "label": "Contact", "url": "/contact", "children": []},
                ],
            },
        )
        click.echo("Created sample menu: Main Menu")

    if not _exists(Form, "contact-form"):
        form_service.create_form(
            author_id=admin.id,
            data={
                "name": "Contact Form",
                "slug": "contact-form",
                "description": "General contact form",
                "fields": [
                    {"id": "name", "type": "text", "label": "Name", "required": True, "placeholder": "Your name"},
                    {"id": "email", "type": "email", "label": "Email", "required": True, "placeholder": "your@email.com"},
                    {"id": "message", "type": "textarea", "label": "Message", "required": True, "placeholder": "Your message", "rows": 5},
                ],
                "settings": {
                    "submitButtonText": "Send Message",
                    "successMessage": "Thank you for your message!",
                    "emailNotification": True,
                },
            },
        )
        click.echo("Created sample form: Contact Form")

    return admin


def register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables (use `flask db upgrade` once migrations exist)."""
        db.create_all()
        click.echo("Database tables created")

    @app.cli.command("create-admin")
    @click.argument("email")
    @click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
    @click.option("--name", default="Admin User")
    def create_admin(email, password, name):
        """Create an ADMIN user."""
        user = auth_service.register_user(email=email, password=password, name=name, role="ADMIN")
        click.echo(f"Created admin user: {user.email}")

    @app.cli.command("seed")
    def seed():
        """Seed sample content (safe to run repeatedly)."""
        db.create_all()
        seed_database()
        click.echo("Database seeding completed")
        click.echo(f"Login: {SEED_ADMIN_EMAIL} / {SEED_ADMIN_PASSWORD} (change it after first login)")
