"""
Shared fixtures: an app on in-memory SQLite, a test client and JWTs
carrying the role claim the capability check reads.
"""
import pytest
from flask_jwt_extended import create_access_token

from spmi import create_app
from spmi.extensions import db
from spmi.models import HomeSection, LandingPage, Page


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield app
        db.session.remove()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def cli_runner(app):
    return app.test_cli_runner()


def _auth_headers(app, identity, role):
    with app.app_context():
        token = create_access_token(identity=identity, additional_claims={"role": role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(app):
    return _auth_headers(app, "admin-1", "admin")


@pytest.fixture
def editor_headers(app):
    return _auth_headers(app, "editor-1", "editor")


@pytest.fixture
def make_page(app):
    """Insert a page row and return its id."""
    def _make_page(slug="visi-misi", content=None, is_published=True):
        with app.app_context():
            page = Page()
            page.title = slug.replace("-", " ").title()
            page.slug = slug
            page.is_published = is_published
            page.content = content
            db.session.add(page)
            db.session.commit()
            return page.id
    return _make_page


@pytest.fixture
def make_home_section(app):
    def _make_home_section(content=None, order=0):
        with app.app_context():
            section = HomeSection()
            section.order = order
            section.content = content
            db.session.add(section)
            db.session.commit()
            return section.id
    return _make_home_section


@pytest.fixture
def make_landing_page(app):
    def _make_landing_page(slug="penerimaan", content=None):
        with app.app_context():
            landing_page = LandingPage()
            landing_page.title = slug.title()
            landing_page.slug = slug
            landing_page.content = content
            db.session.add(landing_page)
            db.session.commit()
            return landing_page.id
    return _make_landing_page
