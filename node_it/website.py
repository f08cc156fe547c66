"""
Flask development server for the personal site.

The app renders the same Jinja2 templates and page data as the static
build, so what you preview locally is what gets published. Assets are
served from ``/public`` to match the layout of the built tree.
"""

import logging
import os

from flask import Flask, current_app, render_template
from werkzeug.exceptions import HTTPException

from .config import DEFAULT_USER_CONFIG
from .pages import (
    ABOUT_TITLE,
    CONTACT_TITLE,
    HOME_TITLE,
    page_context,
    profile_title,
    profile_user,
)

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
TEMPLATE_DIR = os.path.abspath(os.path.join(BASE_DIR, "templates"))
STATIC_DIR = os.path.abspath(os.path.join(BASE_DIR, "public"))
LOGGER = logging.getLogger(__name__)


def _base_path():
    return current_app.config["BASE_PATH"]


def index():
    """Render the home page."""

    return render_template("index.html", **page_context(HOME_TITLE, _base_path()))


def about():
    """Render the about page."""

    return render_template("about.html", **page_context(ABOUT_TITLE, _base_path()))


def contact():
    """Render the contact page."""

    return render_template("contact.html", **page_context(CONTACT_TITLE, _base_path()))


def profile():
    """Render the profile page from the configured user record."""

    user = profile_user(current_app.config["USER_CONFIG"])
    return render_template(
        "profile.html",
        **page_context(profile_title(user), _base_path(), user=user),
    )


def handle_http_error(error):
    """
    Render the error page for HTTP errors such as 404.

    :param error: Werkzeug ``HTTPException``.
    :returns: Rendered HTML response with the error's status code.
    """

    status = error.code or 500
    data = page_context("Error", _base_path(), status=status, message=error.description)
    return render_template("error.html", **data), status


def handle_unexpected_error(error):
    """Log an unhandled exception and render a generic 500 page."""

    current_app.logger.exception("Unhandled error while rendering a page")
    message = str(error) if current_app.debug else "Internal Server Error"
    data = page_context("Error", _base_path(), status=500, message=message)
    return render_template("error.html", **data), 500


def create_app(*, user_config=None, base_path=""):
    """
    Create and configure the Flask application.

    :param user_config: Optional user configuration record for the profile
        page; defaults to :data:`node_it.config.DEFAULT_USER_CONFIG`.
    :param base_path: URL prefix used in rendered links (``""`` locally).
    :returns: Configured Flask app instance.
    """

    LOGGER.debug("Templates directory: %s", TEMPLATE_DIR)
    app = Flask(
        __name__,
        template_folder=TEMPLATE_DIR,
        static_folder=STATIC_DIR,
        static_url_path="/public",
    )
    app.config["USER_CONFIG"] = user_config or DEFAULT_USER_CONFIG
    app.config["BASE_PATH"] = base_path
    app.add_url_rule("/", "index", index)
    app.add_url_rule("/about/", "about", about)
    app.add_url_rule("/contact/", "contact", contact)
    app.add_url_rule("/profile/", "profile", profile)
    app.register_error_handler(HTTPException, handle_http_error)
    app.register_error_handler(Exception, handle_unexpected_error)
    return app
