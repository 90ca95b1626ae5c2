from flask import jsonify
from buzzinga.application.pages.queries import get_published_page
from buzzinga.normalizers.envelope import envelope
from buzzinga.normalizers.page import normalize_page
from . import v1_bp


@v1_bp.route("/public/pages/<slug>", methods=["GET"])
def get_public_page(slug):
    page = get_published_page(slug=slug)
    return jsonify(envelope(normalize_page(page, public=True)))
