"""
Tests for the offline fallback page.
"""

from offline_gateway.services import offline_response, render_offline_page


def test_page_is_self_contained():
    page = render_offline_page("The Language of Wearing")

    assert page.startswith("<!DOCTYPE html>")
    assert "<title>Offline - The Language of Wearing</title>" in page
    assert "Try Again" in page
    assert "window.location.reload()" in page
    assert "addEventListener('online'" in page
    assert "<link" not in page
    assert "src=" not in page


def test_app_name_is_escaped():
    page = render_offline_page("<Wear & Tear>")

    assert "&lt;Wear &amp; Tear&gt;" in page
    assert "<Wear & Tear>" not in page


def test_response_is_fresh_each_time():
    first = offline_response("App")
    second = offline_response("App")

    assert first.status == 200
    assert first.headers["Content-Type"] == "text/html; charset=utf-8"
    assert first.headers["Cache-Control"] == "no-store"
    assert first is not second
    assert first.body == second.body
