"""Tests for the Streamlit dashboard sidebar, run headless with AppTest."""

import os

import pytest
from streamlit.testing.v1 import AppTest

APP_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "dashboard", "app.py")


@pytest.fixture
def app():
    at = AppTest.from_file(APP_PATH, default_timeout=60)
    at.run()
    return at


def test_default_location(app):
    assert not app.exception
    assert app.text_input(key="city").value == "Porto Alegre"
    assert app.text_input(key="country").value == "Brazil"


def test_quick_location_fills_inputs(app):
    app.button(key="quick_2").click().run()

    assert app.text_input(key="city").value == "Dhaka"
    assert app.text_input(key="country").value == "Bangladesh"


def test_quick_location_survives_next_rerun(app):
    app.button(key="quick_1").click().run()
    app.run()

    assert app.text_input(key="city").value == "Valencia"
    assert app.text_input(key="country").value == "Spain"
