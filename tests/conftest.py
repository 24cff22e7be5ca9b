"""Pytest fixtures shared by the clinicdocs tests."""

import pytest

import factories


@pytest.fixture
def single_item_invoice():
    return factories.single_item_invoice()


@pytest.fixture
def large_invoice():
    return factories.large_invoice()


@pytest.fixture
def form_pdf():
    """Text field 'owner' plus checkbox 'vaccinated'."""
    return factories.text_and_checkbox_pdf()


@pytest.fixture
def radio_pdf():
    return factories.radio_group_pdf()


@pytest.fixture
def listbox_pdf():
    return factories.choice_pdf()
