"""Shared fixtures for the hostname service tests."""

import pytest

from helpers import InMemoryHostnameStore, InMemoryTemplateStore, make_template


@pytest.fixture()
def template():
    return make_template()


@pytest.fixture()
def template_store(template):
    return InMemoryTemplateStore(template)


@pytest.fixture()
def hostname_store():
    return InMemoryHostnameStore()
