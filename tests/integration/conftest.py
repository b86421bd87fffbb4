"""Fixtures for tests that drive the assembled application.

Requests travel through the app's middleware, which pushes the ordering or
storefront domain context from the URL prefix, so these tests do not open a
domain context of their own.
"""

import pytest
from fastapi.testclient import TestClient
from protean import current_domain


@pytest.fixture()
def client(cart_dir):
    from app import app

    yield TestClient(app)

    from ordering.domain import ordering
    from storefront.domain import storefront

    for domain in (ordering, storefront):
        with domain.domain_context():
            for _, provider in current_domain.providers.items():
                provider._data_reset()
            current_domain.event_store.store._data_reset()
