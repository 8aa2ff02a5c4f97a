"""
Pytest configuration and fixtures for the uniform stock tests
"""
import pytest
from fastapi.testclient import TestClient

from uniform_app.main import app
from uniform_app.models.inventory import InventoryItemCreate
from uniform_app.models.student import StudentCreate
from uniform_app.services.store import MemoryStore, get_store


@pytest.fixture(scope='function')
def store():
    """Fresh in-memory store per test"""
    return MemoryStore()


@pytest.fixture(scope='function')
def client(store):
    """Test client wired to the per-test store"""
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture(scope='function')
def shirt(store):
    """SCH001 medium shirts: 10 on hand, threshold 5"""
    return store.create_item(InventoryItemCreate(
        school_id='SCH001', item_type='Shirt', size='M', quantity=10, low_stock_threshold=5,
    ))


@pytest.fixture(scope='function')
def student(store):
    return store.create_student(StudentCreate(
        school_id='SCH001', name='Amani Otieno', admission_number='ADM-1001', grade='Grade 4',
    ))


def add_item(store, item_type='Shirt', size='M', quantity=10, threshold=5, school_id='SCH001'):
    """Helper to create a stock row"""
    return store.create_item(InventoryItemCreate(
        school_id=school_id, item_type=item_type, size=size, quantity=quantity, low_stock_threshold=threshold,
    ))
