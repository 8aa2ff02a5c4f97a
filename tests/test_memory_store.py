import threading

import pytest

from uniform_app.errors import DuplicateItem, InvalidState, ItemNotFound, StudentNotFound
from uniform_app.models.student import StudentUpdate, UniformStatus
from tests.conftest import add_item


def test_find_item_by_identity(store, shirt):
    found = store.find_item('SCH001', 'Shirt', 'M')
    assert found.id == shirt.id
    assert store.find_item('SCH001', 'Shirt', 'L') is None
    assert store.find_item('SCH002', 'Shirt', 'M') is None


def test_duplicate_identity_rejected(store, shirt):
    with pytest.raises(DuplicateItem):
        add_item(store, item_type='Shirt', size='M', quantity=3)
    assert len(store.list_items('SCH001')) == 1


def test_list_items_per_school_and_all(store, shirt):
    add_item(store, school_id='SCH002', item_type='Sweater', size='L')
    assert [i.id for i in store.list_items('SCH001')] == [shirt.id]
    assert len(store.list_items()) == 2


def test_adjust_quantity(store, shirt):
    assert store.adjust_quantity(shirt.id, -4).quantity == 6
    assert store.adjust_quantity(shirt.id, 2).quantity == 8
    assert store.get_item(shirt.id).quantity == 8


def test_adjust_quantity_to_zero_is_allowed(store, shirt):
    assert store.adjust_quantity(shirt.id, -10).quantity == 0


def test_adjust_quantity_below_zero_fails(store, shirt):
    with pytest.raises(InvalidState):
        store.adjust_quantity(shirt.id, -11)
    assert store.get_item(shirt.id).quantity == 10


def test_adjust_unknown_item(store):
    with pytest.raises(ItemNotFound):
        store.adjust_quantity('missing', 1)


def test_returned_items_are_copies(store, shirt):
    shirt.quantity = 999
    assert store.get_item(shirt.id).quantity == 10


def test_concurrent_decrements_never_go_negative(store, shirt):
    barrier = threading.Barrier(20)
    failures = []

    def take_one():
        barrier.wait()
        try:
            store.adjust_quantity(shirt.id, -1)
        except InvalidState:
            failures.append(1)

    threads = [threading.Thread(target=take_one) for _ in range(20)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert store.get_item(shirt.id).quantity == 0
    assert len(failures) == 10


def test_set_uniform_status(store, student):
    updated = store.set_uniform_status(student.id, UniformStatus.NEEDS_REPAIR)
    assert updated.uniform_status == UniformStatus.NEEDS_REPAIR
    with pytest.raises(StudentNotFound):
        store.set_uniform_status('missing', UniformStatus.ISSUED)


def test_update_student_changes_only_sent_fields(store, student):
    updated = store.update_student(student.id, StudentUpdate(uniform_status=UniformStatus.GOOD, grade=None))
    assert updated.uniform_status == UniformStatus.GOOD
    assert updated.grade == 'Grade 4'
    assert updated.name == student.name
    with pytest.raises(StudentNotFound):
        store.update_student('missing', StudentUpdate(grade='Grade 5'))
