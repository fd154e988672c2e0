import json

import pytest

from course_search.exceptions import PlanNotFoundError
from course_search.schedule.plans import DEFAULT_PLAN_NAME, PlanBook, generate_plan_id

from factories import item

A = item("A", ("MWF", 540, 590), course_code="CS 150")
B = item("B", ("MW", 570, 620))
D = item("D", ("TR", 540, 590))


def test_generate_plan_id():
    pid = generate_plan_id()
    assert pid.startswith("plan_")
    assert len(pid.split("_")[2]) == 7
    assert generate_plan_id() != pid


def test_create_switch_rename():
    book = PlanBook()
    a = book.create_plan("Fall")
    b = book.create_plan("Backup")
    assert book.current_plan_id == b

    book.switch_plan(a)
    assert book.current_plan().name == "Fall"
    book.switch_plan("nope")
    assert book.current_plan_id == a

    book.rename_plan(a, "Fall v2")
    assert book.get_plan(a).name == "Fall v2"
    with pytest.raises(PlanNotFoundError):
        book.rename_plan("nope", "x")


def test_current_plan_is_created_on_demand():
    book = PlanBook()
    plan = book.current_plan()
    assert plan.name == DEFAULT_PLAN_NAME
    assert book.current_plan_id == plan.id
    assert book.current_plan().id == plan.id


def test_delete_moves_current_to_first_remaining():
    book = PlanBook()
    a = book.create_plan("A")
    b = book.create_plan("B")
    book.delete_plan(b)
    assert book.current_plan_id == a
    book.delete_plan(a)
    assert book.current_plan_id is None
    assert book.plans == []


def test_duplicate_is_a_deep_copy():
    book = PlanBook()
    a = book.create_plan("Main")
    book.update_plan(a, [A])

    copy_id = book.duplicate_plan(a)
    copy = book.get_plan(copy_id)
    assert copy.name == "Main (Copy)"
    assert book.current_plan_id == copy_id
    assert [x.section_id for x in copy.items] == ["A"]

    copy.items[0].meetings[0].start_min = 0
    assert book.get_plan(a).items[0].meetings[0].start_min == 540

    assert book.duplicate_plan("nope") is None
    assert book.get_plan(book.duplicate_plan(a, "Other")).name == "Other"


def test_store_round_trip_through_plan():
    book = PlanBook()
    pid = book.create_plan("Main")

    store = book.store_for(pid)
    store.add_section(A)
    assert not store.add_section(B).ok
    store.add_section(D)
    book.save_store(pid, store)

    assert [x.section_id for x in book.get_plan(pid).items] == ["A", "D"]
    assert [x.section_id for x in book.store_for(pid).items] == ["A", "D"]

    with pytest.raises(PlanNotFoundError):
        book.store_for("nope")


def test_serialisation_survives_json():
    book = PlanBook()
    pid = book.create_plan("Main")
    book.update_plan(pid, [A, D])

    blob = json.dumps(book.to_dict())
    data = json.loads(blob)
    assert data["currentPlanId"] == pid
    assert data["plans"][0]["items"][0]["sectionId"] == "A"
    assert data["plans"][0]["items"][0]["courseCode"] == "CS 150"

    restored = PlanBook.from_dict(data)
    assert restored.current_plan_id == pid
    plan = restored.get_plan(pid)
    assert plan.name == "Main"
    assert [x.section_id for x in plan.items] == ["A", "D"]
    assert plan.items[0].meetings[0].start_min == 540
