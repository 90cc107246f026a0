import asyncio
import json
import threading

import pytest

from studyflow.core.enums import IdLookupPolicy, COURSES_STORAGE_KEY
from studyflow.core.exceptions import PersistenceError, ValidationError
from studyflow.persistence import InMemoryStorage
from studyflow.services import CourseService


HOMEWORK_EXAMS = [{"name": "Homework", "weight": 40}, {"name": "Exams", "weight": 60}]


def test_unset_slot_reads_seed_without_writing(course_service, course_storage):
    courses = asyncio.run(course_service.get_all())

    assert [c["Id"] for c in courses] == [1, 2, 3, 4]
    assert courses[0]["code"] == "CS 301"
    assert course_storage.read() is None


def test_empty_string_slot_falls_back_to_seed():
    service = CourseService(InMemoryStorage(COURSES_STORAGE_KEY, initial=""), latency=0)

    assert len(asyncio.run(service.get_all())) == 4


def test_create_on_empty_store_starts_at_one(empty_course_service):
    course = asyncio.run(empty_course_service.create({"code": "BIO 110", "targetGrade": 85}))

    assert course["Id"] == 1
    assert course["gradeCategories"] == []


def test_create_assigns_increasing_ids(empty_course_service):
    async def scenario():
        ids = []
        for code in ["A", "B", "C", "D"]:
            course = await empty_course_service.create({"code": code})
            ids.append(course["Id"])
        return ids

    assert asyncio.run(scenario()) == [1, 2, 3, 4]


def test_create_uses_max_existing_id():
    stored = [{"Id": 3, "code": "X"}, {"Id": 9, "code": "Y"}, {"Id": 4, "code": "Z"}]
    service = CourseService(InMemoryStorage(COURSES_STORAGE_KEY, initial=json.dumps(stored)), latency=0)

    async def scenario():
        await service.delete(4)
        return await service.create({"code": "NEW"})

    assert asyncio.run(scenario())["Id"] == 10


def test_create_after_seed_persists_seed_and_new_record(course_service, course_storage):
    course = asyncio.run(course_service.create({"code": "CHEM 101"}))

    stored = json.loads(course_storage.read())
    assert course["Id"] == 5
    assert [c["Id"] for c in stored] == [1, 2, 3, 4, 5]


def test_create_keeps_given_categories_and_extra_fields(empty_course_service):
    course = asyncio.run(empty_course_service.create({
        "code": "CS 101",
        "color": "#000000",
        "gradeCategories": HOMEWORK_EXAMS,
        "instructor": "Dr. Lee",
    }))

    assert course["gradeCategories"] == HOMEWORK_EXAMS
    assert course["instructor"] == "Dr. Lee"


def test_create_then_get_round_trip(empty_course_service):
    data = {"code": "MATH 101", "color": "#123456", "targetGrade": 92}

    async def scenario():
        created = await empty_course_service.create(data)
        return created, await empty_course_service.get_by_id(created["Id"])

    created, fetched = asyncio.run(scenario())
    assert fetched == {**data, "Id": created["Id"], "gradeCategories": []}


def test_get_by_id_parses_leading_digits(course_service):
    async def scenario():
        return (
            await course_service.get_by_id("2"),
            await course_service.get_by_id(" 2 "),
            await course_service.get_by_id("2abc"),
        )

    results = asyncio.run(scenario())
    assert all(r["code"] == "MATH 240" for r in results)


def test_get_by_id_malformed_is_not_found(course_service):
    assert asyncio.run(course_service.get_by_id("abc")) is None
    assert asyncio.run(course_service.get_by_id(99)) is None


def test_get_by_id_malformed_rejected_under_reject_policy(course_storage):
    service = CourseService(course_storage, latency=0, id_policy=IdLookupPolicy.REJECT)

    with pytest.raises(ValidationError):
        asyncio.run(service.get_by_id("abc"))


def test_get_by_id_returns_a_copy(course_service, course_storage):
    async def scenario():
        await course_service.update(1, {"targetGrade": 91})
        course = await course_service.get_by_id(1)
        course["targetGrade"] = 10
        return await course_service.get_by_id(1)

    assert asyncio.run(scenario())["targetGrade"] == 91


def test_update_changes_only_given_field(course_service):
    async def scenario():
        before = await course_service.get_by_id(2)
        after = await course_service.update(2, {"targetGrade": 95})
        return before, after

    before, after = asyncio.run(scenario())
    assert after["targetGrade"] == 95
    assert {k: v for k, v in after.items() if k != "targetGrade"} == \
        {k: v for k, v in before.items() if k != "targetGrade"}


def test_update_keeps_record_id(course_service):
    updated = asyncio.run(course_service.update(1, {"Id": 4, "code": "CS 302"}))

    assert updated["Id"] == 1
    assert updated["code"] == "CS 302"


def test_update_missing_returns_none_and_writes_nothing(course_service, course_storage):
    assert asyncio.run(course_service.update(42, {"code": "X"})) is None
    assert course_storage.read() is None


def test_delete_is_idempotent(course_service):
    async def scenario():
        first = await course_service.delete(3)
        after_first = await course_service.get_all()
        second = await course_service.delete(3)
        after_second = await course_service.get_all()
        return first, second, after_first, after_second

    first, second, after_first, after_second = asyncio.run(scenario())
    assert first is True and second is True
    assert after_first == after_second
    assert 3 not in [c["Id"] for c in after_second]


def test_delete_missing_id_still_succeeds(empty_course_service):
    assert asyncio.run(empty_course_service.delete("nope")) is True


def test_corrupt_slot_raises_persistence_error():
    service = CourseService(InMemoryStorage(COURSES_STORAGE_KEY, initial="{not json"), latency=0)

    with pytest.raises(PersistenceError) as exc_info:
        asyncio.run(service.get_all())
    assert exc_info.value.error_code == "corrupt_storage"


def test_non_list_slot_raises_persistence_error():
    service = CourseService(InMemoryStorage(COURSES_STORAGE_KEY, initial='{"Id": 1}'), latency=0)

    with pytest.raises(PersistenceError):
        asyncio.run(service.create({"code": "X"}))


def test_concurrent_creates_are_not_lost(empty_course_service):
    async def scenario():
        created = await asyncio.gather(*[
            empty_course_service.create({"code": f"C{n}"}) for n in range(8)
        ])
        return created, await empty_course_service.get_all()

    created, stored = asyncio.run(scenario())
    assert sorted(c["Id"] for c in created) == list(range(1, 9))
    assert len(stored) == 8


class GatedStorage(InMemoryStorage):
    """Holds every read until all the expected readers have arrived."""

    def __init__(self, key, initial, readers):
        super().__init__(key, initial=initial)
        self._barrier = threading.Barrier(readers, timeout=5)
        self.gated = True

    def read(self):
        if self.gated:
            self._barrier.wait()
        return super().read()


def test_unserialized_concurrent_creates_lose_updates():
    storage = GatedStorage(COURSES_STORAGE_KEY, "[]", readers=3)
    service = CourseService(storage, latency=0, serialize_writes=False)

    async def scenario():
        created = await asyncio.gather(*[service.create({"code": f"C{n}"}) for n in range(3)])
        storage.gated = False
        return created, await service.get_all()

    created, stored = asyncio.run(scenario())
    assert [c["Id"] for c in created] == [1, 1, 1]
    assert len(stored) == 1


def test_latency_is_applied():
    service = CourseService(InMemoryStorage(COURSES_STORAGE_KEY, initial="[]"), latency=0.05)

    async def scenario():
        loop = asyncio.get_running_loop()
        start = loop.time()
        await service.get_all()
        return loop.time() - start

    assert asyncio.run(scenario()) >= 0.04


def test_validation_disabled_accepts_any_shape(empty_course_service):
    course = asyncio.run(empty_course_service.create({"targetGrade": 400}))

    assert course["Id"] == 1


def test_validation_enabled_rejects_bad_create():
    service = CourseService(InMemoryStorage(COURSES_STORAGE_KEY, initial="[]"), latency=0,
                            validate_records=True)

    with pytest.raises(ValidationError):
        asyncio.run(service.create({"code": ""}))
    assert asyncio.run(service.get_all()) == []


def test_validation_enabled_checks_merged_update():
    service = CourseService(InMemoryStorage(COURSES_STORAGE_KEY, initial="[]"), latency=0,
                            validate_records=True)

    async def scenario():
        await service.create({"code": "A", "gradeCategories": HOMEWORK_EXAMS})
        await service.update(1, {"gradeCategories": [{"name": "Exams", "weight": 140}]})

    with pytest.raises(ValidationError) as exc_info:
        asyncio.run(scenario())
    assert exc_info.value.error_code == "invalid_weight"
