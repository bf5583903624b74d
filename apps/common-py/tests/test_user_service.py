"""Tests for the in-memory user service."""

import threading

import pytest
from pydantic import ValidationError
from registry_common.models.user import UserIn
from registry_common.services.user_service import InMemoryUserService


def _payload(n: int) -> dict[str, str]:
    return {"username": f"user{n:02d}", "email": f"user{n}@mail.com", "name": f"User {n}"}


@pytest.mark.unit
def test_create_assigns_sequential_ids(service: InMemoryUserService, ann: dict) -> None:
    first = service.create_user(ann)
    second = service.create_user(_payload(2))

    assert first.id == 1
    assert second.id == 2
    assert service.count() == 2


@pytest.mark.unit
def test_create_accepts_model_and_mapping(service: InMemoryUserService, ann: dict) -> None:
    from_model = service.create_user(UserIn(**ann))
    from_mapping = service.create_user(ann)

    assert from_model.model_dump(exclude={"id"}) == from_mapping.model_dump(exclude={"id"}) == ann


@pytest.mark.unit
def test_create_then_get(service: InMemoryUserService, ann: dict) -> None:
    created = service.create_user(ann)

    fetched = service.get_user(created.id)

    assert fetched == created
    assert fetched.model_dump(exclude={"id"}) == ann


@pytest.mark.unit
def test_create_rejects_invalid_payload(service: InMemoryUserService, ann: dict) -> None:
    with pytest.raises(ValidationError):
        service.create_user({**ann, "email": "not-an-email"})
    with pytest.raises(ValidationError):
        service.create_user({**ann, "username": "ab"})

    assert service.count() == 0


@pytest.mark.unit
def test_list_users_in_insertion_order(service: InMemoryUserService) -> None:
    for n in (3, 1, 2):
        service.create_user(_payload(n))

    assert [user.username for user in service.list_users()] == ["user03", "user01", "user02"]


@pytest.mark.unit
def test_returned_records_are_copies(service: InMemoryUserService, ann: dict) -> None:
    created = service.create_user(ann)
    created.name = "Mallory"
    service.list_users()[0].name = "Mallory"

    assert service.get_user(created.id).name == "Ann"


@pytest.mark.unit
def test_missing_ids(service: InMemoryUserService, ann: dict) -> None:
    assert service.get_user(1) is None
    assert service.update_user(1, ann) is None
    assert service.delete_user(1) is False


@pytest.mark.unit
def test_update_replaces_fields_and_keeps_id(service: InMemoryUserService, ann: dict) -> None:
    created = service.create_user(ann)

    updated = service.update_user(created.id, {"username": "ann02", "email": "ann@mail.com", "name": "Ann B"})

    assert updated.id == created.id
    assert service.get_user(created.id).model_dump() == {
        "id": created.id,
        "username": "ann02",
        "email": "ann@mail.com",
        "name": "Ann B",
    }


@pytest.mark.unit
def test_update_rejects_invalid_payload(service: InMemoryUserService, ann: dict) -> None:
    created = service.create_user(ann)

    with pytest.raises(ValidationError):
        service.update_user(created.id, {**ann, "name": ""})

    assert service.get_user(created.id).name == "Ann"


@pytest.mark.unit
def test_delete_then_get(service: InMemoryUserService, ann: dict) -> None:
    created = service.create_user(ann)

    assert service.delete_user(created.id) is True
    assert service.get_user(created.id) is None
    assert service.delete_user(created.id) is False


@pytest.mark.unit
def test_counter_never_reuses_ids(service: InMemoryUserService, ann: dict) -> None:
    service.create_user(ann)
    service.create_user(_payload(2))
    service.delete_user(1)

    assert service.create_user(_payload(3)).id == 3


@pytest.mark.unit
def test_size_strategy_reuses_ids() -> None:
    """Size-based ids are count + 1 and can collide after a deletion."""
    service = InMemoryUserService(id_strategy="size")
    service.create_user(_payload(1))
    service.create_user(_payload(2))
    service.delete_user(1)

    third = service.create_user(_payload(3))

    assert third.id == 2
    assert [user.id for user in service.list_users()] == [2, 2]
    # Lookups resolve to the first record with a matching id.
    assert service.get_user(2).username == "user02"


@pytest.mark.unit
def test_unknown_id_strategy() -> None:
    with pytest.raises(ValueError, match="Unknown id strategy"):
        InMemoryUserService(id_strategy="uuid")


@pytest.mark.unit
def test_clear_resets_counter(service: InMemoryUserService, ann: dict) -> None:
    service.create_user(ann)
    service.create_user(_payload(2))

    service.clear()

    assert service.list_users() == []
    assert service.create_user(ann).id == 1


@pytest.mark.unit
def test_concurrent_creates_get_unique_ids(service: InMemoryUserService) -> None:
    workers = 8
    per_worker = 50
    barrier = threading.Barrier(workers)

    def create_many(worker: int) -> None:
        barrier.wait()
        for n in range(per_worker):
            service.create_user(
                {"username": f"w{worker}u{n:03d}", "email": f"w{worker}u{n}@mail.com", "name": "Worker"}
            )

    threads = [threading.Thread(target=create_many, args=(worker,)) for worker in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    ids = [user.id for user in service.list_users()]
    assert len(ids) == workers * per_worker
    assert sorted(ids) == list(range(1, workers * per_worker + 1))


@pytest.mark.unit
def test_create_then_get_keeps_email_verbatim(service: InMemoryUserService) -> None:
    payload = {"username": "ann01", "email": "Ann@Example.COM", "name": "Ann"}
    created = service.create_user(payload)

    assert service.get_user(created.id).model_dump(exclude={"id"}) == payload


@pytest.mark.unit
def test_reads_never_see_partial_updates(service: InMemoryUserService) -> None:
    first = {"username": "first", "email": "first@mail.com", "name": "First"}
    second = {"username": "second", "email": "second@mail.com", "name": "Second"}
    user_id = service.create_user(first).id
    stop = threading.Event()
    torn: list[dict] = []

    def flip() -> None:
        while not stop.is_set():
            service.update_user(user_id, second)
            service.update_user(user_id, first)

    def read() -> None:
        for _ in range(2000):
            seen = service.get_user(user_id).model_dump(exclude={"id"})
            if seen not in (first, second):
                torn.append(seen)

    writer = threading.Thread(target=flip)
    readers = [threading.Thread(target=read) for _ in range(4)]
    writer.start()
    for reader in readers:
        reader.start()
    for reader in readers:
        reader.join()
    stop.set()
    writer.join()

    assert torn == []
