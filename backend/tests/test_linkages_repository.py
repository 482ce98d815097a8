import pytest

from domain.models import LinkageType
from repositories import LinkagesRepository
from repositories.models import PlaceLinkageORM

repo = LinkagesRepository()


def test_list_for_place_matches_parents_and_children(session, add_place):
    old = add_place(22.28, 114.15, name="Victoria", year_from=1841, year_to=1903)
    new = add_place(22.28, 114.15, name="Central", year_from=1903, year_to=2999)
    other = add_place(22.30, 114.17, name="Kowloon")

    created = repo.create_linkage(session, LinkageType.RENAMED, [old.id], [new.id])

    from_parent = repo.list_for_place(session, old.id)
    from_child = repo.list_for_place(session, new.id)

    assert [link.id for link in from_parent] == [created.id]
    assert [link.id for link in from_child] == [created.id]
    assert repo.list_for_place(session, other.id) == []

    link = from_parent[0]
    assert link.type == LinkageType.RENAMED
    assert [p.name["en_us"] for p in link.parents] == ["Victoria"]
    assert [c.name["en_us"] for c in link.children] == ["Central"]
    assert link.children[0].year_from == 1903
    assert link.to_dict()["children"][0] == {
        "id": new.id,
        "name": {"zh_hk": "Central", "en_us": "Central"},
        "year_from": 1903,
        "year_to": 2999,
    }


def test_merge_linkage_with_several_parents(session, add_place):
    a = add_place(22.3, 114.1, name="A", year_from=1900, year_to=1950)
    b = add_place(22.3, 114.1, name="B", year_from=1800, year_to=1950)
    merged = add_place(22.3, 114.1, name="AB", year_from=1950)

    repo.create_linkage(session, LinkageType.MERGED, [a.id, b.id], [merged.id])

    [link] = repo.list_for_place(session, merged.id)
    # parents ordered by year_from
    assert [p.id for p in link.parents] == [b.id, a.id]


def test_create_linkage_rejects_unknown_places(session, add_place):
    a = add_place(22.3, 114.1, name="A")
    with pytest.raises(ValueError):
        repo.create_linkage(session, LinkageType.SPLIT, [a.id], ["missing"])


def test_list_for_place_skips_linkage_with_unknown_type(session, add_place):
    old = add_place(22.28, 114.15, name="Victoria")
    new = add_place(22.28, 114.15, name="Central")
    kept = repo.create_linkage(session, LinkageType.RENAMED, [old.id], [new.id])
    broken = repo.create_linkage(session, LinkageType.SPLIT, [old.id], [new.id])
    session.get(PlaceLinkageORM, broken.id).type = "teleported"
    session.commit()

    assert [link.id for link in repo.list_for_place(session, old.id)] == [kept.id]
