"""Tests for the (position, state) photo matcher."""

from types import SimpleNamespace

from services.photo_matching import (
    ComparePhotoPair,
    iter_photo_pairs,
    match_photos,
    photo_key,
)


def photo(id, position, state=None, sort_order=0):
    return SimpleNamespace(
        id=id,
        photo_position=position,
        photo_state=state,
        original_path=f"/p/{id}.jpg",
        thumbnail_path=None,
        sort_order=sort_order,
    )


def by_key(pairs):
    return {p.key: p for p in pairs}


class TestPhotoKey:
    def test_state_none_and_empty_are_the_same_key(self):
        assert photo_key(photo("a", "chin", None)) == photo_key(photo("b", "chin", ""))

    def test_missing_position_has_no_key(self):
        assert photo_key(photo("a", None, "pre")) is None
        assert photo_key(photo("a", "", "pre")) is None

    def test_key_is_position_and_state(self):
        assert photo_key(photo("a", "forehead", "pre")) == ("forehead", "pre")


class TestMatchPhotos:
    def test_before_after_scenario(self):
        before = [photo("A", "forehead", "pre")]
        after = [photo("B", "forehead", "pre"), photo("C", "chin", None)]

        pairs = by_key(match_photos(before, after))

        assert set(pairs) == {("forehead", "pre"), ("chin", "")}
        forehead = pairs[("forehead", "pre")]
        assert forehead.position == "forehead"
        assert forehead.photo_state == "pre"
        assert forehead.before_photo.id == "A"
        assert forehead.after_photo.id == "B"

        chin = pairs[("chin", "")]
        assert chin.photo_state is None
        assert chin.before_photo is None
        assert chin.after_photo.id == "C"

    def test_key_set_is_union_without_duplicates(self):
        before = [
            photo("1", "forehead", "relaxed"),
            photo("2", "forehead", "active"),
            photo("3", "chin"),
            photo("4", None, "relaxed"),
        ]
        after = [
            photo("5", "forehead", "active"),
            photo("6", "lips", ""),
            photo("7", "lips", None),
            photo("8", None),
        ]

        pairs = match_photos(before, after)
        keys = [p.key for p in pairs]

        expected = {photo_key(p) for p in before + after if p.photo_position}
        assert len(keys) == len(set(keys))
        assert set(keys) == expected

    def test_photos_without_position_never_appear(self):
        before = [photo("x", None, "pre"), photo("a", "chin")]
        after = [photo("y", None), photo("b", "chin")]

        for pair in match_photos(before, after):
            assert pair.before_photo is None or pair.before_photo.id != "x"
            assert pair.after_photo is None or pair.after_photo.id != "y"

    def test_empty_inputs_give_no_pairs(self):
        assert match_photos([], []) == []
        assert match_photos([photo("x", None)], [photo("y", "")]) == []

    def test_duplicates_first_in_collection_order_wins(self):
        before = [photo("first", "chin", "pre"), photo("second", "chin", "pre")]

        pairs = match_photos(before, [])

        assert len(pairs) == 1
        assert pairs[0].before_photo.id == "first"

    def test_order_by_decides_which_duplicate_wins(self):
        before = [
            photo("late", "chin", "pre", sort_order=5),
            photo("early", "chin", "pre", sort_order=1),
        ]
        after = [
            photo("b2", "chin", "pre", sort_order=2),
            photo("b1", "chin", "pre", sort_order=2),
        ]

        pairs = match_photos(before, after, order_by=lambda p: p.sort_order)

        assert pairs[0].before_photo.id == "early"
        # equal sort keys keep the incoming order
        assert pairs[0].after_photo.id == "b2"

    def test_order_by_does_not_mutate_inputs(self):
        before = [photo("b", "chin", sort_order=2), photo("a", "chin", sort_order=1)]
        match_photos(before, [], order_by=lambda p: p.sort_order)
        assert [p.id for p in before] == ["b", "a"]

    def test_same_position_different_states_are_separate_pairs(self):
        before = [photo("r", "forehead", "relaxed"), photo("a", "forehead", "active")]
        after = [photo("a2", "forehead", "active")]

        pairs = by_key(match_photos(before, after))

        assert pairs[("forehead", "relaxed")].after_photo is None
        assert pairs[("forehead", "active")].after_photo.id == "a2"

    def test_iter_photo_pairs_is_lazy(self):
        pairs = iter_photo_pairs([photo("a", "chin")], [])
        assert not isinstance(pairs, list)
        assert [p.key for p in pairs] == [("chin", "")]


class TestComparePhotoPairToDict:
    def test_serializes_both_sides(self):
        pair = ComparePhotoPair(
            position="chin",
            photo_state=None,
            before_photo=None,
            after_photo=photo("C", "chin"),
        )

        assert pair.to_dict() == {
            "position": "chin",
            "photoState": None,
            "beforePhoto": None,
            "afterPhoto": {
                "id": "C",
                "originalPath": "/p/C.jpg",
                "thumbnailPath": None,
                "photoState": None,
            },
        }
