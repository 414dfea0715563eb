"""
Tests for galadeck.core.slide_store

Covers:
  - SlideRecord (de)serialization
  - load fallbacks (missing, corrupt, invalid, duplicate ids)
  - quiz layout check on load
  - edits (including rejected patches), visited marking and best-effort saving
"""

from unittest import mock

import pytest

from galadeck.core.default_deck import build_default_deck
from galadeck.core.slide_store import SLIDES_KEY, SlideKind, SlideRecord, SlideStore
from galadeck.errors import StorageError
from galadeck.utils.storage import LocalStorage


# ---------------------------------------------------------------------------
# SlideRecord
# ---------------------------------------------------------------------------

class TestSlideRecord:

    def test_to_dict_uses_persisted_field_names(self):
        slide = SlideRecord(id=3, kind=SlideKind.TOP_LEFT, title="Act", content=("a", "b"))
        assert slide.to_dict() == {
            "id": 3,
            "type": "top-left",
            "title": "Act",
            "content": ["a", "b"],
            "visited": False,
        }

    def test_from_dict_defaults(self):
        slide = SlideRecord.from_dict({"id": 1, "type": "title", "title": "Hello"})
        assert slide.kind is SlideKind.TITLE
        assert slide.content == ()
        assert slide.subtitle is None
        assert slide.image is None
        assert slide.visited is False

    @pytest.mark.parametrize("data", [
        {"type": "title", "title": "no id"},
        {"id": "1", "type": "title", "title": "string id"},
        {"id": True, "type": "title", "title": "bool id"},
        {"id": 1, "type": "poster", "title": "unknown type"},
        {"id": 1, "type": "title", "title": 5},
        {"id": 1, "type": "title", "title": "x", "content": "not a list"},
        {"id": 1, "type": "title", "title": "x", "content": [1, 2]},
        {"id": 1, "type": "title", "title": "x", "image": 42},
        "not an object",
    ])
    def test_from_dict_rejects_bad_shapes(self, data):
        with pytest.raises(ValueError):
            SlideRecord.from_dict(data)


# ---------------------------------------------------------------------------
# Default deck
# ---------------------------------------------------------------------------

class TestDefaultDeck:

    def test_layout_matches_quiz_topology(self, topology):
        deck = build_default_deck()
        assert len(deck) == 45
        assert deck[topology.board].kind is SlideKind.BOARD
        assert deck[topology.credits].kind is SlideKind.CREDITS
        assert len({slide.id for slide in deck}) == 45
        assert all(len(deck[i].content) == 2 for i in range(18, 43))


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

class TestLoad:

    def test_nothing_saved_uses_default(self, store):
        assert store.deck == build_default_deck()

    def test_corrupt_json_uses_default(self, storage):
        storage.path_for(SLIDES_KEY).write_text("[{broken", encoding="utf-8")
        assert SlideStore(storage).deck == build_default_deck()

    @pytest.mark.parametrize("raw", [
        [],
        {"slides": []},
        [{"id": 1, "type": "title"}],
        [{"id": 1, "type": "title", "title": "a"}, {"id": 1, "type": "content", "title": "b"}],
    ])
    def test_invalid_deck_uses_default(self, storage, raw):
        storage.set(SLIDES_KEY, raw)
        assert SlideStore(storage).deck == build_default_deck()

    def test_unreadable_storage_uses_default(self):
        storage = mock.Mock(spec=LocalStorage)
        storage.get.side_effect = StorageError("disk gone")
        assert SlideStore(storage).deck == build_default_deck()

    def test_saved_deck_round_trips(self, storage, store):
        store.update_slide(1, {"subtitle": "Tonight", "image": "data:image/png;base64,AAAA"})
        store.mark_visited(20)
        store.save()
        assert SlideStore(storage).deck == store.deck

    def test_deck_not_fitting_quiz_layout_uses_default(self, storage, topology):
        storage.set(SLIDES_KEY, [
            {"id": i, "type": "content", "title": str(i)} for i in range(1, 11)
        ])
        assert SlideStore(storage, topology=topology).deck == build_default_deck()

    def test_deck_fitting_quiz_layout_is_kept(self, storage, store, topology):
        store.update_slide(1, {"title": "Kept"})
        assert SlideStore(storage, topology=topology).deck[0].title == "Kept"

    def test_save_of_load_changes_nothing(self, storage, store):
        store.save()
        before = storage.path_for(SLIDES_KEY).read_text(encoding="utf-8")
        reloaded = SlideStore(storage)
        reloaded.save(reloaded.load())
        assert storage.path_for(SLIDES_KEY).read_text(encoding="utf-8") == before


# ---------------------------------------------------------------------------
# Editing
# ---------------------------------------------------------------------------

class TestUpdateSlide:

    def test_edit_is_persisted(self, storage, store):
        store.update_slide(5, {"title": "Renamed", "content": ["one", "two"]})
        reloaded = SlideStore(storage)
        slide = reloaded.deck[reloaded.find(5)]
        assert slide.title == "Renamed"
        assert slide.content == ("one", "two")

    def test_other_slides_and_order_preserved(self, store):
        before = store.deck
        after = store.update_slide(5, {"title": "Renamed"})
        assert [s.id for s in after] == [s.id for s in before]
        assert all(a == b for a, b in zip(after, before) if a.id != 5)

    def test_unknown_id_is_noop(self, store):
        with mock.patch.object(store, "save") as save:
            deck = store.update_slide(999, {"title": "x"})
        assert deck is store.deck
        save.assert_not_called()

    def test_id_cannot_be_patched(self, store):
        store.update_slide(5, {"id": 77, "title": "x"})
        assert store.find(77) is None
        assert store.deck[store.find(5)].title == "x"

    def test_kind_accepts_enum_value(self, store):
        store.update_slide(2, {"kind": "soup"})
        assert store.deck[store.find(2)].kind is SlideKind.SOUP

    def test_kind_and_content_accept_python_types(self, store):
        store.update_slide(2, {"kind": SlideKind.LIST, "content": ("a", "b")})
        slide = store.deck[store.find(2)]
        assert slide.kind is SlideKind.LIST
        assert slide.content == ("a", "b")

    def test_subtitle_can_be_cleared(self, store):
        store.update_slide(1, {"subtitle": "Tonight"})
        store.update_slide(1, {"subtitle": None})
        assert store.deck[0].subtitle is None

    @pytest.mark.parametrize("patch", [
        {"title": 123},
        {"subtitle": 5},
        {"image": ["not", "text"]},
        {"kind": "poster"},
        {"content": "hello"},
        {"content": [1, 2]},
        {"title": "ok", "content": "mixed"},
    ])
    def test_invalid_patch_is_noop(self, store, patch):
        before = store.deck
        with mock.patch.object(store, "save") as save:
            deck = store.update_slide(2, patch)
        assert deck is before
        save.assert_not_called()

    def test_invalid_patch_keeps_earlier_edits_loadable(self, storage, store):
        store.update_slide(1, {"title": "Edited"})
        store.update_slide(2, {"title": 123})
        reloaded = SlideStore(storage)
        assert reloaded.deck[0].title == "Edited"
        assert reloaded.deck[1].title == build_default_deck()[1].title

    def test_patch_cannot_clear_visited(self, store):
        store.mark_visited(20)
        slide_id = store.deck[20].id
        store.update_slide(slide_id, {"visited": False})
        assert store.deck[20].visited is True

    def test_update_content_line(self, store):
        slide_id = store.deck[20].id
        store.update_content_line(slide_id, 1, "New answer")
        assert store.deck[20].content[1] == "New answer"

    def test_update_content_line_bad_index_is_noop(self, store):
        before = store.deck
        store.update_content_line(store.deck[20].id, 9, "x")
        assert store.deck is before

    def test_save_failure_keeps_in_memory_edit(self):
        storage = mock.Mock(spec=LocalStorage)
        storage.get.return_value = None
        storage.set.side_effect = StorageError("quota exceeded")
        store = SlideStore(storage)

        store.update_slide(1, {"title": "Still here"})

        assert store.deck[0].title == "Still here"
        storage.set.assert_called_once()

    def test_reset_restores_default(self, storage, store):
        store.update_slide(1, {"title": "Changed"})
        store.reset()
        assert store.deck == build_default_deck()
        assert SlideStore(storage).deck == build_default_deck()


class TestMarkVisited:

    def test_sets_flag_and_saves(self, store):
        with mock.patch.object(store, "save") as save:
            store.mark_visited(20)
        assert store.deck[20].visited is True
        save.assert_called_once()

    def test_already_visited_is_noop(self, store):
        store.mark_visited(20)
        with mock.patch.object(store, "save") as save:
            deck = store.mark_visited(20)
        assert deck[20].visited is True
        save.assert_not_called()

    @pytest.mark.parametrize("index", [-1, 45, 1000])
    def test_out_of_range_is_noop(self, store, index):
        before = store.deck
        assert store.mark_visited(index) is before
