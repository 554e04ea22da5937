"""Tests for the page element tree."""

import pytest

from tribute_scene import (
    Element,
    MissingElementError,
    build_page,
    LEAVES_ID,
    WAVEFORM_ID,
    PLAY_BUTTON_ID,
    PLAY_GLYPH,
    PAUSED_GRADIENT,
)


class TestElement:
    def test_append_and_remove(self):
        parent = Element("div")
        child = parent.append_child(Element("span"))
        assert child.parent is parent
        assert parent.child_count == 1
        child.remove()
        assert child.parent is None
        assert parent.child_count == 0

    def test_remove_detached_is_noop(self):
        """Removing an element that has no parent does nothing."""
        el = Element("div")
        el.remove()
        el.remove()
        assert el.parent is None

    def test_append_moves_between_parents(self):
        a, b = Element("div"), Element("div")
        child = a.append_child(Element("i"))
        b.append_child(child)
        assert a.children == []
        assert b.children == [child]

    def test_find_and_find_all(self):
        root = Element("body")
        box = root.append_child(Element("div", "box"))
        box.append_child(Element("div", class_name="bar tall"))
        box.append_child(Element("div", class_name="bar"))
        box.append_child(Element("div", class_name="barn"))
        assert root.find("box") is box
        assert root.find("nope") is None
        assert len(root.find_all("bar")) == 2

    def test_elements_compare_by_identity(self):
        """Two identical-looking leaves are still distinct children."""
        parent = Element("div")
        a = parent.append_child(Element("div", class_name="leaf"))
        b = parent.append_child(Element("div", class_name="leaf"))
        b.remove()
        assert parent.children == [a]
        assert parent.children[0] is a


class TestBuildPage:
    def test_required_elements_present(self):
        page = build_page()
        for element_id in (LEAVES_ID, WAVEFORM_ID, PLAY_BUTTON_ID):
            assert page.require(element_id).element_id == element_id

    def test_button_starts_paused(self):
        button = build_page().require(PLAY_BUTTON_ID)
        assert button.text == PLAY_GLYPH
        assert button.style["background"] == PAUSED_GRADIENT

    def test_containers_start_empty(self):
        page = build_page()
        assert page.require(LEAVES_ID).child_count == 0
        assert page.require(WAVEFORM_ID).child_count == 0

    def test_heading_text(self):
        page = build_page("Song Title", "Some Band")
        assert page.root.find_all("title")[0].text == "Song Title"
        assert page.root.find_all("subtitle")[0].text == "Some Band"

    def test_require_missing(self):
        with pytest.raises(MissingElementError):
            build_page().require("does-not-exist")
