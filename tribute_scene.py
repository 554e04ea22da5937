"""
Page elements
----------------------------------------------
A small element tree standing in for the tribute page's document.
"""

from dataclasses import dataclass, field


# -------- Element ids & glyphs --------

LEAVES_ID = "leaves"
WAVEFORM_ID = "waveform"
PLAY_BUTTON_ID = "play-btn"

PLAY_GLYPH = "\u25b6"   # ▶
PAUSE_GLYPH = "\u23f8"  # ⏸

# Button gradients (top, bottom)
PAUSED_GRADIENT = ((255, 107, 107), (238, 90, 36))
PLAYING_GRADIENT = ((46, 213, 115), (30, 144, 255))

DEFAULT_TITLE = "Autumn Leaves"
DEFAULT_ARTIST = "a tribute"


class MissingElementError(LookupError):
    """A required element is not in the page."""


@dataclass(eq=False)
class Element:
    tag: str
    element_id: str = None
    class_name: str = ""
    style: dict = field(default_factory=dict)
    text: str = ""
    children: list = field(default_factory=list, repr=False)
    parent: "Element" = field(default=None, repr=False)

    @property
    def child_count(self):
        return len(self.children)

    def append_child(self, child):
        if child.parent is not None:
            child.parent.remove_child(child)
        child.parent = self
        self.children.append(child)
        return child

    def remove_child(self, child):
        self.children.remove(child)
        child.parent = None

    def remove(self):
        """Detach from the parent. Does nothing when already detached."""
        if self.parent is not None:
            self.parent.remove_child(self)

    def walk(self):
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, element_id):
        for el in self.walk():
            if el.element_id == element_id:
                return el
        return None

    def find_all(self, class_name):
        return [el for el in self.walk() if class_name in el.class_name.split()]


@dataclass(eq=False)
class Page:
    root: Element
    title: str = DEFAULT_TITLE
    artist: str = DEFAULT_ARTIST

    def require(self, element_id):
        el = self.root.find(element_id)
        if el is None:
            raise MissingElementError(f"page has no element #{element_id}")
        return el


def build_page(title=DEFAULT_TITLE, artist=DEFAULT_ARTIST):
    """
    Static markup of the tribute page: heading, leaves layer,
    waveform strip and the play control in its paused state.
    """
    root = Element("body")
    root.append_child(Element("div", LEAVES_ID, "leaves-container"))

    header = root.append_child(Element("header", class_name="hero"))
    header.append_child(Element("h1", class_name="title", text=title))
    header.append_child(Element("p", class_name="subtitle", text=artist))

    player = root.append_child(Element("section", class_name="player"))
    player.append_child(Element("div", WAVEFORM_ID, "waveform"))
    player.append_child(Element(
        "button",
        PLAY_BUTTON_ID,
        "play-btn",
        style={"background": PAUSED_GRADIENT},
        text=PLAY_GLYPH,
    ))
    return Page(root, title, artist)
