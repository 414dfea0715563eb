"""
Slide Store - Owns the ordered slide deck and persists edits to local storage.
"""

import dataclasses
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Sequence, Tuple

from ..errors import StorageError, TopologyError
from ..utils.storage import LocalStorage
from .quiz_topology import QuizTopology

logger = logging.getLogger(__name__)

SLIDES_KEY = "slides"

# Fields a renderer is allowed to edit in place
EDITABLE_FIELDS = ("kind", "title", "subtitle", "content", "image", "visited")


class SlideKind(Enum):
    """Layout family of a slide."""
    TITLE = "title"
    CONTENT = "content"
    LIST = "list"
    BOARD = "board"
    TOP_LEFT = "top-left"
    SOUP = "soup"
    CREDITS = "credits"


@dataclass(frozen=True)
class SlideRecord:
    """Represents a single slide with its editable content."""
    id: int
    kind: SlideKind
    title: str
    subtitle: Optional[str] = None
    content: Tuple[str, ...] = ()
    image: Optional[str] = None
    visited: bool = False

    def to_dict(self) -> Dict:
        """Convert slide to dictionary."""
        data = {
            "id": self.id,
            "type": self.kind.value,
            "title": self.title,
            "content": list(self.content),
            "visited": self.visited,
        }
        if self.subtitle is not None:
            data["subtitle"] = self.subtitle
        if self.image is not None:
            data["image"] = self.image
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> 'SlideRecord':
        """
        Create SlideRecord from dictionary.

        Raises:
            ValueError: if a field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise ValueError(f"Slide must be an object, got {type(data).__name__}")

        try:
            slide_id = data["id"]
            title = data["title"]
            kind = SlideKind(data["type"])
        except KeyError as e:
            raise ValueError(f"Slide is missing field {e}") from e

        if isinstance(slide_id, bool) or not isinstance(slide_id, int):
            raise ValueError(f"Slide id must be an integer, got {slide_id!r}")
        if not isinstance(title, str):
            raise ValueError(f"Slide {slide_id} title must be text")

        content = data.get("content") or []
        if not isinstance(content, list) or not all(isinstance(line, str) for line in content):
            raise ValueError(f"Slide {slide_id} content must be a list of text")

        subtitle = data.get("subtitle")
        image = data.get("image")
        for name, value in (("subtitle", subtitle), ("image", image)):
            if value is not None and not isinstance(value, str):
                raise ValueError(f"Slide {slide_id} {name} must be text")

        return cls(
            id=slide_id,
            kind=kind,
            title=title,
            subtitle=subtitle,
            content=tuple(content),
            image=image,
            visited=bool(data.get("visited", False)),
        )


SlideDeck = Tuple[SlideRecord, ...]


def parse_deck(raw) -> SlideDeck:
    """
    Validate a decoded JSON value as a deck.

    Raises:
        ValueError: if the value is not a non-empty list of slides with unique ids
    """
    if not isinstance(raw, list) or not raw:
        raise ValueError("Deck must be a non-empty list")
    deck = tuple(SlideRecord.from_dict(item) for item in raw)
    ids = [slide.id for slide in deck]
    if len(set(ids)) != len(ids):
        raise ValueError("Slide ids must be unique")
    return deck


class SlideStore:
    """Sole owner and writer of the slide deck."""

    def __init__(
        self,
        storage: LocalStorage,
        default_factory: Optional[Callable[[], Sequence[SlideRecord]]] = None,
        topology: Optional[QuizTopology] = None
    ):
        """
        Initialize slide store and load the deck.

        Args:
            storage: Where the deck is persisted
            default_factory: Builds the fallback deck (the built-in gala show by default)
            topology: Quiz layout a saved deck must fit (unchecked if None)
        """
        if default_factory is None:
            from .default_deck import build_default_deck
            default_factory = build_default_deck

        self.storage = storage
        self.default_factory = default_factory
        self.topology = topology
        self._deck: SlideDeck = self.load()

    @property
    def deck(self) -> SlideDeck:
        return self._deck

    def __len__(self) -> int:
        return len(self._deck)

    def get(self, index: int) -> Optional[SlideRecord]:
        """Slide at ``index``, or None when out of range."""
        if 0 <= index < len(self._deck):
            return self._deck[index]
        return None

    def find(self, slide_id: int) -> Optional[int]:
        """Index of the slide with ``slide_id``, or None."""
        for index, slide in enumerate(self._deck):
            if slide.id == slide_id:
                return index
        return None

    def load(self) -> SlideDeck:
        """Return the saved deck, or the default deck if nothing valid is saved."""
        try:
            raw = self.storage.get(SLIDES_KEY)
        except StorageError as e:
            logger.warning("Saved slides unreadable, using default deck: %s", e)
            return tuple(self.default_factory())

        if raw is None:
            logger.info("No saved slides, using default deck")
            return tuple(self.default_factory())

        try:
            deck = parse_deck(raw)
        except ValueError as e:
            logger.warning("Saved slides invalid, using default deck: %s", e)
            return tuple(self.default_factory())

        if self.topology is not None:
            try:
                self.topology.validate(len(deck))
            except TopologyError as e:
                logger.warning("Saved slides do not fit the quiz layout, using default deck: %s", e)
                return tuple(self.default_factory())
        return deck

    def save(self, deck: Optional[SlideDeck] = None) -> None:
        """Persist the deck. Failures are logged and dropped."""
        deck = self._deck if deck is None else deck
        try:
            self.storage.set(SLIDES_KEY, [slide.to_dict() for slide in deck])
        except StorageError as e:
            logger.warning("Could not save slides: %s", e)

    def update_slide(self, slide_id: int, patch: Dict) -> SlideDeck:
        """
        Replace the slide matching ``slide_id`` with ``patch`` applied.

        Unknown ids and patches that would not load back (wrong types,
        unknown kind) leave the deck untouched. ``id`` is never patched and
        a patch cannot clear ``visited``.
        """
        index = self.find(slide_id)
        if index is None:
            logger.debug("Edit for unknown slide id %s ignored", slide_id)
            return self._deck

        current = self._deck[index]
        data = current.to_dict()
        for field, value in patch.items():
            if field not in EDITABLE_FIELDS:
                continue
            if field == "kind":
                data["type"] = value.value if isinstance(value, SlideKind) else value
            elif field == "content" and isinstance(value, tuple):
                data["content"] = list(value)
            elif field == "visited":
                data["visited"] = current.visited or bool(value)
            else:
                data[field] = value

        try:
            updated = SlideRecord.from_dict(data)
        except ValueError as e:
            logger.debug("Invalid edit for slide %s ignored: %s", slide_id, e)
            return self._deck

        self._replace(index, updated)
        return self._deck

    def update_content_line(self, slide_id: int, line_index: int, text: str) -> SlideDeck:
        """Edit one content line of a slide; bad indices are ignored."""
        index = self.find(slide_id)
        if index is None:
            return self._deck
        content = list(self._deck[index].content)
        if not 0 <= line_index < len(content):
            return self._deck
        content[line_index] = text
        return self.update_slide(slide_id, {"content": content})

    def mark_visited(self, index: int) -> SlideDeck:
        """Flag the slide at ``index`` as visited (never unset)."""
        slide = self.get(index)
        if slide is None or slide.visited:
            return self._deck
        self._replace(index, dataclasses.replace(slide, visited=True))
        return self._deck

    def reset(self) -> SlideDeck:
        """Discard edits and restore the built-in deck."""
        self._deck = tuple(self.default_factory())
        self.save()
        return self._deck

    def _replace(self, index: int, slide: SlideRecord) -> None:
        deck = list(self._deck)
        deck[index] = slide
        self._deck = tuple(deck)
        self.save()
