"""
Data models for the slide parser.
"""
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

logger = logging.getLogger(__name__)


class ElementType:
    """Closed set of element types a slide can carry."""
    TITLE = "title"
    SUBTITLE = "subtitle"
    BULLETS = "bullets"
    CODE = "code"
    QUOTE = "quote"
    TABLE = "table"
    ICON = "icon"
    GRID = "grid"
    VECTOR = "vector"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    HTML = "html"
    MATH = "math"
    MARKDOWN = "markdown"

    ALL = (
        TITLE, SUBTITLE, BULLETS, CODE, QUOTE, TABLE, ICON, GRID,
        VECTOR, IMAGE, VIDEO, AUDIO, HTML, MATH, MARKDOWN,
    )


AUTO_ANIMATE_TYPES = ("move", "scale", "fade", "opacity", "transform", "all")

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _clamp_level(level: int) -> int:
    if 1 <= level <= 6:
        return level
    clamped = min(6, max(1, level))
    logger.warning("min_heading_level %s out of range 1..6, using %s", level, clamped)
    return clamped


@dataclass(frozen=True)
class ParserOptions:
    """
    Pagination options for a single parse call.

    Frozen so it can be used as part of a memoization key.
    """
    use_delimiter: bool = True
    use_heading_pagination: bool = True
    min_heading_level: int = 1

    def __post_init__(self):
        object.__setattr__(self, "min_heading_level", _clamp_level(int(self.min_heading_level)))

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]]) -> "ParserOptions":
        """
        Build options from a partial dict.

        Accepts the camelCase keys used by the editor front-end
        (``useDelimiter``, ``useHeadingPagination``, ``minHeadingLevel``) as
        well as the snake_case field names. Missing keys and ``None`` values
        keep their defaults.
        """
        if not mapping:
            return cls()

        aliases = {
            "useDelimiter": "use_delimiter",
            "useHeadingPagination": "use_heading_pagination",
            "minHeadingLevel": "min_heading_level",
        }
        kwargs = {}
        for key, value in mapping.items():
            if value is None:
                continue
            name = aliases.get(key, key)
            if name in ("use_delimiter", "use_heading_pagination", "min_heading_level"):
                kwargs[name] = value
            else:
                logger.debug("Ignoring unknown parser option %r", key)
        return cls(**kwargs)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ParserOptions":
        """
        Read defaults from ``SLIDEPARSE_*`` environment variables.

        Unparseable values are logged and replaced by the default.
        """
        env = os.environ if environ is None else environ
        kwargs: Dict[str, Any] = {}

        for var, name in (
            ("SLIDEPARSE_USE_DELIMITER", "use_delimiter"),
            ("SLIDEPARSE_HEADING_PAGINATION", "use_heading_pagination"),
        ):
            raw = env.get(var)
            if raw is None:
                continue
            value = raw.strip().lower()
            if value in _TRUTHY:
                kwargs[name] = True
            elif value in _FALSY:
                kwargs[name] = False
            else:
                logger.warning("Invalid boolean for %s: %r (using default)", var, raw)

        raw_level = env.get("SLIDEPARSE_MIN_HEADING_LEVEL")
        if raw_level is not None:
            try:
                kwargs["min_heading_level"] = int(raw_level)
            except ValueError:
                logger.warning("Invalid integer for SLIDEPARSE_MIN_HEADING_LEVEL: %r (using default)", raw_level)

        return cls(**kwargs)


@dataclass
class AutoAnimate:
    """
    Animation directives embedded in a source line.

    Every field is optional; only the ones present in the directive are set.
    """
    enabled: Optional[bool] = None
    id: Optional[str] = None
    type: Optional[str] = None
    duration: Optional[int] = None  # milliseconds
    easing: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Flattened element fields (``autoAnimate``, ``autoAnimateId``, ...)."""
        data: Dict[str, Any] = {}
        if self.enabled is not None:
            data["autoAnimate"] = self.enabled
        if self.id is not None:
            data["autoAnimateId"] = self.id
        if self.type is not None:
            data["autoAnimateType"] = self.type
        if self.duration is not None:
            data["autoAnimateDuration"] = self.duration
        if self.easing is not None:
            data["autoAnimateEasing"] = self.easing
        return data


@dataclass
class MathContent:
    """Content of a block ``math`` element."""
    latex: str
    display_mode: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {"latex": self.latex, "displayMode": self.display_mode}


ElementContent = Union[str, List[str], MathContent]


@dataclass
class SlideElement:
    """
    A single typed element on a slide.
    """
    id: str
    type: str
    content: ElementContent
    click_state: int = 0
    style: Optional[Dict[str, str]] = None
    list_type: Optional[str] = None  # "ordered" / "unordered", bullets only
    list_start: Optional[int] = None  # ordered bullets only
    language: Optional[str] = None  # code only
    auto_animate: Optional[AutoAnimate] = None

    def __post_init__(self):
        if self.type not in ElementType.ALL:
            raise ValueError(f"Unknown element type: {self.type!r}")

    def is_title(self) -> bool:
        """Check if this element is the slide title."""
        return self.type == ElementType.TITLE

    def to_dict(self) -> Dict[str, Any]:
        """Convert element to the dictionary shape renderers consume."""
        if isinstance(self.content, MathContent):
            content: Any = self.content.to_dict()
        elif isinstance(self.content, list):
            content = list(self.content)
        else:
            content = self.content

        data: Dict[str, Any] = {
            "id": self.id,
            "type": self.type,
            "content": content,
            "clickState": self.click_state,
        }
        if self.style:
            data["style"] = dict(self.style)
        if self.list_type is not None:
            data["listType"] = self.list_type
        if self.list_start is not None:
            data["listStart"] = self.list_start
        if self.language is not None:
            data["language"] = self.language
        if self.auto_animate is not None:
            data.update(self.auto_animate.to_dict())
        return data


@dataclass
class SlideContent:
    """
    One slide: ordered elements plus speaker notes and a layout name.
    """
    id: str
    elements: List[SlideElement] = field(default_factory=list)
    notes: str = ""
    layout: str = "auto"

    @property
    def title(self) -> Optional[SlideElement]:
        """First title element, if any."""
        for element in self.elements:
            if element.is_title():
                return element
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "elements": [element.to_dict() for element in self.elements],
            "notes": self.notes,
            "layout": self.layout,
        }


@dataclass
class TOCItem:
    """A heading found in the document."""
    id: str
    text: str
    level: int
    line_index: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "level": self.level,
            "lineIndex": self.line_index,
        }
