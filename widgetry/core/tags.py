"""
HTML Tags
=========

Lightweight HTML tag tree used by every constructor. Tags keep their
attributes in insertion order, carry the CSS/JS dependencies they need and,
for input controls and output placeholders, the id they are bound to.
"""

import copy
from typing import Any, Callable, Dict, Iterator, List, Optional, Union

from widgetry.models.schemas import Binding, BindingKind, HTMLDependency, OutputKind


VOID_ELEMENTS = frozenset(
    ["area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "track", "wbr"]
)


def escape_html(text: str, attr: bool = False) -> str:
    """Escape HTML special characters."""
    if not text:
        return ""
    text = text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    if attr:
        text = text.replace('"', "&quot;")
    return text


def normalize_attr_name(name: str) -> str:
    """Map a Python keyword name to an HTML attribute name.

    A trailing underscore is dropped (``class_`` -> ``class``) and remaining
    underscores become dashes (``data_value`` -> ``data-value``).
    """
    if name.endswith("_") and len(name) > 1:
        name = name[:-1]
    return name.replace("_", "-")


class HTML(str):
    """Markup that is emitted verbatim, without escaping."""

    def __html__(self) -> str:
        return str(self)

    def __repr__(self) -> str:
        return f"HTML({str.__repr__(self)})"


Child = Union["Tag", "TagList", HTML, str, None]


def _flatten(children: Any, out: List[Any], deps: List[HTMLDependency]) -> None:
    for child in children:
        if child is None or child is False:
            continue
        if isinstance(child, HTMLDependency):
            deps.append(child)
        elif isinstance(child, (Tag, HTML)):
            out.append(child)
        elif isinstance(child, TagList):
            _flatten(child, out, deps)
        elif isinstance(child, (list, tuple)):
            _flatten(child, out, deps)
        elif isinstance(child, str):
            out.append(child)
        elif hasattr(child, "__html__"):
            out.append(HTML(child.__html__()))
        else:
            out.append(str(child))


def _format_attr_value(value: Any) -> Optional[str]:
    if value is None or value is False:
        return None
    if value is True:
        return ""
    if isinstance(value, (list, tuple)):
        joined = " ".join(str(v) for v in value if v not in (None, ""))
        return joined or None
    return str(value)


class TagList(list):
    """An ordered group of children without a wrapping element."""

    def __init__(self, *children: Any) -> None:
        items: List[Any] = []
        deps: List[HTMLDependency] = []
        _flatten(children, items, deps)
        super().__init__(items + deps)

    def render(self, indent: int = 0, pretty: bool = True, indent_width: int = 2) -> str:
        parts = [
            _render_child(child, indent, pretty, indent_width)
            for child in self
            if not isinstance(child, HTMLDependency)
        ]
        return ("\n" if pretty else "").join(parts)

    def __html__(self) -> str:
        return self.render()

    def __str__(self) -> str:
        return self.render()


class Tag:
    """A single HTML element with attributes, children and dependencies."""

    def __init__(self, _name: str, *children: Any, **attrs: Any) -> None:
        self.name = _name
        self.attrs: Dict[str, Any] = {}
        self.children: List[Any] = []
        self.dependencies: List[HTMLDependency] = []
        self.binding: Optional[Binding] = None
        # Page level information (window title, theme, language)
        self.metadata: Dict[str, Any] = {}
        self.set_attrs(**attrs)
        self.append(*children)

    # Construction helpers -------------------------------------------------

    def append(self, *children: Any) -> "Tag":
        items: List[Any] = []
        _flatten(children, items, self.dependencies)
        self.children.extend(items)
        return self

    def insert(self, index: int, *children: Any) -> "Tag":
        items: List[Any] = []
        _flatten(children, items, self.dependencies)
        self.children[index:index] = items
        return self

    def set_attrs(self, **attrs: Any) -> "Tag":
        for key, value in attrs.items():
            name = normalize_attr_name(key)
            if name == "class":
                self.add_class(value)
            else:
                self.attrs[name] = value
        return self

    def add_class(self, *classes: Any) -> "Tag":
        current = [c for c in str(self.attrs.get("class") or "").split() if c]
        for value in classes:
            if value is None or value is False:
                continue
            if isinstance(value, (list, tuple)):
                names = [name for v in value if v for name in str(v).split()]
            else:
                names = str(value).split()
            for name in names:
                if name not in current:
                    current.append(name)
        if current:
            self.attrs["class"] = " ".join(current)
        return self

    def has_class(self, name: str) -> bool:
        return name in str(self.attrs.get("class") or "").split()

    def add_dependency(self, *deps: HTMLDependency) -> "Tag":
        self.dependencies.extend(deps)
        return self

    def bind(self, kind: BindingKind, id: str, output_kind: Optional[OutputKind] = None) -> "Tag":
        self.binding = Binding(kind=kind, id=id, output_kind=output_kind)
        return self

    # Traversal ------------------------------------------------------------

    def walk(self) -> Iterator["Tag"]:
        """Yield this tag and every descendant tag, depth first."""
        yield self
        for child in self.children:
            if isinstance(child, Tag):
                yield from child.walk()

    def find(self, id: str) -> Optional["Tag"]:
        """Return the first tag whose ``id`` attribute or binding matches."""
        for tag in self.walk():
            if tag.attrs.get("id") == id or (tag.binding is not None and tag.binding.id == id):
                return tag
        return None

    def find_all(self, predicate: Callable[["Tag"], bool]) -> List["Tag"]:
        return [tag for tag in self.walk() if predicate(tag)]

    def copy(self) -> "Tag":
        return copy.deepcopy(self)

    # Rendering ------------------------------------------------------------

    def _open_tag(self) -> str:
        parts = [self.name]
        for key, value in self.attrs.items():
            formatted = _format_attr_value(value)
            if formatted is None:
                continue
            if value is True:
                parts.append(key)
            else:
                parts.append(f'{key}="{escape_html(formatted, attr=True)}"')
        return "<" + " ".join(parts)

    def render(self, indent: int = 0, pretty: bool = True, indent_width: int = 2) -> str:
        """Render the tag (and its children) to an HTML string."""
        pad = " " * (indent * indent_width) if pretty else ""
        opening = self._open_tag()

        if self.name in VOID_ELEMENTS:
            return f"{pad}{opening}/>"

        if not self.children:
            return f"{pad}{opening}></{self.name}>"

        if len(self.children) == 1 and isinstance(self.children[0], str):
            text = _render_text(self.children[0])
            return f"{pad}{opening}>{text}</{self.name}>"

        if not pretty:
            inner = "".join(_render_child(c, 0, False, indent_width) for c in self.children)
            return f"{opening}>{inner}</{self.name}>"

        inner = "\n".join(_render_child(c, indent + 1, True, indent_width) for c in self.children)
        return f"{pad}{opening}>\n{inner}\n{pad}</{self.name}>"

    def __html__(self) -> str:
        return self.render()

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        bound = f" bound={self.binding.id!r}" if self.binding else ""
        return f"<Tag {self.name}{bound} children={len(self.children)}>"


def _render_text(text: str) -> str:
    if isinstance(text, HTML):
        return str(text)
    return escape_html(text)


def _render_child(child: Any, indent: int, pretty: bool, indent_width: int) -> str:
    if isinstance(child, (Tag, TagList)):
        return child.render(indent, pretty, indent_width)
    pad = " " * (indent * indent_width) if pretty else ""
    return pad + _render_text(child)


def collect_dependencies(node: Union[Tag, TagList]) -> List[HTMLDependency]:
    """Collect dependencies in order of first appearance.

    When the same dependency name appears with different versions the highest
    version wins, keeping the position of the first appearance.
    """
    found: Dict[str, HTMLDependency] = {}

    def visit(deps: List[HTMLDependency]) -> None:
        for dep in deps:
            current = found.get(dep.name)
            if current is None or dep.version_info > current.version_info:
                found[dep.name] = dep

    roots = [node] if isinstance(node, Tag) else [c for c in node if isinstance(c, Tag)]
    if isinstance(node, TagList):
        visit([c for c in node if isinstance(c, HTMLDependency)])
    for root in roots:
        for tag in root.walk():
            visit(tag.dependencies)
    return list(found.values())


def _tag_factory(name: str) -> Callable[..., Tag]:
    def make(*children: Any, **attrs: Any) -> Tag:
        return Tag(name, *children, **attrs)

    make.__name__ = name
    make.__doc__ = f"Create a <{name}> tag."
    return make


class _TagNamespace:
    """Build any HTML tag by attribute access: ``tags.section(...)``."""

    def __getattr__(self, name: str) -> Callable[..., Tag]:
        if name.startswith("__"):
            raise AttributeError(name)
        return _tag_factory(normalize_attr_name(name))


tags = _TagNamespace()

div = _tag_factory("div")
span = _tag_factory("span")
p = _tag_factory("p")
h1 = _tag_factory("h1")
h2 = _tag_factory("h2")
h3 = _tag_factory("h3")
h4 = _tag_factory("h4")
h5 = _tag_factory("h5")
h6 = _tag_factory("h6")
a = _tag_factory("a")
img = _tag_factory("img")
br = _tag_factory("br")
hr = _tag_factory("hr")
strong = _tag_factory("strong")
em = _tag_factory("em")
code = _tag_factory("code")
pre = _tag_factory("pre")
label = _tag_factory("label")
ul = _tag_factory("ul")
ol = _tag_factory("ol")
li = _tag_factory("li")
table = _tag_factory("table")
thead = _tag_factory("thead")
tbody = _tag_factory("tbody")
tr = _tag_factory("tr")
th = _tag_factory("th")
td = _tag_factory("td")
form = _tag_factory("form")
nav = _tag_factory("nav")
script = _tag_factory("script")
style = _tag_factory("style")
i = _tag_factory("i")
b = _tag_factory("b")
small = _tag_factory("small")
