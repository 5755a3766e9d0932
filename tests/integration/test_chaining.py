"""End-to-end chains mixing reference and value hosts."""

from dataclasses import dataclass, field

import pytest

from configure import K, Configurable, FieldTypeError, ValueConfigurable


@dataclass
class Insets(ValueConfigurable):
    top: float = 0.0
    left: float = 0.0
    bottom: float = 0.0
    right: float = 0.0


@dataclass
class Style(ValueConfigurable):
    font: str = "system"
    size: float = 12.0
    padding: Insets = field(default_factory=Insets)


class View(Configurable):
    name: str
    style: Style
    children: list["View"]

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.style = Style()
        self.children = []


def test_point_scenario(point_cls):
    """Zero point is never mutated while a chain derives a new one."""
    zero = point_cls(x=0, y=0)

    result = zero.set(K.x, 5).set(K.y, 10)

    assert result == point_cls(x=5, y=10)
    assert zero == point_cls(x=0, y=0)


def test_label_scenario(label_cls):
    a = label_cls()
    b = a.set(K.text, "hi")

    assert a.text == "hi"
    assert a is b


def test_value_then_versus_mutate(point_cls):
    original = point_cls(1, 1)
    retained = original

    copy = original.then(lambda p: setattr(p, "x", 9))
    assert copy == point_cls(9, 1)
    assert retained == point_cls(1, 1)

    original.mutate(lambda p: setattr(p, "x", 9))
    assert retained == point_cls(9, 1)


def test_building_a_view_tree():
    header = View("header").set(K.style.size, 18.0).set(K.style.padding.top, 8.0)
    root = View("root").then(lambda v: v.children.append(header))

    assert root.children[0] is header
    assert header.style == Style(size=18.0, padding=Insets(top=8.0))


def test_reference_set_through_value_field_stores_new_value():
    """A reference host reaching into a value field writes a new value back."""
    view = View()
    style = view.style

    result = view.set(K.style.font, "mono")

    assert result is view
    assert view.style.font == "mono"
    assert style.font == "system"
    assert view.style is not style


def test_child_style_update_is_written_back_on_the_child():
    child = View("child")
    root = View("root").then(lambda v: v.children.append(child))
    previous = child.style

    root.set(K.children[0].style.size, 20.0)

    assert root.children[0] is child
    assert child.style.size == 20.0
    assert previous.size == 12.0


def test_shared_value_template_is_not_affected_by_derivations():
    base = Style(font="serif")

    heading = base.set(K.size, 24.0)
    caption = base.set(K.size, 9.0).set(K.padding.left, 2.0)

    assert base == Style(font="serif")
    assert heading.padding is base.padding
    assert caption.padding == Insets(left=2.0)


def test_let_derives_summary_without_touching_view():
    view = View("card").set(K.style.size, 14.0)

    summary = view.let(lambda v: f"{v.name}:{v.style.size:g}")

    assert summary == "card:14"
    assert view.style.size == 14.0


def test_do_terminates_chain_with_side_effect():
    rendered: list[str] = []

    result = View("footer").set(K.name, "Footer").do(lambda v: rendered.append(v.name))

    assert result is None
    assert rendered == ["Footer"]


def test_invalid_nested_value_is_rejected_before_any_write():
    view = View()

    with pytest.raises(FieldTypeError, match=r"Insets\.top"):
        view.set(K.style.padding.top, "wide")

    assert view.style.padding.top == 0.0


def test_value_assigned_into_reference_host_is_copied():
    """Storing a value host copies it, like assigning a struct."""
    theme = Style(font="serif")
    view = View().set(K.style, theme)

    theme.mutate(lambda s: setattr(s, "font", "mono"))

    assert view.style == Style(font="serif")
    assert view.style is not theme
