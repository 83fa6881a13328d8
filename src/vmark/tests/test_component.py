"""Tests for components, the registry and subcomponent rendering."""

import pytest
from pydantic import ValidationError

from vmark.component import (
    Component,
    ComponentRegistry,
    load_component_from_string,
    load_components,
)
from vmark.exceptions import ComponentNotFoundError, UnknownFieldError
from vmark.viewmodel import ViewModel


def greeting():
    return Component(
        name="greeting",
        template="<span>{{ greeting }}, {{ message }}</span>",
        props=["message"],
        data={"greeting": "Hello"},
    )


def app(template, **data):
    return Component(name="app", template=template, subs={"greeting": "greeting"}, data=data)


def render_app(template, **data):
    root = app(template, **data)
    registry = ComponentRegistry([root, greeting()])
    return ViewModel(root, registry=registry).render()


# =============================================================================
# Definitions
# =============================================================================


def test_template_must_not_be_blank():
    with pytest.raises(ValidationError, match="must not be empty"):
        Component(name="x", template="   ")


def test_sub_tags_are_lowercased():
    comp = Component(name="x", template="<p></p>", subs={"My-Card": "card"})
    assert comp.subs == {"my-card": "card"}


def test_methods_excluded_from_dump():
    comp = Component(name="x", template="<p></p>", methods={"go": lambda vm: None})
    assert "methods" not in comp.model_dump()
    assert "go" in comp.methods


def test_load_component_from_string():
    comp = load_component_from_string(
        """
name: card
template: <div class="card">{{ title }}</div>
props: [title]
data:
  title: Untitled
subs:
  card-footer: footer
"""
    )
    assert comp.name == "card"
    assert comp.props == ["title"]
    assert comp.data == {"title": "Untitled"}
    assert comp.subs == {"card-footer": "footer"}


def test_load_components_list(tmp_path):
    path = tmp_path / "components.yaml"
    path.write_text(
        """
components:
  - name: a
    template: <p>a</p>
  - name: b
    template: <p>b</p>
"""
    )
    assert [c.name for c in load_components(path)] == ["a", "b"]


def test_load_components_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_components(tmp_path / "nope.yaml")


# =============================================================================
# Instances and registry
# =============================================================================


class TestInstance:
    def test_has_prop_matches_capitalized(self):
        inst = greeting().instance()
        assert inst.has_prop("Message")
        assert inst.has_prop("message")
        assert not inst.has_prop("title")

    def test_set_prop_uses_declared_name(self):
        inst = greeting().instance()
        inst.set_prop("Message", "world")
        assert inst.props == {"message": "world"}

    def test_set_unknown_prop_fails(self):
        with pytest.raises(KeyError):
            greeting().instance().set_prop("title", "x")

    def test_initial_data_is_a_copy(self):
        comp = Component(name="x", template="<p></p>", data={"items": [1]})
        first = comp.instance().initial_data()
        first["items"].append(2)
        assert comp.data == {"items": [1]}

    def test_props_override_data(self):
        comp = Component(name="x", template="<p></p>", props=["title"], data={"title": "a"})
        inst = comp.instance()
        inst.set_prop("title", "b")
        assert inst.initial_data() == {"title": "b"}


class TestRegistry:
    def test_get_unknown(self):
        with pytest.raises(ComponentNotFoundError, match="nope"):
            ComponentRegistry().get("nope")

    def test_resolve_only_declared_subs(self):
        root = app("<div></div>")
        registry = ComponentRegistry([root, greeting()])
        assert registry.resolve(root, "greeting").name == "greeting"
        assert registry.resolve(root, "GREETING").name == "greeting"
        assert registry.resolve(root, "div") is None
        assert registry.resolve(greeting(), "greeting") is None

    def test_resolve_creates_fresh_instances(self):
        root = app("<div></div>")
        registry = ComponentRegistry([root, greeting()])
        a = registry.resolve(root, "greeting")
        b = registry.resolve(root, "greeting")
        a.set_prop("message", "x")
        assert b.props == {}

    def test_resolve_unregistered_sub(self):
        root = app("<div></div>")
        with pytest.raises(ComponentNotFoundError, match="greeting"):
            ComponentRegistry([root]).resolve(root, "greeting")

    def test_names_and_contains(self):
        registry = ComponentRegistry([greeting()])
        assert registry.names() == ["greeting"]
        assert "greeting" in registry
        assert len(registry) == 1


# =============================================================================
# Subcomponent rendering
# =============================================================================


class TestSubcomponents:
    def test_prop_passed_and_spliced(self):
        out = render_app('<div><greeting v-bind:message="who"></greeting></div>', who="world")
        assert out == "<div><span>Hello, world</span></div>"

    def test_children_of_sub_element_are_ignored(self):
        out = render_app(
            '<div><greeting v-bind:message="who"><b v-bind:x="missing"></b></greeting></div>',
            who="world",
        )
        assert out == "<div><span>Hello, world</span></div>"

    def test_siblings_after_sub_are_executed(self):
        out = render_app(
            '<div><greeting v-bind:message="who"></greeting><p v-if="show">after</p></div>',
            who="w",
            show=True,
        )
        assert out == "<div><span>Hello, w</span><p>after</p></div>"

    def test_sub_in_loop(self):
        out = render_app(
            '<div><greeting v-for="n in names" v-bind:message="n"></greeting></div>',
            names=["a", "b"],
        )
        assert out == "<div><span>Hello, a</span><span>Hello, b</span></div>"

    def test_sub_removed_by_if(self):
        out = render_app('<div><greeting v-if="show"></greeting></div>', show=False)
        assert out == "<div></div>"

    def test_sub_loop_counter_is_independent(self):
        listing = Component(
            name="listing",
            template='<ol><li v-for="x in items">{{ x }}</li></ol>',
            props=["items"],
        )
        root = Component(
            name="app",
            template='<div><p v-for="x in a">{{ x }}</p><listing v-bind:items="b"></listing></div>',
            subs={"listing": "listing"},
            data={"a": [1], "b": [2, 3]},
        )
        out = ViewModel(root, registry=ComponentRegistry([root, listing])).render()
        assert out == "<div><p>1</p><ol><li>2</li><li>3</li></ol></div>"

    def test_prop_placeholder_is_not_evaluated(self):
        out = render_app('<div><greeting v-bind:message="who"></greeting></div>', who="{{ 6 * 7 }}")
        assert out == "<div><span>Hello, {{ 6 * 7 }}</span></div>"

    def test_sub_output_is_interpolated_once(self):
        out = render_app(
            '<div><greeting v-bind:message="who"></greeting></div>',
            who="{{ secret }}",
            secret="leaked",
        )
        assert "leaked" not in out
        assert out == "<div><span>Hello, {{ secret }}</span></div>"

    def test_sub_field_errors_propagate(self):
        broken = Component(name="greeting", template='<p v-bind:x="nope"></p>')
        root = app("<div><greeting></greeting></div>")
        vm = ViewModel(root, registry=ComponentRegistry([root, broken]))
        with pytest.raises(UnknownFieldError):
            vm.render()
