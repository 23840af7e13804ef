"""Tests for structural template validation."""

import pytest

from evento.core.errors import InvalidTemplate, UnknownComponentType
from evento.document import ViolationKind, ensure_valid, parse_template, validate
from evento.document.traversal import find_back_edges, preorder, reachable_ids


def arena(nodes, root_ids=None):
    document = {"name": "Arena", "nodes": nodes}
    if root_ids is not None:
        document["rootIds"] = root_ids
    return parse_template(document)


def kinds(result):
    return {v.kind for v in result.violations}


@pytest.mark.unit
def test_valid_template(invitation, registry):
    result = validate(invitation, registry)
    assert result.valid
    assert bool(result)
    assert result.to_dict() == {"valid": True, "violations": []}


@pytest.mark.unit
def test_unknown_type(registry, carousel_document):
    template = parse_template(carousel_document)
    result = validate(template, registry)
    assert kinds(result) == {ViolationKind.UNKNOWN_TYPE}

    with pytest.raises(UnknownComponentType) as exc:
        ensure_valid(template, registry)
    assert exc.value.component_type == "carousel"
    assert len(exc.value.violations) == 1


@pytest.mark.unit
def test_undeclared_property(registry):
    template = arena({"t": {"type": "text", "properties": {"content": "Hi", "blink": True}}})
    [violation] = validate(template, registry).violations
    assert violation.kind == ViolationKind.UNDECLARED_PROPERTY
    assert violation.property == "blink"


@pytest.mark.unit
def test_children_only_under_containers(registry):
    template = arena({
        "t": {"type": "text", "children": ["h"]},
        "h": {"type": "heading"},
    })
    result = validate(template, registry)
    assert kinds(result) == {ViolationKind.ILLEGAL_CHILDREN}
    assert result.violations[0].node_id == "t"


@pytest.mark.unit
def test_missing_child(registry):
    template = arena({"box": {"type": "container", "children": ["ghost"]}})
    assert kinds(validate(template, registry)) == {ViolationKind.MISSING_CHILD}


@pytest.mark.unit
def test_missing_root(registry):
    template = arena({"t": {"type": "text"}}, root_ids=["t", "nope"])
    assert kinds(validate(template, registry)) == {ViolationKind.MISSING_ROOT}


@pytest.mark.unit
def test_shared_child(registry):
    template = arena(
        {
            "a": {"type": "container", "children": ["t"]},
            "b": {"type": "container", "children": ["t"]},
            "t": {"type": "text"},
        },
        root_ids=["a", "b"],
    )
    result = validate(template, registry)
    assert kinds(result) == {ViolationKind.SHARED_CHILD}
    assert result.of_kind(ViolationKind.SHARED_CHILD)[0].node_id == "t"


@pytest.mark.unit
def test_cycle_detected(registry):
    template = arena(
        {
            "a": {"type": "container", "children": ["b"]},
            "b": {"type": "container", "children": ["a"]},
        },
        root_ids=["a"],
    )
    result = validate(template, registry)
    assert result.of_kind(ViolationKind.CYCLE)
    assert find_back_edges(template) == [("b", "a")]

    with pytest.raises(InvalidTemplate):
        ensure_valid(template, registry)


@pytest.mark.unit
def test_cycle_among_unreachable_nodes(registry):
    template = arena(
        {
            "root": {"type": "text"},
            "x": {"type": "container", "children": ["y"]},
            "y": {"type": "container", "children": ["x"]},
        },
        root_ids=["root"],
    )
    result = validate(template, registry)
    assert result.of_kind(ViolationKind.CYCLE)
    assert {v.node_id for v in result.of_kind(ViolationKind.ORPHAN_NODE)} == {"x", "y"}


@pytest.mark.unit
def test_orphan_node(registry):
    template = arena({"a": {"type": "text"}, "lost": {"type": "shape"}}, root_ids=["a"])
    [violation] = validate(template, registry).violations
    assert violation.kind == ViolationKind.ORPHAN_NODE
    assert violation.node_id == "lost"


@pytest.mark.unit
def test_node_limit(registry):
    template = arena({"a": {"type": "text"}, "b": {"type": "text"}})
    assert validate(template, registry).valid
    assert kinds(validate(template, registry, max_nodes=1)) == {ViolationKind.TOO_MANY_NODES}


@pytest.mark.unit
def test_rejected_literal_caught_early(registry):
    template = arena({"img": {"type": "image", "properties": {"src": "javascript:alert(1)"}}})
    [violation] = validate(template, registry).violations
    assert violation.kind == ViolationKind.CONSTRAINT
    assert violation.property == "src"


@pytest.mark.unit
def test_bound_source_not_checked_before_data(registry):
    template = arena({"img": {"type": "image", "properties": {"src": "{{photo}}"}}})
    assert validate(template, registry).valid


@pytest.mark.unit
def test_all_violations_reported_together(registry):
    template = arena(
        {
            "t": {"type": "text", "properties": {"size": 3}, "children": ["w"]},
            "w": {"type": "widget"},
        },
        root_ids=["t"],
    )
    result = validate(template, registry)
    assert kinds(result) == {
        ViolationKind.UNDECLARED_PROPERTY,
        ViolationKind.ILLEGAL_CHILDREN,
        ViolationKind.UNKNOWN_TYPE,
    }
    # Pre-order: parent's problems before the child's
    assert result.violations[-1].node_id == "w"
    assert [v["kind"] for v in result.to_dict()["violations"]][0] == "undeclared_property"


@pytest.mark.unit
def test_traversal_is_preorder(invitation):
    assert [node.id for node in preorder(invitation)] == ["page", "title", "photo", "rsvp", "when"]
    assert reachable_ids(invitation) == set(invitation.nodes)
