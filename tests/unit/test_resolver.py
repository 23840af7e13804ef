"""Tests for template resolution into visual trees."""

import pytest
from hypothesis import HealthCheck, given, settings as hypothesis_settings, strategies as st
from returns.result import Failure, Success

from evento.binding.resolver import ResolutionErrorKind, resolve
from evento.binding.visual import VisualTree
from evento.components import Frame, get_registry
from evento.core.errors import PropertyConstraintViolation, UnboundReference, UnknownComponentType
from evento.document import parse_template, walk


def resolved(template, data, registry=None):
    result = resolve(template, data, registry)
    assert isinstance(result, Success), result
    return result.unwrap()


# ============================================================================
# Scenarios
# ============================================================================

@pytest.mark.unit
def test_welcome_heading(invitation, invitation_data, registry):
    tree = resolved(invitation, invitation_data, registry)
    title = tree.find("title")
    assert title.output.element == "h1"
    assert title.output.text == "Welcome Grace"


@pytest.mark.unit
def test_image_placeholder(invitation, invitation_data, registry):
    photo = resolved(invitation, invitation_data, registry).find("photo")
    assert photo.output.attributes == {"placeholder": True}
    assert photo.output.text == "No image"


@pytest.mark.unit
def test_qrcode_clamped_and_bound(invitation, invitation_data, registry):
    rsvp = resolved(invitation, invitation_data, registry).find("rsvp")
    assert rsvp.output.attributes["size"] == 200
    assert rsvp.output.attributes["value"] == "https://example.org/rsvp/42"


@pytest.mark.unit
def test_qrcode_empty_value_uses_default(registry):
    template = parse_template({
        "name": "QR",
        "components": [{"id": "qr", "type": "qrcode", "props": {"value": "", "size": 500}}],
    })
    qr = resolved(template, {}, registry).find("qr")
    assert qr.output.attributes == {
        "value": "https://example.com",
        "size": 200,
        "fgColor": "#000000",
        "bgColor": "#ffffff",
    }


@pytest.mark.unit
def test_unknown_component_type(carousel_document, registry):
    with pytest.raises(UnknownComponentType):
        resolve(parse_template(carousel_document), {}, registry)


@pytest.mark.unit
def test_unbound_reference(unbound_document, registry):
    result = resolve(parse_template(unbound_document), {"user": {"name": "Ada"}}, registry)
    assert isinstance(result, Failure)

    error = result.failure()
    assert error.kind == ResolutionErrorKind.UNBOUND_REFERENCE
    assert error.node_id == "email"
    assert error.property == "content"
    assert error.path == "user.email"

    exc = error.to_exception()
    assert isinstance(exc, UnboundReference)
    assert exc.path == "user.email"


@pytest.mark.unit
def test_unbound_path_inside_interpolation(registry):
    template = parse_template({
        "name": "Greeting",
        "components": [{"id": "t", "type": "text", "props": {"content": "Hi {{first}} {{last}}"}}],
    })
    error = resolve(template, {"first": "Ada"}, registry).failure()
    assert error.path == "last"
    assert error.to_dict()["nodeId"] == "t"


@pytest.mark.unit
def test_bound_value_rejected_by_policy(registry):
    template = parse_template({
        "name": "Photo",
        "components": [{"id": "img", "type": "image", "props": {"src": "{{photo}}"}}],
    })
    error = resolve(template, {"photo": "javascript:alert(1)"}, registry).failure()
    assert error.kind == ResolutionErrorKind.PROPERTY_CONSTRAINT
    assert error.property == "src"
    assert isinstance(error.to_exception(), PropertyConstraintViolation)

    img = resolved(template, {"photo": "https://cdn.example.org/p.jpg"}, registry).find("img")
    assert img.output.element == "img"


# ============================================================================
# Output details
# ============================================================================

@pytest.mark.unit
def test_style_merge_order(registry):
    template = parse_template({
        "name": "Styled",
        "components": [{
            "id": "t",
            "type": "text",
            "props": {"content": "x", "color": "#111111"},
            "styles": {"color": "red", "margin": "4px"},
        }],
    })
    style = resolved(template, {}, registry).find("t").output.style
    assert style["padding"] == "8px"
    assert style["color"] == "red"
    assert style["margin"] == "4px"
    assert style["fontSize"] == "16px"


@pytest.mark.unit
def test_frames_and_layering(registry):
    template = parse_template({
        "name": "Frames",
        "components": [
            {"id": "a", "type": "text"},
            {"id": "b", "type": "shape", "frame": {"x": 5, "y": 6, "width": 7, "height": 8}, "zIndex": 2},
        ],
    })
    tree = resolved(template, {}, registry)
    assert tree.find("a").frame == Frame(width=200, height=50)
    assert tree.find("b").frame == Frame(x=5, y=6, width=7, height=8)
    assert tree.find("b").z_index == 2


@pytest.mark.unit
def test_numbers_interpolate_cleanly(registry):
    template = parse_template({
        "name": "Seats",
        "components": [{"id": "t", "type": "text", "props": {"content": "Table {{table}} of {{tables}}"}}],
    })
    assert resolved(template, {"table": 4.0, "tables": 12}, registry).find("t").output.text == "Table 4 of 12"


@pytest.mark.unit
def test_null_reference_uses_default(registry):
    template = parse_template({
        "name": "Null",
        "components": [{"id": "t", "type": "text", "props": {"content": {"$ref": "note"}}}],
    })
    assert resolved(template, {"note": None}, registry).find("t").output.text == "Enter text here"


@pytest.mark.unit
def test_template_is_not_mutated(invitation, invitation_data, registry):
    before = invitation.model_dump()
    resolved(invitation, invitation_data, registry)
    assert invitation.model_dump() == before


@pytest.mark.unit
def test_json_round_trip(invitation, invitation_data, registry):
    tree = resolved(invitation, invitation_data, registry)
    assert VisualTree.from_json(tree.to_json()) == tree


@pytest.mark.unit
def test_empty_template(registry):
    tree = resolved(parse_template({"name": "Blank", "components": []}), {}, registry)
    assert tree.roots == ()
    assert tree.node_count == 0


# ============================================================================
# Properties
# ============================================================================

@st.composite
def nested_documents(draw):
    """Random valid arena documents: containers own text, headings and dividers."""
    size = draw(st.integers(min_value=1, max_value=12))
    kinds = [draw(st.sampled_from(["container", "text", "heading", "divider"])) for _ in range(size)]
    parents: list[int | None] = []
    for i in range(size):
        choices = [None] + [j for j in range(i) if kinds[j] == "container"]
        parents.append(draw(st.sampled_from(choices)))

    nodes = {}
    for i, kind in enumerate(kinds):
        node = {"type": kind, "children": [f"n{c}" for c in range(size) if parents[c] == i]}
        if kind in ("text", "heading"):
            node["properties"] = {"content": draw(st.sampled_from(["Hello", "Hi {{name}}", "{{name}}"]))}
        nodes[f"n{i}"] = node

    return {
        "name": "Generated",
        "nodes": nodes,
        "rootIds": [f"n{i}" for i in range(size) if parents[i] is None],
    }


names = st.text(alphabet=st.characters(min_codepoint=32, max_codepoint=0x2FFF), max_size=20)


@pytest.mark.unit
@hypothesis_settings(max_examples=50, suppress_health_check=[HealthCheck.too_slow])
@given(document=nested_documents(), name=names)
def test_tree_mirrors_template_shape(document, name):
    template = parse_template(document)
    tree = resolved(template, {"name": name}, get_registry())

    assert tree.node_count == template.node_count
    assert [node.id for node in tree.iter_nodes()] == [visit.node.id for visit in walk(template)]
    for node in tree.iter_nodes():
        assert node.type == template.nodes[node.id].type
        assert tuple(child.id for child in node.children) == template.nodes[node.id].children


@pytest.mark.unit
@hypothesis_settings(max_examples=50, suppress_health_check=[HealthCheck.too_slow])
@given(document=nested_documents(), name=names)
def test_resolution_is_deterministic(document, name):
    template = parse_template(document)
    registry = get_registry()
    first = resolved(template, {"name": name}, registry)
    second = resolved(template, {"name": name}, registry)
    assert first.to_json() == second.to_json()


@pytest.mark.unit
@hypothesis_settings(max_examples=50, suppress_health_check=[HealthCheck.too_slow])
@given(document=nested_documents())
def test_missing_binding_never_yields_a_tree(document):
    template = parse_template(document)
    result = resolve(template, {}, get_registry())
    bound = any(node.bindings for node in template.nodes.values())
    assert isinstance(result, Failure) == bound
