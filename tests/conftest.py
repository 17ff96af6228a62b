"""
Shared pytest fixtures: small Figma node builders and sample payloads.
"""

import pytest


def text_node(characters=None, **extra):
    node = {"id": "t", "name": "Label", "type": "TEXT"}
    if characters is not None:
        node["characters"] = characters
    node.update(extra)
    return node


def button_instance(name="Primary Button", label="Click", **extra):
    node = {
        "id": f"inst-{name}",
        "name": name,
        "type": "INSTANCE",
        "children": [text_node(label)],
    }
    node.update(extra)
    return node


def wrap_nodes(*documents):
    return {
        "Result": {
            "nodes": {f"{i}:1": {"document": doc} for i, doc in enumerate(documents, 1)}
        }
    }


@pytest.fixture
def scenario_a():
    group = {
        "id": "1:1",
        "name": "Button Group",
        "type": "FRAME",
        "layoutMode": "HORIZONTAL",
        "children": [
            button_instance("Primary Button", "OK"),
            button_instance("Secondary Button", "Cancel"),
        ],
    }
    return wrap_nodes(group)


@pytest.fixture
def scenario_b():
    return wrap_nodes(
        {"id": "1:1", "name": "Header", "type": "FRAME", "children": []},
        {"id": "2:1", "name": "Card", "type": "FRAME"},
    )


@pytest.fixture
def scenario_c():
    group = {
        "id": "1:1",
        "name": "Actions",
        "type": "FRAME",
        "layoutMode": "HORIZONTAL",
        "children": [
            button_instance("Save Button", "Save"),
            {"id": "r", "name": "Divider", "type": "RECTANGLE"},
            button_instance("Hidden Button", "Nope", visible=False),
            button_instance("Delete Button", "Delete"),
        ],
    }
    return wrap_nodes(group)
