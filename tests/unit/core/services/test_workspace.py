from __future__ import annotations

"""
Unit tests for the Project Workspace Store.

Verifies selection handling, structure import and the JSON round trip
of the session state.
"""

import pytest

from structure_builder.core.services.workspace import ProjectWorkspace
from structure_builder.domain.tree_models import NodeKind


def test_sample_tree_seed() -> None:
    """TC-01: The starter workspace holds src/main.py and a README."""
    ws = ProjectWorkspace.with_sample_tree("demo")

    assert [n.name for n in ws.forest] == ["src", "README.md"]
    assert ws.forest[0].children[0].name == "main.py"
    assert ws.forest[1].content.startswith("# demo")
    assert ws.selected is None


def test_select_file_and_ignore_folders(sample_forest) -> None:
    """TC-02: Only files become the selection."""
    ws = ProjectWorkspace("demo", sample_forest)
    main_py = sample_forest[0].children[0]

    ws.select(main_py.id)
    assert ws.selected is not None
    assert ws.selected.name == "main.py"

    ws.select(sample_forest[0].id)
    assert ws.selected_id is None

    ws.select("missing")
    assert ws.selected_id is None


@pytest.mark.parametrize("target", ["self", "parent"])
def test_delete_clears_selection_inside_removed_subtree(sample_forest, target: str) -> None:
    """TC-03: Deleting the selected file or one of its ancestors clears the selection."""
    ws = ProjectWorkspace("demo", sample_forest)
    main_py = sample_forest[0].children[0]
    ws.select(main_py.id)

    ws.delete(main_py.id if target == "self" else sample_forest[0].id)

    assert ws.selected_id is None
    assert ws.selected is None


def test_delete_elsewhere_keeps_selection(sample_forest) -> None:
    """TC-04: Unrelated deletions leave the selection alone."""
    ws = ProjectWorkspace("demo", sample_forest)
    ws.select(sample_forest[1].id)

    ws.delete(sample_forest[0].id)

    assert ws.selected is not None
    assert ws.selected.name == "README.md"


def test_update_content_reaches_selected_file(sample_forest) -> None:
    """TC-05: Edits land on the file and are visible through the selection."""
    ws = ProjectWorkspace("demo", sample_forest)
    main_py = sample_forest[0].children[0]
    ws.select(main_py.id)

    ws.update_content(main_py.id, "print('edited')\n")

    assert ws.selected.content == "print('edited')\n"
    assert main_py.content == 'print("hi")\n'


def test_import_structure_appends_roots(sample_forest, sample_listing: str) -> None:
    """TC-06: Imported roots follow the existing ones."""
    ws = ProjectWorkspace("demo", sample_forest)

    added = ws.import_structure(sample_listing)

    assert added == 4
    assert [n.name for n in ws.forest] == [
        "src", "README.md", "app", "models", "requirements.txt", "README.md",
    ]


def test_import_without_entries_is_noop(sample_forest) -> None:
    """TC-07: Blank or glyph-only input leaves the forest untouched."""
    ws = ProjectWorkspace("demo", sample_forest)
    before = ws.forest

    assert ws.import_structure("   \n") == 0
    assert ws.import_structure("│\n└──\n") == 0
    assert ws.forest is before


def test_add_item_and_blank_names() -> None:
    """TC-08: New items land at the top level; blank names are ignored."""
    ws = ProjectWorkspace("demo")

    folder = ws.add_item("docs", NodeKind.FOLDER)
    ws.add_item("notes.txt")

    assert folder is not None and folder.is_folder
    assert [n.name for n in ws.forest] == ["docs", "notes.txt"]
    assert ws.forest[1].content == ""
    assert ws.add_item("  ") is None
    assert len(ws.forest) == 2


def test_rename_rejects_blank() -> None:
    """TC-09: Project names cannot be blank."""
    ws = ProjectWorkspace("demo")
    ws.rename("  renamed ")

    assert ws.project_name == "renamed"
    with pytest.raises(ValueError):
        ws.rename("   ")


def test_json_round_trip_resets_selection(sample_forest) -> None:
    """TC-10: Loading an exported document restores the forest."""
    ws = ProjectWorkspace("demo", sample_forest)
    ws.select(sample_forest[1].id)
    exported = ws.to_json()

    other = ProjectWorkspace("copy")
    other.select(None)
    other.load_json(exported)

    assert other.flatten() == ws.flatten()
    assert other.selected_id is None
    assert other.to_json() == exported
