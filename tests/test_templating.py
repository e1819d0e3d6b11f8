from auto_insert_folder.core.templating import placeholder_values, resolve_placeholders
from auto_insert_folder.data_models import FolderRef, NoteAncestry


def test_folder_placeholder_replaced_everywhere():
    ancestry = NoteAncestry.from_folder_path("Work")
    assert resolve_placeholders("{{folder}}/{{folder}}", ancestry) == "Work/Work"


def test_parent_is_an_alias_for_folder():
    ancestry = NoteAncestry.from_folder_path("Work/Projects")
    assert resolve_placeholders("{{parent}} | {{folder}}", ancestry) == "Projects | Projects"


def test_grandparent_resolves_to_parent_of_parent():
    ancestry = NoteAncestry.from_folder_path("Work/Projects")
    assert resolve_placeholders("{{grandparent}}/{{folder}}", ancestry) == "Work/Projects"


def test_grandparent_is_empty_without_a_second_level():
    ancestry = NoteAncestry(folders=(FolderRef(name="Work", path="Work"),))
    assert resolve_placeholders("[{{grandparent}}]", ancestry) == "[]"


def test_top_level_folder_has_root_grandparent():
    ancestry = NoteAncestry.from_folder_path("Work")
    assert resolve_placeholders("{{grandparent}}", ancestry) == "Root"


def test_note_in_vault_root_renders_root():
    ancestry = NoteAncestry.from_folder_path("/")
    assert resolve_placeholders("{{folder}}", ancestry) == "Root"
    assert resolve_placeholders("{{grandparent}}", ancestry) == ""


def test_unknown_placeholders_are_left_verbatim():
    ancestry = NoteAncestry.from_folder_path("Work")
    assert resolve_placeholders("{{date}} {{folder}} {{ folder }}", ancestry) == "{{date}} Work {{ folder }}"


def test_text_without_placeholders_is_unchanged():
    ancestry = NoteAncestry.from_folder_path("Work")
    assert resolve_placeholders("Plain text", ancestry) == "Plain text"


def test_folder_names_are_not_expanded_again():
    ancestry = NoteAncestry.from_folder_path("{{grandparent}}/{{folder}}")
    assert resolve_placeholders("{{folder}}", ancestry) == "{{folder}}"
    assert resolve_placeholders("{{grandparent}}", ancestry) == "{{grandparent}}"


def test_placeholder_values_mapping():
    ancestry = NoteAncestry.from_folder_path("A/B/C")
    assert placeholder_values(ancestry) == {"folder": "C", "parent": "C", "grandparent": "B"}
