from prompt_toolkit.buffer import Buffer

from core import Tag
from core.desktop.devtools.application.edit_session import EditDraft, EditField
from core.desktop.devtools.interface.tui_comments import CommentComposer
from core.desktop.devtools.interface.tui_editing import (
    EditOutcome,
    EditSession,
    apply_text_key,
    is_printable,
    set_buffer_text,
)

TAGS = [Tag(id=1, name="a"), Tag(id=2, name="b"), Tag(id=3, name="c")]


def _feed(session, keys, tags=TAGS):
    outcome = EditOutcome.NONE
    for key in keys:
        outcome = session.handle_key(key, tags)
    return outcome


def test_is_printable():
    assert is_printable("a") and is_printable(" ") and is_printable("ж")
    assert not is_printable("enter") and not is_printable("\x1b")


def test_apply_text_key_respects_limit_and_cursor():
    buf = Buffer()
    for key in "abcd":
        apply_text_key(buf, key, char_limit=3)
    assert buf.text == "abc"
    apply_text_key(buf, "left")
    apply_text_key(buf, "backspace")
    assert buf.text == "ac" and buf.cursor_position == 1
    apply_text_key(buf, "home")
    apply_text_key(buf, "delete")
    assert buf.text == "c"


def test_enter_only_inserts_in_multiline():
    single = Buffer()
    assert apply_text_key(single, "enter") is False
    multi = Buffer(multiline=True)
    set_buffer_text(multi, "x")
    assert apply_text_key(multi, "enter", multiline=True)
    assert multi.text == "x\n"


def test_unknown_control_keys_are_not_consumed():
    buf = Buffer()
    assert apply_text_key(buf, "c-x") is False
    assert buf.text == ""


def test_session_starts_on_title_with_buffers_from_draft():
    session = EditSession(EditDraft(task_id=3, title="Old", notes="n", priority_text="4"))
    assert session.field is EditField.TITLE and not session.is_new
    assert session.buffer(EditField.TITLE).text == "Old"
    assert session.buffer(EditField.TITLE).cursor_position == 3
    assert session.buffer(EditField.PRIORITY).text == "4"
    assert session.buffer(EditField.TAGS) is None


def test_enter_advances_from_title_and_priority_only():
    session = EditSession(EditDraft.new())
    _feed(session, ["x", "enter"])
    assert session.field is EditField.DESCRIPTION
    _feed(session, ["y", "enter", "z"])
    assert session.field is EditField.DESCRIPTION
    assert session.draft.description == "y\nz"
    _feed(session, ["tab", "enter"])
    assert session.field is EditField.NOTES and session.draft.notes == "\n"
    _feed(session, ["tab", "enter"])
    assert session.field is EditField.TAGS


def test_tags_field_moves_cursor_and_toggles():
    session = EditSession(EditDraft.new())
    session.field = EditField.TAGS
    assert _feed(session, ["down", "down", "down", " "]) is EditOutcome.TOGGLED
    assert session.tag_cursor == 2 and session.draft.tag_ids == [3]
    assert _feed(session, ["up", "enter"]) is EditOutcome.TOGGLED
    assert session.draft.tag_ids == [3, 2]
    assert _feed(session, [" "], tags=[]) is EditOutcome.NONE


def test_save_button_and_shortcuts():
    session = EditSession(EditDraft.new())
    assert _feed(session, ["s-tab", "x"]) is EditOutcome.NONE
    assert session.field is EditField.SAVE
    assert _feed(session, ["enter"]) is EditOutcome.SAVE
    assert _feed(session, ["tab", "T", "c-s"]) is EditOutcome.SAVE
    assert session.draft.title == "T"
    assert _feed(session, ["escape"]) is EditOutcome.CANCEL


def test_comment_composer_submission_is_trimmed():
    composer = CommentComposer(char_limit=10)
    assert composer.submission() is None
    for key in [" ", "h", "i", "enter", " "]:
        composer.handle_key(key)
    assert composer.submission() == "hi"
    for key in "0123456789":
        composer.handle_key(key)
    assert len(composer.text) == 10
    composer.clear()
    assert composer.text == ""
