import random

from core.desktop.devtools.interface.tui_scroll import CHROME_ROWS, ROWS_PER_ITEM, Viewport


def _assert_visible(vp, cursor, total):
    if total == 0:
        assert vp.scroll == 0
    else:
        assert vp.scroll <= cursor < vp.scroll + vp.visible_count


def test_visible_count_uses_three_rows_per_item():
    assert (ROWS_PER_ITEM, CHROME_ROWS) == (3, 12)
    assert Viewport(height=24).visible_count == 4
    assert Viewport(height=13).visible_count == 1
    assert Viewport(height=5).visible_count == 1  # never below one item


def test_scroll_moves_minimally():
    vp = Viewport(height=24)
    vp.ensure_visible(3, 10)
    assert vp.scroll == 0
    vp.ensure_visible(4, 10)
    assert vp.scroll == 1
    vp.ensure_visible(2, 10)
    assert vp.scroll == 1
    vp.ensure_visible(0, 10)
    assert vp.scroll == 0


def test_shrinking_list_pulls_scroll_back():
    vp = Viewport(height=24, scroll=8)
    vp.ensure_visible(1, 2)
    assert vp.scroll == 1
    vp.ensure_visible(0, 0)
    assert vp.scroll == 0


def test_resize_then_ensure_keeps_cursor_on_screen():
    vp = Viewport(height=40)
    vp.ensure_visible(7, 20)
    assert vp.scroll == 0
    vp.resize(15)
    vp.ensure_visible(7, 20)
    assert vp.scroll == 7
    vp.resize(-3)
    assert vp.height == 0 and vp.visible_count == 1


def test_cursor_stays_visible_over_random_walk():
    rng = random.Random(7)
    vp = Viewport(height=30)
    cursor, total = 0, 25
    for _ in range(500):
        roll = rng.random()
        if roll < 0.6:
            cursor = max(0, min(cursor + rng.choice([-5, -1, 1, 5]), total - 1))
        elif roll < 0.8:
            vp.resize(rng.randint(10, 60))
        else:
            total = rng.randint(0, 40)
            cursor = max(0, min(cursor, total - 1)) if total else 0
        vp.ensure_visible(cursor, total)
        _assert_visible(vp, cursor, total)


def test_visible_range_clips_to_total():
    vp = Viewport(height=24, scroll=2)
    assert list(vp.visible_range(10)) == [2, 3, 4, 5]
    assert list(vp.visible_range(3)) == [2]
    assert list(vp.visible_range(0)) == []
