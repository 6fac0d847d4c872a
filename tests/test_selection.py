from record_console.engine.selection import SelectionManager


def test_toggle_row():
    selection = SelectionManager()
    selection.toggle_row(1, True)
    selection.toggle_row(2, True)
    selection.toggle_row(1, False)
    assert selection.selected == frozenset({2})
    assert 2 in selection
    assert selection.count == len(selection) == 1


def test_none_identity_is_ignored():
    selection = SelectionManager()
    selection.toggle_row(None, True)
    assert selection.count == 0


def test_toggle_visible_only_touches_visible_identities():
    selection = SelectionManager([7])
    selection.toggle_visible(True, [1, 2, 3])
    assert selection.selected == {1, 2, 3, 7}
    assert selection.all_selected([1, 2, 3])

    selection.toggle_visible(False, [1, 2, 3])
    assert selection.selected == {7}
    assert not selection.all_selected([1, 2, 3])


def test_all_selected_is_false_for_empty_page():
    assert SelectionManager([1]).all_selected([]) is False


def test_ordered_keeps_selection_order():
    selection = SelectionManager()
    for identity in ("c", "a", "b"):
        selection.toggle_row(identity, True)
    assert selection.ordered() == ["c", "a", "b"]


def test_reconcile_drops_only_missing_identities():
    selection = SelectionManager([1, 2, 3])
    dropped = selection.reconcile([1, 3, 4])
    assert dropped == {2}
    assert selection.selected == {1, 3}


def test_clear():
    selection = SelectionManager([1, 2])
    selection.clear()
    assert selection.count == 0
