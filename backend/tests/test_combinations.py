from catalog_admin.utils.combinations import cartesian_product, count_combinations


def test_last_axis_varies_fastest():
    combos = cartesian_product([["a", "b"], [1, 2]])
    assert combos == [("a", 1), ("a", 2), ("b", 1), ("b", 2)]


def test_size_is_product_of_axis_lengths():
    axes = [["s1", "s2", "s3"], ["r1"], ["m1", "m2"]]
    combos = cartesian_product(axes)
    assert len(combos) == 3 * 1 * 2
    assert len(set(combos)) == len(combos)
    for combo in combos:
        assert len(combo) == 3
        for token, axis in zip(combo, axes):
            assert token in axis


def test_same_input_gives_same_order():
    axes = [["x", "y"], ["1", "2", "3"], ["p", "q"]]
    assert cartesian_product(axes) == cartesian_product(axes)


def test_accepts_any_iterables():
    combos = cartesian_product([iter(["a", "b"]), ("c",)])
    assert combos == [("a", "c"), ("b", "c")]


def test_zero_axes_yield_single_empty_tuple():
    assert cartesian_product([]) == [()]


def test_empty_axis_yields_no_combinations():
    assert cartesian_product([["a", "b"], []]) == []


def test_many_single_option_axes_stay_flat():
    # deep axis counts are folded iteratively, not recursed
    combos = cartesian_product([["only"]] * 2000)
    assert len(combos) == 1
    assert len(combos[0]) == 2000


def test_count_combinations():
    assert count_combinations([2, 3]) == 6
    assert count_combinations([2, 3], color_count=0) == 6
    assert count_combinations([2, 3], color_count=4) == 24
    assert count_combinations([], color_count=0) == 1
