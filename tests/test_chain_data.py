from errchain import new


def test_data():
    base = new("base")
    assert base.wrap_data("m", 42).data == 42
    assert base.data is None
    assert new("base").wrap_data("error", "test").data == "test"


def test_data_with_args():
    err = new("base").wrap_template("%s").wrap_data_with_args("test", "error")
    assert err.data == "test"
    assert str(err) == "base: error"


def test_data_template():
    err = new("base").wrap_data_template("%s", "test").with_args("x")
    assert err.data is None
    assert err.any_data() == "test"
    assert str(err) == "base: x"


def test_data_is_not_propagated():
    err = new("base").wrap_data("m", {"k": 1}).wrap("leaf")
    assert err.data is None
    assert err.any_data() == {"k": 1}


def test_any_data_walks_to_root():
    root = new("root")
    root_with_data = root.wrap_data("payload", 7)
    leaf = root_with_data.wrap("a").wrap("b").wrap("c")
    assert leaf.any_data() == 7
    assert root.wrap("a").any_data() is None


def test_any_data_prefers_nearest():
    err = new("root").wrap_data("a", 1).wrap_data("b", 2).wrap("c")
    assert err.any_data() == 2


def test_extras_order():
    extra1 = new("extra1")
    extra2 = new("extra2")
    extra3 = new("extra3")
    err = new("base")
    assert err.extra(extra1) is err
    err.extra(extra2).extra(extra3)

    extras = err.extras
    assert len(extras) == 3
    assert extras[0] is extra1
    assert extras[1] is extra2
    assert extras[2] is extra3


def test_derivation_does_not_copy_extras():
    base = new("base").extra(new("e"))
    assert base.wrap("leaf").extras == ()
    assert str(base.wrap("leaf")) == "base: leaf"
