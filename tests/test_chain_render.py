from errchain import new, new_template


def test_new():
    assert new("test error").render() == "test error"
    assert str(new("%s error")) == "%s error"


def test_with_args_on_plain_node_joins_args():
    assert str(new("%s error").with_args("test")) == "%s error: test"
    assert str(new("base").with_args("a", 1)) == "base: a 1"


def test_new_template():
    assert str(new_template("%s error").with_args("test")) == "test error"
    assert str(new_template("v=%d").with_args(7)) == "v=7"


def test_template_alone_renders_empty():
    assert new_template("v=%d").render() == ""


def test_wrap():
    b = new("base")
    assert str(b.wrap("sub1")) == "base: sub1"
    assert str(b.wrap("sub1").wrap("sub2")) == "base: sub1 > sub2"
    assert str(b.wrap("sub1").wrap("sub2").wrap("sub3")) == "base: sub1; sub2 > sub3"
    assert (
        str(b.wrap("sub1").wrap("sub2").wrap("sub3").wrap("sub4"))
        == "base: sub1; sub2; sub3 > sub4"
    )


def test_wrap_template():
    b = new("base")
    e1 = b.wrap_template("sub%s").with_args("1")
    assert str(e1) == "base: sub1"
    e2 = e1.wrap_template("sub%s").with_args("2")
    assert str(e2) == "base: sub1 > sub2"
    e3 = e2.wrap_template("sub%s").with_args("3")
    assert str(e3) == "base: sub1; sub2 > sub3"
    e4 = e3.wrap_template("sub%s").with_args("4")
    assert str(e4) == "base: sub1; sub2; sub3 > sub4"


def test_unfilled_template_prints_its_ancestors():
    assert str(new("base").wrap_template("x%s")) == "base"
    assert str(new("base").wrap("sub1").wrap_template("x%s")) == "base: sub1"


def test_empty_ancestor_text_is_skipped():
    assert str(new("base").wrap("").wrap("leaf")) == "base: leaf"


def test_cause():
    assert str(new("A").wrap("B").wrap_cause("C", new("D"))) == "A: B > C < D"
    assert (
        str(new("base").wrap("sub1").wrap_cause("fail", new("cause")))
        == "base: sub1 > fail < cause"
    )
    assert (
        str(new("base").wrap("sub1").wrap_cause("fail", new("cause").wrap_cause("deep", new("cause"))))
        == "base: sub1 > fail < cause: deep < cause"
    )
    assert (
        str(new("base").wrap_template("%s").wrap_cause_with_args(new("cause"), "error"))
        == "base: error < cause"
    )


def test_cause_on_ancestor():
    base = new("base").wrap_cause("base error", new("basecause"))
    cause = new("cause").wrap_cause("cause error", new("causecause"))
    assert (
        str(base.wrap_cause("error", cause))
        == "base: base error < basecause > error < cause: cause error < causecause"
    )


def test_native_cause_uses_str():
    err = new("io").wrap_cause("read", OSError("disk full"))
    assert str(err) == "io: read < disk full"


def test_extras_render_in_order():
    err = new("base").extra(new("extra1")).extra(new("extra2")).extra(new("extra3"))
    assert str(err) == "base + extra1 + extra2 + extra3"


def test_extras_follow_whole_chain():
    err = new("base").wrap("sub1").wrap("sub2").extra(new("x").wrap("y")).extra(ValueError("bad"))
    assert str(err) == "base: sub1 > sub2 + x: y + bad"


def test_render_is_repeatable():
    err = new("base").wrap("sub1").wrap_cause("fail", new("cause")).extra(new("e"))
    assert err.render() == err.render() == str(err)


def test_repr():
    assert repr(new("base").wrap("sub1")) == "ErrorChain('sub1')"
