from tickwork.core.coerce import to_bool, to_count, to_int, to_millis, to_name


def test_to_int():
    assert to_int("12") == 12
    assert to_int(3.9) == 3
    assert to_int("x", default=4) == 4


def test_to_millis_is_non_negative():
    assert to_millis(None) == 0
    assert to_millis("250") == 250
    assert to_millis(-5) == 0
    assert to_millis("bad", default=7) == 7


def test_to_count():
    assert to_count(None, 2) == 2
    assert to_count("3") == 3
    assert to_count(-1) == 0


def test_to_name():
    assert to_name("  main ") == "main"
    assert to_name(None, fallback="x") == "x"
    assert to_name("   ", fallback="y") == "y"
    assert to_name(12) == "12"


def test_to_bool():
    assert to_bool("yes") is True
    assert to_bool("0", default=True) is False
    assert to_bool(None, default=True) is True
    assert to_bool("maybe") is False
