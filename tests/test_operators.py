from lightcr import operators


def test_exists():
    assert operators.exists().encode("key") == "key"


def test_not_exists():
    assert operators.not_exists().encode("key") == "!key"


def test_equal():
    assert operators.equal("xxx").encode("key") == "key=xxx"


def test_not_equal():
    assert operators.not_equal("xxx").encode("key") == "key!=xxx"


def test_in():
    assert operators.in_(["yyy", "xxx"]).encode("key") == "key in (xxx,yyy)"


def test_not_in():
    assert operators.not_in(["zzz", "xxx"]).encode("key") == "key notin (xxx,zzz)"


def test_equality():
    assert operators.in_(["b", "a"]) == operators.in_(["a", "b"])
    assert operators.equal("a") != operators.not_equal("a")
    assert operators.exists() == operators.exists()
