import pytest

from sonnetkit.errors import (
    ErrorKind,
    EvalError,
    StackTraceElement,
    format_empty_str,
    format_found,
    format_signature,
    jaro_winkler,
    suggest_similar,
)


def test_format_empty_str():
    assert format_empty_str("") == '"" (empty string)'
    assert format_empty_str("abc") == "abc"


def test_format_found_empty():
    assert format_found([], "variable") == ""


def test_format_found_single():
    assert format_found(["a"], "field") == "\nThere is field with similar name present: a"


def test_format_found_plural():
    text = format_found(["a", "b"], "variable")
    assert "variables with similar names present: " in text
    assert text.endswith("a, b")


def test_format_signature_empty():
    assert format_signature([]) == "\nFunction has the following signature: (/*no arguments*/)"


def test_format_signature_params():
    text = format_signature([("a", False), (None, True)])
    assert text.endswith("(a, <unnamed> = <default>)")


def test_jaro_winkler_identical():
    assert jaro_winkler("hello", "hello") == pytest.approx(1.0)


def test_jaro_winkler_known_example():
    assert jaro_winkler("martha", "marhta") == pytest.approx(0.9611, abs=1e-4)


def test_jaro_winkler_disjoint_and_empty():
    assert jaro_winkler("abc", "xyz") == 0.0
    assert jaro_winkler("", "abc") == 0.0
    assert jaro_winkler("", "") == pytest.approx(1.0)


def test_jaro_winkler_symmetric_and_bounded():
    for a, b in [("dwayne", "duane"), ("dixon", "dicksonx"), ("foo", "food")]:
        sim = jaro_winkler(a, b)
        assert 0.0 <= sim <= 1.0
        assert sim == pytest.approx(jaro_winkler(b, a))


def test_suggest_similar_orders_and_filters():
    result = suggest_similar(["value", "valu", "zzz", "values"], "value")
    assert "zzz" not in result
    assert "value" not in result
    assert set(result) == {"valu", "values"}
    scores = [jaro_winkler(name, "value") for name in result]
    assert scores == sorted(scores, reverse=True)


def test_variable_not_defined_message():
    err = EvalError(ErrorKind.VARIABLE_IS_NOT_DEFINED, "foo", ["fob"])
    assert str(err) == "variable is not defined: foo" + format_found(["fob"], "variable")
    assert err.kind is ErrorKind.VARIABLE_IS_NOT_DEFINED


def test_runtime_error_empty_message():
    err = EvalError(ErrorKind.RUNTIME_ERROR, "")
    assert str(err) == 'runtime error: "" (empty string)'


def test_assertion_failed_message():
    assert str(EvalError(ErrorKind.ASSERTION_FAILED, "fail")) == "assert failed: fail"


def test_type_mismatch_message():
    err = EvalError(ErrorKind.TYPE_MISMATCH, "ctx", ["number", "string"], "bool")
    assert str(err) == "type mismatch: expected number, string, got bool ctx"


def test_parameter_not_bound_unnamed():
    err = EvalError(ErrorKind.FUNCTION_PARAMETER_NOT_BOUND_IN_CALL, None, [])
    assert str(err).startswith("function argument is not passed: <unnamed>")


def test_with_description_builds_trace():
    err = EvalError(ErrorKind.DIVISION_BY_ZERO)
    returned = err.with_description("getting field x").with_description("call", "file.jsonnet")
    assert returned is err
    assert err.trace == [
        StackTraceElement("getting field x"),
        StackTraceElement("call", "file.jsonnet"),
    ]
    text = err.format_trace()
    assert text.startswith("attempted to divide by zero\n")
    assert "\tgetting field x\n" in text
    assert "file.jsonnet" in text


def test_raise_and_catch():
    err = EvalError(ErrorKind.NO_SUPER_FOUND)
    assert str(err) == "no super found"
    assert err.kind is ErrorKind.NO_SUPER_FOUND
    with pytest.raises(EvalError) as info:
        raise err
    assert info.value is err
    assert str(info.value) == "no super found"