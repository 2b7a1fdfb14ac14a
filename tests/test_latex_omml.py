"""Tests for LaTeX to OMML conversion."""
from services.exporters.latex_omml import M_NS, latex_to_omml, latex_to_omml_string, symbols_to_text


def _tag(name):
    return f"{{{M_NS}}}{name}"


def _texts(element):
    return [t.text for t in element.iter(_tag("t"))]


def test_fraction_becomes_numerator_and_denominator():
    math = latex_to_omml("\\frac{a}{b}")

    assert math.tag == _tag("oMath")
    fraction = math.find(_tag("f"))
    assert _texts(fraction.find(_tag("num"))) == ["a"]
    assert _texts(fraction.find(_tag("den"))) == ["b"]


def test_superscript_and_subscript():
    math = latex_to_omml("E = mc^2 + x_{0}")

    assert _texts(math)[0] == "E = "
    sup = math.find(_tag("sSup"))
    assert _texts(sup.find(_tag("e"))) == ["mc"]
    assert _texts(sup.find(_tag("sup"))) == ["2"]
    sub = math.find(_tag("sSub"))
    assert _texts(sub.find(_tag("e"))) == ["x"]
    assert _texts(sub.find(_tag("sub"))) == ["0"]


def test_greek_letters_and_operators():
    assert symbols_to_text("\\alpha \\cdot \\beta \\leq \\infty") == "α · β ≤ ∞"
    assert symbols_to_text("\\left( x \\right)") == "( x )"
    assert symbols_to_text("\\unknown") == "\\unknown"


def test_greek_base_with_superscript():
    sup = latex_to_omml("\\omega^2").find(_tag("sSup"))
    assert _texts(sup.find(_tag("e"))) == ["ω"]


def test_display_math_is_wrapped_in_math_paragraph():
    para = latex_to_omml("E = mc^2", display=True)

    assert para.tag == _tag("oMathPara")
    assert para[0].tag == _tag("oMath")


def test_string_output_declares_math_namespace():
    xml = latex_to_omml_string("\\frac{1}{2}")
    assert xml.startswith("<m:oMath")
    assert f'xmlns:m="{M_NS}"' in xml
    assert "<m:f>" in xml
