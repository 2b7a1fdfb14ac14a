"""
LaTeX to Office Math Markup (OMML) conversion for Word exports

Covers the subset the editor produces: fractions, superscripts, subscripts,
Greek letters and common operators. Anything else is kept as math text.
"""
import re

from lxml import etree

M_NS = "http://schemas.openxmlformats.org/officeDocument/2006/math"
XML_SPACE = "{http://www.w3.org/XML/1998/namespace}space"

SYMBOLS = {
    "alpha": "α", "beta": "β", "gamma": "γ", "delta": "δ", "epsilon": "ε",
    "varepsilon": "ε", "zeta": "ζ", "eta": "η", "theta": "θ", "iota": "ι",
    "kappa": "κ", "lambda": "λ", "mu": "μ", "nu": "ν", "xi": "ξ", "pi": "π",
    "rho": "ρ", "sigma": "σ", "tau": "τ", "upsilon": "υ", "phi": "φ",
    "varphi": "φ", "chi": "χ", "psi": "ψ", "omega": "ω",
    "Gamma": "Γ", "Delta": "Δ", "Theta": "Θ", "Lambda": "Λ", "Xi": "Ξ",
    "Pi": "Π", "Sigma": "Σ", "Phi": "Φ", "Psi": "Ψ", "Omega": "Ω",
    "cdot": "·", "times": "×", "div": "÷", "pm": "±", "mp": "∓",
    "leq": "≤", "le": "≤", "geq": "≥", "ge": "≥", "neq": "≠", "ne": "≠",
    "approx": "≈", "equiv": "≡", "propto": "∝", "infty": "∞",
    "partial": "∂", "nabla": "∇", "sum": "∑", "prod": "∏", "int": "∫",
    "rightarrow": "→", "to": "→", "leftarrow": "←", "Rightarrow": "⇒",
    "in": "∈", "forall": "∀", "exists": "∃", "hbar": "ℏ", "degree": "°",
}

_TOKEN_RE = re.compile(
    r"\\frac\{(?P<num>[^{}]+)\}\{(?P<den>[^{}]+)\}"
    r"|(?P<sup_base>\\?[A-Za-z0-9]+)\^(?:\{(?P<sup_group>[^{}]+)\}|(?P<sup_char>[A-Za-z0-9]))"
    r"|(?P<sub_base>\\?[A-Za-z0-9]+)_(?:\{(?P<sub_group>[^{}]+)\}|(?P<sub_char>[A-Za-z0-9]))"
)
_COMMAND_RE = re.compile(r"\\([A-Za-z]+)")
_SPACING_RE = re.compile(r"\\[,;:! ]")
_SIZING_RE = re.compile(r"\\(left|right|big|Big|bigg|Bigg)\b")


def _m(tag: str) -> str:
    return f"{{{M_NS}}}{tag}"


def symbols_to_text(latex: str) -> str:
    """Replace known commands with Unicode and drop sizing/spacing commands"""
    text = _SIZING_RE.sub("", latex)
    text = _SPACING_RE.sub(" ", text)
    text = _COMMAND_RE.sub(lambda match: SYMBOLS.get(match.group(1), match.group(0)), text)
    return text.replace("{", "").replace("}", "")


def _append_run(parent, text: str) -> None:
    text = symbols_to_text(text)
    if not text:
        return
    run = etree.SubElement(parent, _m("r"))
    t = etree.SubElement(run, _m("t"))
    t.text = text
    t.set(XML_SPACE, "preserve")


def _append_math(parent, latex: str) -> None:
    position = 0
    for match in _TOKEN_RE.finditer(latex):
        _append_run(parent, latex[position:match.start()])
        if match.group("num") is not None:
            fraction = etree.SubElement(parent, _m("f"))
            _append_math(etree.SubElement(fraction, _m("num")), match.group("num"))
            _append_math(etree.SubElement(fraction, _m("den")), match.group("den"))
        elif match.group("sup_base") is not None:
            script = etree.SubElement(parent, _m("sSup"))
            _append_run(etree.SubElement(script, _m("e")), match.group("sup_base"))
            _append_math(
                etree.SubElement(script, _m("sup")),
                match.group("sup_group") or match.group("sup_char")
            )
        else:
            script = etree.SubElement(parent, _m("sSub"))
            _append_run(etree.SubElement(script, _m("e")), match.group("sub_base"))
            _append_math(
                etree.SubElement(script, _m("sub")),
                match.group("sub_group") or match.group("sub_char")
            )
        position = match.end()
    _append_run(parent, latex[position:])


def latex_to_omml(latex: str, display: bool = False):
    """
    Build an m:oMath element (wrapped in m:oMathPara for display math)
    """
    root = etree.Element(_m("oMathPara" if display else "oMath"), nsmap={"m": M_NS})
    math = etree.SubElement(root, _m("oMath")) if display else root
    _append_math(math, latex.strip())
    return root


def latex_to_omml_string(latex: str, display: bool = False) -> str:
    return etree.tostring(latex_to_omml(latex, display), encoding="unicode")
