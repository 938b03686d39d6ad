"""Formal grammar of the literal language and of D-Bus signatures.

The literal grammar is implemented by the parsers that
``dtui.parser.compile`` assembles from a signature; these constants are
the reference documentation, printed by ``dtui grammar``.

Grammar notation used here:
    ``:=``      production rule
    ``|``       alternation
    ``[ ]``     optional (zero or one)
    ``( )*``    zero or more repetitions
"""
from __future__ import annotations

# ---------------------------------------------------------------------------
# Literals
# ---------------------------------------------------------------------------

GRAMMAR_LITERAL = """
value       := bool | number | string | array | dict | structure | variant | sig_lit | path_lit
bool        := "true" | "false"
number      := ["-"] digit+ ["." digit+]
string      := '"' (char | escape)* '"'
escape      := "\\\\" ("\\\\" | "/" | '"' | "b" | "f" | "n" | "r" | "t" | "u" hex hex hex hex)
array       := "[" [ value ("," value)* ] "]"
dict        := "{" [ pair ("," pair)* ] "}"
pair        := value ":" value
structure   := "(" value ("," value)* ")"
variant     := sig_lit "->" value
sig_lit     := '"' <valid signature text> '"'
path_lit    := '"' <valid object path text> '"'
"""

# ---------------------------------------------------------------------------
# Signatures
# ---------------------------------------------------------------------------

GRAMMAR_SIGNATURE = """
signature   := complete_type*
complete_type := basic | "v" | array | struct
basic       := "y" | "b" | "n" | "q" | "i" | "u" | "x" | "t" | "d" | "s" | "o" | "g" | "h"
array       := "a" ( complete_type | dict_entry )
dict_entry  := "{" basic complete_type "}"
struct      := "(" complete_type complete_type* ")"
"""

GRAMMAR_OBJECT_PATH = """
object_path := "/" | ( "/" element )+
element     := [A-Za-z0-9_]+
"""

# ---------------------------------------------------------------------------
# Full grammar as one string (for documentation / tooling consumers)
# ---------------------------------------------------------------------------

FULL_GRAMMAR: str = "\n".join([
    "# Literal grammar",
    "# ===============",
    "# Any Unicode whitespace is allowed around every token and separator.",
    GRAMMAR_LITERAL,
    "# Signatures (at most 255 bytes; nesting at most 32 arrays, 32 structs)",
    GRAMMAR_SIGNATURE,
    "# Object paths",
    GRAMMAR_OBJECT_PATH,
])

# Example literal for each primitive type code, shown in CLI help.
EXAMPLE_LITERALS: dict[str, str] = {
    "y": "255",
    "b": "true",
    "n": "-5",
    "q": "5",
    "i": "-42",
    "u": "42",
    "x": "-9000000000",
    "t": "9000000000",
    "d": "3.25",
    "s": '"hello"',
    "g": '"a{sv}"',
    "o": '"/org/freedesktop/DBus"',
    "v": '"u"->5',
}
