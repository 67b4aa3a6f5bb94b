"""Define a small grammar, extend it, and inspect the token tree."""

import re

from tinct import HtmlRenderer, compile_grammar, iter_tokens, tokenize

ini = compile_grammar(
    {
        "comment": {"pattern": r"^\s*[;#].*$", "flags": re.MULTILINE, "greedy": True},
        "section": {"pattern": r"^\s*\[[^\]]+\]", "flags": re.MULTILINE, "alias": "selector"},
        "key": {"pattern": r"^\s*[\w.]+(?=\s*=)", "flags": re.MULTILINE, "alias": "property"},
        "value": {"pattern": r"(=\s*).+", "lookbehind": True, "alias": "string"},
        "punctuation": r"=",
    }
)

# Numbers get their own class, ahead of generic values
ini = ini.insert_before(
    "value",
    {"number": {"pattern": r"(=\s*)\d+\s*$", "flags": re.MULTILINE, "lookbehind": True}},
)

source = "[server]\nport = 8080\nname = tinct\n; done\n"
tokens = tokenize(source, ini)

for token, depth in iter_tokens(tokens):
    print("  " * depth + f"{token.type}: {token.text!r}")

print(HtmlRenderer().render(tokens))
