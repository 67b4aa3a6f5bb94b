"""Grammar for the FHIR Mapping Language (FML).

FML describes transformations between FHIR resource structures
(StructureMap). The grammar classifies:

- metadata-info (``/// key = 'value'`` lines, with nested key/value tokens)
- comment (``//`` lines and ``/* */`` blocks)
- group-definition (``group Name(source src : Type) extends Parent <<type>> {``)
- rule-label (``"name";`` at the end of a rule)
- string (with URL and escape tokens inside)
- structure, mode and transformation keywords, built-in functions
- variable binding (``as``), ConceptMap prefixes and operators
- booleans, numbers, dotted paths, the ``->`` arrow
- operators, identifiers and punctuation

Entry order resolves every overlap: keywords and functions come before
identifiers, rule labels before general strings, paths before identifiers.

"""

from __future__ import annotations

import re

from tinct.grammar import Grammar, compile_grammar

_MODES = r"(?:source|target|queried|produced)"
_QUOTED = r"""(["'])(?:\\.|(?!\1)[^\\\r\n])*\1"""

FML_DEFINITION: dict = {
    "metadata-info": {
        "pattern": r"^\s*///.*$",
        "flags": re.MULTILINE,
        "greedy": True,
        "inside": {
            "metadata-key": {
                "pattern": r"\b\w+(?=\s*=)",
                "alias": "property",
            },
            "metadata-value": {
                "pattern": r"=\s*" + _QUOTED,
                "inside": {
                    "operator": r"=",
                    "string": _QUOTED,
                },
            },
            "comment": r"///",
        },
    },
    "comment": [
        {
            # Plain line comment; "/// key =" lines are metadata
            "pattern": r"^\s*//(?!/\s*\w+\s*=).*$",
            "flags": re.MULTILINE,
            "greedy": True,
        },
        {
            "pattern": r"/\*[\s\S]*?\*/",
            "greedy": True,
        },
    ],
    "group-definition": {
        "pattern": (
            r"\bgroup\s+\w+(?:\s*\([^)]*\))?(?:\s+extends\s+\w+)?(?:\s*<<[^>]*>>)?\s*\{"
        ),
        "greedy": True,
        "inside": {
            "structure-keyword": r"\bgroup\b",
            "group-name": {
                "pattern": r"\b\w+(?=\s*(?:\(|extends|<<|\{))",
                "alias": "identifier",
            },
            "inputs": {
                "pattern": r"\([^)]*\)",
                "greedy": True,
                "inside": {
                    "input-typed": {
                        "pattern": _MODES + r"\s+\w+\s*:\s*[\w\[\]]+",
                        "inside": {
                            "mode-keyword": "^" + _MODES,
                            "variable": r"\b\w+(?=\s*:)",
                            "punctuation": r":",
                            "type": r"[\w\[\]]+$",
                        },
                    },
                    "input-untyped": {
                        "pattern": _MODES + r"\s+\w+(?!\s*:)",
                        "inside": {
                            "mode-keyword": "^" + _MODES,
                            "variable": r"\w+$",
                        },
                    },
                },
            },
            "extends-clause": {
                "pattern": r"\bextends\s+\w+",
                "inside": {
                    "keyword": r"\bextends\b",
                    "parent-class": {
                        "pattern": r"\w+$",
                        "alias": "class-name inherited",
                    },
                },
            },
            "stereotype": {
                "pattern": r"<<[^>]+>>",
                "alias": "annotation",
                "inside": {
                    "punctuation": r"<<|>>",
                    "string": r"[^<>]+",
                },
            },
            "punctuation": r"[(){},:]",
        },
    },
    "structure-keyword": {
        "pattern": r"\b(?:map|uses|group|imports|extends|alias|conceptmap|default)\b",
        "alias": "keyword",
    },
    # Before "string" so a quoted label ahead of ";" keeps its own type
    "rule-label": {
        "pattern": r'"[A-Za-z0-9\-.]+"(?=\s*;)',
        "greedy": True,
        "inside": {
            "string": r"\w+",
        },
    },
    "string": {
        "pattern": r"""(["'])(?:\\(?:\r\n|[\s\S])|(?!\1)[^\\\r\n])*\1""",
        "greedy": True,
        "inside": {
            "url": {
                "pattern": r"""https?://[^\s"']+""",
                "greedy": True,
            },
            "escape": r"""\\(?:[abfnrtv\\"']|\\)""",
        },
    },
    "mode-keyword": {
        "pattern": r"\b" + _MODES + r"\b",
        "alias": "keyword",
    },
    "transformation-keyword": {
        "pattern": (
            r"\b(?:for|where|check|then|first|last|share|collate|only_one|not_first|not_last)\b"
        ),
        "alias": "keyword",
    },
    # Only names directly followed by "(" count as calls
    "function": {
        "pattern": (
            r"\b(?:create|copy|truncate|escape|cast|append|translate|reference|dateOp|uuid"
            r"|pointer|evaluate|cc|c|qty|id|cp|upper|lower|initCap|now|matches|exists"
            r"|empty|is)\b(?=\s*\()"
        ),
        "greedy": True,
    },
    "variable-binding": {
        "pattern": r"\bas\b",
        "alias": "keyword",
    },
    "prefix": {
        "pattern": r"\bprefix\s+\w+\s*=",
        "greedy": True,
        "inside": {
            "keyword": r"\bprefix\b",
            "property": r"\w+",
            "operator": r"=",
        },
    },
    "boolean": r"\b(?:true|false)\b",
    "number": r"\b\d+(?:\.\d+)?\b",
    "path": {
        "pattern": r"\b[a-zA-Z_]\w*(?:\.[a-zA-Z_]\w*)+\b",
        "greedy": True,
    },
    "transformation-arrow": {
        "pattern": r"->",
        "alias": "operator",
    },
    "conceptmap-operator": {
        "pattern": r"<<|>>|==",
        "alias": "operator",
    },
    "operator": r"[=!<>]=?|\band\b|\bor\b|\bnot\b",
    "identifier": {
        "pattern": r"\b[a-zA-Z_]\w*\b",
        "greedy": True,
    },
    "punctuation": r"[{}()\[\];,.:|]",
}

FML: Grammar = compile_grammar(FML_DEFINITION)

# Names the grammar is registered under
FML_NAME = "fml"
FML_ALIASES = ("mapping", "structuremap")
