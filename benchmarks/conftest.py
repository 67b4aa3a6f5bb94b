"""Benchmark fixtures and configuration."""

from __future__ import annotations

import pytest


@pytest.fixture
def large_mapping() -> str:
    """Generate a large FHIR mapping (~100KB)."""
    groups = []
    for i in range(250):
        groups.append(f"""
/// title = 'Group {i}'
group Transform{i}(source src : Patient, target tgt : Patient) {{
  // copy identifiers
  src.identifier as id -> tgt.identifier = copy(id) "copy-id-{i}";
  src.name as n where n.use = 'official' -> tgt.name = translate(n, "#names", "code");
  src.birthDate -> tgt.birthDate = dateOp(src.birthDate, "{i}") "birth-{i}";
}}
""")
    return 'map "http://example.org/fhir/StructureMap/Big" = "Big"\n' + "".join(groups)


@pytest.fixture
def small_snippets() -> list[str]:
    """Short snippets as they appear in documentation code blocks."""
    return [
        "src.id -> tgt.id;",
        'uses "http://hl7.org/fhir/StructureDefinition/Patient" alias Patient as source',
        "group G(source src, target tgt) {\n}",
        "/// url = 'http://example.org'",
        'prefix s = "http://hl7.org/fhir/gender"',
    ] * 20
