"""Highlight a FHIR mapping in 3 lines, zero config and zero deps."""

from tinct import highlight

html = highlight('src.id as id -> tgt.id = id "copy-id";', "fml", show_linenos=True)
print(html)
