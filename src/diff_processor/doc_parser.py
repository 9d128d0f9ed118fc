"""Extract documented field names from provider reference markdown.

Only the two reference sections are read. A document looks like::

    ## Argument Reference

    * `name` - (Required) The name.
    * `settings` - (Optional) Structure is documented below.

    <a name="nested_settings"></a>The `settings` block supports:

    * `tier` - (Required) The tier.

    ## Attributes Reference

    * `id` - an identifier for the resource.

which documents the arguments `name`, `settings`, `settings.tier` and the
attribute `id`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from diff_processor.doc_paths import ARGUMENTS_SECTION, ATTRIBUTES_SECTION

_HEADING_RE = re.compile(r"^(?P<level>#{1,6})\s+(?P<title>.+?)\s*#*\s*$")
_BULLET_RE = re.compile(r"^\s*[*-]\s+`(?P<name>[^`]+)`")
_RULE_RE = re.compile(r"^\s*(?:[-*_]\s*){3,}$")
_FENCE_RE = re.compile(r"^\s*(?P<fence>`{3,}|~{3,})")
_BLOCK_INTRO_RE = re.compile(
    r"^\s*(?:<a\s+name=\"[^\"]*\"\s*>\s*</a>\s*)?"
    r"The\s+`(?P<block>[^`]+)`\s+block\s+(?:supports|contains)\b",
    re.IGNORECASE,
)

_SECTION_TITLES = {
    "argument reference": ARGUMENTS_SECTION,
    "arguments reference": ARGUMENTS_SECTION,
    "attributes reference": ATTRIBUTES_SECTION,
    "attribute reference": ATTRIBUTES_SECTION,
}


@dataclass(frozen=True)
class DocumentedFields:
    arguments: frozenset[str] = frozenset()
    attributes: frozenset[str] = frozenset()

    def contains(self, field: str) -> bool:
        return field in self.arguments or field in self.attributes


def _section_for_title(title: str) -> str | None:
    return _SECTION_TITLES.get(" ".join(title.lower().split()))


def _closes_fence(marker: str, fence: str) -> bool:
    return marker[0] == fence[0] and len(marker) >= len(fence)


def _block_parent(block: str, documented: list[str]) -> str:
    for path in reversed(documented):
        if path.rsplit(".", 1)[-1] == block:
            return path
    return block


def parse_documented_fields(text: str) -> DocumentedFields:
    found: dict[str, set[str]] = {ARGUMENTS_SECTION: set(), ATTRIBUTES_SECTION: set()}
    documented: list[str] = []
    section: str | None = None
    prefix = ""
    # Bullets seen since the current nested scope opened.
    scoped_bullets = 0
    fence: str | None = None
    for line in text.splitlines():
        opener = _FENCE_RE.match(line)
        if fence is not None:
            if opener is not None and _closes_fence(opener.group("fence"), fence):
                fence = None
            continue
        if opener is not None:
            fence = opener.group("fence")
            continue
        heading = _HEADING_RE.match(line)
        if heading is not None:
            prefix = ""
            if len(heading.group("level")) <= 2:
                section = _section_for_title(heading.group("title"))
            continue
        if section is None:
            continue
        if _RULE_RE.match(line):
            prefix = ""
            continue
        intro = _BLOCK_INTRO_RE.match(line)
        if intro is not None:
            prefix = _block_parent(intro.group("block"), documented) + "."
            scoped_bullets = 0
            continue
        bullet = _BULLET_RE.match(line)
        if bullet is None:
            # Unindented prose after a nested list closes the nested scope;
            # indented lines continue the previous bullet.
            if prefix and scoped_bullets and line.strip() and not line[0].isspace():
                prefix = ""
            continue
        path = prefix + bullet.group("name").strip()
        found[section].add(path)
        documented.append(path)
        scoped_bullets += 1
    return DocumentedFields(
        arguments=frozenset(found[ARGUMENTS_SECTION]),
        attributes=frozenset(found[ATTRIBUTES_SECTION]),
    )
