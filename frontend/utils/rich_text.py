"""Long-form body text from the spreadsheet.

Blocks are separated by blank lines. A block starting with ``## `` is a
section heading, ``### `` a subheading, ``> `` a pull quote; anything else is
a paragraph.
"""

import re
from dataclasses import dataclass
from typing import List

BLANK_LINES = re.compile(r"\n\s*\n")

PREFIXES = (
    ("### ", "h3"),
    ("## ", "h2"),
    ("> ", "blockquote"),
)

MARKDOWN_SPECIAL = re.compile(r"([\\`*_{}\[\]<>()#+\-.!|~])")


@dataclass(frozen=True)
class Block:
    kind: str  # h2, h3, blockquote or p
    text: str


def parse_blocks(body: str) -> List[Block]:
    blocks = []
    for chunk in BLANK_LINES.split(body or ""):
        chunk = chunk.strip()
        if not chunk:
            continue

        for prefix, kind in PREFIXES:
            if chunk.startswith(prefix):
                blocks.append(Block(kind, chunk[len(prefix):].strip()))
                break
        else:
            blocks.append(Block("p", chunk))

    return blocks


def escape_markdown(text: str) -> str:
    return MARKDOWN_SPECIAL.sub(r"\\\1", text)


def to_markdown(blocks: List[Block]) -> str:
    """Markdown for ``st.markdown``; sheet text is escaped, never interpreted."""
    parts = []
    for block in blocks:
        text = escape_markdown(block.text)
        if block.kind == "h2":
            parts.append(f"## {text}")
        elif block.kind == "h3":
            parts.append(f"### {text}")
        elif block.kind == "blockquote":
            parts.append("\n".join(f"> {line}" for line in text.splitlines()))
        else:
            parts.append(text.replace("\n", "  \n"))
    return "\n\n".join(parts)
