from __future__ import annotations
import re

COMMENT_SPLIT_RE = re.compile(r"#")

def strip_comment(line: str) -> str:
    """Remove comments starting with '#'"""
    m = COMMENT_SPLIT_RE.split(line, maxsplit=1)
    if not m:
        return line.strip()
    return m[0].strip()

WORD_RE = re.compile(r"^[0-9a-fA-F]{8}$")

def is_word(token: str) -> bool:
    """True for an 8-digit hex opcode word (no 0x prefix)."""
    return bool(WORD_RE.match(token))

def split_fields(line: str):
    """Return (fields, attribs) where attribs are the trailing '@...' tokens."""
    s = line.strip()
    if not s:
        return [], []
    parts = s.split()
    fields = []
    attribs = []
    for p in parts:
        if p.startswith("@") or attribs:
            attribs.append(p)
        else:
            fields.append(p)
    return fields, attribs

def split_attrib(token: str):
    """'@qemu' -> ('qemu', None); '@orig_name=x' -> ('orig_name', 'x')."""
    t = token[1:] if token.startswith("@") else token
    if "=" in t:
        name, value = t.split("=", 1)
        return name, value
    return t, None
