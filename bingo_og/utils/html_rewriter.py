"""
Streaming HTML attribute rewriter.

Scans HTML bytes tag by tag in a single forward pass and rewrites the
value of selected attributes. Everything it does not rewrite is emitted
byte-for-byte; only an unfinished tag at the end of a chunk is held back
until the next chunk arrives.
"""
import html
import re
from dataclasses import dataclass
from typing import AsyncIterator, Iterable, List, Optional, Tuple

_TAG_NAME_RE = re.compile(rb"<([A-Za-z][A-Za-z0-9:-]*)")
_ATTR_RE = re.compile(
    rb"""([^\s"'<>/=]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+)))?"""
)
_RAW_TEXT_TAGS = (b"script", b"style", b"title", b"textarea")
_WHITESPACE = b" \t\n\r\f"

# Past this size an unterminated "<" is treated as text.
MAX_PENDING_TAG = 64 * 1024


@dataclass(frozen=True)
class AttributeRewriteRule:
    """
    Set ``target`` to ``value`` on every ``tag`` whose ``match_attr``
    equals ``match_value``. ``token_match`` compares against a
    space-separated token list instead, as for ``rel``.
    """

    tag: str
    match_attr: str
    match_value: str
    target: str
    value: str
    token_match: bool = False

    def matches(self, tag: str, attrs: dict) -> bool:
        if tag != self.tag:
            return False
        found = attrs.get(self.match_attr)
        if found is None:
            return False
        actual = found[0].strip().lower()
        expected = self.match_value.lower()
        if self.token_match:
            return expected in actual.split()
        return actual == expected


def _find_tag_end(buf: bytes, start: int) -> Optional[int]:
    """Index of the ``>`` closing the tag at ``start``, ignoring quoted values."""
    quote = None
    after_equals = False
    for i in range(start + 1, len(buf)):
        c = buf[i]
        if quote is not None:
            if c == quote:
                quote = None
        elif c == 0x3E:
            return i
        elif c in (0x22, 0x27) and after_equals:
            quote = c
        if quote is None and c not in _WHITESPACE:
            after_equals = c == 0x3D
        elif quote is not None:
            after_equals = False
    return None


def _parse_attributes(raw: bytes, offset: int) -> dict:
    """Map lower-cased attribute name to (decoded value, span of the whole attribute)."""
    attrs = {}
    for m in _ATTR_RE.finditer(raw, offset):
        name = m.group(1).decode("latin-1").lower()
        if name in attrs:
            continue
        value = next((g for g in m.group(2, 3, 4) if g is not None), b"")
        attrs[name] = (html.unescape(value.decode("utf-8", "replace")), m.span())
    return attrs


class HTMLAttributeRewriter:
    """
    Incremental attribute rewriter.

    Usage::

        rewriter = HTMLAttributeRewriter(rules)
        for chunk in chunks:
            out.write(rewriter.feed(chunk))
        out.write(rewriter.close())
    """

    def __init__(self, rules: Iterable[AttributeRewriteRule]):
        self.rules: List[AttributeRewriteRule] = list(rules)
        self._tags = {rule.tag for rule in self.rules}
        self._buffer = b""
        self._raw_text_end: Optional[bytes] = None
        self.rewrites = 0

    def feed(self, chunk: bytes) -> bytes:
        """Consume a chunk and return every byte that is safe to emit."""
        buf = self._buffer + chunk
        out, pos = self._scan(buf)
        self._buffer = buf[pos:]
        return b"".join(out)

    def close(self) -> bytes:
        """Flush whatever is left; an unfinished tag is emitted unchanged."""
        rest, self._buffer = self._buffer, b""
        return rest

    async def transform(self, chunks: AsyncIterator[bytes]) -> AsyncIterator[bytes]:
        async for chunk in chunks:
            if isinstance(chunk, str):
                chunk = chunk.encode("utf-8")
            data = self.feed(chunk)
            if data:
                yield data
        tail = self.close()
        if tail:
            yield tail

    def _scan(self, buf: bytes) -> Tuple[List[bytes], int]:
        out: List[bytes] = []
        pos = 0
        end_of_buf = len(buf)

        while pos < end_of_buf:
            if self._raw_text_end is not None:
                idx = buf.lower().find(self._raw_text_end, pos)
                if idx == -1:
                    # Hold back a possible partial closing tag.
                    keep = max(pos, end_of_buf - len(self._raw_text_end) + 1)
                    out.append(buf[pos:keep])
                    pos = keep
                    break
                out.append(buf[pos:idx])
                pos = idx
                self._raw_text_end = None

            lt = buf.find(b"<", pos)
            if lt == -1:
                out.append(buf[pos:])
                pos = end_of_buf
                break
            out.append(buf[pos:lt])
            pos = lt

            if end_of_buf - pos < 2:
                break
            nxt = buf[pos + 1:pos + 2]

            if buf.startswith(b"<!--", pos):
                close = buf.find(b"-->", pos + 4)
                if close == -1:
                    if end_of_buf - pos > MAX_PENDING_TAG:
                        out.append(buf[pos:pos + 1])
                        pos += 1
                        continue
                    break
                out.append(buf[pos:close + 3])
                pos = close + 3
                continue

            if not (nxt.isalpha() or nxt in (b"/", b"!", b"?")):
                out.append(b"<")
                pos += 1
                continue

            if end_of_buf - pos < 4 and nxt == b"!":
                # Could still become a comment.
                break

            end = _find_tag_end(buf, pos)
            if end is None:
                if end_of_buf - pos > MAX_PENDING_TAG:
                    out.append(buf[pos:pos + 1])
                    pos += 1
                    continue
                break

            out.append(self._handle_tag(buf[pos:end + 1]))
            pos = end + 1

        return out, pos

    def _handle_tag(self, raw: bytes) -> bytes:
        m = _TAG_NAME_RE.match(raw)
        if m is None:
            return raw

        name_bytes = m.group(1).lower()
        if name_bytes in _RAW_TEXT_TAGS and not raw.rstrip(b">").rstrip().endswith(b"/"):
            self._raw_text_end = b"</" + name_bytes

        name = name_bytes.decode("latin-1")
        if name not in self._tags:
            return raw

        # Attribute text sits between the tag name and the closing '>'.
        attr_end = len(raw) - 1
        attrs = _parse_attributes(raw[:attr_end], m.end())
        for rule in self.rules:
            if rule.matches(name, attrs):
                raw = self._set_attribute(raw, attrs, rule)
                attrs = _parse_attributes(raw[:len(raw) - 1], m.end())
        return raw

    def _set_attribute(self, raw: bytes, attrs: dict, rule: AttributeRewriteRule) -> bytes:
        new_attr = f'{rule.target}="{html.escape(rule.value, quote=True)}"'.encode("utf-8")
        self.rewrites += 1

        existing = attrs.get(rule.target)
        if existing is not None:
            start, end = existing[1]
            return raw[:start] + new_attr + raw[end:]

        insert_at = len(raw) - 1
        if raw[insert_at - 1:insert_at] == b"/":
            insert_at -= 1
        prefix = raw[:insert_at].rstrip()
        return prefix + b" " + new_attr + raw[len(prefix):]
