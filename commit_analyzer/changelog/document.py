"""Changelog Document - Parsed view of a changelog file.

The file is split once into the text up to and including the anchor line,
and the text after it. New records go between the two; nothing else in the
file is rewritten except the last-updated marker.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

LATEST_RECORDS_HEADING = "## 📝 最新提交记录"
HISTORY_HEADING = "## 📝 提交历史"
LAST_UPDATED_PREFIX = "*最后更新："


class Anchor(Enum):
    """Where new records are inserted, in priority order."""
    LATEST_RECORDS = "latest_records"
    HISTORY = "history"
    TITLE = "title"


ANCHOR_PATTERNS = [
    (Anchor.LATEST_RECORDS, re.compile(rf'^{re.escape(LATEST_RECORDS_HEADING)}[ \t]*(\r?\n|$)', re.MULTILINE)),
    (Anchor.HISTORY, re.compile(rf'^{re.escape(HISTORY_HEADING)}[ \t]*(\r?\n|$)', re.MULTILINE)),
    (Anchor.TITLE, re.compile(r'^# [^\r\n]+(\r?\n|$)', re.MULTILINE)),
]

LAST_UPDATED_RE = re.compile(r'\*最后更新：.+\*')


@dataclass
class ChangelogDocument:
    head: str = ""
    body: str = ""
    anchor: Anchor | None = None
    records: list[str] = field(default_factory=list)
    last_updated: str | None = None
    newline: str = "\n"

    @classmethod
    def parse(cls, text: str) -> 'ChangelogDocument':
        newline = "\r\n" if "\r\n" in text else "\n"
        for anchor, pattern in ANCHOR_PATTERNS:
            match = pattern.search(text)
            if match:
                head = text[:match.end()]
                if not head.endswith('\n'):
                    head += newline
                return cls(head=head, body=text[match.end():], anchor=anchor, newline=newline)
        return cls(head="", body=text, anchor=None, newline=newline)

    def add_record(self, block: str) -> None:
        """Queue a rendered record; the latest addition ends up first."""
        self.records.insert(0, block)

    def touch(self, timestamp: str) -> None:
        self.last_updated = timestamp

    def render(self) -> str:
        inserted = "".join(f"{block}\n" for block in self.records)
        if self.newline != "\n":
            inserted = inserted.replace("\n", self.newline)
        head, body = self.head, self.body
        if self.last_updated is not None:
            head, replaced = _replace_last_updated(head, self.last_updated)
            if not replaced:
                body, _ = _replace_last_updated(body, self.last_updated)
        return head + inserted + body


def _replace_last_updated(text: str, timestamp: str) -> tuple[str, bool]:
    marker = f"{LAST_UPDATED_PREFIX}{timestamp}*"
    updated, count = LAST_UPDATED_RE.subn(lambda _: marker, text, count=1)
    return updated, count > 0
