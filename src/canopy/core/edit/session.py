"""Inline label editing, one session at a time."""

import re
from dataclasses import dataclass

from canopy.config import PREFIX_MAX_CODE_UNITS
from canopy.models.state import EditResult

_ASCII_ALNUM = re.compile(r"[A-Za-z0-9]+")
_WHITESPACE = re.compile(r"\s")


def _utf16_length(text: str) -> int:
    return len(text.encode("utf-16-le")) // 2


def split_label_prefix(label: str) -> tuple[str | None, str]:
    """Split an icon-like prefix off a label.

    The token before the first whitespace counts as a prefix when it is at
    most two UTF-16 code units long and not plain ASCII alphanumerics, so
    ``"📁 Documents"`` splits into ``("📁", "Documents")`` while ``"A1 Steak"``
    stays whole. Returns ``(prefix, text)`` with prefix None when there is none.
    """
    match = _WHITESPACE.search(label)
    if match is None or match.start() == 0:
        return None, label

    token = label[: match.start()]
    if _utf16_length(token) <= PREFIX_MAX_CODE_UNITS and not _ASCII_ALNUM.fullmatch(token):
        return token, label[match.end() :]
    return None, label


def join_label_prefix(prefix: str | None, text: str) -> str:
    return f"{prefix} {text}" if prefix else text


@dataclass
class EditSession:
    """The active edit: target, what it started as, and the current draft."""

    node_id: str
    original_label: str
    prefix: str | None
    draft: str


class InlineEditor:
    """Holds at most one EditSession.

    The editor only computes results; applying a changed label to the index
    and notifying listeners is up to the caller.
    """

    def __init__(self) -> None:
        self._session: EditSession | None = None

    @property
    def session(self) -> EditSession | None:
        return self._session

    @property
    def active(self) -> bool:
        return self._session is not None

    def start(self, node_id: str, label: str) -> EditSession:
        if self._session is not None:
            msg = f"Edit session for {self._session.node_id!r} still active"
            raise RuntimeError(msg)
        prefix, text = split_label_prefix(label)
        self._session = EditSession(node_id=node_id, original_label=label, prefix=prefix, draft=text)
        return self._session

    def update_draft(self, text: str) -> bool:
        if self._session is None:
            return False
        self._session.draft = text
        return True

    def finish(self, value: str | None = None) -> EditResult | None:
        """Close the session, combining prefix and text into the final label."""
        session = self._session
        if session is None:
            return None
        self._session = None

        text = session.draft if value is None else value
        final = join_label_prefix(session.prefix, text)
        return EditResult(
            node_id=session.node_id,
            original_value=session.original_label,
            new_value=final,
            changed=final != session.original_label,
        )

    def cancel(self) -> EditResult | None:
        """Close the session keeping the original label."""
        session = self._session
        if session is None:
            return None
        self._session = None
        return EditResult(
            node_id=session.node_id,
            original_value=session.original_label,
            new_value=session.original_label,
            changed=False,
            cancelled=True,
        )

    def discard(self) -> None:
        """Drop the session without producing a result (forest replaced)."""
        self._session = None
