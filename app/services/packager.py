"""
Packager — turns multi-file model replies into a downloadable ZIP reference.

The model is instructed to wrap every generated file as

    ---FILE:path/to/name.ext---
    <content>
    ---END FILE---

When a reply carries two or more such blocks, each block is swapped for a
one-line placeholder and the files are zipped into a single archive that
is appended as

    ---ZIP_RESPONSE:<archive name>---
    <base64 zip bytes>
    ---END_ZIP---

A reply with a single block is left alone: the renderer turns that one
into a plain-text download instead.

Everything here is a pure function of its input string.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
import re
import zipfile
from dataclasses import dataclass

from app.config import settings

logger = logging.getLogger(__name__)

ARCHIVE_NAME = settings.archive_name

FILE_START = "---FILE:"
FILE_END = "---END FILE---"
ZIP_START = "---ZIP_RESPONSE:"
ZIP_END = "---END_ZIP---"

# Source blocks may carry path separators in the name.
_FILE_BLOCK_RE = re.compile(r"---FILE:([\w.\-/]+)---([\s\S]*?)---END FILE---")
_ZIP_SEGMENT_RE = re.compile(r"---ZIP_RESPONSE:([\w.-]+)---\s*([A-Za-z0-9+/=\s]*?)\s*---END_ZIP---")
_ARCHIVE_NAME_RE = re.compile(r"^[\w.-]+$")

# Fixed entry timestamp so identical input yields identical bytes.
_ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)


class PackagingError(Exception):
    """Raised when matched file blocks could not be serialised into an archive."""


@dataclass(frozen=True)
class FileBlock:
    """One name/content pair cut out of a model reply."""

    name: str
    content: str


@dataclass(frozen=True)
class ArchivePayload:
    """The archive reference appended to a packaged reply."""

    archive_name: str
    base64: str

    def to_segment(self) -> str:
        return f"{ZIP_START}{self.archive_name}---\n{self.base64}\n{ZIP_END}"


def should_package(text: object) -> bool:
    """True when text holds at least two file start markers and an end marker."""
    if not text or not isinstance(text, str):
        return False
    return FILE_END in text and text.count(FILE_START) > 1


def _block_from_match(match: re.Match) -> FileBlock:
    # Only the blank-line padding goes; indentation on the first line stays.
    return FileBlock(name=match.group(1).strip(), content=match.group(2).strip("\r\n"))


def extract_file_blocks(text: str) -> list[FileBlock]:
    """Return every well-formed file block in text, left to right."""
    return [_block_from_match(m) for m in _FILE_BLOCK_RE.finditer(text)]


def build_archive(blocks: list[FileBlock]) -> bytes:
    """
    Serialise blocks into a deflated ZIP archive.

    A name that appears twice keeps the later content. Raises
    PackagingError if any entry cannot be encoded or written.
    """
    entries: dict[str, str] = {}
    for block in blocks:
        entries[block.name] = block.content

    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for name, content in entries.items():
                info = zipfile.ZipInfo(name, date_time=_ZIP_EPOCH)
                info.compress_type = zipfile.ZIP_DEFLATED
                info.external_attr = 0o644 << 16
                archive.writestr(info, content.encode("utf-8"))
    except (UnicodeError, ValueError, zipfile.LargeZipFile) as exc:
        raise PackagingError(f"Could not build archive: {exc}") from exc
    return buffer.getvalue()


def package_if_multi_file(text: str, archive_name: str = ARCHIVE_NAME) -> str:
    """
    Replace two or more file blocks with placeholders plus one ZIP segment.

    Returns text unchanged when there is nothing to package (fewer than two
    start markers, no end marker, or no well-formed block).
    """
    if not should_package(text):
        return text
    if not _ARCHIVE_NAME_RE.match(archive_name):
        raise PackagingError(f"Invalid archive name: {archive_name!r}")

    blocks: list[FileBlock] = []

    def _placeholder(match: re.Match) -> str:
        block = _block_from_match(match)
        blocks.append(block)
        return f"\n[File: {block.name} packaged in ZIP]\n"

    processed = _FILE_BLOCK_RE.sub(_placeholder, text)
    if not blocks:
        return text

    payload = ArchivePayload(
        archive_name=archive_name,
        base64=base64.b64encode(build_archive(blocks)).decode("ascii"),
    )
    logger.info("Packaged %d file block(s) into %s", len(blocks), archive_name)
    return f"{processed.strip()}\n\n{payload.to_segment()}"


def unpack_archive(data: str) -> dict[str, str]:
    """
    Decode an archive segment (or its bare base64 payload) into {name: content}.

    Raises PackagingError if the payload is not a readable ZIP.
    """
    match = _ZIP_SEGMENT_RE.search(data)
    encoded = match.group(2) if match else data
    try:
        raw = base64.b64decode("".join(encoded.split()), validate=True)
        with zipfile.ZipFile(io.BytesIO(raw)) as archive:
            return {name: archive.read(name).decode("utf-8") for name in archive.namelist()}
    except (binascii.Error, zipfile.BadZipFile, UnicodeDecodeError) as exc:
        raise PackagingError(f"Could not read archive: {exc}") from exc
