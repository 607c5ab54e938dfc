"""Front-matter codec: split markdown files into metadata + body and back.

The rest of devsync only talks to ``FrontMatterCodec``; the YAML flavour
used by dev.to (``---`` delimited, as written by gray-matter / Jekyll) is
implemented by ``YamlFrontMatterCodec`` on top of python-frontmatter.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

import frontmatter
import yaml
from frontmatter.default_handlers import YAMLHandler

from devsync.core.fileutil import atomic_write
from devsync.core.models import Document
from devsync.sync.errors import FrontMatterError

log = logging.getLogger(__name__)


@runtime_checkable
class FrontMatterCodec(Protocol):
    """Contract for turning file text into a Document and back."""

    def parse(self, text: str) -> Document:
        """Split text into metadata mapping and body."""
        ...

    def serialize(self, metadata: dict, body: str) -> str:
        """Render metadata + body as file text."""
        ...


class YamlFrontMatterCodec:
    """YAML front matter between ``---`` lines, keys kept in insertion order."""

    def parse(self, text: str) -> Document:
        try:
            post = frontmatter.loads(text)
        except yaml.YAMLError as e:
            raise FrontMatterError(f"Invalid front matter: {e}") from e
        if not isinstance(post.metadata, dict):
            raise FrontMatterError("Front matter is not a key/value mapping")
        return Document(metadata=dict(post.metadata), body=post.content)

    def serialize(self, metadata: dict, body: str) -> str:
        # frontmatter.dumps strips the content; the body must go out verbatim
        header = YAMLHandler().export(metadata, sort_keys=False)
        return f"---\n{header}\n---\n\n{body}\n"


_default_codec = YamlFrontMatterCodec()


def load_document(path: Path, codec: FrontMatterCodec | None = None) -> Document:
    """Read and parse a markdown file."""
    codec = codec or _default_codec
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise FrontMatterError(f"{path}: not valid UTF-8 ({e.reason} at byte {e.start})") from e
    try:
        return codec.parse(text)
    except FrontMatterError as e:
        raise FrontMatterError(f"{path}: {e}") from e


def dump_document(
    path: Path,
    metadata: dict,
    body: str,
    codec: FrontMatterCodec | None = None,
) -> None:
    """Serialize metadata + body and write it atomically to path."""
    codec = codec or _default_codec
    atomic_write(path, codec.serialize(metadata, body))
