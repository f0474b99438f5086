"""Packed asset files: a short header, a table of indexes, then raw asset data."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import BinaryIO, Iterable

MAGIC = b"IFB"
TAG_SIZE = 32
INDEX_SIZE = TAG_SIZE + 3 * 4
VERIFICATION_SIZE = len(MAGIC) + 4
IMAGE_DIMENSIONS_SIZE = 2 * 4

SHADER_FILE_NAME = "ItFliesBy.Assets.Shaders.ifb"
IMAGE_FILE_NAME = "ItFliesBy.Assets.Images.ifb"

_HEADER = struct.Struct("<3sI")
_INDEX = struct.Struct("<32sIII")
_DIMENSIONS = struct.Struct("<II")


class ShaderAsset(IntEnum):
    """Shader stages, in the order they are stored in the shader asset file."""

    TEXTURED_QUAD_VERTEX_SHADER = 0
    TEXTURED_QUAD_FRAGMENT_SHADER = 1
    SOLID_QUAD_VERTEX_SHADER = 2
    SOLID_QUAD_FRAGMENT_SHADER = 3
    TEST_VERTEX_SHADER = 4
    TEST_FRAGMENT_SHADER = 5


class ImageAsset(IntEnum):
    """Images, in the order they are stored in the image asset file."""

    CALIBRATION_CONNOR = 0
    CALIBRATION_JIG = 1


SHADER_COUNT = len(ShaderAsset)
IMAGE_COUNT = len(ImageAsset)


@dataclass(frozen=True)
class AssetFileIndex:
    """Where one asset lives in its file and how much memory it needs."""

    tag: str
    file_size: int
    allocation_size: int
    offset: int

    @classmethod
    def unpack(cls, data: bytes) -> AssetFileIndex:
        """Decode one packed index record."""
        if len(data) != INDEX_SIZE:
            raise ValueError(f"index record must be {INDEX_SIZE} bytes, got {len(data)}")
        return cls._from_fields(_INDEX.unpack(data))

    @classmethod
    def _from_fields(cls, record: tuple[bytes, int, int, int]) -> AssetFileIndex:
        raw_tag, file_size, allocation_size, offset = record
        tag = raw_tag.split(b"\0", 1)[0].decode("utf-8", errors="replace")
        return cls(tag=tag, file_size=file_size, allocation_size=allocation_size, offset=offset)

    def pack(self) -> bytes:
        """Encode this index as a packed record."""
        raw_tag = self.tag.encode("utf-8")
        if len(raw_tag) > TAG_SIZE:
            raise ValueError(f"tag is longer than {TAG_SIZE} bytes: {self.tag!r}")
        return _INDEX.pack(raw_tag, self.file_size, self.allocation_size, self.offset)


@dataclass(frozen=True)
class ImageData:
    """A decoded image: its dimensions and raw pixel bytes."""

    width_pixels: int
    height_pixels: int
    pixels: bytes


def _read_at(stream: BinaryIO, offset: int, size: int) -> bytes:
    stream.seek(offset)
    data = stream.read(size)
    if len(data) != size:
        raise ValueError(f"asset file is truncated: wanted {size} bytes at {offset}, got {len(data)}")
    return data


def read_index_count(stream: BinaryIO) -> int:
    """Check the file header and return the number of indexes it announces."""
    magic, count = _HEADER.unpack(_read_at(stream, 0, VERIFICATION_SIZE))
    if magic != MAGIC:
        raise ValueError(f"not an asset file: header starts with {magic!r}")
    return count & 0xFFFF


def read_indexes(stream: BinaryIO, count: int) -> list[AssetFileIndex]:
    """Read the index table, which must hold exactly ``count`` entries."""
    actual = read_index_count(stream)
    if actual != count:
        raise ValueError(f"asset file holds {actual} indexes, expected {count}")
    data = _read_at(stream, VERIFICATION_SIZE, INDEX_SIZE * count)
    return [AssetFileIndex._from_fields(record) for record in _INDEX.iter_unpack(data)]


class AssetStore:
    """The open shader and image asset files and their index tables."""

    def __init__(self, shader_file: BinaryIO, image_file: BinaryIO) -> None:
        self.shader_file = shader_file
        self.image_file = image_file
        self.shader_indexes = read_indexes(shader_file, SHADER_COUNT)
        self.image_indexes = read_indexes(image_file, IMAGE_COUNT)

    @classmethod
    def open(cls, directory: str | Path) -> AssetStore:
        """Open both asset files in ``directory`` and load their indexes."""
        directory = Path(directory)
        opened: list[BinaryIO] = []
        missing: list[str] = []
        for name in (SHADER_FILE_NAME, IMAGE_FILE_NAME):
            try:
                opened.append(open(directory / name, "rb"))
            except FileNotFoundError:
                missing.append(name)
        if missing:
            for handle in opened:
                handle.close()
            raise FileNotFoundError("missing asset files: " + ", ".join(missing))
        try:
            return cls(*opened)
        except Exception:
            for handle in opened:
                handle.close()
            raise

    def close(self) -> None:
        self.shader_file.close()
        self.image_file.close()

    def __enter__(self) -> AssetStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _shader_index(self, shader_id: int) -> AssetFileIndex:
        return self.shader_indexes[ShaderAsset(shader_id)]

    def _image_index(self, image: int) -> AssetFileIndex:
        return self.image_indexes[ImageAsset(image)]

    def shader_allocation_size(self, shader_ids: Iterable[int]) -> int:
        """Memory needed to hold the given shaders; fewer than all of them may be asked for."""
        ids = list(shader_ids)
        if not 0 < len(ids) < SHADER_COUNT:
            raise ValueError(f"between 1 and {SHADER_COUNT - 1} shader ids are needed, got {len(ids)}")
        return sum(self._shader_index(shader_id).allocation_size for shader_id in ids)

    def load_shaders(self, shader_ids: Iterable[int]) -> tuple[bytes, list[int]]:
        """Read the given shaders back to back; return the data and each shader's offset in it."""
        ids = list(shader_ids)
        if not ids:
            raise ValueError("at least one shader id is needed")
        chunks: list[bytes] = []
        offsets: list[int] = []
        position = 0
        for shader_id in ids:
            index = self._shader_index(shader_id)
            chunks.append(_read_at(self.shader_file, index.offset, index.allocation_size))
            offsets.append(position)
            position += index.allocation_size
        return b"".join(chunks), offsets

    def image_allocation_size(self, image: int) -> int:
        return self._image_index(image).allocation_size

    def load_image(self, image: int) -> ImageData:
        """Read an image's dimensions and pixels."""
        index = self._image_index(image)
        if index.allocation_size < IMAGE_DIMENSIONS_SIZE:
            raise ValueError(f"image {image} is too small to hold its dimensions")
        width, height = _DIMENSIONS.unpack(
            _read_at(self.image_file, index.offset, IMAGE_DIMENSIONS_SIZE)
        )
        pixels = _read_at(
            self.image_file,
            index.offset + IMAGE_DIMENSIONS_SIZE,
            index.allocation_size - IMAGE_DIMENSIONS_SIZE,
        )
        return ImageData(width_pixels=width, height_pixels=height, pixels=pixels)